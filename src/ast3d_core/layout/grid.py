# src/ast3d_core/layout/grid.py
import math

from ..config import LayoutAlgorithm
from ..geometry import Vector3
from .registry import LayoutContext, register_layout


@register_layout(LayoutAlgorithm.GRID)
def grid_layout(context: LayoutContext) -> None:
    """Row-major square grid in the x/z plane, centred on the origin."""
    nodes = context.unpinned_nodes()
    if not nodes:
        return
    cell = context.clamped_spacing
    side = math.ceil(math.sqrt(len(nodes)))
    offset = (side - 1) * cell / 2.0

    for index, node in enumerate(nodes):
        row, col = divmod(index, side)
        node.set_position(Vector3(col * cell - offset, 0.0, row * cell - offset))
