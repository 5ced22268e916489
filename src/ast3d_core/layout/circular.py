# src/ast3d_core/layout/circular.py
import math
from typing import Dict, List

from ..config import LayoutAlgorithm
from ..constants import TWO_PI
from ..geometry import Vector3
from ..model import Node
from .registry import LayoutContext, register_layout


def circle_radius(spacing: float, count: int) -> float:
    return max(spacing * count / TWO_PI, spacing * 2)


def circle_positions(nodes: List[Node], spacing: float) -> Dict[str, Vector3]:
    """Evenly spaced points on a circle in the x/z plane, one per node, starting on +x."""
    count = len(nodes)
    radius = circle_radius(spacing, count)
    positions = {}
    for index, node in enumerate(nodes):
        angle = index * TWO_PI / count
        positions[node.id] = Vector3(math.cos(angle) * radius, 0.0, math.sin(angle) * radius)
    return positions


@register_layout(LayoutAlgorithm.CIRCULAR)
def circular_layout(context: LayoutContext) -> None:
    nodes = context.unpinned_nodes()
    if not nodes:
        return
    positions = circle_positions(nodes, context.spacing)
    for node in nodes:
        node.set_position(positions[node.id])
