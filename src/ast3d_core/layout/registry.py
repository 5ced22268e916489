# src/ast3d_core/layout/registry.py
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List

from ..config import LayoutAlgorithm
from ..constants import MIN_LAYOUT_SPACING
from ..model import Graph, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutContext:
    """
    Everything a layout needs for one build. Pinned nodes keep their position:
    layouts may read them but must never move them.
    """
    graph: Graph
    pinned: FrozenSet[str] = field(default_factory=frozenset)
    spacing: float = 2.0

    @property
    def clamped_spacing(self) -> float:
        return max(self.spacing, MIN_LAYOUT_SPACING)

    def unpinned_nodes(self) -> List[Node]:
        """Un-pinned nodes in graph insertion order."""
        return [n for n in self.graph.nodes.values() if n.id not in self.pinned]


LayoutFunction = Callable[[LayoutContext], None]

LAYOUT_REGISTRY: Dict[LayoutAlgorithm, LayoutFunction] = {}


def register_layout(algorithm: LayoutAlgorithm):
    """Decorator registering a layout function under its algorithm name."""
    def decorator(func: LayoutFunction) -> LayoutFunction:
        if algorithm in LAYOUT_REGISTRY:
            logger.warning(f"Layout '{algorithm}' is being redefined by {func.__name__}.")
        LAYOUT_REGISTRY[algorithm] = func
        return func
    return decorator


def apply_layout(algorithm: LayoutAlgorithm, context: LayoutContext) -> None:
    layout = LAYOUT_REGISTRY[algorithm]
    logger.debug(
        f"Applying '{algorithm}' layout to {len(context.graph.nodes)} node(s), "
        f"{len(context.pinned)} pinned."
    )
    layout(context)
