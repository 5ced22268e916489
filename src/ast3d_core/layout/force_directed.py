# src/ast3d_core/layout/force_directed.py
"""
Fixed-iteration force-directed layout.

Un-pinned nodes start on the circle used by the circular layout and then run
exactly FORCE_ITERATIONS rounds of:

1. pairwise repulsion between un-pinned nodes, REPULSION_STRENGTH / d**2;
2. attraction along every connection with at least one un-pinned end,
   ATTRACTION_STRENGTH * d * ATTRACTION_SCALE (pinned ends stay put);
3. multiplicative damping of every un-pinned position by DAMPING_FACTOR.

Forces are applied immediately, pair by pair, in graph insertion order. There is
no randomness and no convergence test, so identical input yields bit-identical
positions.
"""
import logging

import numpy as np

from ..config import LayoutAlgorithm
from ..constants import (
    ATTRACTION_SCALE,
    ATTRACTION_STRENGTH,
    DAMPING_FACTOR,
    FORCE_ITERATIONS,
    MIN_FORCE_DISTANCE,
    REPULSION_STRENGTH,
)
from ..geometry import Vector3
from .circular import circle_positions
from .registry import LayoutContext, register_layout

logger = logging.getLogger(__name__)


def _direction_and_distance(delta: np.ndarray):
    distance = float(np.linalg.norm(delta)) or MIN_FORCE_DISTANCE
    return delta / distance, distance


@register_layout(LayoutAlgorithm.FORCE_DIRECTED)
def force_directed_layout(context: LayoutContext) -> None:
    nodes = context.unpinned_nodes()
    if not nodes:
        return

    seed = circle_positions(nodes, context.spacing)
    index = {node.id: i for i, node in enumerate(nodes)}
    positions = np.array([seed[node.id].as_array() for node in nodes])
    fixed = {
        node_id: node.position.as_array()
        for node_id, node in context.graph.nodes.items() if node_id in context.pinned
    }
    edges = [
        (c.source.node_id, c.target.node_id)
        for c in context.graph.connections.values()
        if c.source.node_id in index or c.target.node_id in index
    ]

    def position_of(node_id: str) -> np.ndarray:
        return positions[index[node_id]] if node_id in index else fixed[node_id]

    count = len(nodes)
    for _ in range(FORCE_ITERATIONS):
        for j in range(count):
            for k in range(j + 1, count):
                direction, distance = _direction_and_distance(positions[j] - positions[k])
                push = direction * (REPULSION_STRENGTH / (distance * distance))
                positions[j] += push
                positions[k] -= push

        for source_id, target_id in edges:
            direction, distance = _direction_and_distance(position_of(target_id) - position_of(source_id))
            pull = direction * (ATTRACTION_STRENGTH * distance * ATTRACTION_SCALE)
            if source_id in index:
                positions[index[source_id]] += pull
            if target_id in index:
                positions[index[target_id]] -= pull

        positions *= DAMPING_FACTOR

    for node in nodes:
        node.set_position(Vector3.from_array(positions[index[node.id]]))
    logger.debug(f"Force-directed layout finished after {FORCE_ITERATIONS} iterations.")
