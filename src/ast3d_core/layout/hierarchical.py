# src/ast3d_core/layout/hierarchical.py
"""
Layered layout.

Layers are assigned by a breadth-first walk from every root: a child lands one
layer below its deepest known parent. Self-loops are ignored, so a node whose
only parent is itself still counts as a root. The walk is an explicit queue,
never recursion, and a node is only re-queued when its layer grows. No layer can exceed `len(nodes) - 1` in an acyclic graph, so the layer is
capped there; hitting the cap means the walk is circling a cycle and it stops.

Nodes no root can reach (a cycle with no entry point) share one extra layer below
the deepest assigned layer.
"""
import logging
from collections import deque
from itertools import groupby
from typing import Dict

from ..config import LayoutAlgorithm
from ..geometry import Vector3
from .registry import LayoutContext, register_layout

logger = logging.getLogger(__name__)


def assign_layers(context: LayoutContext) -> Dict[str, int]:
    """Layer index per node id, for every node in the graph."""
    nodes = context.graph.nodes
    if not nodes:
        return {}
    max_layer = len(nodes) - 1
    layer_of: Dict[str, int] = {}
    queue = deque()
    for node in nodes.values():
        if all(parent_id == node.id for parent_id in node.parents):
            layer_of[node.id] = 0
            queue.append(node.id)

    capped = False
    while queue:
        node_id = queue.popleft()
        next_layer = layer_of[node_id] + 1
        for child_id in nodes[node_id].children:
            if child_id == node_id or child_id not in nodes:
                continue
            if next_layer > max_layer:
                capped = True
                continue
            if next_layer > layer_of.get(child_id, -1):
                layer_of[child_id] = next_layer
                queue.append(child_id)

    if capped:
        logger.warning("Hierarchical layering stopped at the layer cap; the graph contains a cycle.")

    unreached = [node_id for node_id in nodes if node_id not in layer_of]
    if unreached:
        extra_layer = max(layer_of.values(), default=-1) + 1
        logger.debug(f"{len(unreached)} node(s) unreachable from any root placed in layer {extra_layer}.")
        for node_id in unreached:
            layer_of[node_id] = extra_layer
    return layer_of


@register_layout(LayoutAlgorithm.HIERARCHICAL)
def hierarchical_layout(context: LayoutContext) -> None:
    layer_of = assign_layers(context)
    spacing = context.clamped_spacing
    nodes = sorted(context.unpinned_nodes(), key=lambda n: layer_of[n.id])

    for layer, members in groupby(nodes, key=lambda n: layer_of[n.id]):
        members = list(members)
        start = -(len(members) - 1) * spacing / 2.0
        for i, node in enumerate(members):
            node.set_position(Vector3(start + i * spacing, layer * spacing * 2, 0.0))
