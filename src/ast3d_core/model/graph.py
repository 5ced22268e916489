# src/ast3d_core/model/graph.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import networkx as nx

from ..geometry import BoundingBox, Vector3
from .connection import Connection, ConnectionEndpoint
from .exceptions import UnknownNodeError
from .node import Node

logger = logging.getLogger(__name__)


class Graph:
    """
    The built, positioned graph handed to rendering and export layers.

    Populated by the GraphBuilder in a single pass and read-mostly afterwards. The
    mutation methods keep the adjacency invariant: `children`/`parents` lists hold
    no duplicates and only ids of nodes present in this graph.
    """

    def __init__(self, id: str, name: str, description: Optional[str] = None):
        self.id = id
        self.name = name
        self.description = description
        self.nodes: Dict[str, Node] = {}
        self.connections: Dict[str, Connection] = {}
        self.metadata: Dict[str, Any] = {}

    def __repr__(self):
        return f"Graph(id={self.id!r}, name={self.name!r}, nodes={len(self.nodes)}, connections={len(self.connections)})"

    # --- Nodes ---

    def add_node(self, node: Node) -> None:
        """Adds a node; a node with the same id is replaced and its adjacency carried over."""
        previous = self.nodes.get(node.id)
        if previous is not None:
            logger.debug(f"Replacing existing node '{node.id}'.")
            for child_id in previous.children:
                node.add_child(child_id)
            for parent_id in previous.parents:
                node.add_parent(parent_id)
        self.nodes[node.id] = node

    def remove_node(self, node_id: str) -> None:
        """Removes a node, every connection touching it, and every adjacency entry naming it."""
        node = self.nodes.get(node_id)
        if node is None:
            return

        for connection_id in [cid for cid, c in self.connections.items() if c.touches(node_id)]:
            del self.connections[connection_id]

        for parent_id in node.parents:
            if parent := self.nodes.get(parent_id):
                parent.remove_child(node_id)
        for child_id in node.children:
            if child := self.nodes.get(child_id):
                child.remove_parent(node_id)

        del self.nodes[node_id]
        logger.debug(f"Removed node '{node_id}'.")

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def nodes_by_type(self, node_type) -> List[Node]:
        value = getattr(node_type, "value", node_type)
        return [n for n in self.nodes.values() if n.type.value == value]

    def root_nodes(self) -> List[Node]:
        return [n for n in self.nodes.values() if not n.parents]

    def leaf_nodes(self) -> List[Node]:
        return [n for n in self.nodes.values() if not n.children]

    # --- Connections ---

    def add_connection(self, connection: Connection, assign_anchors: bool = True) -> None:
        """
        Registers a connection and links its endpoints' adjacency lists.

        With `assign_anchors`, each endpoint gets a best-effort anchor from the
        current node state. These anchors go stale as soon as a node moves.
        """
        source = self.nodes.get(connection.source.node_id)
        target = self.nodes.get(connection.target.node_id)
        if source is None or target is None:
            missing = [
                ep.node_id for ep in (connection.source, connection.target)
                if ep.node_id not in self.nodes
            ]
            raise UnknownNodeError(connection.id, missing)

        source.add_child(target.id)
        target.add_parent(source.id)

        if assign_anchors:
            connection.source.anchor = self.resolve_anchor(connection.source)
            connection.target.anchor = self.resolve_anchor(connection.target)

        self.connections[connection.id] = connection

    def remove_connection(self, connection_id: str) -> None:
        connection = self.connections.pop(connection_id, None)
        if connection is None:
            return
        source_id, target_id = connection.source.node_id, connection.target.node_id
        if any(c.joins(source_id, target_id) for c in self.connections.values()):
            return
        if source := self.nodes.get(source_id):
            source.remove_child(target_id)
        if target := self.nodes.get(target_id):
            target.remove_parent(source_id)

    def get_connection(self, connection_id: str) -> Optional[Connection]:
        return self.connections.get(connection_id)

    def connections_by_type(self, connection_type) -> List[Connection]:
        value = getattr(connection_type, "value", connection_type)
        return [c for c in self.connections.values() if c.type.value == value]

    def node_connections(self, node_id: str) -> List[Connection]:
        return [c for c in self.connections.values() if c.touches(node_id)]

    # --- Anchors ---

    def face_resolves(self, endpoint: ConnectionEndpoint) -> bool:
        node = self.nodes.get(endpoint.node_id)
        return node is not None and endpoint.face_id is not None and node.get_face(endpoint.face_id) is not None

    def resolve_anchor(self, endpoint: ConnectionEndpoint) -> Vector3:
        """The centre of the named face when it exists on the node, else the node centre."""
        node = self.nodes[endpoint.node_id]
        if endpoint.face_id is not None:
            face = node.get_face(endpoint.face_id)
            if face is not None:
                return face.center
        return node.position

    def refresh_anchors(self) -> None:
        """Recomputes every connection anchor from the current node transforms."""
        for connection in self.connections.values():
            connection.update_anchors(
                self.resolve_anchor(connection.source),
                self.resolve_anchor(connection.target),
            )

    # --- Structure ---

    def bounds(self) -> BoundingBox:
        return BoundingBox.enclosing(node.bounding_box for node in self.nodes.values())

    def to_networkx(self) -> nx.DiGraph:
        digraph = nx.DiGraph()
        digraph.add_nodes_from(self.nodes)
        for node in self.nodes.values():
            for child_id in node.children:
                if child_id in self.nodes:
                    digraph.add_edge(node.id, child_id)
        return digraph

    def find_cycle(self) -> List[str]:
        """Node ids of one directed cycle, first id repeated at the end; [] when acyclic."""
        try:
            edges = nx.find_cycle(self.to_networkx(), orientation="original")
        except nx.NetworkXNoCycle:
            return []
        return [edge[0] for edge in edges] + [edges[-1][1]]

    def has_cycles(self) -> bool:
        return not nx.is_directed_acyclic_graph(self.to_networkx())

    def depth(self) -> int:
        """
        Number of nodes on the longest root-to-leaf chain. Strongly connected
        components count as a single level, so cyclic graphs still terminate.
        """
        if not self.nodes:
            return 0
        condensed = nx.condensation(self.to_networkx())
        return nx.dag_longest_path_length(condensed) + 1

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "connections": [c.to_dict() for c in self.connections.values()],
            "metadata": dict(self.metadata),
            "bounds": self.bounds().to_dict(),
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Graph:
        """Rehydrates a graph. Stored anchors are kept as they were serialized."""
        graph = cls(data["id"], data["name"], data.get("description"))
        for node_data in data.get("nodes", []):
            graph.add_node(Node.from_dict(node_data))
        for connection_data in data.get("connections", []):
            graph.add_connection(Connection.from_dict(connection_data), assign_anchors=False)
        graph.metadata = dict(data.get("metadata", {}))
        return graph

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> Graph:
        return cls.from_dict(json.loads(text))
