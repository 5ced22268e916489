# src/ast3d_core/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..categories import ConnectionType, NodeType
from ..geometry import GeometryClass

# The classes in this module are the Intermediate Representation (IR) handed from
# the DiagramParser to the GraphBuilder and to the statement validator. They carry
# exactly what the source text said: no ids are checked, no properties interpreted.


@dataclass(frozen=True)
class ParsedEndpoint:
    """One side of a connection. A missing face_id means "anchor to the node centre"."""
    node_id: str
    face_id: Optional[str] = None


@dataclass(frozen=True)
class ParsedNode:
    """IR for a node declaration such as `A[Function: processData]`."""
    id: str
    type_tag: NodeType
    display_name: str
    geometry_class: GeometryClass
    delimiter: str
    raw_properties: Dict[str, Any] = field(default_factory=dict)
    line_number: int = 0

    @property
    def description(self) -> Optional[str]:
        value = self.raw_properties.get("description")
        return str(value) if value is not None else None


@dataclass(frozen=True)
class ParsedConnection:
    """IR for a connection statement such as `A@front --> B : "data"`."""
    id: str
    arrow_kind: ConnectionType
    source: ParsedEndpoint
    target: ParsedEndpoint
    label: Optional[str] = None
    raw_properties: Dict[str, Any] = field(default_factory=dict)
    line_number: int = 0


@dataclass(frozen=True)
class ParsedGraph:
    """
    Result of one parse pass. `nodes` and `connections` keep first-seen source
    order and are not deduplicated.
    """
    title: Optional[str]
    description: Optional[str]
    nodes: List[ParsedNode]
    connections: List[ParsedConnection]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]
