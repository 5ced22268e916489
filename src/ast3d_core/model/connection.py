# src/ast3d_core/model/connection.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..categories import ConnectionType
from ..constants import (
    DEFAULT_CONNECTION_COLORS,
    DEFAULT_CONNECTION_OPACITY,
    DEFAULT_LABEL_COLOR,
    DEFAULT_LABEL_SIZE,
    NEUTRAL_GRAY,
)
from ..geometry import BoundingBox, Vector3

logger = logging.getLogger(__name__)


@dataclass
class ConnectionEndpoint:
    """
    One end of a built connection. `anchor` is filled in by the graph/builder,
    never by the parser, and is not kept in sync when the node moves later.
    """
    node_id: str
    face_id: Optional[str] = None
    anchor: Optional[Vector3] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"nodeId": self.node_id}
        if self.face_id is not None:
            data["faceId"] = self.face_id
        if self.anchor is not None:
            data["anchor"] = self.anchor.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ConnectionEndpoint:
        anchor = data.get("anchor")
        return cls(
            node_id=data["nodeId"],
            face_id=data.get("faceId"),
            anchor=Vector3.from_dict(anchor) if anchor is not None else None,
        )


@dataclass
class ConnectionLabel:
    text: str
    size: int = DEFAULT_LABEL_SIZE
    color: str = DEFAULT_LABEL_COLOR
    position: Vector3 = field(default_factory=Vector3.zero)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "size": self.size, "color": self.color, "position": self.position.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ConnectionLabel:
        position = data.get("position")
        return cls(
            text=data["text"],
            size=data.get("size", DEFAULT_LABEL_SIZE),
            color=data.get("color", DEFAULT_LABEL_COLOR),
            position=Vector3.from_dict(position) if position else Vector3.zero(),
        )


@dataclass
class ConnectionVisual:
    color: str = NEUTRAL_GRAY
    opacity: float = DEFAULT_CONNECTION_OPACITY
    label: Optional[ConnectionLabel] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"color": self.color, "opacity": self.opacity}
        if self.label is not None:
            data["label"] = self.label.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ConnectionVisual:
        label = data.get("label")
        return cls(
            color=data.get("color", NEUTRAL_GRAY),
            opacity=float(data.get("opacity", DEFAULT_CONNECTION_OPACITY)),
            label=ConnectionLabel.from_dict(label) if label else None,
        )


class Connection:
    """A directed, typed edge between two nodes, with optional face anchors and waypoints."""

    def __init__(
        self,
        id: str,
        type: ConnectionType,
        source: ConnectionEndpoint,
        target: ConnectionEndpoint,
    ):
        self.id = id
        self.type = type
        self.source = source
        self.target = target
        self.visual = ConnectionVisual(color=DEFAULT_CONNECTION_COLORS.get(type.value, NEUTRAL_GRAY))
        self.metadata: Dict[str, Any] = {}
        self.waypoints: List[Vector3] = []

    def __repr__(self):
        return f"Connection(id={self.id!r}, {self.source.node_id!r} -> {self.target.node_id!r}, type={self.type.value!r})"

    @property
    def label_text(self) -> Optional[str]:
        return self.visual.label.text if self.visual.label else None

    def joins(self, source_id: str, target_id: str) -> bool:
        return self.source.node_id == source_id and self.target.node_id == target_id

    def touches(self, node_id: str) -> bool:
        return self.source.node_id == node_id or self.target.node_id == node_id

    # --- Path ---

    def add_waypoint(self, position: Vector3) -> None:
        self.waypoints.append(position)

    def clear_waypoints(self) -> None:
        self.waypoints = []

    def set_waypoints(self, waypoints: Iterable[Vector3]) -> None:
        self.waypoints = list(waypoints)

    def update_anchors(self, source_anchor: Vector3, target_anchor: Vector3) -> None:
        self.source.anchor = source_anchor
        self.target.anchor = target_anchor

    def path_points(self) -> List[Vector3]:
        points = []
        if self.source.anchor is not None:
            points.append(self.source.anchor)
        points.extend(self.waypoints)
        if self.target.anchor is not None:
            points.append(self.target.anchor)
        return points

    def path_length(self) -> float:
        """Length of the polyline source anchor -> waypoints -> target anchor; 0 without a source anchor."""
        if self.source.anchor is None:
            return 0.0
        points = self.path_points()
        return sum(a.distance_to(b) for a, b in zip(points, points[1:]))

    def bounding_box(self) -> BoundingBox:
        points = self.path_points()
        if not points:
            return BoundingBox.empty()
        return BoundingBox.enclosing(
            BoundingBox(min=p, max=p, center=p, size=Vector3.zero()) for p in points
        )

    def intersects_with(self, other: Connection) -> bool:
        """Coarse test: do the bounding boxes of both paths overlap?"""
        if len(self.path_points()) < 2 or len(other.path_points()) < 2:
            return False
        return self.bounding_box().intersects(other.bounding_box())

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "source": self.source.to_dict(),
            "target": self.target.to_dict(),
            "visual": self.visual.to_dict(),
            "metadata": dict(self.metadata),
            "waypoints": [w.to_dict() for w in self.waypoints],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Connection:
        connection = cls(
            id=data["id"],
            type=ConnectionType(data["type"]),
            source=ConnectionEndpoint.from_dict(data["source"]),
            target=ConnectionEndpoint.from_dict(data["target"]),
        )
        connection.visual = ConnectionVisual.from_dict(data.get("visual", {}))
        connection.metadata = dict(data.get("metadata", {}))
        connection.set_waypoints(Vector3.from_dict(w) for w in data.get("waypoints", []))
        return connection
