# src/ast3d_core/model/node.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..categories import NodeType
from ..constants import DEFAULT_NODE_COLORS, DEFAULT_NODE_OPACITY, NEUTRAL_GRAY
from ..geometry import (
    BoundingBox,
    Face,
    GeometryClass,
    Transform,
    Vector3,
    generate_faces,
)

logger = logging.getLogger(__name__)


@dataclass
class NodeVisual:
    color: str = NEUTRAL_GRAY
    opacity: float = DEFAULT_NODE_OPACITY
    wireframe: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"color": self.color, "opacity": self.opacity, "wireframe": self.wireframe}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> NodeVisual:
        return cls(
            color=data.get("color", NEUTRAL_GRAY),
            opacity=float(data.get("opacity", DEFAULT_NODE_OPACITY)),
            wireframe=bool(data.get("wireframe", False)),
        )


class Node:
    """
    A positioned node of the built graph.

    The bounding box and the faces are derived from the transform and are
    regenerated every time the transform changes; they are never edited in place.
    `children` and `parents` record connection direction, not ownership.
    """

    def __init__(
        self,
        id: str,
        type: NodeType,
        name: str,
        geometry: GeometryClass = GeometryClass.BOX,
        transform: Optional[Transform] = None,
    ):
        self.id = id
        self.type = type
        self.name = name
        self.description: Optional[str] = None
        self.geometry = geometry
        self.visual = NodeVisual(color=DEFAULT_NODE_COLORS.get(type.value, NEUTRAL_GRAY))
        self.metadata: Dict[str, Any] = {}
        self.children: List[str] = []
        self.parents: List[str] = []
        self.set_transform(transform or Transform.identity())

    def __repr__(self):
        return f"Node(id={self.id!r}, type={self.type.value!r}, position={self.position.as_tuple()})"

    # --- Transform ---

    @property
    def position(self) -> Vector3:
        return self.transform.position

    def set_transform(self, transform: Transform) -> None:
        self.transform = transform
        self.bounding_box = BoundingBox.from_transform(transform)
        self.faces: List[Face] = generate_faces(self.geometry, transform)

    def set_position(self, position: Vector3) -> None:
        self.set_transform(self.transform.with_position(position))

    def set_scale(self, scale: Vector3) -> None:
        """Raises InvalidTransformError if any component is not positive."""
        self.set_transform(self.transform.with_scale(scale))

    # --- Faces ---

    def get_face(self, face_id: str) -> Optional[Face]:
        for face in self.faces:
            if face.id == face_id:
                return face
        return None

    def connection_points(self) -> List[Vector3]:
        return [face.center for face in self.faces]

    # --- Adjacency ---

    def add_child(self, child_id: str) -> None:
        if child_id not in self.children:
            self.children.append(child_id)

    def add_parent(self, parent_id: str) -> None:
        if parent_id not in self.parents:
            self.parents.append(parent_id)

    def remove_child(self, child_id: str) -> None:
        self.children = [c for c in self.children if c != child_id]

    def remove_parent(self, parent_id: str) -> None:
        self.parents = [p for p in self.parents if p != parent_id]

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "geometry": self.geometry.value,
            "transform": self.transform.to_dict(),
            "boundingBox": self.bounding_box.to_dict(),
            "faces": [face.to_dict() for face in self.faces],
            "visual": self.visual.to_dict(),
            "metadata": dict(self.metadata),
            "children": list(self.children),
            "parents": list(self.parents),
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Node:
        """Rehydrates a node. Faces and bounding box are regenerated from the stored transform."""
        node = cls(
            id=data["id"],
            type=NodeType(data["type"]),
            name=data["name"],
            geometry=GeometryClass(data["geometry"]),
            transform=Transform.from_dict(data["transform"]),
        )
        node.description = data.get("description")
        node.visual = NodeVisual.from_dict(data.get("visual", {}))
        node.metadata = dict(data.get("metadata", {}))
        node.children = list(data.get("children", []))
        node.parents = list(data.get("parents", []))
        return node
