# src/ast3d_core/geometry/types.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List

import numpy as np

from .exceptions import InvalidTransformError

logger = logging.getLogger(__name__)


class GeometryClass(Enum):
    """
    The geometric shape family of a node. Selected by the delimiter of the
    node declaration, never by its category label.
    """
    BOX = "cube"
    MANY_FACED = "dodecahedron"
    PLATE = "plane"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Vector3:
    """An immutable 3-vector of floats. Used for positions, rotations, scales and normals."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> Vector3:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def one(cls) -> Vector3:
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def from_array(cls, values: Iterable[float]) -> Vector3:
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Vector3:
        return cls(float(data["x"]), float(data["y"]), float(data["z"]))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def as_tuple(self):
        return (self.x, self.y, self.z)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def distance_to(self, other: Vector3) -> float:
        return math.sqrt((other.x - self.x) ** 2 + (other.y - self.y) ** 2 + (other.z - self.z) ** 2)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scaled(self, factor: float) -> Vector3:
        return Vector3(self.x * factor, self.y * factor, self.z * factor)


@dataclass(frozen=True)
class Transform:
    """
    Position, rotation (euler angles) and scale of a node.
    Every scale component must be a positive, finite number.
    """
    position: Vector3 = field(default_factory=Vector3.zero)
    rotation: Vector3 = field(default_factory=Vector3.zero)
    scale: Vector3 = field(default_factory=Vector3.one)

    def __post_init__(self):
        components = self.scale.as_tuple()
        if not all(math.isfinite(c) and c > 0 for c in components):
            raise InvalidTransformError(
                scale=components,
                details="Every scale component must be a positive, finite number."
            )

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    def with_position(self, position: Vector3) -> Transform:
        return Transform(position=position, rotation=self.rotation, scale=self.scale)

    def with_scale(self, scale: Vector3) -> Transform:
        return Transform(position=self.position, rotation=self.rotation, scale=scale)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "position": self.position.to_dict(),
            "rotation": self.rotation.to_dict(),
            "scale": self.scale.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Transform:
        return cls(
            position=Vector3.from_dict(data["position"]),
            rotation=Vector3.from_dict(data["rotation"]),
            scale=Vector3.from_dict(data["scale"]),
        )


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box in world coordinates."""
    min: Vector3
    max: Vector3
    center: Vector3
    size: Vector3

    @classmethod
    def empty(cls) -> BoundingBox:
        zero = Vector3.zero()
        return cls(min=zero, max=zero, center=zero, size=zero)

    @classmethod
    def from_transform(cls, transform: Transform) -> BoundingBox:
        """The box of a node: centred on its position, extending half its scale on each axis."""
        position = transform.position.as_array()
        half = transform.scale.as_array() / 2.0
        return cls(
            min=Vector3.from_array(position - half),
            max=Vector3.from_array(position + half),
            center=transform.position,
            size=transform.scale,
        )

    @classmethod
    def enclosing(cls, boxes: Iterable[BoundingBox]) -> BoundingBox:
        """The smallest box containing every box given; an empty box when none are."""
        boxes = list(boxes)
        if not boxes:
            return cls.empty()
        lower = np.min([b.min.as_array() for b in boxes], axis=0)
        upper = np.max([b.max.as_array() for b in boxes], axis=0)
        return cls(
            min=Vector3.from_array(lower),
            max=Vector3.from_array(upper),
            center=Vector3.from_array((lower + upper) / 2.0),
            size=Vector3.from_array(upper - lower),
        )

    def intersects(self, other: BoundingBox, margin: float = 0.0) -> bool:
        return bool(
            np.all(self.min.as_array() - margin <= other.max.as_array() + margin)
            and np.all(self.max.as_array() + margin >= other.min.as_array() - margin)
        )

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "min": self.min.to_dict(),
            "max": self.max.to_dict(),
            "center": self.center.to_dict(),
            "size": self.size.to_dict(),
        }


@dataclass(frozen=True)
class Face:
    """A named connection face of a node. `center` and `vertices` are absolute world coordinates."""
    id: str
    normal: Vector3
    center: Vector3
    vertices: List[Vector3] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "normal": self.normal.to_dict(),
            "center": self.center.to_dict(),
            "vertices": [v.to_dict() for v in self.vertices],
        }
