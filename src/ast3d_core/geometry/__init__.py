# src/ast3d_core/geometry/__init__.py
from .types import BoundingBox, Face, GeometryClass, Transform, Vector3
from .faces import FACE_GENERATORS, face_ids_for, generate_faces
from .exceptions import InvalidTransformError

__all__ = [
    # Value Types
    "Vector3",
    "Transform",
    "BoundingBox",
    "Face",
    "GeometryClass",
    # Face Generation
    "FACE_GENERATORS",
    "generate_faces",
    "face_ids_for",
    # Exceptions
    "InvalidTransformError",
]
