# src/ast3d_core/geometry/faces.py
"""
Face generation for the three geometry classes.

Each geometry class maps to a pure function `(transform) -> List[Face]`. Faces are
absolute world-space objects derived from the current transform, so the owning
node regenerates the whole list whenever its position or scale changes instead of
patching individual faces.
"""
import logging
from typing import Callable, Dict, List

import numpy as np

from ..constants import MANY_FACED_FACE_COUNT, TWO_PI
from .types import Face, GeometryClass, Transform, Vector3

logger = logging.getLogger(__name__)

FaceGenerator = Callable[[Transform], List[Face]]

# (face id, axis index, sign). The two remaining axes span the face plane.
_BOX_FACE_LAYOUT = (
    ("front", 2, 1.0),
    ("back", 2, -1.0),
    ("top", 1, 1.0),
    ("bottom", 1, -1.0),
    ("right", 0, 1.0),
    ("left", 0, -1.0),
)

# Corner order around a face, expressed in the (u, v) coordinates of its plane.
_QUAD_CORNERS = ((-1.0, -1.0), (1.0, -1.0), (1.0, 1.0), (-1.0, 1.0))


def _quad_vertices(center: np.ndarray, half: np.ndarray, u_axis: int, v_axis: int, flip: bool) -> List[Vector3]:
    """Four corners of an axis-aligned rectangle; `flip` reverses the winding for faces pointing down an axis."""
    corners = _QUAD_CORNERS[::-1] if flip else _QUAD_CORNERS
    vertices = []
    for cu, cv in corners:
        corner = center.copy()
        corner[u_axis] += cu * half[u_axis]
        corner[v_axis] += cv * half[v_axis]
        vertices.append(Vector3.from_array(corner))
    return vertices


def generate_box_faces(transform: Transform) -> List[Face]:
    position = transform.position.as_array()
    half = transform.scale.as_array() / 2.0
    faces = []
    for face_id, axis, sign in _BOX_FACE_LAYOUT:
        normal = np.zeros(3)
        normal[axis] = sign
        center = position + normal * half
        u_axis, v_axis = [a for a in range(3) if a != axis]
        faces.append(Face(
            id=face_id,
            normal=Vector3.from_array(normal),
            center=Vector3.from_array(center),
            vertices=_quad_vertices(center, half, u_axis, v_axis, flip=sign < 0),
        ))
    return faces


def generate_plate_faces(transform: Transform) -> List[Face]:
    """A plate offers a single front face lying in the x/y plane through its centre."""
    position = transform.position.as_array()
    half = transform.scale.as_array() / 2.0
    return [Face(
        id="front",
        normal=Vector3(0.0, 0.0, 1.0),
        center=transform.position,
        vertices=_quad_vertices(position, half, 0, 1, flip=False),
    )]


def generate_many_faced_faces(transform: Transform) -> List[Face]:
    """
    Approximates a dodecahedron by twelve faces spread evenly around a circle in
    the x/y plane, radius half the largest scale component. Faces carry no vertices.
    """
    position = transform.position.as_array()
    radius = max(transform.scale.as_tuple()) / 2.0
    faces = []
    for i in range(MANY_FACED_FACE_COUNT):
        angle = i * TWO_PI / MANY_FACED_FACE_COUNT
        normal = np.array([np.cos(angle), np.sin(angle), 0.0])
        faces.append(Face(
            id=f"face_{i}",
            normal=Vector3.from_array(normal),
            center=Vector3.from_array(position + normal * radius),
        ))
    return faces


FACE_GENERATORS: Dict[GeometryClass, FaceGenerator] = {
    GeometryClass.BOX: generate_box_faces,
    GeometryClass.PLATE: generate_plate_faces,
    GeometryClass.MANY_FACED: generate_many_faced_faces,
}


def generate_faces(geometry_class: GeometryClass, transform: Transform) -> List[Face]:
    """Computes the connection faces of a node of the given geometry class."""
    return FACE_GENERATORS[geometry_class](transform)


def face_ids_for(geometry_class: GeometryClass) -> List[str]:
    """The face names a geometry class offers, independent of any transform."""
    return [face.id for face in generate_faces(geometry_class, Transform.identity())]
