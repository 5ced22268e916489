# tests/test_geometry.py
import math

import numpy as np
import pytest

from ast3d_core.categories import NodeType
from ast3d_core.geometry import (
    BoundingBox,
    GeometryClass,
    InvalidTransformError,
    Transform,
    Vector3,
    face_ids_for,
    generate_faces,
)
from ast3d_core.model import Node


def faces_by_id(faces):
    return {face.id: face for face in faces}


class TestVectorAndTransform:

    def test_vector_arithmetic(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(0.5, 0.5, 0.5)
        assert a + b == Vector3(1.5, 2.5, 3.5)
        assert a - b == Vector3(0.5, 1.5, 2.5)
        assert b.scaled(2) == Vector3.one()
        assert Vector3.zero().distance_to(Vector3(3.0, 4.0, 0.0)) == 5.0
        assert Vector3.from_array(np.array([1, 2, 3])) == Vector3(1.0, 2.0, 3.0)

    def test_identity_transform(self):
        transform = Transform.identity()
        assert transform.position == Vector3.zero()
        assert transform.rotation == Vector3.zero()
        assert transform.scale == Vector3.one()

    @pytest.mark.parametrize("scale", [
        Vector3(0.0, 1.0, 1.0),
        Vector3(1.0, -2.0, 1.0),
        Vector3(1.0, 1.0, math.inf),
        Vector3(math.nan, 1.0, 1.0),
    ])
    def test_scale_must_be_positive_and_finite(self, scale):
        with pytest.raises(InvalidTransformError) as excinfo:
            Transform(scale=scale)
        assert "Invalid Transform" in excinfo.value.get_diagnostic_report()

    def test_bounding_box_from_transform(self):
        box = BoundingBox.from_transform(Transform(position=Vector3(10.0, 0.0, 0.0), scale=Vector3(2.0, 4.0, 6.0)))
        assert box.min == Vector3(9.0, -2.0, -3.0)
        assert box.max == Vector3(11.0, 2.0, 3.0)
        assert box.center == Vector3(10.0, 0.0, 0.0)
        assert box.size == Vector3(2.0, 4.0, 6.0)

    def test_enclosing_box(self):
        a = BoundingBox.from_transform(Transform(position=Vector3(-5.0, 0.0, 0.0)))
        b = BoundingBox.from_transform(Transform(position=Vector3(5.0, 0.0, 0.0)))
        enclosing = BoundingBox.enclosing([a, b])
        assert enclosing.min == Vector3(-5.5, -0.5, -0.5)
        assert enclosing.max == Vector3(5.5, 0.5, 0.5)
        assert enclosing.center == Vector3.zero()
        assert BoundingBox.enclosing([]) == BoundingBox.empty()
        assert not a.intersects(b)
        assert a.intersects(b, margin=5.0)


class TestFaceGeneration:

    def test_box_has_six_named_faces(self):
        transform = Transform(position=Vector3(1.0, 2.0, 3.0), scale=Vector3(2.0, 4.0, 6.0))
        faces = faces_by_id(generate_faces(GeometryClass.BOX, transform))

        assert set(faces) == {"front", "back", "top", "bottom", "left", "right"}
        assert faces["front"].center == Vector3(1.0, 2.0, 6.0)
        assert faces["front"].normal == Vector3(0.0, 0.0, 1.0)
        assert faces["back"].center == Vector3(1.0, 2.0, 0.0)
        assert faces["top"].center == Vector3(1.0, 4.0, 3.0)
        assert faces["bottom"].center == Vector3(1.0, 0.0, 3.0)
        assert faces["right"].center == Vector3(2.0, 2.0, 3.0)
        assert faces["left"].normal == Vector3(-1.0, 0.0, 0.0)

    def test_box_face_vertices_lie_in_the_face_plane(self):
        transform = Transform(scale=Vector3(2.0, 2.0, 2.0))
        for face in generate_faces(GeometryClass.BOX, transform):
            assert len(face.vertices) == 4
            normal = face.normal.as_array()
            for vertex in face.vertices:
                offset = vertex.as_array() - face.center.as_array()
                assert np.dot(offset, normal) == 0.0

    def test_plate_has_single_front_face_at_centre(self):
        transform = Transform(position=Vector3(3.0, 0.0, 0.0), scale=Vector3(4.0, 2.0, 1.0))
        faces = generate_faces(GeometryClass.PLATE, transform)
        assert len(faces) == 1
        assert faces[0].id == "front"
        assert faces[0].center == Vector3(3.0, 0.0, 0.0)
        assert faces[0].normal == Vector3(0.0, 0.0, 1.0)
        xs = sorted(v.x for v in faces[0].vertices)
        assert xs == [1.0, 1.0, 5.0, 5.0]

    def test_many_faced_solid_has_twelve_faces_on_a_circle(self):
        transform = Transform(position=Vector3(0.0, 0.0, 5.0), scale=Vector3(1.0, 4.0, 2.0))
        faces = generate_faces(GeometryClass.MANY_FACED, transform)

        assert [f.id for f in faces] == [f"face_{i}" for i in range(12)]
        assert faces[0].center == Vector3(2.0, 0.0, 5.0)
        assert faces[3].center.x == pytest.approx(0.0, abs=1e-12)
        assert faces[3].center.y == pytest.approx(2.0)
        for face in faces:
            assert face.vertices == []
            radius = math.hypot(face.center.x, face.center.y)
            assert radius == pytest.approx(2.0)

    def test_face_ids_for(self):
        assert face_ids_for(GeometryClass.PLATE) == ["front"]
        assert len(face_ids_for(GeometryClass.MANY_FACED)) == 12
        assert "top" in face_ids_for(GeometryClass.BOX)

    def test_faces_follow_the_node_transform(self):
        node = Node("A", NodeType.FUNCTION, "a")
        assert node.get_face("front").center == Vector3(0.0, 0.0, 0.5)

        node.set_position(Vector3(10.0, 0.0, 0.0))
        assert node.get_face("front").center == Vector3(10.0, 0.0, 0.5)
        assert node.bounding_box.center == Vector3(10.0, 0.0, 0.0)

        node.set_scale(Vector3(4.0, 4.0, 4.0))
        assert node.get_face("front").center == Vector3(10.0, 0.0, 2.0)
        assert node.bounding_box.max == Vector3(12.0, 2.0, 2.0)
        assert node.get_face("missing") is None
