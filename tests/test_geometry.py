import numpy as np
import pytest

from lumenscene.bounding_box import BoundingBox
from lumenscene.geometry import (
    AttributeKind,
    Frustum,
    Geometry,
    Plane,
    PlaneIntersects,
    attribute_name,
)

POSITIONS = [0, 0, 0, 1, 0, 0, 0, 1, 0, 1, 1, 0]
UVS = [0, 0, 1, 0, 0, 1, 1, 1]
NORMALS = [0, 0, 1] * 4


def make_quad():
    geom = Geometry()
    geom.set_attribute(AttributeKind.POSITION, POSITIONS)
    geom.set_attribute(AttributeKind.TEX_COORD, UVS)
    geom.set_attribute(AttributeKind.NORMAL, NORMALS)
    geom.set_index([0, 1, 2, 2, 1, 3])
    return geom


def test_attribute_names():
    assert attribute_name(AttributeKind.POSITION) == "aPos"
    assert attribute_name(AttributeKind.TEX_COORD) == "aTexCoord"
    assert attribute_name(AttributeKind.NORMAL) == "aNormal"


def test_missing_attribute_is_empty():
    geom = Geometry()
    assert geom.get_attribute(AttributeKind.NORMAL).size == 0
    assert geom.vertex_count() == 0


def test_bad_attribute_length():
    with pytest.raises(ValueError):
        Geometry().set_attribute(AttributeKind.POSITION, [1, 2])


def test_counts():
    geom = make_quad()
    assert geom.vertex_count() == 4
    assert geom.triangle_count() == 2
    assert geom.is_indexed


def test_non_indexed_counts_and_no_triangle():
    geom = Geometry()
    geom.set_attribute(AttributeKind.POSITION, POSITIONS[:9])
    assert geom.triangle_count() == 1
    assert geom.fetch_triangle(0) is None


def test_fetch_triangle_uses_indices():
    geom = make_quad()
    tri = geom.fetch_triangle(1)
    pos = np.array(POSITIONS, dtype=float).reshape(-1, 3)
    uv = np.array(UVS, dtype=float).reshape(-1, 2)
    assert np.allclose(tri.v0, pos[2])
    assert np.allclose(tri.v1, pos[1])
    assert np.allclose(tri.v2, pos[3])
    assert np.allclose(tri.t2, uv[3])
    assert np.allclose(tri.n0, [0, 0, 1])


def test_fetch_triangle_out_of_range():
    with pytest.raises(IndexError):
        make_quad().fetch_triangle(2)


def test_plane_distance_and_points():
    plane = Plane()
    plane.set((0, 2, 0), (0, 1, 0))
    assert plane.distance((5, 1, 5)) == pytest.approx(0.0)
    assert plane.intersects_point((0, 3, 0)) is PlaneIntersects.FRONT
    assert plane.intersects_point((0, -3, 0)) is PlaneIntersects.BACK
    assert plane.intersects_point((7, 1, 0)) is PlaneIntersects.TANGENT


def test_plane_segment_and_triangle():
    plane = Plane((0, 1, 0), (0, 0, 0))
    assert plane.intersects_segment((0, -1, 0), (0, 1, 0)) is PlaneIntersects.CROSS
    assert plane.intersects_segment((0, 1, 0), (0, 2, 0)) is PlaneIntersects.FRONT
    assert plane.intersects_segment((0, 0, 0), (0, 2, 0)) is PlaneIntersects.TANGENT
    assert plane.intersects_triangle((0, 1, 0), (1, 1, 0), (0, -1, 0)) is PlaneIntersects.CROSS
    assert plane.intersects_triangle((0, -1, 0), (1, -1, 0), (0, -2, 0)) is PlaneIntersects.BACK


def test_plane_box():
    plane = Plane((0, 1, 0), (0, 0, 0))
    assert plane.intersects_box(BoundingBox((0, -1, 0), (1, 1, 1))) is PlaneIntersects.CROSS
    assert plane.intersects_box(BoundingBox((0, -3, 0), (1, -2, 1))) is PlaneIntersects.BACK
    assert plane.intersects_box(BoundingBox((0, 2, 0), (1, 3, 1))) is PlaneIntersects.FRONT


def unit_cube_frustum():
    frustum = Frustum()
    normals = [(1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1)]
    for plane, n in zip(frustum.planes, normals):
        point = [0.0 if c > 0 else 1.0 if c < 0 else 0.5 for c in n]
        plane.set(n, point)
    frustum.bbox = BoundingBox((0, 0, 0), (1, 1, 1))
    return frustum


def test_frustum_points_and_segments():
    frustum = unit_cube_frustum()
    assert frustum.intersects_point((0.5, 0.5, 0.5))
    assert not frustum.intersects_point((2, 0.5, 0.5))
    assert frustum.intersects_segment((-1, 0.5, 0.5), (2, 0.5, 0.5))
    assert not frustum.intersects_triangle((3, 3, 3), (4, 3, 3), (3, 4, 3))


def test_frustum_boxes():
    frustum = unit_cube_frustum()
    assert frustum.intersects_box(BoundingBox((0.2, 0.2, 0.2), (0.4, 0.4, 0.4)))
    assert not frustum.intersects_box(BoundingBox((5, 5, 5), (6, 6, 6)))