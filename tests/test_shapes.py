import math

import numpy as np
import pytest

from lumenscene.bounding_box import Ray
from lumenscene.material import Material
from lumenscene.shapes import Intersection, Sphere, Triangle


def make_tri(material=None):
    return Triangle((0, 0, 0), (1, 0, 0), (0, 1, 0), material)


def test_intersection_defaults():
    isect = Intersection()
    assert not isect.hit
    assert not isect.has_emission()
    np.testing.assert_allclose(isect.emission(), np.zeros(3))


def test_intersection_emission_from_material():
    mat = Material()
    mat.set_emission((4, 5, 6))
    isect = Intersection(material=mat)
    assert isect.has_emission()
    np.testing.assert_allclose(isect.emission(), [4, 5, 6])


def test_triangle_area_and_normal():
    tri = make_tri()
    assert tri.area == pytest.approx(0.5)
    np.testing.assert_allclose(tri.normal, [0, 0, 1])


def test_triangle_hit():
    mat = Material()
    tri = make_tri(mat)
    origin = (0.2, 0.2, 5.0)
    isect = tri.get_intersection(Ray(origin, (0, 0, -1)))
    assert isect.hit
    assert isect.trace_distance == pytest.approx(origin[2])
    np.testing.assert_allclose(isect.impact_point, [origin[0], origin[1], 0])
    assert isect.primitive is tri
    assert isect.material is mat


def test_triangle_back_face_and_miss():
    tri = make_tri()
    assert not tri.get_intersection(Ray((0.2, 0.2, -5), (0, 0, 1))).hit
    assert not tri.get_intersection(Ray((2, 2, 5), (0, 0, -1))).hit
    assert not tri.get_intersection(Ray((0.2, 0.2, 5), (1, 0, 0))).hit


def test_triangle_bounds():
    box = make_tri().bounds()
    np.testing.assert_allclose(box.pmin, [0, 0, 0])
    np.testing.assert_allclose(box.pmax, [1, 1, 0])


def test_triangle_sample_on_surface():
    tri = make_tri()
    for _ in range(20):
        pos, pdf = tri.sample()
        p = pos.impact_point
        assert p[2] == pytest.approx(0.0)
        assert p[0] >= -1e-9 and p[1] >= -1e-9 and p[0] + p[1] <= 1 + 1e-9
        assert pdf == pytest.approx(1 / tri.area)


def test_triangle_transform_translation():
    tri = make_tri()
    area = tri.area
    m = np.eye(4)
    m[:3, 3] = (1, 2, 3)
    tri.transform(m)
    box = tri.bounds()
    np.testing.assert_allclose(box.pmin, [1, 2, 3])
    assert tri.area == pytest.approx(area)
    np.testing.assert_allclose(tri.e1, tri.v1 - tri.v0)


def test_triangle_has_emit():
    mat = Material()
    tri = make_tri(mat)
    assert not tri.has_emit()
    mat.set_emission((1, 1, 1))
    assert tri.has_emit()
    assert not make_tri().has_emit()


def test_sphere_hit_from_outside():
    radius = 1.0
    sphere = Sphere((0, 0, 0), radius)
    isect = sphere.get_intersection(Ray((0, 0, -10), (0, 0, 1)))
    assert isect.hit
    assert isect.trace_distance == pytest.approx(10 - radius)
    np.testing.assert_allclose(isect.impact_point, [0, 0, -radius])
    np.testing.assert_allclose(isect.normal, [0, 0, -1])


def test_sphere_hit_from_inside_uses_far_root():
    sphere = Sphere((0, 0, 0), 2.0)
    isect = sphere.get_intersection(Ray((0, 0, 0), (1, 0, 0)))
    assert isect.hit
    assert isect.trace_distance == pytest.approx(sphere.radius)


def test_sphere_near_hit_is_ignored():
    sphere = Sphere((0, 0, 0), 1.0)
    ray = Ray((0, 0, -1.2), (0, 0, 1))
    assert sphere.intersect(ray)
    assert not sphere.get_intersection(ray).hit


def test_sphere_miss():
    sphere = Sphere((0, 0, 0), 1.0)
    ray = Ray((5, 5, -10), (0, 0, 1))
    assert not sphere.intersect(ray)
    assert not sphere.get_intersection(ray).hit


def test_sphere_bounds_and_area():
    sphere = Sphere((1, 2, 3), 2.0)
    box = sphere.bounds()
    np.testing.assert_allclose(box.pmin, [-1, 0, 1])
    np.testing.assert_allclose(box.pmax, [3, 4, 5])
    assert sphere.area == pytest.approx(4 * math.pi * 4)


def test_sphere_sample_on_surface():
    sphere = Sphere((1, 1, 1), 3.0)
    for _ in range(20):
        pos, pdf = sphere.sample()
        assert np.linalg.norm(pos.impact_point - sphere.center) == pytest.approx(sphere.radius)
        assert np.linalg.norm(pos.normal) == pytest.approx(1.0)
        assert pdf == pytest.approx(1 / sphere.area)


def test_sphere_transform():
    sphere = Sphere((0, 0, 0), 1.0)
    m = np.diag([2.0, 2.0, 2.0, 1.0])
    m[:3, 3] = (1, 0, 0)
    sphere.transform(m)
    np.testing.assert_allclose(sphere.center, [1, 0, 0])
    assert sphere.radius == pytest.approx(2.0)
    assert sphere.area == pytest.approx(4 * math.pi * 4)