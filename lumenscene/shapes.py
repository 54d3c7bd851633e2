"""Ray-intersectable primitives: triangles and spheres."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from lumenscene.bounding_box import BoundingBox, Ray
from lumenscene.globals import EPSILON, FLOAT_MAX, PI
from lumenscene.material import Material


def _as_vec3(value: Any) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3).copy()


def _normalize(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v)
    return v / n if n > 0 else v


def _solve_quadratic(a: float, b: float, c: float) -> tuple[float, float] | None:
    discr = b * b - 4.0 * a * c
    if discr < 0:
        return None
    if discr == 0:
        x = -0.5 * b / a
        return x, x
    root = math.sqrt(discr)
    q = -0.5 * (b + root) if b > 0 else -0.5 * (b - root)
    x0, x1 = q / a, c / q
    return (x0, x1) if x0 <= x1 else (x1, x0)


@dataclass(eq=False)
class Intersection:
    """Result of tracing a ray against geometry."""

    hit: bool = False
    impact_point: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    tex_coords: np.ndarray = field(default_factory=lambda: np.zeros(2))
    trace_distance: float = FLOAT_MAX
    material: Material | None = None
    primitive: Any = None

    def has_emission(self) -> bool:
        return self.material is not None and self.material.has_emission()

    def emission(self) -> np.ndarray:
        if self.material is None:
            return np.zeros(3)
        return self.material.emission.copy()


class Triangle:
    """A single triangle with optional per-vertex texture coordinates and normals."""

    def __init__(self, v0: Any, v1: Any, v2: Any, material: Material | None = None) -> None:
        self.v0 = _as_vec3(v0)
        self.v1 = _as_vec3(v1)
        self.v2 = _as_vec3(v2)
        self.t0 = np.zeros(2)
        self.t1 = np.zeros(2)
        self.t2 = np.zeros(2)
        self.n0 = np.zeros(3)
        self.n1 = np.zeros(3)
        self.n2 = np.zeros(3)
        self.material = material
        self._update_derived()

    def _update_derived(self) -> None:
        self.e1 = self.v1 - self.v0
        self.e2 = self.v2 - self.v0
        cross = np.cross(self.e1, self.e2)
        self.normal = _normalize(cross)
        self.area = float(np.linalg.norm(cross) * 0.5)

    def get_intersection(self, ray: Ray) -> Intersection:
        """Möller–Trumbore test; back faces are not hit."""
        result = Intersection()
        if np.dot(ray.direction, self.normal) > 0:
            return result
        s1 = np.cross(ray.direction, self.e2)
        det = float(np.dot(self.e1, s1))
        if abs(det) < EPSILON:
            return result
        s = ray.origin - self.v0
        s2 = np.cross(s, self.e1)
        det_inv = 1.0 / det
        u = float(np.dot(s, s1)) * det_inv
        if u < 0 or u > 1:
            return result
        v = float(np.dot(ray.direction, s2)) * det_inv
        if v < 0 or u + v > 1:
            return result
        t = float(np.dot(self.e2, s2)) * det_inv
        if t < 0:
            return result
        result.hit = True
        result.trace_distance = t
        result.normal = self.normal.copy()
        result.impact_point = ray.origin + ray.direction * t
        result.material = self.material
        result.primitive = self
        return result

    def bounds(self) -> BoundingBox:
        return BoundingBox(self.v0, self.v1).merge_point(self.v2)

    def sample(self) -> tuple[Intersection, float]:
        """A point on the triangle and the area pdf of choosing it."""
        x = math.sqrt(random.random())
        y = random.random()
        pos = Intersection()
        pos.impact_point = self.v0 * (1 - x) + self.v1 * (x * (1 - y)) + self.v2 * (x * y)
        pos.tex_coords = self.t0 * (1 - x) + self.t1 * (x * (1 - y)) + self.t2 * (x * y)
        pos.normal = self.normal.copy()
        pos.material = self.material
        return pos, 1.0 / self.area

    def has_emit(self) -> bool:
        return self.material is not None and self.material.has_emission()

    def transform(self, matrix: Any) -> None:
        """Apply an affine 4x4 transform to the vertices in place."""
        m = np.asarray(matrix, dtype=float)
        self.v0 = (m @ np.append(self.v0, 1.0))[:3]
        self.v1 = (m @ np.append(self.v1, 1.0))[:3]
        self.v2 = (m @ np.append(self.v2, 1.0))[:3]
        self._update_derived()


class Sphere:
    """An analytic sphere."""

    def __init__(self, center: Any, radius: float, material: Material | None = None) -> None:
        self.center = _as_vec3(center)
        self.radius = float(radius)
        self.material = material
        self.area = 4 * PI * self.radius * self.radius

    def _roots(self, ray: Ray) -> tuple[float, float] | None:
        to_origin = ray.origin - self.center
        a = float(np.dot(ray.direction, ray.direction))
        b = 2.0 * float(np.dot(ray.direction, to_origin))
        c = float(np.dot(to_origin, to_origin)) - self.radius * self.radius
        return _solve_quadratic(a, b, c)

    def intersect(self, ray: Ray) -> bool:
        roots = self._roots(ray)
        if roots is None:
            return False
        t0, t1 = roots
        if t0 < 0:
            t0 = t1
        return t0 >= 0

    def get_intersection(self, ray: Ray) -> Intersection:
        """Nearest hit; hits closer than 0.5 along the ray are ignored."""
        result = Intersection()
        roots = self._roots(ray)
        if roots is None:
            return result
        t0, t1 = roots
        if t0 < 0:
            t0 = t1
        if t0 < 0.5:
            return result
        result.hit = True
        result.impact_point = ray.origin + ray.direction * t0
        result.normal = _normalize(result.impact_point - self.center)
        result.material = self.material
        result.trace_distance = t0
        return result

    def bounds(self) -> BoundingBox:
        return BoundingBox(self.center - self.radius, self.center + self.radius)

    def sample(self) -> tuple[Intersection, float]:
        theta = 2.0 * PI * random.random()
        phi = PI * random.random()
        direction = np.array(
            [math.cos(phi), math.sin(phi) * math.cos(theta), math.sin(phi) * math.sin(theta)]
        )
        pos = Intersection()
        pos.impact_point = self.center + self.radius * direction
        pos.normal = direction
        pos.material = self.material
        return pos, 1.0 / self.area

    def has_emit(self) -> bool:
        return self.material is not None and self.material.has_emission()

    def transform(self, matrix: Any) -> None:
        """Translate the centre and scale the radius by the x-axis scale."""
        m = np.asarray(matrix, dtype=float)
        self.center = self.center + m[:3, 3]
        self.radius *= float(np.linalg.norm(m[:3, 0]))
        self.area = 4 * PI * self.radius * self.radius