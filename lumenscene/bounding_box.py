"""Rays and axis-aligned bounding boxes."""

from __future__ import annotations

from typing import Any

import numpy as np

from lumenscene.globals import FLOAT_MAX, FLOAT_MIN


def _as_vec3(value: Any) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3).copy()


class Ray:
    """A half-line with a cached reciprocal direction."""

    __slots__ = ("origin", "direction", "direction_inv")

    def __init__(self, origin: Any, direction: Any) -> None:
        self.origin = _as_vec3(origin)
        self.direction = _as_vec3(direction)
        with np.errstate(divide="ignore"):
            self.direction_inv = 1.0 / self.direction

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"


class BoundingBox:
    """Axis-aligned box; built empty, or spanning two points."""

    def __init__(self, p1: Any = None, p2: Any = None) -> None:
        if p1 is None and p2 is None:
            self.pmin = np.full(3, FLOAT_MAX)
            self.pmax = np.full(3, FLOAT_MIN)
            return
        a = _as_vec3(p1 if p1 is not None else p2)
        b = _as_vec3(p2 if p2 is not None else p1)
        self.pmin = np.minimum(a, b)
        self.pmax = np.maximum(a, b)

    def corners(self) -> list[np.ndarray]:
        """The eight corners, near face first."""
        lo, hi = self.pmin, self.pmax
        return [
            np.array([lo[0], hi[1], hi[2]]),
            np.array([lo[0], lo[1], hi[2]]),
            np.array([hi[0], lo[1], hi[2]]),
            np.array([hi[0], hi[1], hi[2]]),
            np.array([hi[0], hi[1], lo[2]]),
            np.array([hi[0], lo[1], lo[2]]),
            np.array([lo[0], lo[1], lo[2]]),
            np.array([lo[0], hi[1], lo[2]]),
        ]

    def transform(self, matrix: Any) -> BoundingBox:
        """Bounding box of this box's corners after an affine 4x4 transform."""
        m = np.asarray(matrix, dtype=float)
        result = BoundingBox()
        for corner in self.corners():
            result.merge_point((m @ np.append(corner, 1.0))[:3])
        return result

    def overlaps(self, box: BoundingBox) -> bool:
        lo, hi = self.pmin, self.pmax
        return all(
            (box.pmin[i] <= lo[i] <= box.pmax[i]) or (lo[i] <= box.pmin[i] <= hi[i])
            for i in range(3)
        )

    def inside(self, point: Any) -> bool:
        """True when the point lies strictly inside the box."""
        p = _as_vec3(point)
        return bool(np.all(p > self.pmin) and np.all(p < self.pmax))

    def offset(self, point: Any) -> np.ndarray:
        """Position of a point relative to the box, 0 at the minimum and 1 at the maximum."""
        out = _as_vec3(point) - self.pmin
        extent = self.pmax - self.pmin
        mask = self.pmax > self.pmin
        out[mask] /= extent[mask]
        return out

    def intersect_ray(self, ray: Ray) -> bool:
        with np.errstate(invalid="ignore"):
            t1 = (self.pmin - ray.origin) * ray.direction_inv
            t2 = (self.pmax - ray.origin) * ray.direction_inv
        t_min = np.fmin(t1, t2)
        t_max = np.fmax(t1, t2)
        t_enter = float(np.max(t_min))
        t_exit = float(np.min(t_max))
        return t_exit >= 0.0 and t_enter <= t_exit

    def centroid(self) -> np.ndarray:
        return (self.pmin + self.pmax) * 0.5

    def diagonal(self) -> np.ndarray:
        return self.pmax - self.pmin

    def max_extent_axis(self) -> int:
        d = self.diagonal()
        if d[0] > d[1] and d[0] > d[2]:
            return 0
        if d[1] > d[2]:
            return 1
        return 2

    def surface_area(self) -> float:
        d = self.diagonal()
        return float(2.0 * (d[0] * d[1] + d[0] * d[2] + d[1] * d[2]))

    def merge_point(self, point: Any) -> BoundingBox:
        """Grow to include a point; returns self."""
        p = _as_vec3(point)
        self.pmin = np.minimum(self.pmin, p)
        self.pmax = np.maximum(self.pmax, p)
        return self

    def merge(self, box: BoundingBox) -> BoundingBox:
        """Grow to include another box; returns self."""
        self.pmin = np.minimum(self.pmin, box.pmin)
        self.pmax = np.maximum(self.pmax, box.pmax)
        return self

    def copy(self) -> BoundingBox:
        out = BoundingBox()
        out.pmin = self.pmin.copy()
        out.pmax = self.pmax.copy()
        return out

    def __repr__(self) -> str:
        return f"BoundingBox(min={self.pmin.tolist()}, max={self.pmax.tolist()})"


def union(box1: BoundingBox, box2: BoundingBox) -> BoundingBox:
    """A new box enclosing both boxes."""
    return BoundingBox().merge(box1).merge(box2)