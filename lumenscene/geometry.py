"""Vertex data containers, planes and view frustums."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Sequence

import numpy as np

from lumenscene.bounding_box import BoundingBox
from lumenscene.shapes import Triangle


class AttributeKind(IntEnum):
    """Per-vertex attribute streams a geometry can carry."""

    POSITION = 0
    TEX_COORD = 1
    NORMAL = 2


_COMPONENTS = {
    AttributeKind.POSITION: 3,
    AttributeKind.TEX_COORD: 2,
    AttributeKind.NORMAL: 3,
}

_NAMES = {
    AttributeKind.POSITION: "aPos",
    AttributeKind.TEX_COORD: "aTexCoord",
    AttributeKind.NORMAL: "aNormal",
}


def attribute_name(kind: AttributeKind) -> str:
    """Name of the shader input that receives this attribute."""
    return _NAMES[AttributeKind(kind)]


class MeshType(Enum):
    MESH = "mesh"
    MESH_INDEXED = "mesh_indexed"


class Geometry:
    """Flat vertex attribute arrays with an optional index list."""

    def __init__(self) -> None:
        self.mesh_type = MeshType.MESH
        self._attributes: dict[AttributeKind, np.ndarray] = {}
        self.indices: list[int] = []

    @property
    def is_indexed(self) -> bool:
        return self.mesh_type is MeshType.MESH_INDEXED

    def set_attribute(self, kind: AttributeKind, data: Any) -> None:
        """Store a flat float array for an attribute stream."""
        kind = AttributeKind(kind)
        array = np.asarray(data, dtype=float).reshape(-1).copy()
        if array.size % _COMPONENTS[kind]:
            raise ValueError(
                f"{kind.name} data length {array.size} is not a multiple of "
                f"{_COMPONENTS[kind]}"
            )
        self._attributes[kind] = array

    def get_attribute(self, kind: AttributeKind) -> np.ndarray:
        """The flat array for an attribute, or an empty array when absent."""
        return self._attributes.get(AttributeKind(kind), np.zeros(0))

    def has_attribute(self, kind: AttributeKind) -> bool:
        return AttributeKind(kind) in self._attributes

    def set_index(self, indices: Sequence[int]) -> None:
        """Switch to indexed drawing with the given vertex indices."""
        self.mesh_type = MeshType.MESH_INDEXED
        self.indices = [int(i) for i in indices]

    def vertex_count(self) -> int:
        """Number of vertices in the position stream."""
        positions = self._attributes.get(AttributeKind.POSITION)
        return 0 if positions is None else positions.size // 3

    def triangle_count(self) -> int:
        if self.is_indexed:
            return len(self.indices) // 3
        return self.vertex_count() // 3

    def fetch_triangle(self, k: int) -> Triangle | None:
        """Build the k-th triangle of an indexed geometry; None if not indexed."""
        positions = self._attributes.get(AttributeKind.POSITION)
        if not self.is_indexed or positions is None:
            return None
        if not 0 <= k < self.triangle_count():
            raise IndexError(f"triangle index {k} out of range")
        i0, i1, i2 = self.indices[3 * k : 3 * k + 3]
        pos = positions.reshape(-1, 3)
        tri = Triangle(pos[i0], pos[i1], pos[i2])
        tex = self._attributes.get(AttributeKind.TEX_COORD)
        if tex is not None:
            uv = tex.reshape(-1, 2)
            tri.t0, tri.t1, tri.t2 = uv[i0].copy(), uv[i1].copy(), uv[i2].copy()
        normals = self._attributes.get(AttributeKind.NORMAL)
        if normals is not None:
            nrm = normals.reshape(-1, 3)
            tri.n0, tri.n1, tri.n2 = nrm[i0].copy(), nrm[i1].copy(), nrm[i2].copy()
        return tri


class PlaneIntersects(Enum):
    FRONT = "front"
    BACK = "back"
    CROSS = "cross"
    TANGENT = "tangent"


class Plane:
    """A plane given by a unit normal and signed offset from the origin."""

    def __init__(self, normal: Any = (0.0, 0.0, 0.0), point: Any = (0.0, 0.0, 0.0)) -> None:
        self.normal = np.zeros(3)
        self.d = 0.0
        self.set(normal, point)

    def set(self, normal: Any, point: Any) -> None:
        """Define the plane through a point with the given normal."""
        n = np.asarray(normal, dtype=float).reshape(3)
        length = np.linalg.norm(n)
        self.normal = n / length if length > 0 else n.copy()
        self.d = -float(np.dot(self.normal, np.asarray(point, dtype=float).reshape(3)))

    def distance(self, point: Any) -> float:
        """Signed distance; positive on the side the normal points to."""
        return float(np.dot(self.normal, np.asarray(point, dtype=float).reshape(3))) + self.d

    def intersects_box(self, box: BoundingBox) -> PlaneIntersects:
        center = (box.pmin + box.pmax) * 0.5
        extent = (box.pmax - box.pmin) * 0.5
        d = self.distance(center)
        r = float(np.sum(np.abs(extent * self.normal)))
        if d == r:
            return PlaneIntersects.TANGENT
        if abs(d) < r:
            return PlaneIntersects.CROSS
        return PlaneIntersects.FRONT if d > 0.0 else PlaneIntersects.BACK

    def intersects_point(self, p0: Any) -> PlaneIntersects:
        d = self.distance(p0)
        if d == 0:
            return PlaneIntersects.TANGENT
        return PlaneIntersects.FRONT if d > 0.0 else PlaneIntersects.BACK

    def intersects_segment(self, p0: Any, p1: Any) -> PlaneIntersects:
        s0 = self.intersects_point(p0)
        s1 = self.intersects_point(p1)
        if s0 is s1:
            return s0
        if PlaneIntersects.TANGENT in (s0, s1):
            return PlaneIntersects.TANGENT
        return PlaneIntersects.CROSS

    def intersects_triangle(self, p0: Any, p1: Any, p2: Any) -> PlaneIntersects:
        s0 = self.intersects_segment(p0, p1)
        s1 = self.intersects_segment(p0, p2)
        s2 = self.intersects_segment(p1, p2)
        if s0 is s1 and s0 is s2:
            return s0
        if PlaneIntersects.CROSS in (s0, s1, s2):
            return PlaneIntersects.CROSS
        return PlaneIntersects.TANGENT


class Frustum:
    """Six inward-facing planes, eight corners and their bounding box."""

    def __init__(self) -> None:
        self.planes = [Plane() for _ in range(6)]
        self.corners = [np.zeros(3) for _ in range(8)]
        self.bbox = BoundingBox()

    def intersects_box(self, box: BoundingBox) -> bool:
        if any(p.intersects_box(box) is PlaneIntersects.BACK for p in self.planes):
            return False
        return self.bbox.overlaps(box)

    def intersects_point(self, p0: Any) -> bool:
        return all(p.intersects_point(p0) is not PlaneIntersects.BACK for p in self.planes)

    def intersects_segment(self, p0: Any, p1: Any) -> bool:
        return all(
            p.intersects_segment(p0, p1) is not PlaneIntersects.BACK for p in self.planes
        )

    def intersects_triangle(self, p0: Any, p1: Any, p2: Any) -> bool:
        return all(
            p.intersects_triangle(p0, p1, p2) is not PlaneIntersects.BACK
            for p in self.planes
        )