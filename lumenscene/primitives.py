"""Procedural meshes: UV spheres and single triangles."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from lumenscene.geometry import AttributeKind, Geometry
from lumenscene.material import Material
from lumenscene.mesh import Mesh


def load_sphere_mesh(
    radius: float = 1.0,
    width_segments: int = 32,
    height_segments: int = 16,
    phi_start: float = 0.0,
    phi_length: float = 2 * math.pi,
    theta_start: float = 0.0,
    theta_length: float = math.pi,
) -> Mesh:
    """A UV sphere with positions, normals, texture coordinates and indices."""
    width_segments = max(3, width_segments)
    height_segments = max(2, height_segments)
    theta_end = min(theta_start + theta_length, math.pi)

    vertices: list[float] = []
    normals: list[float] = []
    uvs: list[float] = []
    grid: list[list[int]] = []
    index = 0

    for iy in range(height_segments + 1):
        v = iy / height_segments
        u_offset = 0.0
        if iy == 0 and theta_start == 0:
            u_offset = 0.5 / width_segments
        elif iy == height_segments and theta_end == math.pi:
            u_offset = -0.5 / width_segments

        row = []
        theta = theta_start + v * theta_length
        for ix in range(width_segments + 1):
            u = ix / width_segments
            phi = phi_start + u * phi_length
            vertex = np.array(
                [
                    -radius * math.cos(phi) * math.sin(theta),
                    radius * math.cos(theta),
                    radius * math.sin(phi) * math.sin(theta),
                ]
            )
            vertices.extend(vertex)
            length = np.linalg.norm(vertex)
            normals.extend(vertex / length if length > 0 else vertex)
            uvs.extend((u + u_offset, 1.0 - v))
            row.append(index)
            index += 1
        grid.append(row)

    indices: list[int] = []
    for iy in range(height_segments):
        for ix in range(width_segments):
            a = grid[iy][ix + 1]
            b = grid[iy][ix]
            c = grid[iy + 1][ix]
            d = grid[iy + 1][ix + 1]
            if iy != 0 or theta_start > 0:
                indices.extend((a, b, d))
            if iy != height_segments - 1 or theta_end < math.pi:
                indices.extend((b, c, d))

    geom = Geometry()
    geom.set_attribute(AttributeKind.POSITION, vertices)
    geom.set_attribute(AttributeKind.TEX_COORD, uvs)
    geom.set_attribute(AttributeKind.NORMAL, normals)
    geom.set_index(indices)
    return Mesh(geom, Material())


def load_triangle_mesh(v0: Any, v1: Any, v2: Any) -> Mesh:
    """A single triangle wound v0, v2, v1 with a flat normal."""
    p0, p1, p2 = (np.asarray(v, dtype=float).reshape(3) for v in (v0, v1, v2))
    cross = np.cross(p2 - p0, p1 - p0)
    length = np.linalg.norm(cross)
    normal = cross / length if length > 0 else cross

    geom = Geometry()
    geom.set_attribute(AttributeKind.POSITION, np.concatenate([p0, p1, p2]))
    geom.set_attribute(AttributeKind.NORMAL, np.tile(normal, 3))
    geom.set_index([0, 2, 1])
    return Mesh(geom, Material())