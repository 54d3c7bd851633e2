"""Renderable meshes: geometry plus material, arranged in a hierarchy."""

from __future__ import annotations

import weakref
from typing import Any

import numpy as np

from lumenscene.geometry import Geometry
from lumenscene.globals import ShadingModel
from lumenscene.material import Material
from lumenscene.shapes import Triangle


class Mesh:
    """A geometry with its material, render flags and child meshes.

    A mesh attached to an object takes that object's ``world_matrix``.
    """

    def __init__(self, geometry: Geometry | None = None, material: Material | None = None) -> None:
        self.geometry = geometry
        self.material = material
        self.use_cull = True
        self.cast_shadow = False
        self.shading_mode = ShadingModel.BASE_COLOR
        self._world_matrix = np.eye(4)
        self.submeshes: list[Mesh] = []
        self._parent: weakref.ref | None = None

    @property
    def parent_object(self) -> Any:
        return self._parent() if self._parent is not None else None

    def clone(self) -> Mesh:
        """Copy sharing geometry and material, with cloned submeshes and no parent."""
        other = Mesh(self.geometry, self.material)
        other.use_cull = self.use_cull
        other.cast_shadow = self.cast_shadow
        other.shading_mode = self.shading_mode
        other._world_matrix = self._world_matrix.copy()
        other.submeshes = [mesh.clone() for mesh in self.submeshes]
        return other

    def world_matrix(self) -> np.ndarray:
        parent = self.parent_object
        if parent is not None:
            matrix = parent.world_matrix
            return np.array(matrix() if callable(matrix) else matrix, dtype=float)
        return self._world_matrix.copy()

    def update_world_matrix(self, matrix: Any) -> None:
        """Store the world transform on this mesh and its submeshes."""
        m = np.asarray(matrix, dtype=float).reshape(4, 4).copy()
        self._world_matrix = m
        for mesh in self.submeshes:
            mesh.update_world_matrix(m)

    def fetch_triangle(self, k: int) -> Triangle | None:
        """The k-th triangle of this mesh's geometry, carrying its material."""
        if self.geometry is None:
            return None
        tri = self.geometry.fetch_triangle(k)
        if tri is not None:
            tri.material = self.material
        return tri

    def enable_face_cull(self, enabled: bool) -> None:
        self.use_cull = enabled
        for mesh in self.submeshes:
            mesh.enable_face_cull(enabled)

    def enable_cast_shadow(self, enabled: bool) -> None:
        self.cast_shadow = enabled
        for mesh in self.submeshes:
            mesh.enable_cast_shadow(enabled)

    def set_shading_mode(self, mode: ShadingModel) -> None:
        self.shading_mode = ShadingModel(mode)
        for mesh in self.submeshes:
            mesh.set_shading_mode(mode)

    def add_mesh(self, mesh: Mesh) -> None:
        self.submeshes.append(mesh)

    def set_parent_object(self, obj: Any) -> None:
        """Attach this mesh and all submeshes to an object, held weakly."""
        self._parent = weakref.ref(obj) if obj is not None else None
        for mesh in self.submeshes:
            mesh.set_parent_object(obj)

    def set_emission(self, color: Any) -> None:
        if self.material is not None:
            self.material.set_emission(color)
        for mesh in self.submeshes:
            mesh.set_emission(color)

    def set_diffuse(self, color: Any) -> None:
        if self.material is not None:
            self.material.set_diffuse(color)
        for mesh in self.submeshes:
            mesh.set_diffuse(color)