"""A scene: objects, lights, a focus point and a BVH over everything."""

from __future__ import annotations

import random
from typing import Any

import numpy as np

from lumenscene.bounding_box import BoundingBox, Ray
from lumenscene.bvh import BVHAccel
from lumenscene.mesh import Mesh
from lumenscene.scene_object import SceneObject
from lumenscene.shapes import Intersection


class Scene:
    """Holds the objects and lights to render or trace."""

    def __init__(self) -> None:
        self.objects: list[SceneObject] = []
        self.lights: list[SceneObject] = []
        self.bboxes: list[BoundingBox] = []
        self.intersectables: list[Any] = []
        self.focus = np.zeros(3)
        self.skybox: SceneObject | None = None
        self.camera: Any = None
        self._bvh: BVHAccel | None = None
        self._packed_meshes: list[Mesh] = []
        self._packed_light_meshes: list[Mesh] = []
        self._mesh_cache_dirty = True

    @property
    def bvh(self) -> BVHAccel | None:
        return self._bvh

    @property
    def packed_meshes(self) -> list[Mesh]:
        return self._packed_meshes

    @property
    def packed_light_meshes(self) -> list[Mesh]:
        return self._packed_light_meshes

    def add_object(self, obj: SceneObject) -> None:
        self.objects.append(obj)

    def add_light(self, light: SceneObject) -> None:
        self.lights.append(light)

    def add_bbox(self, bbox: BoundingBox) -> None:
        self.bboxes.append(bbox)

    def add_intersectable(self, item: Any) -> None:
        self.intersectables.append(item)

    def set_focus(self, focus: Any) -> None:
        self.focus = np.asarray(focus, dtype=float).reshape(3).copy()

    def build_bvh(self, use_bvh: bool | None = None) -> None:
        """Build every object's and light's BVH, then one over all of them."""
        for obj in self.objects:
            obj.build_bvh(use_bvh)
            self.intersectables.append(obj)
        for light in self.lights:
            light.build_bvh(use_bvh)
            self.intersectables.append(light)
        self._bvh = BVHAccel(self.intersectables)

    def setup_scene(self, use_bvh: bool | None = None) -> None:
        """Initialise lights and objects, then build the BVH."""
        for light in self.lights:
            light.init()
        for obj in self.objects:
            obj.init()
        self.build_bvh(use_bvh)

    def intersect(self, ray: Ray) -> Intersection:
        """Closest hit of a ray in the scene."""
        if self._bvh is None:
            raise RuntimeError("BVH not built, intersect scene failed")
        return self._bvh.intersect(ray)

    def sample_light(self) -> tuple[Intersection, float]:
        """Pick a light in proportion to its area and sample a point on it."""
        total = sum(light.area for light in self.lights)
        split = random.random() * total
        accumulated = 0.0
        for light in self.lights:
            accumulated += light.area
            if accumulated >= split:
                return light.sample()
        return Intersection(), 0.0

    def pack_meshes(self) -> None:
        """Collect the meshes of all objects and lights, once."""
        if not self._mesh_cache_dirty:
            return
        for obj in self.objects:
            self._pack(obj, self._packed_meshes)
        for light in self.lights:
            self._pack(light, self._packed_light_meshes)
        self._mesh_cache_dirty = False

    def _pack(self, obj: SceneObject | None, out: list[Mesh]) -> None:
        if obj is None:
            return
        obj.update_frame()
        if obj.mesh is not None:
            out.append(obj.mesh)
        for child in obj.children:
            self._pack(child, out)