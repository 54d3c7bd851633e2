"""Scene graph nodes: transforms, parent/child links, meshes and per-object BVHs."""

from __future__ import annotations

import itertools
import math
import weakref
from collections import deque
from typing import Any

import numpy as np

from lumenscene.bounding_box import BoundingBox, Ray
from lumenscene.bvh import BVHAccel
from lumenscene.camera import look_at_matrix
from lumenscene.config import get_instance
from lumenscene.globals import EPSILON
from lumenscene.mesh import Mesh
from lumenscene.shapes import Intersection

_uuids = itertools.count(1)


def _vec3(value: Any) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3).copy()


def _mat4(value: Any) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(4, 4).copy()


def _inverse(m: np.ndarray) -> np.ndarray:
    try:
        return np.linalg.inv(m)
    except np.linalg.LinAlgError:
        return np.linalg.pinv(m)


def _rotation_about(axis: Any, angle_degrees: float) -> np.ndarray:
    a = _vec3(axis)
    length = np.linalg.norm(a)
    if length < EPSILON:
        raise ValueError("rotation axis must be non-zero")
    kx, ky, kz = a / length
    k = np.array([[0.0, -kz, ky], [kz, 0.0, -kx], [-ky, kx, 0.0]])
    theta = math.radians(angle_degrees)
    return np.eye(3) + math.sin(theta) * k + (1.0 - math.cos(theta)) * (k @ k)


def _decompose(m: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split an affine matrix into translation, scale and rotation."""
    translation = m[:3, 3].copy()
    basis = m[:3, :3]
    scale = np.linalg.norm(basis, axis=0)
    if np.linalg.det(basis) < 0:
        scale = -scale
    safe = np.where(scale != 0, scale, 1.0)
    rotation = basis / safe
    return translation, scale, rotation


class SceneObject:
    """A node in the scene graph with a local TRS transform and an optional mesh."""

    def __init__(self, mesh: Mesh | None = None) -> None:
        self.visible = True
        self.uuid = next(_uuids)

        self.local_position = np.zeros(3)
        self.local_orientation = np.eye(3)
        self.local_scale = np.ones(3)

        self._local_matrix = np.eye(4)
        self._parent_world_matrix = np.eye(4)
        self._world_matrix = np.eye(4)

        self.world_position = np.zeros(3)
        self.world_scale = np.ones(3)
        self.world_orientation = np.eye(3)
        self.normal_to_world = np.eye(4)

        self._parent: weakref.ref | None = None
        self.children: list[SceneObject] = []
        self.mesh: Mesh | None = None

        self.show_debug_bbox = False
        self.intersectables: list[Any] = []
        self.bbox = BoundingBox()
        self.area = 0.0
        self._bvh: BVHAccel | None = None

        if mesh is not None:
            self.set_mesh(mesh)

    # -- read-only views -------------------------------------------------

    @property
    def parent(self) -> SceneObject | None:
        return self._parent() if self._parent is not None else None

    @property
    def world_matrix(self) -> np.ndarray:
        return self._world_matrix.copy()

    @property
    def local_matrix(self) -> np.ndarray:
        return self._local_matrix.copy()

    @property
    def parent_world_matrix(self) -> np.ndarray:
        return self._parent_world_matrix.copy()

    @property
    def bvh(self) -> BVHAccel | None:
        return self._bvh

    # -- hierarchy -------------------------------------------------------

    def clone(self) -> SceneObject:
        """Copy the world transform and clone the children; no parent and no mesh."""
        other = type(self)()
        other.visible = self.visible
        other.world_orientation = self.world_orientation.copy()
        other.normal_to_world = self.normal_to_world.copy()
        other.world_position = self.world_position.copy()
        other.world_scale = self.world_scale.copy()
        other._world_matrix = self._world_matrix.copy()
        other.children = [child.clone() for child in self.children]
        return other

    def update_frame(self) -> None:
        """Push the current world transform to the mesh."""
        if self.mesh is not None:
            self.mesh.update_world_matrix(self._world_matrix)

    def init(self) -> None:
        """Link every descendant to its parent and propagate transforms."""
        for child in self.children:
            child.set_parent(self)
            child.init()

    def set_parent(self, parent: SceneObject) -> None:
        self._parent = weakref.ref(parent)
        self.set_parent_world_matrix(parent._world_matrix)

    def add_child(self, child: SceneObject) -> None:
        child.set_parent(self)
        self.children.append(child)

    def set_mesh(self, mesh: Mesh | None) -> None:
        self.mesh = mesh
        if mesh is not None:
            mesh.set_parent_object(self)

    # -- transforms ------------------------------------------------------

    def set_world_matrix(self, transform: Any) -> None:
        """Set the world transform; the local one follows when there is a parent."""
        self._world_matrix = _mat4(transform)
        if self.parent is not None:
            self._local_matrix = _inverse(self._parent_world_matrix) @ self._world_matrix
        else:
            self._parent = None

        translation, scale, rotation = _decompose(self._world_matrix)
        self.world_position = translation
        self.world_scale = scale
        self.world_orientation = rotation
        self.normal_to_world = _inverse(self._world_matrix).T

        for child in self.children:
            child.set_parent_world_matrix(self._world_matrix)

    def set_local_matrix(self, local: Any) -> None:
        self._local_matrix = _mat4(local)
        self.set_world_matrix(self._parent_world_matrix @ self._local_matrix)

    def set_parent_world_matrix(self, transform: Any) -> None:
        self._parent_world_matrix = _mat4(transform)
        self.set_world_matrix(self._parent_world_matrix @ self._local_matrix)

    def rotate(self, angle: float, axis: Any) -> None:
        """Rotate by an angle in degrees about an axis, on top of the current rotation."""
        self.local_orientation = _rotation_about(axis, angle) @ self.local_orientation
        self._update_local_matrix()

    def look_at(self, focus: Any, ignore_pitch: bool = False) -> None:
        """Orient the object so that its -z axis points at the focus."""
        target = _vec3(focus)
        pos = self.world_position.copy()
        if ignore_pitch:
            pos[1] = target[1]
        if np.linalg.norm(target - pos) < EPSILON:
            raise ValueError("cannot look at the object's own position")
        view = look_at_matrix(pos, target, self._up_vector())
        self.local_orientation = _inverse(view)[:3, :3]
        self._update_local_matrix()

    def translate(self, x: float, y: float, z: float) -> None:
        """Move the local position by an offset."""
        self.local_position = self.local_position + np.array([x, y, z], dtype=float)
        self._update_local_matrix()

    def scale(self, x: float, y: float, z: float) -> None:
        """Multiply the local scale per axis."""
        self.local_scale = self.local_scale * np.array([x, y, z], dtype=float)
        self._update_local_matrix()

    def apply_transform(self, transform: Any) -> None:
        """Apply a transform after the current local transform."""
        self.set_local_matrix(_mat4(transform) @ self._local_matrix)

    def set_position(self, position: Any) -> None:
        self.local_position = _vec3(position)
        self._update_local_matrix()

    def set_scale(self, x: Any, y: float | None = None, z: float | None = None) -> None:
        """Set the local scale from three numbers or from one 3-vector."""
        if y is None and z is None:
            self.local_scale = _vec3(x)
        else:
            self.local_scale = _vec3((x, y, z))
        self._update_local_matrix()

    def _update_local_matrix(self) -> None:
        model = np.eye(4)
        model[:3, :3] = self.local_orientation * self.local_scale
        model[:3, 3] = self.local_position
        self.set_local_matrix(model)

    def _up_vector(self) -> np.ndarray:
        up = self.world_orientation[:, 1]
        length = np.linalg.norm(up)
        return up / length if length > EPSILON else np.array([0.0, 1.0, 0.0])

    # -- ray tracing -----------------------------------------------------

    def build_bvh(self, use_bvh: bool | None = None) -> None:
        """Collect world-space triangles of all meshes and children into a BVH."""
        self.show_debug_bbox = True
        if use_bvh is None:
            use_bvh = get_instance().use_bvh
        if not use_bvh:
            return

        self.intersectables = []
        self.bbox = BoundingBox()
        self.area = 0.0

        submeshes: list[Mesh] = []
        queue: deque[Mesh] = deque([self.mesh] if self.mesh is not None else [])
        while queue:
            current = queue.popleft()
            submeshes.append(current)
            queue.extend(current.submeshes)

        world = self._world_matrix
        for submesh in submeshes:
            if submesh.geometry is None:
                continue
            for k in range(submesh.geometry.triangle_count()):
                tri = submesh.fetch_triangle(k)
                if tri is None:
                    continue
                tri.transform(world)
                self.bbox.merge(tri.bounds())
                self.area += tri.area
                self.intersectables.append(tri)

        for child in self.children:
            child.build_bvh(use_bvh)
            self.bbox.merge(child.bounds())
            self.area += child.area
            self.intersectables.append(child)

        self._bvh = BVHAccel(self.intersectables)

    def get_intersection(self, ray: Ray) -> Intersection:
        if self._bvh is not None:
            return self._bvh.intersect(ray)
        return Intersection()

    def sample(self) -> tuple[Intersection, float]:
        """A point on the object's surface with its pdf; pdf 0 when nothing is built."""
        if self._bvh is not None and self._bvh.root is not None:
            return self._bvh.sample()
        return Intersection(), 0.0

    def bounds(self) -> BoundingBox:
        return self.bbox.copy()

    def __repr__(self) -> str:
        return f"SceneObject(uuid={self.uuid}, position={self.world_position.tolist()})"