"""Fly-through cameras with Euler-angle orientation and a perspective frustum."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

import numpy as np

from lumenscene.bounding_box import BoundingBox
from lumenscene.config import Config, get_instance
from lumenscene.geometry import Frustum
from lumenscene.globals import EPSILON


class CameraMovement(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"


def _vec3(value: Any) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3).copy()


def _normalize(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v)
    return v / n if n > 0 else v


def _direction_from_angles(yaw: float, pitch: float) -> np.ndarray:
    y, p = math.radians(yaw), math.radians(pitch)
    return np.array([math.cos(y) * math.cos(p), math.sin(p), math.sin(y) * math.cos(p)])


def _angles_from_direction(direction: np.ndarray) -> tuple[float, float]:
    yaw = math.degrees(math.atan2(direction[2], direction[0]))
    pitch = math.degrees(math.asin(max(-1.0, min(1.0, float(direction[1])))))
    return yaw, pitch


def look_at_matrix(eye: Any, center: Any, up: Any) -> np.ndarray:
    """Right-handed view matrix looking from eye towards center."""
    e = _vec3(eye)
    f = _normalize(_vec3(center) - e)
    s = _normalize(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    m = np.eye(4)
    m[0, :3], m[1, :3], m[2, :3] = s, u, -f
    m[0, 3] = -np.dot(s, e)
    m[1, 3] = -np.dot(u, e)
    m[2, 3] = np.dot(f, e)
    return m


def perspective_matrix(fov_degrees: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed projection mapping depth [near, far] to [-1, 1]."""
    if aspect == 0 or near == far:
        raise ValueError("aspect must be non-zero and near must differ from far")
    f = 1.0 / math.tan(math.radians(fov_degrees) / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


class Camera:
    """A camera oriented by yaw and pitch in degrees."""

    def __init__(
        self,
        position: Any = (0.0, 0.0, 0.0),
        up: Any = (0.0, 1.0, 0.0),
        *,
        config: Config | None = None,
    ) -> None:
        config = config if config is not None else get_instance()
        self.position = _vec3(position)
        self.world_up = _vec3(up)
        self.front = np.array([0.0, 0.0, -1.0])
        self.up = self.world_up.copy()
        self.right = np.array([1.0, 0.0, 0.0])
        self.yaw = config.camera_yaw
        self.pitch = config.camera_pitch
        self.movement_speed = config.camera_speed
        self.mouse_sensitivity = config.mouse_sensitivity
        self.zoom = config.camera_zoom
        self._update_vectors()

    def look_at(self, target: Any) -> None:
        """Turn to face a target point; a target at the eye faces -z."""
        direction = _vec3(target) - self.position
        if np.linalg.norm(direction) < EPSILON:
            direction = np.array([0.0, 0.0, -1.0])
        self.yaw, self.pitch = _angles_from_direction(_normalize(direction))
        self._update_vectors()

    def view_matrix(self) -> np.ndarray:
        return look_at_matrix(self.position, self.position + self.front, self.up)

    def process_keyboard(self, direction: CameraMovement, delta_time: float) -> None:
        velocity = self.movement_speed * delta_time
        if direction is CameraMovement.FORWARD:
            self.position = self.position + self.front * velocity
        elif direction is CameraMovement.BACKWARD:
            self.position = self.position - self.front * velocity
        elif direction is CameraMovement.LEFT:
            self.position = self.position - self.right * velocity
        elif direction is CameraMovement.RIGHT:
            self.position = self.position + self.right * velocity

    def process_mouse_movement(
        self, xoffset: float, yoffset: float, constrain_pitch: bool = True
    ) -> None:
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch += yoffset * self.mouse_sensitivity
        if constrain_pitch:
            self.pitch = max(-89.0, min(89.0, self.pitch))
        self._update_vectors()

    def process_mouse_scroll(self, yoffset: float) -> None:
        self.zoom = max(1.0, min(45.0, self.zoom - yoffset))

    def update(self) -> None:
        self._update_vectors()

    def _update_vectors(self) -> None:
        self.front = _normalize(_direction_from_angles(self.yaw, self.pitch))
        self.right = _normalize(np.cross(self.front, self.world_up))
        self.up = _normalize(np.cross(self.right, self.front))


class PerspectiveCamera(Camera):
    """A camera with a perspective projection and a view frustum for culling."""

    def __init__(
        self,
        fov: float = 45.0,
        aspect: float = 1.0,
        near: float = 0.1,
        far: float = 50.0,
        position: Any = (0.0, 0.0, 0.0),
        up: Any = (0.0, 1.0, 0.0),
        *,
        config: Config | None = None,
    ) -> None:
        super().__init__(position, up, config=config)
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far
        self.frustum = Frustum()
        self.frustum_center = np.zeros(3)

    def projection_matrix(self) -> np.ndarray:
        return perspective_matrix(self.fov, self.aspect, self.near, self.far)

    def process_mouse_scroll(self, yoffset: float) -> None:
        self.fov = max(1.0, min(90.0, self.fov - yoffset))

    def update(self) -> None:
        """Refresh orientation, then rebuild the frustum planes, corners and bounds."""
        super().update()
        pos, fwd, up, right = self.position, self.front, self.up, self.right
        half_tan = math.tan(self.fov / 2.0)
        near_h = self.near * half_tan
        far_h = self.far * half_tan
        near_w = near_h * self.aspect
        far_w = far_h * self.aspect

        near_center = pos + fwd * self.near
        far_center = pos + fwd * self.far
        planes = self.frustum.planes
        planes[0].set(fwd, near_center)
        planes[1].set(-fwd, far_center)

        top = near_center + up * near_h
        planes[2].set(np.cross(_normalize(top - pos), right), top)
        bottom = near_center - up * near_h
        planes[3].set(np.cross(right, _normalize(bottom - pos)), bottom)
        left = near_center - right * near_w
        planes[4].set(np.cross(_normalize(left - pos), up), left)
        right_c = near_center + right * near_w
        planes[5].set(np.cross(up, _normalize(right_c - pos)), right_c)

        self.frustum.corners = [
            near_center + up * near_h - right * near_w,
            near_center + up * near_h + right * near_w,
            near_center - up * near_h - right * near_w,
            near_center - up * near_h + right * near_w,
            far_center + up * far_h - right * far_w,
            far_center + up * far_h + right * far_w,
            far_center - up * far_h - right * far_w,
            far_center - up * far_h + right * far_w,
        ]
        bbox = BoundingBox()
        for corner in self.frustum.corners:
            bbox.merge_point(corner)
        self.frustum.bbox = bbox
        self.frustum_center = bbox.centroid()