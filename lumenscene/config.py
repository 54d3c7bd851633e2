"""Renderer configuration and its JSON file format."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from lumenscene.globals import SceneType, ShadingModel

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./configs/renderConfig.json"


class RendererType(IntEnum):
    SOFT = 0
    OPENGL = 1
    VULKAN = 2


class RenderPipeline(IntEnum):
    FORWARD_RENDERING = 0
    DEFERRED_RENDERING = 1
    TEST_RENDERING_OFFSCREEN = 2
    TEST_RENDERING_ONSCREEN = 3
    PATH_TRACING = 4


def _bool_value(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def _number_value(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _int_value(value: Any) -> int:
    return int(_number_value(value))


# attribute name, JSON key, reader
_FIELDS = (
    ("shadow_map", "bShadowMap", _bool_value),
    ("render_pipeline", "RenderPipeline", lambda v: RenderPipeline(_int_value(v))),
    ("camera_yaw", "CameraYaw", _number_value),
    ("camera_pitch", "CameraPitch", _number_value),
    ("camera_speed", "CameraSpeed", _number_value),
    ("mouse_sensitivity", "MouseSensitivity", _number_value),
    ("camera_zoom", "CameraZoom", _number_value),
    ("camera_near", "CameraNear", _number_value),
    ("camera_far", "CameraFar", _number_value),
    ("resolution_shadow_map", "Resolution_ShadowMap", _int_value),
    ("capture_radius_shadow_map", "CaptureRadius_ShadowMap", _number_value),
    ("camera_aspect", "CameraAspect", _number_value),
    ("camera_fov", "CameraFOV", _number_value),
    ("window_width", "WindowWidth", _int_value),
    ("window_height", "WindowHeight", _int_value),
    ("skybox", "bSkybox", _bool_value),
    ("use_bvh", "bUseBVH", _bool_value),
    ("spp", "SPP", _int_value),
    ("exposure", "Exposure", _number_value),
    ("use_hdr", "bUseHDR", _bool_value),
    ("use_bloom", "bUseBloom", _bool_value),
    ("use_ssao", "bUseSSAO", _bool_value),
    ("scene_type", "SceneType", lambda v: SceneType(_int_value(v))),
    (
        "shading_model_for_deferred_rendering",
        "ShadingModelForDeferredRendering",
        lambda v: ShadingModel(_int_value(v)),
    ),
    ("use_mipmaps", "bUseMipmaps", _bool_value),
)


@dataclass
class Config:
    """All tunable renderer settings."""

    # viewer
    window_width: int = 1920
    window_height: int = 1080
    skybox: bool = False
    renderer_type: RendererType = RendererType.OPENGL
    render_pipeline: RenderPipeline = RenderPipeline.FORWARD_RENDERING
    shading_model_for_deferred_rendering: ShadingModel = ShadingModel.BLINN_PHONG
    scene_type: SceneType = SceneType.DEFAULT
    # geometry
    use_bvh: bool = False
    # camera
    camera_yaw: float = -90.0
    camera_pitch: float = 0.0
    camera_speed: float = 2.5
    mouse_sensitivity: float = 0.1
    camera_zoom: float = 90.0
    # shadow map
    shadow_map: bool = False
    resolution_shadow_map: int = 1024
    camera_near: float = 0.1
    camera_far: float = 50.0
    # perspective camera
    camera_aspect: float = 1.0
    camera_fov: float = 45.0
    # orthographic camera
    capture_radius_shadow_map: float = 60.0
    # ray tracing
    spp: int = 0
    # HDR
    use_hdr: bool = True
    exposure: float = 1.0
    use_bloom: bool = True
    use_ssao: bool = False
    use_mipmaps: bool = False

    def to_json(self) -> dict[str, Any]:
        """Return the settings as a JSON-ready mapping."""
        out: dict[str, Any] = {}
        for attr, key, _ in _FIELDS:
            value = getattr(self, attr)
            out[key] = int(value) if isinstance(value, IntEnum) else value
        return out

    def from_json(self, data: dict[str, Any]) -> Config:
        """Load every setting from a mapping; missing keys read as zero or false."""
        for attr, key, reader in _FIELDS:
            setattr(self, attr, reader(data.get(key)))
        return self

    def serialize(self, path: str) -> None:
        """Write the settings to a JSON file."""
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(json.dumps(self.to_json(), sort_keys=True))

    def deserialize(self, path: str) -> bool:
        """Read settings from a JSON file; return False if the file cannot be opened."""
        try:
            with open(path, encoding="utf-8") as fh:
                text = fh.read()
        except OSError:
            log.info("No default config, creating default one...")
            return False
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")
        self.from_json(data)
        return True


_instance: Config | None = None
_instance_lock = threading.Lock()


def get_instance() -> Config:
    """Return the shared configuration, loading it from the default path once."""
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                config = Config()
                config.deserialize(DEFAULT_CONFIG_PATH)
                log.info("Rendering RenderPipeline: %d", int(config.render_pipeline))
                _instance = config
    return _instance