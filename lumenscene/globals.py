"""Shared constants and enumerations used throughout the renderer."""

from __future__ import annotations

from enum import IntEnum

import numpy as np

PI = 3.14159265358979323846
EPSILON_BIGGER = 1e-2
EPSILON = 1e-6
FLOAT_MAX = float(np.finfo(np.float32).max)
FLOAT_MIN = -FLOAT_MAX

WHITE_COLOR = (0.725, 0.71, 0.68)
BLACK_COLOR = (0.001, 0.001, 0.001)
RED_COLOR = (0.63, 0.065, 0.05)
GREEN_COLOR = (0.14, 0.45, 0.091)

X_POSITIVE_UNIT = (1.0, 0.0, 0.0)
Y_POSITIVE_UNIT = (0.0, 1.0, 0.0)
Z_POSITIVE_UNIT = (0.0, 0.0, 1.0)


class WrapMode(IntEnum):
    """Texture coordinate wrapping."""

    REPEAT = 0
    MIRRORED_REPEAT = 1
    CLAMP_TO_EDGE = 2
    CLAMP_TO_BORDER = 3


class FilterMode(IntEnum):
    """Texture filtering."""

    NEAREST = 0
    LINEAR = 1
    NEAREST_MIPMAP_NEAREST = 2
    LINEAR_MIPMAP_NEAREST = 3
    NEAREST_MIPMAP_LINEAR = 4
    LINEAR_MIPMAP_LINEAR = 5


class ShadingModel(IntEnum):
    """Shading model a material is rendered with."""

    BASE_COLOR = 0
    BLINN_PHONG = 1
    PBR = 2
    LAMBERTIAN = 3
    SKYBOX = 4
    IBL_IRRADIANCE = 5
    IBL_PREFILTER = 6
    FXAA = 7
    UNKNOWN = 8


class ShaderPass(IntEnum):
    """Render pass a shader belongs to."""

    SHADOW = 0
    SHADOW_CUBE = 1
    FORWARD_SHADING = 2
    GEOMETRY = 3
    LIGHT = 4


class SceneType(IntEnum):
    """Built-in scenes."""

    DEFAULT = 0
    STANFORD_BUNNY = 1
    PBR_TESTING = 2


class ShaderStage(IntEnum):
    """Programmable pipeline stages."""

    VERTEX = 0
    FRAGMENT = 1
    TESS_CONTROL = 2
    TESS_EVALUATION = 3
    GEOMETRY = 4