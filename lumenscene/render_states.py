"""Pipeline state descriptions: blending, depth, culling and clearing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class DepthFunction(IntEnum):
    NEVER = 0
    LESS = 1
    EQUAL = 2
    LEQUAL = 3
    GREATER = 4
    NOTEQUAL = 5
    GEQUAL = 6
    ALWAYS = 7


class BlendFactor(IntEnum):
    ZERO = 0
    ONE = 1
    SRC_COLOR = 2
    SRC_ALPHA = 3
    DST_COLOR = 4
    DST_ALPHA = 5
    ONE_MINUS_SRC_COLOR = 6
    ONE_MINUS_SRC_ALPHA = 7
    ONE_MINUS_DST_COLOR = 8
    ONE_MINUS_DST_ALPHA = 9
    CONSTANT_COLOR = 10
    ONE_MINUS_CONSTANT_COLOR = 11


class BlendFunction(IntEnum):
    ADD = 0
    SUBTRACT = 1
    REVERSE_SUBTRACT = 2
    MIN = 3
    MAX = 4


class PolygonMode(IntEnum):
    POINT = 0
    LINE = 1
    FILL = 2


class CullMode(IntEnum):
    BACK = 0
    FRONT = 1
    FRONT_AND_BACK = 2


class PrimitiveType(IntEnum):
    POINT = 0
    LINE = 1
    TRIANGLE = 2


@dataclass
class BlendParameters:
    """Blend equation for colour and alpha channels."""

    blend_func_rgb: BlendFunction = BlendFunction.ADD
    blend_src_rgb: BlendFactor = BlendFactor.ONE
    blend_dst_rgb: BlendFactor = BlendFactor.ZERO
    blend_func_alpha: BlendFunction = BlendFunction.ADD
    blend_src_alpha: BlendFactor = BlendFactor.ONE
    blend_dst_alpha: BlendFactor = BlendFactor.ZERO
    blend_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)

    def set_blend_factor(self, src: BlendFactor, dst: BlendFactor) -> None:
        """Use the same source and destination factors for colour and alpha."""
        self.blend_src_rgb = src
        self.blend_src_alpha = src
        self.blend_dst_rgb = dst
        self.blend_dst_alpha = dst

    def set_blend_func(self, func: BlendFunction) -> None:
        """Use the same blend function for colour and alpha."""
        self.blend_func_rgb = func
        self.blend_func_alpha = func


@dataclass
class RenderStates:
    """Fixed-function state applied before a draw."""

    blend: bool = False
    blend_params: BlendParameters = field(default_factory=BlendParameters)
    depth_test: bool = False
    depth_mask: bool = True
    depth_func: DepthFunction = DepthFunction.LESS
    cull_face: bool = False
    face_to_cull: CullMode = CullMode.BACK
    primitive_type: PrimitiveType = PrimitiveType.TRIANGLE
    polygon_mode: PolygonMode = PolygonMode.FILL
    line_width: float = 1.0
    buffer_write: bool = True
    buffer_read: bool = False


@dataclass
class ClearStates:
    """What to clear at the start of a render pass, and to which values."""

    depth_flag: bool = False
    color_flag: bool = False
    clear_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    clear_depth: float = 1.0