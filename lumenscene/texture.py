"""Texture descriptions: format, target, sampler state and pixel data."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any

from lumenscene.globals import FilterMode, WrapMode

MAX_TEXTURE_NUM = 16


class CubeMapFace(IntEnum):
    POSITIVE_X = 0
    NEGATIVE_X = 1
    POSITIVE_Y = 2
    NEGATIVE_Y = 3
    POSITIVE_Z = 4
    NEGATIVE_Z = 5


class BorderColor(IntEnum):
    BLACK = 0
    WHITE = 1


class TextureTarget(IntEnum):
    TEXTURE_2D = 0
    TEXTURE_2D_MULTISAMPLE = 1
    TEXTURE_CUBE_MAP = 2
    TEXTURE_BUFFER = 3


class TextureFormat(IntEnum):
    RGBA8 = 0
    RGB8 = 1
    RGB16F = 2
    RGBA16F = 3
    RGB32F = 4
    RGBA32F = 5
    FLOAT32 = 6
    R16F = 7


class TextureUsage(IntFlag):
    SAMPLER = 1 << 0
    UPLOAD_DATA = 1 << 1
    ATTACHMENT_COLOR = 1 << 2
    ATTACHMENT_DEPTH = 1 << 3
    RENDERER_OUTPUT = 1 << 4


@dataclass
class SamplerInfo:
    """Filtering, wrapping and border settings used when sampling."""

    filter_min: FilterMode = FilterMode.LINEAR
    filter_mag: FilterMode = FilterMode.LINEAR
    wrap_s: WrapMode = WrapMode.REPEAT
    wrap_t: WrapMode = WrapMode.REPEAT
    wrap_r: WrapMode = WrapMode.REPEAT
    border_color: BorderColor = BorderColor.BLACK


@dataclass
class TextureData:
    """Pixel data of a texture: 8-bit images, float images or a raw float buffer.

    ``loaded_texture_type`` is the material slot the data was loaded for, or None.
    """

    unit_data_array: list[Any] = field(default_factory=list)
    float_data_array: list[Any] = field(default_factory=list)
    buffer_data: list[float] = field(default_factory=list)
    path: str = ""
    loaded_texture_type: int | None = None


@dataclass
class TextureInfo:
    """Size, layout and intended use of a texture."""

    width: int = 0
    height: int = 0
    type: int | None = None
    target: TextureTarget = TextureTarget.TEXTURE_2D
    format: TextureFormat = TextureFormat.RGBA8
    usage: TextureUsage = TextureUsage.SAMPLER
    border: int = 0
    use_mipmaps: bool = False
    multi_sample: bool = False


class Texture:
    """A texture as described on the CPU side, with its backend id and readiness."""

    def __init__(
        self,
        info: TextureInfo | None = None,
        sampler: SamplerInfo | None = None,
        data: TextureData | None = None,
    ) -> None:
        self.info = info if info is not None else TextureInfo()
        self.sampler_info = sampler if sampler is not None else SamplerInfo()
        self.data = data if data is not None else TextureData()
        self.id = 0
        self.ready = False

    @classmethod
    def of_type(cls, texture_type: int) -> Texture:
        """An empty texture meant for the given material slot."""
        return cls(TextureInfo(type=texture_type))

    @property
    def type(self) -> int | None:
        return self.info.type

    @property
    def width(self) -> int:
        return self.info.width

    @property
    def height(self) -> int:
        return self.info.height

    @property
    def use_mipmaps(self) -> bool:
        return self.info.use_mipmaps

    @use_mipmaps.setter
    def use_mipmaps(self, flag: bool) -> None:
        self.info.use_mipmaps = flag

    @property
    def multi_sample(self) -> bool:
        return self.info.multi_sample

    @multi_sample.setter
    def multi_sample(self, flag: bool) -> None:
        self.info.multi_sample = flag

    def load_texture_data(self, data: TextureData) -> None:
        self.data = data

    def copy_data_to(self, other: Texture) -> None:
        """Give another texture an independent copy of this texture's data."""
        other.data = copy.deepcopy(self.data)

    def __repr__(self) -> str:
        return (
            f"Texture(id={self.id}, {self.width}x{self.height}, "
            f"target={self.info.target.name}, format={self.info.format.name})"
        )