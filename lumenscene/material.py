"""Surface materials: shading model, Disney-style parameters and texture sources."""

from __future__ import annotations

import copy
import itertools
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import numpy as np

from lumenscene.globals import EPSILON, ShadingModel

_uuids = itertools.count(1)


class AlphaMode(IntEnum):
    OPAQUE = 0
    BLEND = 1


def _color(value: Any) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3).copy()


@dataclass(eq=False)
class MaterialInfo:
    """Per-material parameters uploaded to the shaders."""

    albedo: np.ndarray = field(default_factory=lambda: np.zeros(3))
    emission: np.ndarray = field(default_factory=lambda: np.zeros(3))
    subsurface: float = 0.0
    metallic: float = 0.0
    specular: float = 0.0
    specular_tint: float = 0.0
    roughness: float = 1.0
    anisotropic: float = 0.0
    sheen: float = 0.0
    sheen_tint: float = 0.0
    clearcoat: float = 0.0
    clearcoat_gloss: float = 0.0
    ior: float = 1.0
    transmission: float = 0.0


class Material:
    """Describes how a surface looks: shading model, parameters, defines, textures."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.info = MaterialInfo()
        self.shading_model = ShadingModel.BASE_COLOR
        self.defines: list[str] = []
        self.texture_data: dict[int, Any] = {}
        self.uuid = next(_uuids)

    @property
    def emission(self) -> np.ndarray:
        return self.info.emission

    @property
    def diffuse(self) -> np.ndarray:
        return self.info.albedo

    def has_emission(self) -> bool:
        """True when the material emits light."""
        return bool(np.linalg.norm(self.info.emission) > EPSILON)

    def set_emission(self, color: Any) -> None:
        self.info.emission = _color(color)

    def set_diffuse(self, color: Any) -> None:
        self.info.albedo = _color(color)

    def set_shading_mode(self, mode: ShadingModel) -> None:
        self.shading_model = ShadingModel(mode)

    def add_define(self, define: str) -> None:
        self.defines.append(define)

    def clone(self) -> Material:
        """Return an independent copy carrying a fresh identity."""
        other = Material(self.name)
        other.info = copy.deepcopy(self.info)
        other.shading_model = self.shading_model
        other.defines = list(self.defines)
        other.texture_data = dict(self.texture_data)
        return other

    def __repr__(self) -> str:
        return f"Material(name={self.name!r}, shading_model={self.shading_model.name})"