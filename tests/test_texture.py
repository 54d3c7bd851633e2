import pytest

from lumenscene.globals import FilterMode, WrapMode
from lumenscene.texture import (
    MAX_TEXTURE_NUM,
    BorderColor,
    CubeMapFace,
    SamplerInfo,
    Texture,
    TextureData,
    TextureFormat,
    TextureInfo,
    TextureTarget,
    TextureUsage,
)


def test_texture_info_defaults():
    info = TextureInfo()
    assert info.width == 0 and info.height == 0
    assert info.target is TextureTarget.TEXTURE_2D
    assert info.format is TextureFormat.RGBA8
    assert info.usage == TextureUsage.SAMPLER
    assert info.use_mipmaps is False and info.multi_sample is False


def test_sampler_info_defaults():
    s = SamplerInfo()
    assert s.filter_min is FilterMode.LINEAR
    assert s.filter_mag is FilterMode.LINEAR
    assert (s.wrap_s, s.wrap_t, s.wrap_r) == (WrapMode.REPEAT,) * 3
    assert s.border_color is BorderColor.BLACK


def test_usage_flags_are_bits():
    usage = TextureUsage(5)
    assert usage == TextureUsage.ATTACHMENT_COLOR | TextureUsage.SAMPLER
    assert TextureUsage.SAMPLER in usage
    assert TextureUsage.ATTACHMENT_DEPTH not in usage
    assert TextureUsage(1 << 4) == TextureUsage.RENDERER_OUTPUT


def test_cube_face_order():
    assert [CubeMapFace(i) for i in range(6)] == list(CubeMapFace)
    assert CubeMapFace(0) is CubeMapFace.TEXTURE_CUBE_MAP_POSITIVE_X
    assert MAX_TEXTURE_NUM == 16


def test_texture_reads_info():
    tex = Texture(TextureInfo(width=64, height=32, multi_sample=True))
    assert tex.width == 64
    assert tex.height == 32
    assert tex.multi_sample is True
    assert tex.ready is False


def test_flag_setters_update_info():
    tex = Texture()
    tex.use_mipmaps = True
    tex.multi_sample = True
    assert tex.info.use_mipmaps is True
    assert tex.info.multi_sample is True


def test_of_type_sets_type():
    tex = Texture.of_type(3)
    assert tex.type == 3


def test_copy_data_to_is_independent():
    src = Texture(data=TextureData(buffer_data=[1.0, 2.0], path="a.png"))
    dst = Texture()
    src.copy_data_to(dst)
    assert dst.data.buffer_data == [1.0, 2.0]
    assert dst.data.path == "a.png"
    src.data.buffer_data.append(3.0)
    assert dst.data.buffer_data == [1.0, 2.0]


def test_load_texture_data_replaces():
    tex = Texture()
    data = TextureData(path="b.png", loaded_texture_type=1)
    tex.load_texture_data(data)
    assert tex.data.path == "b.png"
    assert tex.data.loaded_texture_type == 1


def test_format_from_int_rejects_unknown():
    with pytest.raises(ValueError):
        TextureFormat(99)