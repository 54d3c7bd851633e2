"""Render targets: colour attachments by slot plus one depth attachment."""

from __future__ import annotations

from dataclasses import dataclass

from lumenscene.texture import CubeMapFace, Texture


@dataclass
class FrameBufferAttachment:
    """A texture bound to a framebuffer slot, with layer (cube face) and mip level."""

    tex: Texture | None = None
    layer: int = 0
    level: int = 0


class FrameBuffer:
    """Tracks which textures are attached where; backends do the binding."""

    def __init__(self, offscreen: bool = False) -> None:
        self.offscreen = offscreen
        self.color_ready = False
        self.depth_ready = False
        self.color_attachments: dict[int, FrameBufferAttachment] = {}
        self.depth_attachment = FrameBufferAttachment()

    def set_color_attachment(self, texture: Texture, level: int = 0, pos: int = 0) -> None:
        attachment = self.color_attachments.setdefault(pos, FrameBufferAttachment())
        attachment.tex = texture
        attachment.layer = 0
        attachment.level = level
        self.color_ready = True

    def set_cube_color_attachment(
        self, texture: Texture, face: CubeMapFace, level: int = 0, pos: int = 0
    ) -> None:
        """Attach a cube map face; the face is chosen by the backend when binding."""
        CubeMapFace(face)
        attachment = self.color_attachments.setdefault(pos, FrameBufferAttachment())
        attachment.tex = texture
        attachment.layer = 0
        attachment.level = level
        self.color_ready = True

    def set_depth_attachment(self, texture: Texture) -> None:
        self.depth_attachment = FrameBufferAttachment(texture, 0, 0)
        self.depth_ready = True

    def color_attachment(self, pos: int) -> FrameBufferAttachment:
        """The attachment at a slot, or an empty attachment if nothing is there."""
        attachment = self.color_attachments.get(pos)
        return attachment if attachment is not None else FrameBufferAttachment()

    def is_multi_sample(self) -> bool:
        """Whether the depth attachment is multisampled."""
        if self.depth_ready and self.depth_attachment.tex is not None:
            return self.depth_attachment.tex.multi_sample
        return False