"""Image loading and OpenGL 2D textures."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike

from PIL import Image

_MODE_CHANNELS = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}
_GRAYSCALE_MODES = {"1", "I", "I;16", "I;16B", "I;16L", "F"}
_GL_FORMATS = {1: "GL_RED", 3: "GL_RGB", 4: "GL_RGBA"}


class TextureError(RuntimeError):
    """Raised when a texture image cannot be loaded or used."""


@dataclass(frozen=True)
class ImageData:
    """Decoded pixels, bottom row first, ``channels`` bytes per pixel."""

    width: int
    height: int
    channels: int
    pixels: bytes


def _normalise_mode(image: Image.Image) -> Image.Image:
    mode = image.mode
    if mode in _MODE_CHANNELS:
        return image
    if mode == "P":
        return image.convert("RGBA" if "transparency" in image.info else "RGB")
    if mode == "PA":
        return image.convert("RGBA")
    if mode in _GRAYSCALE_MODES:
        return image.convert("L")
    return image.convert("RGB")


def load_image(path: str | PathLike) -> ImageData:
    """Decode an image file, flipped so that its first row is the bottom one."""
    try:
        with Image.open(path) as source:
            source.load()
            image = _normalise_mode(source)
            flipped = image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    except OSError as exc:
        raise TextureError(f"failed to load texture data from {path}") from exc
    return ImageData(
        width=flipped.width,
        height=flipped.height,
        channels=_MODE_CHANNELS[flipped.mode],
        pixels=flipped.tobytes(),
    )


def _gl():
    from pyglet import gl

    return gl


class Texture:
    """A mipmapped, repeating 2D texture created from an image file."""

    def __init__(self, path: str | PathLike) -> None:
        image = load_image(path)
        if image.channels not in _GL_FORMATS:
            raise TextureError(
                f"unknown texture format: {image.channels} channels in {path}"
            )
        self.path = str(path)
        self.texture_type = ""
        self.width = image.width
        self.height = image.height
        self.channels = image.channels
        self._id = None

        gl = _gl()
        texture_id = gl.GLuint()
        gl.glGenTextures(1, texture_id)
        gl.glBindTexture(gl.GL_TEXTURE_2D, texture_id)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
        gl.glTexParameteri(
            gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR
        )
        fmt = getattr(gl, _GL_FORMATS[image.channels])
        data = (gl.GLubyte * len(image.pixels)).from_buffer_copy(image.pixels)
        gl.glTexImage2D(
            gl.GL_TEXTURE_2D, 0, fmt, image.width, image.height, 0,
            fmt, gl.GL_UNSIGNED_BYTE, data,
        )
        gl.glGenerateMipmap(gl.GL_TEXTURE_2D)
        self._id = texture_id

    def bind(self, slot: int = 0) -> None:
        """Bind the texture to texture unit ``slot``."""
        if self._id is None:
            raise TextureError(f"texture {self.path} has been deleted")
        gl = _gl()
        gl.glActiveTexture(gl.GL_TEXTURE0 + slot)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self._id)

    def delete(self) -> None:
        """Release the GPU texture; further binds fail."""
        if self._id is not None:
            _gl().glDeleteTextures(1, self._id)
            self._id = None