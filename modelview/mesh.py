"""Indexed triangle meshes and their GPU buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

_FLOATS_PER_VERTEX = 8
_FLOAT_SIZE = 4
_STRIDE = _FLOATS_PER_VERTEX * _FLOAT_SIZE
_TEXTURE_SLOTS = {"texture_diffuse": 0, "texture_specular": 1}


@dataclass(frozen=True)
class Vertex:
    """A vertex position, its normal and its texture coordinates."""

    position: tuple[float, float, float]
    normal: tuple[float, float, float] = (0.0, 0.0, 0.0)
    tex_coords: tuple[float, float] = (0.0, 0.0)


def texture_slot(texture_type: str) -> int:
    """Texture unit used for a texture of the given type."""
    return _TEXTURE_SLOTS.get(texture_type, 0)


def pack_vertices(vertices: Iterable[Vertex]) -> np.ndarray:
    """Interleave vertices into an (n, 8) float32 array: position, normal, uv."""
    rows = [(*v.position, *v.normal, *v.tex_coords) for v in vertices]
    if not rows:
        return np.empty((0, _FLOATS_PER_VERTEX), dtype=np.float32)
    packed = np.asarray(rows, dtype=np.float32)
    if packed.shape[1] != _FLOATS_PER_VERTEX:
        raise ValueError("vertices must have 3D positions and normals and 2D uvs")
    return packed


def _gl():
    from pyglet import gl

    return gl


class Mesh:
    """Vertices, triangle indices and textures drawn with one call."""

    def __init__(self, vertices: Sequence[Vertex], indices: Sequence[int], textures: Sequence) -> None:
        self.vertices = list(vertices)
        self.indices = [int(i) for i in indices]
        self.textures = list(textures)
        self.vao = None
        self.vbo = None
        self.ebo = None

    @property
    def uploaded(self) -> bool:
        return self.vao is not None

    def upload(self) -> None:
        """Create the vertex array and buffers on the GPU."""
        if self.uploaded:
            return
        gl = _gl()
        vao, vbo, ebo = gl.GLuint(), gl.GLuint(), gl.GLuint()
        gl.glGenVertexArrays(1, vao)
        gl.glGenBuffers(1, vbo)
        gl.glGenBuffers(1, ebo)

        gl.glBindVertexArray(vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ebo)

        vertex_data = np.ascontiguousarray(pack_vertices(self.vertices))
        index_data = np.ascontiguousarray(np.asarray(self.indices, dtype=np.uint32))
        gl.glBufferData(
            gl.GL_ARRAY_BUFFER, vertex_data.nbytes,
            vertex_data.tobytes(), gl.GL_STATIC_DRAW,
        )
        gl.glBufferData(
            gl.GL_ELEMENT_ARRAY_BUFFER, index_data.nbytes,
            index_data.tobytes(), gl.GL_STATIC_DRAW,
        )

        for location, size, offset in ((0, 3, 0), (1, 3, 3), (2, 2, 6)):
            gl.glVertexAttribPointer(
                location, size, gl.GL_FLOAT, gl.GL_FALSE, _STRIDE,
                offset * _FLOAT_SIZE,
            )
        for location in (0, 1, 2):
            gl.glEnableVertexAttribArray(location)

        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)
        gl.glBindVertexArray(0)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, 0)
        self.vao, self.vbo, self.ebo = vao, vbo, ebo

    def draw(self, shader) -> None:
        """Bind the textures to their slots and draw the triangles."""
        self.upload()
        shader.use()
        for texture in self.textures:
            texture.bind(texture_slot(texture.texture_type))
        gl = _gl()
        gl.glBindVertexArray(self.vao)
        gl.glDrawElements(gl.GL_TRIANGLES, len(self.indices), gl.GL_UNSIGNED_INT, None)

    def delete(self) -> None:
        """Release the GPU buffers; a later draw uploads them again."""
        if not self.uploaded:
            return
        gl = _gl()
        gl.glDeleteBuffers(1, self.vbo)
        gl.glDeleteBuffers(1, self.ebo)
        gl.glDeleteVertexArrays(1, self.vao)
        self.vao = self.vbo = self.ebo = None