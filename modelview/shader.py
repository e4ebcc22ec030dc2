"""GLSL program built from a vertex and a fragment shader file."""

from __future__ import annotations

import logging
from os import PathLike

import numpy as np

logger = logging.getLogger(__name__)

_INFO_LOG_SIZE = 512


class ShaderError(RuntimeError):
    """Raised when shader sources cannot be read, compiled or linked."""


def read_sources(vertex_path: str | PathLike, fragment_path: str | PathLike) -> tuple[str, str]:
    """Read both shader source files, the vertex shader first."""
    sources = []
    for path, stage in ((vertex_path, "vertex"), (fragment_path, "fragment")):
        try:
            with open(path, encoding="utf-8") as handle:
                sources.append(handle.read())
        except OSError as exc:
            raise ShaderError(f"failed to open {stage} shader source: {path}") from exc
    return sources[0], sources[1]


def _gl():
    from pyglet import gl

    return gl


def _c_string(gl, text: str):
    data = text.encode("utf-8") + b"\0"
    return (gl.GLchar * len(data)).from_buffer_copy(data)


def _compile(gl, kind, source: str, stage: str):
    shader = gl.glCreateShader(kind)
    text = _c_string(gl, source)
    char_pointer = gl.glShaderSource.argtypes[2]._type_
    strings = (char_pointer * 1)(char_pointer(gl.GLchar.from_buffer(text)))
    gl.glShaderSource(shader, 1, strings, None)
    gl.glCompileShader(shader)
    status = gl.GLint()
    gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS, status)
    if not status.value:
        log = (gl.GLchar * _INFO_LOG_SIZE)()
        gl.glGetShaderInfoLog(shader, _INFO_LOG_SIZE, None, log)
        raise ShaderError(
            f"failed to compile {stage} shader: {log.value.decode(errors='replace')}"
        )
    return shader


class Shader:
    """A linked shader program with cached uniform locations."""

    def __init__(self, vertex_path: str | PathLike, fragment_path: str | PathLike) -> None:
        vertex_source, fragment_source = read_sources(vertex_path, fragment_path)
        self._locations: dict[str, int] = {}
        self._program = None

        gl = _gl()
        vertex = _compile(gl, gl.GL_VERTEX_SHADER, vertex_source, "vertex")
        fragment = _compile(gl, gl.GL_FRAGMENT_SHADER, fragment_source, "fragment")

        program = gl.glCreateProgram()
        gl.glAttachShader(program, vertex)
        gl.glAttachShader(program, fragment)
        gl.glLinkProgram(program)
        status = gl.GLint()
        gl.glGetProgramiv(program, gl.GL_LINK_STATUS, status)
        if not status.value:
            log = (gl.GLchar * _INFO_LOG_SIZE)()
            gl.glGetProgramInfoLog(program, _INFO_LOG_SIZE, None, log)
            raise ShaderError(
                f"failed to link program: {log.value.decode(errors='replace')}"
            )
        gl.glDeleteShader(vertex)
        gl.glDeleteShader(fragment)
        self._program = program

    def use(self) -> None:
        """Make this program current."""
        _gl().glUseProgram(self._program)

    def uniform_location(self, name: str) -> int:
        """Location of uniform ``name``; -1 (with a warning) if it does not exist."""
        if name not in self._locations:
            gl = _gl()
            location = gl.glGetUniformLocation(self._program, _c_string(gl, name))
            if location == -1:
                logger.warning("Uniform '%s' doesn't exist!", name)
            self._locations[name] = location
        return self._locations[name]

    def set_float(self, name: str, value: float) -> None:
        _gl().glUniform1f(self.uniform_location(name), float(value))

    def set_int(self, name: str, value: int) -> None:
        _gl().glUniform1i(self.uniform_location(name), int(value))

    def set_bool(self, name: str, value: bool) -> None:
        _gl().glUniform1i(self.uniform_location(name), int(bool(value)))

    def set_vec3(self, name: str, value) -> None:
        gl = _gl()
        data = (gl.GLfloat * 3)(*np.asarray(value, dtype=np.float32).ravel())
        gl.glUniform3fv(self.uniform_location(name), 1, data)

    def set_mat4(self, name: str, matrix) -> None:
        gl = _gl()
        column_major = np.asarray(matrix, dtype=np.float32).T.ravel()
        data = (gl.GLfloat * 16)(*column_major)
        gl.glUniformMatrix4fv(self.uniform_location(name), 1, gl.GL_FALSE, data)

    def delete(self) -> None:
        """Release the GPU program."""
        if self._program is not None:
            _gl().glDeleteProgram(self._program)
            self._program = None
            self._locations.clear()