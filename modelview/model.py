"""Wavefront OBJ scenes turned into drawable meshes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Callable, Iterator

from modelview.mesh import Mesh, Vertex
from modelview.texture import Texture

logger = logging.getLogger(__name__)

DEFAULT_MATERIAL = "DefaultMaterial"
_ZERO_NORMAL = (0.0, 0.0, 0.0)
_ZERO_UV = (0.0, 0.0)


class ModelError(RuntimeError):
    """Raised when a model file cannot be loaded."""


@dataclass
class Material:
    """A named material and the texture files it refers to."""

    name: str
    diffuse_textures: list[str] = field(default_factory=list)
    specular_textures: list[str] = field(default_factory=list)


@dataclass
class SceneMesh:
    """Triangulated geometry of one mesh and the index of its material."""

    vertices: list[Vertex]
    indices: list[int]
    material_index: int = 0


def _strip_comment(raw: str) -> str:
    return raw.split("#", 1)[0].strip()


def _resolve(token: str, count: int, kind: str) -> int:
    try:
        value = int(token)
    except ValueError as exc:
        raise ModelError(f"invalid {kind} index: {token!r}") from exc
    index = value - 1 if value > 0 else count + value
    if value == 0 or not 0 <= index < count:
        raise ModelError(f"{kind} index {value} out of range")
    return index


def _triangulate(base: int, corners: int) -> Iterator[int]:
    if corners < 3:
        yield from range(base, base + corners)
        return
    for k in range(1, corners - 1):
        yield base
        yield base + k
        yield base + k + 1


class _ObjReader:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.positions: list[tuple[float, float, float]] = []
        self.uvs: list[tuple[float, float]] = []
        self.normals: list[tuple[float, float, float]] = []
        self.materials = [Material(DEFAULT_MATERIAL)]
        self.material_names: dict[str, int] = {}
        self.current_material = 0
        self.faces: list[list[tuple[int, int | None, int | None]]] = []
        self.meshes: list[SceneMesh] = []

    def read(self) -> tuple[list[SceneMesh], list[Material]]:
        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ModelError(f"failed to load scene: {self.path}") from exc
        for raw in text.splitlines():
            line = _strip_comment(raw)
            if not line:
                continue
            keyword, *args = line.split()
            self._handle(keyword, args)
        self._flush()
        if not self.meshes:
            raise ModelError(f"failed to load scene: {self.path} holds no faces")
        return self.meshes, self.materials

    def _handle(self, keyword: str, args: list[str]) -> None:
        try:
            if keyword == "v":
                x, y, z = (float(a) for a in args[:3])
                self.positions.append((x, y, z))
            elif keyword == "vt":
                u = float(args[0])
                v = float(args[1]) if len(args) > 1 else 0.0
                self.uvs.append((u, v))
            elif keyword == "vn":
                x, y, z = (float(a) for a in args[:3])
                self.normals.append((x, y, z))
            elif keyword == "f":
                self.faces.append([self._corner(token) for token in args])
            elif keyword == "usemtl":
                self._use_material(" ".join(args))
            elif keyword == "mtllib":
                for name in args:
                    self._read_library(name)
            elif keyword in ("o", "g"):
                self._flush()
        except (ValueError, IndexError) as exc:
            raise ModelError(f"malformed '{keyword}' statement in {self.path}") from exc

    def _corner(self, token: str) -> tuple[int, int | None, int | None]:
        parts = token.split("/")
        position = _resolve(parts[0], len(self.positions), "vertex")
        uv = None
        if len(parts) > 1 and parts[1]:
            uv = _resolve(parts[1], len(self.uvs), "texture coordinate")
        normal = None
        if len(parts) > 2 and parts[2]:
            normal = _resolve(parts[2], len(self.normals), "normal")
        return position, uv, normal

    def _use_material(self, name: str) -> None:
        index = self.material_names.get(name)
        if index is None:
            logger.warning("Unknown material '%s', using the default material", name)
            index = 0
        if index != self.current_material:
            self._flush()
            self.current_material = index

    def _read_library(self, name: str) -> None:
        library = self.path.parent / name
        try:
            text = library.read_text(encoding="utf-8", errors="replace")
        except OSError:
            logger.warning("Material library '%s' could not be read", library)
            return
        current: Material | None = None
        for raw in text.splitlines():
            line = _strip_comment(raw)
            if not line:
                continue
            keyword, *args = line.split()
            keyword = keyword.lower()
            if keyword == "newmtl":
                current = Material(" ".join(args))
                self.material_names[current.name] = len(self.materials)
                self.materials.append(current)
            elif current is not None and args:
                if keyword == "map_kd":
                    current.diffuse_textures.append(args[-1])
                elif keyword == "map_ks":
                    current.specular_textures.append(args[-1])

    def _flush(self) -> None:
        if not self.faces:
            return
        corners = [corner for face in self.faces for corner in face]
        has_normals = all(normal is not None for _, _, normal in corners)
        vertices: list[Vertex] = []
        indices: list[int] = []
        for face in self.faces:
            base = len(vertices)
            for position, uv, normal in face:
                if uv is None:
                    tex_coords = _ZERO_UV
                else:
                    u, v = self.uvs[uv]
                    tex_coords = (u, 1.0 - v)
                vertices.append(
                    Vertex(
                        position=self.positions[position],
                        normal=self.normals[normal] if has_normals else _ZERO_NORMAL,
                        tex_coords=tex_coords,
                    )
                )
            indices.extend(_triangulate(base, len(face)))
        self.meshes.append(SceneMesh(vertices, indices, self.current_material))
        self.faces = []


def load_scene(path: str | PathLike) -> tuple[list[SceneMesh], list[Material]]:
    """Read a Wavefront OBJ file: triangulated meshes with flipped UVs, and materials.

    The first material is always the default one used by meshes without a
    known material.
    """
    file_path = Path(path)
    if file_path.suffix.lower() != ".obj":
        raise ModelError(f"failed to load scene: unsupported format {file_path.suffix!r}")
    return _ObjReader(file_path).read()


class Model:
    """All meshes of a model file, sharing textures loaded once per path."""

    def __init__(
        self,
        path: str | PathLike,
        texture_factory: Callable[[str], object] = Texture,
    ) -> None:
        self.path = Path(path)
        self.directory = self.path.parent
        self._texture_factory = texture_factory
        self.loaded_textures: dict[str, object] = {}
        scene_meshes, materials = load_scene(self.path)
        self.meshes = [self._build_mesh(mesh, materials) for mesh in scene_meshes]

    def _build_mesh(self, scene_mesh: SceneMesh, materials: list[Material]) -> Mesh:
        material = materials[scene_mesh.material_index]
        textures = [
            *self._load_textures(material.diffuse_textures, "texture_diffuse"),
            *self._load_textures(material.specular_textures, "texture_specular"),
        ]
        return Mesh(scene_mesh.vertices, scene_mesh.indices, textures)

    def _load_textures(self, names: list[str], texture_type: str) -> list[object]:
        textures = []
        for name in names:
            full_path = str(self.directory / name)
            texture = self.loaded_textures.get(full_path)
            if texture is None:
                texture = self._texture_factory(full_path)
                texture.texture_type = texture_type
                self.loaded_textures[full_path] = texture
            textures.append(texture)
        return textures

    def draw(self, shader) -> None:
        """Draw every mesh with ``shader``."""
        for mesh in self.meshes:
            mesh.draw(shader)