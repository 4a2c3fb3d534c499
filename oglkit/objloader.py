"""Loader for Wavefront OBJ files with their MTL material libraries.

Faces are triangulated as fans; each group becomes a :class:`Mesh` whose
vertices form consecutive triangles.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from os import PathLike

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

Point3 = tuple[float, float, float]
Point2 = tuple[float, float]


@dataclass
class Material:
    """Ambient, emissive, diffuse and specular RGBA colours plus shininess."""

    name: str = ""
    ka: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])
    ke: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])
    kd: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])
    ks: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])
    kn: float = 0.0


@dataclass(frozen=True)
class Vertex:
    position: Point3
    normal: Point3
    uv: Point2


@dataclass
class Mesh:
    """A named group of triangles sharing one material."""

    vertices: list[Vertex] = field(default_factory=list)
    material_id: int = 0
    name: str = ""


def _default_material() -> Material:
    return Material(
        name="(Default)",
        ka=[1.0, 1.0, 1.0, 1.0],
        ke=[0.0, 0.0, 0.0, 1.0],
        kd=[1.0, 1.0, 1.0, 1.0],
        ks=[1.0, 1.0, 1.0, 1.0],
        kn=128.0,
    )


def _read_floats(tokens: list[str], current: list[float]) -> list[float]:
    """Read floats over ``current``; a bad token reads as 0 and ends reading."""
    values = list(current)
    for i, token in enumerate(tokens[: len(values)]):
        try:
            values[i] = float(token)
        except ValueError:
            values[i] = 0.0
            break
    return values


def _parse_index(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _second_token(line: str) -> str:
    tokens = line.split()
    return tokens[1] if len(tokens) > 1 else ""


def _directory_of(filename: str) -> str:
    pos = max(filename.rfind("/"), filename.rfind("\\"))
    return "." if pos < 0 else filename[:pos]


def _lookup(items: list, index: int, kind: str):
    if not 0 <= index < len(items):
        raise ValueError(f"face references missing {kind} {index}")
    return items[index]


class Loader:
    """Holds the meshes and materials read from an OBJ file."""

    def __init__(self, filename: str | PathLike | None = None) -> None:
        self._meshes: list[Mesh] = []
        self._materials: list[Material] = []
        self._is_loaded = False
        if filename is not None:
            self.load_file(filename)

    @property
    def meshes(self) -> list[Mesh]:
        return self._meshes

    @property
    def materials(self) -> list[Material]:
        return self._materials

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    def unload(self) -> None:
        """Forget every mesh and material."""
        self._meshes.clear()
        self._materials.clear()
        self._is_loaded = False

    def load_file(self, filename: str | PathLike) -> None:
        """Replace the current content with the content of ``filename``.

        Raises ``OSError`` if the file cannot be read and ``ValueError`` if a
        face refers to an element that does not exist.
        """
        self.unload()
        filename = str(filename)
        with open(filename, encoding="utf-8", errors="replace") as file:
            lines = [line.rstrip("\n") for line in file]

        path = _directory_of(filename)
        self._materials.append(_default_material())
        self._meshes.append(Mesh())
        current_material = 0
        current_mesh = 0

        positions: list[Point3] = [(0.0, 0.0, 0.0)]
        normals: list[Point3] = [(0.0, 0.0, 0.0)]
        uvs: list[Point2] = [(0.0, 0.0)]

        for line in lines:
            first, second = line[:1], line[1:2]
            if first == "#":
                continue
            if first == "v" and second == " ":
                positions.append(tuple(_read_floats(line[2:].split(), [0.0] * 3)))
            elif first == "v" and second == "n":
                normals.append(tuple(_read_floats(line[3:].split(), [0.0] * 3)))
            elif first == "v" and second == "t":
                uvs.append(tuple(_read_floats(line[3:].split(), [0.0] * 2)))
            elif first == "u":
                current_material = self._find_material(_second_token(line))
                self._meshes[current_mesh].material_id = current_material
            elif first == "g":
                current_mesh = self._get_mesh(_second_token(line))
                self._meshes[current_mesh].material_id = current_material
            elif first == "f":
                corners = self._parse_face(line[2:])
                if len(corners) < 3:
                    continue

                def build(corner: tuple[int, int, int]) -> Vertex:
                    v, t, n = corner
                    return Vertex(
                        position=_lookup(positions, v, "position"),
                        normal=_lookup(normals, n, "normal"),
                        uv=_lookup(uvs, t, "texture coordinate"),
                    )

                built = [build(c) for c in corners]
                mesh = self._meshes[current_mesh]
                mesh.vertices.extend(built[:3])
                for previous, current in zip(built[2:-1], built[3:]):
                    mesh.vertices.extend((built[0], previous, current))
            elif first == "m":
                self._load_mtl_file(f"{path}/{_second_token(line)}")

        self._meshes = [mesh for mesh in self._meshes if mesh.vertices]
        self._is_loaded = True

    @staticmethod
    def _parse_face(text: str) -> list[tuple[int, int, int]]:
        tokens = text.split(" ")
        if tokens and tokens[-1] == "":
            tokens.pop()
        corners = []
        for token in tokens:
            parts = token.split("/")[:3]
            ids = [_parse_index(part) for part in parts] + [0] * (3 - len(parts))
            corners.append((ids[0], ids[1], ids[2]))
        return corners

    def _load_mtl_file(self, filename: str) -> None:
        try:
            with open(filename, encoding="utf-8", errors="replace") as file:
                lines = [line.rstrip("\n") for line in file]
        except OSError:
            logger.warning("failed to open material file %s for reading", filename)
            return

        current = 0
        for line in lines:
            first = line[:1]
            if first == "#":
                continue
            if first == "n":
                current = len(self._materials)
                self._materials.append(Material(name=_second_token(line)))
            elif first == "N":
                tokens = line.split()
                self._materials[current].kn = _read_floats(tokens[1:2], [0.0])[0]
            elif first == "K":
                attribute = {"d": "kd", "s": "ks", "a": "ka", "e": "ke"}.get(line[1:2])
                if attribute is None:
                    continue
                material = self._materials[current]
                colour = getattr(material, attribute)
                rgb = _read_floats(line.split()[1:], colour[:3])
                setattr(material, attribute, rgb + [1.0])

    def _find_material(self, name: str) -> int:
        return next(
            (i for i, mat in enumerate(self._materials) if mat.name == name), 0
        )

    def _get_mesh(self, name: str) -> int:
        matches = [i for i, mesh in enumerate(self._meshes) if mesh.name == name]
        if matches:
            return matches[-1]
        self._meshes.append(Mesh(name=name))
        return len(self._meshes) - 1