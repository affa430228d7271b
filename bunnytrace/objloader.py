"""Loader for Wavefront OBJ models and their MTL material libraries."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from bunnytrace.objgeom import (
    Vector2,
    Vector3,
    Vertex,
    cross_v3,
    first_token,
    get_element,
    split,
    tail,
    triangulate,
)

PathLike = Union[str, "os.PathLike[str]"]

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_BUMP_KEYS = ("map_Bump", "map_bump", "bump")


def _to_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group(1))


def _to_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group(1))


def _floats(text: str, count: int) -> List[float]:
    parts = split(text, " ")
    if len(parts) < count:
        raise ValueError(f"expected {count} numbers in {text!r}")
    return [_to_float(part) for part in parts[:count]]


@dataclass
class ObjMaterial:
    """A material read from an MTL file."""

    name: str = ""
    ka: Vector3 = field(default_factory=Vector3)
    kd: Vector3 = field(default_factory=Vector3)
    ks: Vector3 = field(default_factory=Vector3)
    ns: float = 0.0
    ni: float = 0.0
    d: float = 0.0
    illum: int = 0
    map_ka: str = ""
    map_kd: str = ""
    map_ks: str = ""
    map_ns: str = ""
    map_d: str = ""
    map_bump: str = ""


@dataclass
class Mesh:
    """A named list of vertices with triangle indices into it."""

    vertices: List[Vertex] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    name: str = ""
    material: Optional[ObjMaterial] = None


def gen_vertices_from_raw_obj(
    positions: Sequence[Vector3],
    tcoords: Sequence[Vector2],
    normals: Sequence[Vector3],
    line: str,
) -> List[Vertex]:
    """Build the vertices of one face line ("f ...")."""
    vertices: List[Vertex] = []
    no_normal = False
    for corner in split(tail(line), " "):
        parts = split(corner, "/")
        if len(parts) == 1:
            vertices.append(
                Vertex(position=get_element(positions, parts[0]), texture_coordinate=Vector2())
            )
            no_normal = True
        elif len(parts) == 2:
            vertices.append(
                Vertex(
                    position=get_element(positions, parts[0]),
                    texture_coordinate=get_element(tcoords, parts[1]),
                )
            )
            no_normal = True
        elif len(parts) == 3:
            texture = get_element(tcoords, parts[1]) if parts[1] != "" else Vector2()
            vertices.append(
                Vertex(
                    position=get_element(positions, parts[0]),
                    normal=get_element(normals, parts[2]),
                    texture_coordinate=texture,
                )
            )

    if no_normal:
        if len(vertices) < 3:
            raise ValueError(f"face needs at least three vertices: {line!r}")
        a = vertices[0].position - vertices[1].position
        b = vertices[2].position - vertices[1].position
        normal = cross_v3(a, b)
        for vertex in vertices:
            vertex.normal = normal
    return vertices


@dataclass
class Loader:
    """Reads OBJ files into meshes, vertices, indices and materials."""

    loaded_meshes: List[Mesh] = field(default_factory=list)
    loaded_vertices: List[Vertex] = field(default_factory=list)
    loaded_indices: List[int] = field(default_factory=list)
    loaded_materials: List[ObjMaterial] = field(default_factory=list)

    def load_file(self, path: PathLike) -> bool:
        """Load an OBJ file; return whether it contained any geometry.

        Raises ValueError if the path does not end in ".obj" and OSError if
        the file cannot be read.
        """
        path = os.fspath(path)
        if not path.endswith(".obj"):
            raise ValueError(f"not an .obj file: {path!r}")

        with open(path, encoding="utf-8") as handle:
            lines = handle.read().splitlines()

        self.loaded_meshes = []
        self.loaded_vertices = []
        self.loaded_indices = []

        positions: List[Vector3] = []
        tcoords: List[Vector2] = []
        normals: List[Vector3] = []
        vertices: List[Vertex] = []
        indices: List[int] = []
        mesh_mat_names: List[str] = []
        listening = False
        meshname = ""

        for line in lines:
            token = first_token(line)

            if token in ("o", "g") or line.startswith("g"):
                named = token in ("o", "g")
                if not listening:
                    listening = True
                    meshname = tail(line) if named else "unnamed"
                elif indices and vertices:
                    self.loaded_meshes.append(Mesh(vertices, indices, meshname))
                    vertices, indices = [], []
                    meshname = tail(line)
                else:
                    meshname = tail(line) if named else "unnamed"

            if token == "v":
                x, y, z = _floats(tail(line), 3)
                positions.append(Vector3(x, y, z))
            elif token == "vt":
                u, v = _floats(tail(line), 2)
                tcoords.append(Vector2(u, v))
            elif token == "vn":
                x, y, z = _floats(tail(line), 3)
                normals.append(Vector3(x, y, z))
            elif token == "f":
                face = gen_vertices_from_raw_obj(positions, tcoords, normals, line)
                vertices.extend(face)
                self.loaded_vertices.extend(face)
                mesh_base = len(vertices) - len(face)
                loaded_base = len(self.loaded_vertices) - len(face)
                for index in triangulate(face):
                    indices.append(mesh_base + index)
                    self.loaded_indices.append(loaded_base + index)
            elif token == "usemtl":
                mesh_mat_names.append(tail(line))
                if indices and vertices:
                    self.loaded_meshes.append(Mesh(vertices, indices, f"{meshname}_2"))
                    vertices, indices = [], []
            elif token == "mtllib":
                parts = split(path, "/")
                prefix = "".join(part + "/" for part in parts[:-1]) if len(parts) != 1 else ""
                material_path = prefix + tail(line)
                if material_path.endswith(".mtl"):
                    try:
                        self.load_materials(material_path)
                    except OSError:
                        pass

        if indices and vertices:
            self.loaded_meshes.append(Mesh(vertices, indices, meshname))

        for mesh, matname in zip(self.loaded_meshes, mesh_mat_names):
            found = next((m for m in self.loaded_materials if m.name == matname), None)
            if found is not None:
                mesh.material = found

        return bool(self.loaded_meshes or self.loaded_vertices or self.loaded_indices)

    def load_materials(self, path: PathLike) -> None:
        """Append the materials of an MTL file to loaded_materials.

        Raises ValueError if the path does not end in ".mtl" and OSError if
        the file cannot be read.
        """
        path = os.fspath(path)
        if not path.endswith(".mtl"):
            raise ValueError(f"not an .mtl file: {path!r}")

        with open(path, encoding="utf-8") as handle:
            lines = handle.read().splitlines()

        material = ObjMaterial()
        listening = False

        for line in lines:
            token = first_token(line)
            value = tail(line)

            if token == "newmtl":
                if listening:
                    self.loaded_materials.append(material)
                    material = ObjMaterial()
                listening = True
                material.name = value if len(line) > 7 else "none"
            elif token in ("Ka", "Kd", "Ks"):
                parts = split(value, " ")
                if len(parts) != 3:
                    continue
                color = Vector3(*(_to_float(part) for part in parts))
                setattr(material, token.lower(), color)
            elif token == "Ns":
                material.ns = _to_float(value)
            elif token == "Ni":
                material.ni = _to_float(value)
            elif token == "d":
                material.d = _to_float(value)
            elif token == "illum":
                material.illum = _to_int(value)
            elif token == "map_Ka":
                material.map_ka = value
            elif token == "map_Kd":
                material.map_kd = value
            elif token == "map_Ks":
                material.map_ks = value
            elif token == "map_Ns":
                material.map_ns = value
            elif token == "map_d":
                material.map_d = value
            elif token in _BUMP_KEYS:
                material.map_bump = value

        self.loaded_materials.append(material)