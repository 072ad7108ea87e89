"""Reader for the whitespace-separated scene description format."""

from __future__ import annotations

import math
import os
import warnings
from typing import Iterator, Optional, Union

import numpy as np

from .camera import Camera, PerspectiveCamera
from .light import DirectionalLight, Light, PointLight
from .linalg import rotate_x, rotate_y, rotate_z, rotation, scaling, translation, uniform_scaling
from .material import Material
from .mesh import Mesh
from .objects import Group, Object3D, Plane, Sphere, Transform, Triangle

PathLike = Union[str, "os.PathLike[str]"]


class SceneError(ValueError):
    """Raised when a scene file cannot be read or is malformed."""


class _Tokens:
    """Whitespace-separated tokens with typed readers."""

    def __init__(self, text: str) -> None:
        self._it: Iterator[str] = iter(text.split())

    def next(self) -> str:
        """The next token, or an empty string at the end of input."""
        return next(self._it, "")

    def expect(self, word: str) -> None:
        token = self.next()
        if token != word:
            raise SceneError(f"expected {word!r}, found {token!r}")

    def read_float(self) -> float:
        token = self.next()
        try:
            return float(token)
        except ValueError as exc:
            raise SceneError(f"Error trying to read 1 float, found {token!r}") from exc

    def read_int(self) -> int:
        token = self.next()
        try:
            return int(token)
        except ValueError as exc:
            raise SceneError(f"Error trying to read 1 int, found {token!r}") from exc

    def read_vec3(self) -> np.ndarray:
        try:
            return np.array([float(self.next()) for _ in range(3)], dtype=float)
        except ValueError as exc:
            raise SceneError("Error trying to read 3 floats to make a Vector3f") from exc


class SceneParser:
    """Parses a ``.txt`` scene file into a camera, lights, materials and objects."""

    def __init__(self, filename: PathLike) -> None:
        name = os.fspath(filename)
        if not str(name).endswith(".txt"):
            raise SceneError("wrong file name extension")
        try:
            with open(name, encoding="utf-8") as fh:
                text = fh.read()
        except OSError as exc:
            raise SceneError("cannot open scene file") from exc

        self.camera: Optional[Camera] = None
        self.background_color = np.array([0.5, 0.5, 0.5])
        self.lights: list[Light] = []
        self.materials: list[Material] = []
        self.group: Optional[Group] = None
        self._current_material: Optional[Material] = None
        self._tokens = _Tokens(text)
        self._parse_file()
        if not self.lights:
            warnings.warn("No lights specified", stacklevel=2)

    @property
    def num_lights(self) -> int:
        return len(self.lights)

    @property
    def num_materials(self) -> int:
        return len(self.materials)

    def get_light(self, index: int) -> Light:
        """The light at ``index``."""
        if not 0 <= index < len(self.lights):
            raise IndexError(f"light {index} out of range")
        return self.lights[index]

    def get_material(self, index: int) -> Material:
        """The material at ``index``."""
        if not 0 <= index < len(self.materials):
            raise IndexError(f"material {index} out of range")
        return self.materials[index]

    # --- top level ----------------------------------------------------------

    def _parse_file(self) -> None:
        handlers = {
            "PerspectiveCamera": self._parse_perspective_camera,
            "Background": self._parse_background,
            "Lights": self._parse_lights,
            "Materials": self._parse_materials,
        }
        while token := self._tokens.next():
            if token in handlers:
                handlers[token]()
            elif token == "Group":
                self.group = self._parse_group()
            else:
                raise SceneError(f"Unknown token in parseFile: {token!r}")

    def _parse_perspective_camera(self) -> None:
        t = self._tokens
        t.expect("{")
        t.expect("center")
        center = t.read_vec3()
        t.expect("direction")
        direction = t.read_vec3()
        t.expect("up")
        up = t.read_vec3()
        t.expect("angle")
        angle = math.radians(t.read_float())
        t.expect("width")
        width = t.read_int()
        t.expect("height")
        height = t.read_int()
        t.expect("}")
        self.camera = PerspectiveCamera(center, direction, up, width, height, angle)

    def _parse_background(self) -> None:
        t = self._tokens
        t.expect("{")
        while True:
            token = t.next()
            if token == "}":
                return
            if token == "color":
                self.background_color = t.read_vec3()
            else:
                raise SceneError(f"Unknown token in parseBackground: {token!r}")

    # --- lights ---------------------------------------------------------------

    def _parse_lights(self) -> None:
        t = self._tokens
        t.expect("{")
        t.expect("numLights")
        count = t.read_int()
        lights: list[Light] = []
        for _ in range(count):
            token = t.next()
            if token == "DirectionalLight":
                lights.append(self._parse_light_body("direction", DirectionalLight))
            elif token == "PointLight":
                lights.append(self._parse_light_body("position", PointLight))
            else:
                raise SceneError(f"Unknown token in parseLight: {token!r}")
        t.expect("}")
        self.lights = lights

    def _parse_light_body(self, key: str, kind) -> Light:
        t = self._tokens
        t.expect("{")
        t.expect(key)
        vector = t.read_vec3()
        t.expect("color")
        color = t.read_vec3()
        t.expect("}")
        return kind(vector, color)

    # --- materials --------------------------------------------------------------

    def _parse_materials(self) -> None:
        t = self._tokens
        t.expect("{")
        t.expect("numMaterials")
        count = t.read_int()
        materials: list[Material] = []
        for _ in range(count):
            token = t.next()
            if token not in ("Material", "PhongMaterial"):
                raise SceneError(f"Unknown token in parseMaterial: {token!r}")
            materials.append(self._parse_material())
        t.expect("}")
        self.materials = materials

    def _parse_material(self) -> Material:
        t = self._tokens
        diffuse = np.array([1.0, 1.0, 1.0])
        specular = np.zeros(3)
        shininess = 0.0
        t.expect("{")
        while True:
            token = t.next()
            if token == "diffuseColor":
                diffuse = t.read_vec3()
            elif token == "specularColor":
                specular = t.read_vec3()
            elif token == "shininess":
                shininess = t.read_float()
            elif token == "texture":
                t.next()  # texture file name is accepted but not used
            elif token == "}":
                break
            else:
                raise SceneError(f"Unknown token in material: {token!r}")
        return Material(diffuse, specular, shininess)

    # --- objects ------------------------------------------------------------------

    def _parse_object(self, token: str) -> Object3D:
        handlers = {
            "Group": self._parse_group,
            "Sphere": self._parse_sphere,
            "Plane": self._parse_plane,
            "Triangle": self._parse_triangle,
            "TriangleMesh": self._parse_triangle_mesh,
            "Transform": self._parse_transform,
        }
        handler = handlers.get(token)
        if handler is None:
            raise SceneError(f"Unknown token in parseObject: {token!r}")
        return handler()

    def _parse_group(self) -> Group:
        t = self._tokens
        t.expect("{")
        t.expect("numObjects")
        count = t.read_int()
        group = Group(count)
        placed = 0
        while placed < count:
            token = t.next()
            if token == "MaterialIndex":
                index = t.read_int()
                if not 0 <= index < len(self.materials):
                    raise SceneError(f"material index {index} out of range")
                self._current_material = self.materials[index]
            else:
                group.add_object(placed, self._parse_object(token))
                placed += 1
        t.expect("}")
        return group

    def _require_material(self) -> Material:
        if self._current_material is None:
            raise SceneError("object defined before any MaterialIndex")
        return self._current_material

    def _parse_sphere(self) -> Sphere:
        t = self._tokens
        t.expect("{")
        t.expect("center")
        center = t.read_vec3()
        t.expect("radius")
        radius = t.read_float()
        t.expect("}")
        return Sphere(center, radius, self._require_material())

    def _parse_plane(self) -> Plane:
        t = self._tokens
        t.expect("{")
        t.expect("normal")
        normal = t.read_vec3()
        t.expect("offset")
        offset = t.read_float()
        t.expect("}")
        return Plane(normal, offset, self._require_material())

    def _parse_triangle(self) -> Triangle:
        t = self._tokens
        t.expect("{")
        vertices = []
        for key in ("vertex0", "vertex1", "vertex2"):
            t.expect(key)
            vertices.append(t.read_vec3())
        t.expect("}")
        return Triangle(*vertices, self._require_material())

    def _parse_triangle_mesh(self) -> Mesh:
        t = self._tokens
        t.expect("{")
        t.expect("obj_file")
        filename = t.next()
        t.expect("}")
        if not filename.endswith(".obj"):
            raise SceneError(f"mesh file {filename!r} must end in '.obj'")
        try:
            return Mesh(filename, self._current_material)
        except OSError as exc:
            raise SceneError(f"Cannot open {filename}") from exc

    def _parse_transform(self) -> Transform:
        t = self._tokens
        matrix = np.identity(4)
        t.expect("{")
        token = t.next()
        # Each transformation multiplies on the right, so the first one listed
        # is the last applied to the object.
        while True:
            if token == "Scale":
                s = t.read_vec3()
                matrix = matrix @ scaling(s[0], s[1], s[2])
            elif token == "UniformScale":
                matrix = matrix @ uniform_scaling(t.read_float())
            elif token == "Translate":
                matrix = matrix @ translation(t.read_vec3())
            elif token == "XRotate":
                matrix = matrix @ rotate_x(math.radians(t.read_float()))
            elif token == "YRotate":
                matrix = matrix @ rotate_y(math.radians(t.read_float()))
            elif token == "ZRotate":
                matrix = matrix @ rotate_z(math.radians(t.read_float()))
            elif token == "Rotate":
                t.expect("{")
                axis = t.read_vec3()
                radians = math.radians(t.read_float())
                matrix = matrix @ rotation(axis, radians)
                t.expect("}")
            elif token == "Matrix4f":
                explicit = np.identity(4)
                t.expect("{")
                for col in range(4):
                    for row in range(4):
                        explicit[row, col] = t.read_float()
                t.expect("}")
                matrix = explicit @ matrix
            else:
                obj = self._parse_object(token)
                break
            token = t.next()
        t.expect("}")
        return Transform(matrix, obj)