# raytracer

Building blocks for a ray tracer. This package reads a plain-text scene
description into a camera, a background colour, lights, materials and a group of
objects. It turns image coordinates into rays, finds the nearest surface a
ray hits, and shades that hit with the Phong model.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Scene files

`raytracer.scene.SceneParser` takes a path that must end in `.txt`. Tokens
are separated by whitespace. A scene may contain these blocks:

- `PerspectiveCamera { center x y z direction x y z up x y z angle deg width w height h }`
- `Background { color r g b }`. Without it the background is `0.5 0.5 0.5`.
- `Lights { numLights n DirectionalLight { direction x y z color r g b } PointLight { position x y z color r g b } }`
- `Materials { numMaterials n Material { diffuseColor r g b specularColor r g b shininess s } }`.
  `PhongMaterial` is accepted as a synonym for `Material`. A `texture name` entry is read and then ignored.
- `Group { numObjects n MaterialIndex i Sphere { center x y z radius r } ... }`

`MaterialIndex i` selects the material for every object that follows it. The
available objects are:

- `Sphere`
- `Plane`, with `normal` and `offset`
- `Triangle`, with `vertex0`, `vertex1` and `vertex2`
- `TriangleMesh`, as `obj_file path.obj`
- nested `Group` blocks
- `Transform` blocks

A `Transform` block holds any number of `Scale`, `UniformScale`, `Translate`,
`XRotate`, `YRotate`, `ZRotate`, `Rotate { axis degrees }` or
`Matrix4f { 16 values }` entries, followed by exactly one object.

A malformed scene raises `raytracer.scene.SceneError`. A bad extension, an
unreadable file, an unknown token, a number that cannot be read and an
out-of-range material index all do so. A scene without lights only gives a
warning.

After parsing, the parser exposes these members:

- `camera`, `background_color`, `lights`, `materials` and `group`
- `num_lights` and `num_materials`
- `get_light(index)` and `get_material(index)`, which raise `IndexError` out of range

## Library use

```python
from raytracer.ray import Hit
from raytracer.scene import SceneParser

scene = SceneParser("scene.txt")
ray = scene.camera.generate_ray((10, 20))
hit = Hit()
if scene.group.intersect(ray, hit, 0.0):
    point = ray.point_at(hit.t)
    color = sum(
        hit.material.shade(ray, hit, *light.illumination(point))
        for light in scene.lights
    )
else:
    color = scene.background_color
```

The modules are:

- `raytracer.linalg`: vector helpers (`vec3`, `normalized`, `min_vec`,
  `max_vec`, `max_component`, `orthonormal_basis`). It also has 4x4 matrices:
  `scaling`, `uniform_scaling`, `translation`, `rotate_x`, `rotate_y`,
  `rotate_z` and `rotation`, applied with `transform_point` and
  `transform_direction`.
- `raytracer.ray`: `Ray` with `point_at(t)`, and `Hit`, which records the nearest `t`, material and normal.
- `raytracer.aabb`: `AABB`, an axis-aligned box with a slab `intersect`, and `fit`, `reset` and `is_infinite`.
- `raytracer.kdtree`: `KDTree` and `KDTNode`, a balanced tree over objects that have an `aabb`.
- `raytracer.objects`: `Sphere`, `Plane`, `Triangle`, `Transform` and `Group`.
  Call `Group.build_tree()` to intersect through a kd-tree instead of testing every object.
- `raytracer.mesh`: `Mesh`, a set of triangles read from the `v`, `vt` and `f` lines of an OBJ file.
- `raytracer.material`: `Material` with Phong `shade`.
- `raytracer.light`: `DirectionalLight` and `PointLight`, whose
  `illumination(point)` returns the direction to the light and the light's colour.
- `raytracer.camera`: `PerspectiveCamera`, whose `generate_ray(point)` maps pixel coordinates to a ray.

## What it does not do

The package has no command-line program. It has no routine that renders a
whole image, and it has no image type, so it reads and writes no image files.
To produce a picture, loop over the camera's `width` and `height` as in the
example above and store the colours yourself.