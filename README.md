# bunnytrace

A compact ray tracer. It loads a triangle mesh from a Wavefront OBJ file, puts
the triangles into a bounding volume hierarchy (BVH), and casts one primary ray
through every pixel. Surfaces are shaded with Whitted-style light transport:
reflection and refraction weighted by the Fresnel equations, and Phong diffuse
and specular shading with shadow rays for point lights. The image is written as
a binary PPM (P6).

## Installation

```
pip install .
```

The package has no runtime dependencies beyond the Python standard library
(Python 3.10 or later).

## Command line

```
bunnytrace [MODEL] [--output FILE] [--width N] [--height N]
```

- `MODEL`: path of the OBJ file to render, default `../models/bunny/bunny.obj`.
  The file must hold exactly one mesh; its vertices are scaled by 60.
- `--output`: image file to write, default `binary.ppm`.
- `--width`, `--height`: image size in pixels, default 1280×960.

The scene is the mesh lit by two point lights at (-20, 70, 20) and
(20, 70, 20), seen from the eye position (-1, 5, 10) with a 90° field of view.
A progress bar is drawn while rendering, and the elapsed time is printed at the
end.

## Library use

```python
from bunnytrace.scene import Scene
from bunnytrace.light import Light
from bunnytrace.triangle import MeshTriangle
from bunnytrace.vector import Vector3f
from bunnytrace.renderer import Renderer

scene = Scene(320, 240)
scene.add(MeshTriangle("models/bunny/bunny.obj"))
scene.add(Light(Vector3f(-20, 70, 20), Vector3f(1, 1, 1)))
scene.add(Light(Vector3f(20, 70, 20), Vector3f(1, 1, 1)))
scene.build_bvh()

framebuffer = Renderer().render(scene, "bunny.ppm")
```

`Renderer.render` writes the image and returns the framebuffer as a list of
`Vector3f` colours. `Scene`, `BVHAccel` and `Renderer` accept a `stream`
argument for their progress and status messages (standard output by default).
`Scene.intersect` and `Scene.cast_ray` raise `RuntimeError` until
`build_bvh` has been called.

The modules:

- `bunnytrace.vector`: `Vector3f`, `Vector2f`, `normalize`, `dot_product`,
  `cross_product`, `lerp`, `clamp`, `solve_quadratic`, `get_random_float`,
  `update_progress`.
- `bunnytrace.ray`: `Ray`, with `Ray.at(t)` for points along the ray.
- `bunnytrace.bounds3`: axis-aligned `Bounds3` boxes (`diagonal`,
  `max_extent`, `surface_area`, `centroid`, `intersect`, `offset`,
  `overlaps`, `inside`, `intersect_p`) and `union`.
- `bunnytrace.material`: `Material` and `MaterialType`.
- `bunnytrace.light`: `Light` and `AreaLight` (with `sample_point`).
- `bunnytrace.intersection`: the `Intersection` hit record and the
  `SceneObject` interface.
- `bunnytrace.sphere` and `bunnytrace.triangle`: the `Sphere`, `Triangle` and
  `MeshTriangle` scene objects, and `ray_triangle_intersect`.
- `bunnytrace.bvh`: `BVHAccel`, `BVHBuildNode` and `SplitMethod`.
- `bunnytrace.objgeom`: OBJ geometry types (`Vector2`, `Vector3`, `Vertex`),
  string helpers (`split`, `tail`, `first_token`, `get_element`) and polygon
  `triangulate`.
- `bunnytrace.objloader`: `Loader`, which reads OBJ files (`load_file`) and
  their MTL material libraries (`load_materials`) into `Mesh` and
  `ObjMaterial` records. Paths not ending in `.obj` or `.mtl` raise
  `ValueError`.
- `bunnytrace.scene`: `Scene`, including `cast_ray`, `trace`, `reflect`,
  `refract` and `fresnel`.
- `bunnytrace.renderer`: `Renderer`, `write_ppm`, `deg2rad` and the `main`
  entry point.

## Limitations

- `AreaLight` objects can be added to a scene but contribute no light when
  shading; only point lights are used.
- `BVHAccel` always builds by splitting at the median centroid of the longest
  axis; `SplitMethod.SAH` is accepted but builds the same tree.
- The camera position and the lights used by the `bunnytrace` command are
  fixed; there is no scene file format.
- Output is PPM only, and there is no preview window.

## Running the tests

```
pip install .[test]
pytest
```