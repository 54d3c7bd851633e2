# lumenscene

A small toolkit for 3D rendering work, built on numpy. It provides scene objects
with parent/child transforms, meshes and materials, cameras with view frustums,
bounding boxes, triangles and spheres, and a bounding volume hierarchy for ray
intersection and light sampling.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `lumenscene.config`: the render settings. `Config` is a dataclass.
  `Config.to_json()` and `Config.from_json(data)` convert it to and from a
  mapping. `Config.serialize(path)` and `Config.deserialize(path)` write and
  read a JSON file; `deserialize` returns `False` when the file cannot be
  opened. `get_instance()` returns one shared `Config`, loaded once from
  `./configs/renderConfig.json` if that file exists. The module also holds the
  `RendererType` and `RenderPipeline` enums.
- `lumenscene.globals`: shared constants (`EPSILON`, `FLOAT_MAX`, the colour
  constants) and the enums `WrapMode`, `FilterMode`, `ShadingModel`,
  `ShaderPass`, `SceneType` and `ShaderStage`.
- `lumenscene.render_states`: the `RenderStates`, `BlendParameters` and
  `ClearStates` dataclasses and the enums for depth functions, blend factors
  and functions, polygon modes, cull modes and primitive types.
- `lumenscene.thread_pool`: `ThreadPool(thread_count=None)`. `submit(fn, *args,
  **kwargs)` returns a `concurrent.futures.Future`, `wait_tasks_finish()` blocks
  until every submitted task is done, and `shutdown()` finishes the queue and
  joins the workers. The pool also works as a context manager. `get_pool()`
  returns a process-wide pool.
- `lumenscene.material`: `Material`, which holds a shading model, defines,
  texture data and a `MaterialInfo` (albedo, emission, metallic, roughness and
  the other surface parameters). `Material.clone()` returns an independent copy.
- `lumenscene.bounding_box`: `Ray` and the axis-aligned `BoundingBox`. The box
  has merge, overlap, inside, ray-slab and transform tests. `union(a, b)`
  returns a new box enclosing both.
- `lumenscene.shapes`: `Triangle` (Möller–Trumbore test, back faces are not
  hit), `Sphere`, and the `Intersection` record they return. Each shape has
  `sample()`, which returns a point on its surface together with its pdf.
- `lumenscene.bvh`: `BVHAccel` over any objects that have `bounds()`, `area`,
  `get_intersection(ray)` and `sample()`. It answers nearest-hit queries with
  `intersect(ray)` and area-weighted point sampling with `sample()`.
- `lumenscene.geometry`: `Geometry` stores flat attribute arrays (`AttributeKind`
  POSITION / TEX_COORD / NORMAL) and an optional index list, and builds
  triangles with `fetch_triangle(k)`. `Plane` and `Frustum` classify boxes,
  points, segments and triangles.
- `lumenscene.mesh`: `Mesh`, a geometry and a material with child meshes. Flag
  and colour setters apply to the whole hierarchy.
- `lumenscene.primitives`: `load_sphere_mesh(...)` builds a UV sphere and
  `load_triangle_mesh(v0, v1, v2)` builds a single triangle.
- `lumenscene.texture`, `lumenscene.framebuffer`: texture descriptions
  (`Texture`, `TextureInfo`, `SamplerInfo`, `TextureData`) and `FrameBuffer`,
  which records the colour attachments by slot and one depth attachment.
- `lumenscene.camera`: `Camera` and `PerspectiveCamera`, oriented by yaw and
  pitch, with keyboard, mouse and scroll handlers. `PerspectiveCamera.update()`
  rebuilds its `frustum`. The module also has `look_at_matrix` and
  `perspective_matrix`. A camera takes its defaults from
  `config.get_instance()` unless you pass `config=`.
- `lumenscene.scene_object`: `SceneObject`, a scene graph node with a local
  position, rotation and scale, world and local matrices, children and a mesh.
  `build_bvh(use_bvh)` collects world-space triangles into a per-object BVH.
- `lumenscene.scene`: `Scene` holds objects and lights. `setup_scene(use_bvh)`
  initialises them and builds a scene BVH. `intersect(ray)` raises
  `RuntimeError` if the BVH has not been built. The scene also has
  `sample_light()` and `pack_meshes()`.

## Example

```python
from lumenscene.bounding_box import Ray
from lumenscene.primitives import load_sphere_mesh
from lumenscene.scene import Scene
from lumenscene.scene_object import SceneObject

ball = SceneObject()
ball.set_mesh(load_sphere_mesh(1.0, 32, 16, 0.0, 6.283185, 0.0, 3.141593))
ball.set_position((0.0, 0.0, -5.0))

scene = Scene()
scene.add_object(ball)
scene.setup_scene(use_bvh=True)

hit = scene.intersect(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
print(hit.hit, hit.trace_distance)
```

## What it does not do

This package covers the CPU side of the scene only. It does not provide:

- a window or an interactive viewer;
- a GPU backend: there are no shaders, uniform buffers or draw calls, and
  textures and frame buffers are descriptions only;
- loading of model or image files: meshes come from `lumenscene.primitives` or
  from `Geometry` arrays that you fill yourself;
- a ready-made path tracer or built-in demo scenes.

It has no command-line interface.