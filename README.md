# oglkit

Building blocks for small real-time 3D viewers. The package computes data:
matrices, vertex arrays, selections and particle states. You pass that data
to whatever renderer you use.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `oglkit.transforms`: matrix helpers on numpy arrays that act on column
  vectors. It provides `normalize`, `perspective`, `look_at`, `translate`,
  `scale`, `rotate`, `inverse_transpose` and `unproject`.
- `oglkit.camera`: a fly-through `Camera`.
  - `keyboard_events(pressed, delta_time)` moves it. `pressed` is an
    iterable of `Key` values: `FORWARD`, `BACKWARD`, `LEFT` or `RIGHT`.
  - `mouse_events(mouse_pos, clicked)` turns it while the button stays held
    across two events. Pitch is clamped to ±89°.
  - `viewport_events(width, height)` updates the aspect ratio.
  - `view_matrix()` and `projection_matrix()` return the matrices. The
    projection uses a 45° field of view and a fixed clipping range of 0.1
    to 300. The `near` and `far` properties are recorded but do not change
    that range.
- `oglkit.objloader`: a Wavefront OBJ/MTL `Loader`.
  - It reads positions, normals, texture coordinates, groups (`g`),
    `usemtl` and `mtllib` lines.
  - It triangulates faces as fans.
  - It exposes `meshes` (a list of `Mesh` made of `Vertex` records) and
    `materials` (a list of `Material`). The first material is a
    `(Default)` one.
  - Meshes with no vertices are dropped.
  - A missing OBJ file raises `OSError`. A face that refers to a missing
    element raises `ValueError`. A missing MTL file is logged and skipped.
- `oglkit.picking`: colour-ID picking for a ring of spirals.
  - `spiral_geometry(steps)` builds a `SpiralGeometry`.
  - `get_rgba` and `get_int_from_rgba` encode an identifier as a colour
    and back.
  - `spiral_translation`, `build_color_map` and `pick` place the spirals
    and look up a picked colour.
  - `PickingScene` uses a fixed camera. Its `select(pixel)` returns the
    spiral index, or `NO_SELECTION` (-1).
- `oglkit.unproject`: `UnprojectScene`, the same ring of spirals seen
  through a `Camera`.
  - `perform_selection(x, y, pixel, depth)` selects a spiral.
  - When `depth < 1` it also sets `point`, the world-space point under the
    cursor, and `ray`, the segment from the camera position to that point.
- `oglkit.orbit`: `OrbitView`, an eye on a sphere around the origin.
  - `longitude`, `latitude` and `distance` are clamped to
    `LONGITUDE_RANGE`, `LATITUDE_RANGE` and `DISTANCE_RANGE`.
  - It provides `model_view()` (the model is scaled by 0.5),
    `normal_matrix()`, `light_position_view()`, `copy_camera_to_light()`
    and `projection(width, height)`.
  - `mesh_draw_data(loader)` turns a loaded OBJ into `MeshDrawData`:
    position and normal arrays plus diffuse, specular and exponent values.
- `oglkit.hierarchy`: geometry and timing for 2D hierarchical drawing.
  - `circle_positions()` gives a triangle-fan unit circle of 362 vertices.
  - `grid_lines()` gives 40 line vertices over [-5, 5]².
  - `animation_time(t)` loops every 5 seconds.
  - `circle_transform(sx, sy, t)` applies the scaling.
- `oglkit.particles`: a CPU `ParticleSystem` driven by
  `GeneratorSettings`.
  - It provides `resize`, Euler integration under gravity with respawning
    (`step`), and far-to-near ordering (`sort_by_distance`).
  - `pack()` returns a `(count, 12)` float32 array: position, life,
    velocity, size, colour and padding, 48 bytes per particle.
- `oglkit.shaders`: support code for shaders.
  - `ShaderType`, `DebugSource`, `DebugType` and `DebugSeverity` are
    enumerations valued by their OpenGL codes.
  - `shader_type_name` and `load_shader_source` raise `ShaderError` for
    unknown stages or unreadable files.
  - `format_compile_error` and `format_debug_message` build report text.
    `format_debug_message` returns `None` for ignored message ids.

## Example

```python
from oglkit.camera import Camera, Key
from oglkit.objloader import Loader

camera = Camera(800, 600, (2.0, 2.0, 2.0), (0.0, 0.0, 0.0))
camera.keyboard_events({Key.FORWARD}, 0.016)
view = camera.view_matrix()
proj = camera.projection_matrix()
clip_from_world = proj @ view

loader = Loader("model.obj")
for mesh in loader.meshes:
    print(mesh.name, len(mesh.vertices))
```

## What it does not do

The package opens no window and makes no graphics API calls. It does not
compile or link shaders, upload buffers, draw anything, read pixels back,
or provide a user interface. Rendering and input handling are up to your
own program. For picking and unprojection, you pass in the pixel colour and
depth value that your program has read back. There is no command-line
program.