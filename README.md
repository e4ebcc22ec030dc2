# modelview

modelview is a small desktop viewer for 3D models stored as Wavefront OBJ files. It opens
a resizable OpenGL 3.3 core window and draws one model with its diffuse and specular
textures, using a shader program you supply. The arrow keys turn the model, and with
L held they move the light.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

It needs Python 3.10 or later and a graphics driver with OpenGL 3.3.

## Usage

```
modelview path/to/model.obj
```

With no path, the viewer opens `assets/models/backpack/backpack.obj`, relative to the
current directory. If the path does not exist, the command prints
`FATAL: Path does not exist: <path>` to standard error and exits with status 1. If the
window, the model, a texture or the shaders cannot be loaded, it prints the error and
exits with status 1. It exits with status 0 when you quit.

### Controls

| Keys                 | Effect                                          |
|----------------------|-------------------------------------------------|
| Left / Right         | turn the model about its Y axis (90° a second)  |
| Up / Down            | tilt the model about its X axis (90° a second)  |
| L + arrow keys       | move the light in X and Y (2.5 units a second)  |
| Escape or close box  | quit                                            |

The camera sits at `(0, 0, 7.5)` and looks at the origin. The projection has a 45°
vertical field of view with near and far planes at 0.1 and 100. The window is
1280×960, titled "3D Model Viewer", and starts with the light at `(2, 2, 2)`.

### Shaders

The package ships no shaders. Each run reads `assets/shaders/vert.glsl` and
`assets/shaders/frag.glsl` from the current directory; a missing file, a compile error
or a link error stops the viewer with a message. Every frame the program is given:

- `mat4` uniforms `model`, `view` and `projection`;
- `vec3` uniforms `lightPos` and `viewPos` (the camera position);
- vertex attributes at location 0 (position, `vec3`), 1 (normal, `vec3`) and
  2 (texture coordinates, `vec2`);
- diffuse textures bound to texture unit 0 and specular textures to unit 1.

Sampler uniforms are not set, so the fragment shader must read from units 0 and 1 on
its own (for example through the default value 0 or a `binding` layout). A uniform the
program does not have is reported once as a warning through `logging`.

### Models

Only `.obj` files are read; any other extension is an error. The reader understands:

- `v`, `vt`, `vn` and `f`, with polygon faces split into triangle fans and negative
  (relative) indices;
- `o` and `g`, which start a new mesh, as does a change of material;
- `mtllib` and `usemtl`; in the material library, `newmtl`, `map_Kd` (diffuse) and
  `map_Ks` (specular).

Other statements are ignored. Texture coordinates are flipped vertically. A mesh in
which any face corner lacks a normal gets zero normals throughout. Texture paths are
resolved against the directory of the model file, and each file is loaded once however
many meshes use it. An unreadable material library or an unknown material name gives a
warning and the mesh uses a default material without textures. A file with no faces,
or with a malformed or out-of-range statement, is an error.

Textures can be greyscale, RGB or RGBA images in any format Pillow opens.

## What it does not do

The camera is fixed: there is no zoom, pan or mouse control. Formats other than OBJ
(such as FBX, glTF or PLY) are not read, and no lighting properties are taken from
materials beyond their texture maps.

## Using it from Python

```python
from modelview.app import App

App("model.obj").run()
```

`modelview.app.apply_input(state, pressed, delta_time)` applies a set of held `Key`
values to a `SceneState` (the model `Transform`, the light position and a running flag)
without a window, which is what the viewer does each frame.

The matrix helpers in `modelview.linalg` work on their own and return `numpy` 4×4
arrays that act on column vectors. Angles are in radians; `Transform.rotation` holds
degrees.

```python
import math

from modelview.camera import Camera
from modelview.linalg import perspective
from modelview.transform import Transform

projection = perspective(math.radians(45.0), 1280 / 960, 0.1, 100.0)
view = Camera().view_matrix()
model = Transform(rotation=(0.0, 30.0, 0.0)).model_matrix()
mvp = projection @ view @ model
```

`modelview.model.load_scene(path)` returns the meshes and materials of an OBJ file
without touching OpenGL, and `Model(path, texture_factory)` accepts any callable in
place of `Texture` for creating textures.