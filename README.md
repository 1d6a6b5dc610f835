# glrenderer

A small OpenGL renderer. It opens a window, draws a colour-shaded pyramid and lets
you fly around it with a camera steered by the keyboard and mouse.

## Installation

```
pip install .
```

The window asks for an OpenGL 3.3 context through pyglet. Two shader files,
`default.vert` and `default.frag`, must exist in the shader directory (by default
`shaders/`, relative to the working directory). The vertex shader receives the
position at attribute location 0, the colour at location 1, and the combined
projection-view matrix in the `mat4` uniform `camMatrix`.

## Running

```
glrenderer
glrenderer --shaders path/to/shaders
```

`--shaders` names the directory holding `default.vert` and `default.frag`.
The command returns -1 if the log file cannot be opened, the window cannot be
created or the shaders cannot be read.

Controls:

- `W` / `S`: move forward and back
- `A` / `D`: move left and right
- `E` / `Q`: move up and down
- hold the right mouse button and move the mouse to look around; the cursor is
  hidden and held at the window centre while looking

Each run writes a log file to `logs/` in the working directory, named after the
day and minute it started (`DD_MM_YYYY_|_HH:MM.log`). The same lines appear on
the console, where level labels, timestamps and source locations are coloured
with ANSI codes.

## What it does not do

There is no on-screen control panel. Camera speed and mouse sensitivity, and the
background colour, are plain attributes (`Camera.speed`, `Camera.sensitivity`,
`RendererWindow.clear_color`) that can only be changed from code.

## Using the pieces

### Camera and math (`glrenderer.camera`)

```python
from glrenderer.camera import Camera

camera = Camera(1300, 900, (0.0, 0.0, 2.0))
camera.move({"w", "d"})                  # one step of `speed` per held key
matrix = camera.matrix(45.0, 0.1, 100.0)  # 4x4 numpy array, projection @ view
```

The aspect ratio used by `Camera.matrix` is the integer quotient of width by
height. `begin_look`, `look(mouse_x, mouse_y)` and `end_look` turn the camera
from cursor positions (y grows downwards). Pitching is refused within five degrees
of straight up or down. `upload(fov_deg, near_plane, far_plane, shader, uniform)`
sets the matrix as a uniform of a `Shader`.

The module also provides `look_at`, `perspective`, `rotate_vector` and
`angle_between`.

### Logging (`glrenderer.logger`)

`get_instance()` returns the shared `Logger`. It has `debug`, `info`, `warning`,
`error`, `fatal` and `todo` methods, each taking a message and optionally a source
file and line. Only messages at or above `Logger.level` (a `LogLevel`, `INFO` by
default) are written. `init()` opens the log file and raises `OSError` if it
cannot. The first message opens it too if needed. `close()` closes it, and a
`Logger` can be used as a context manager. `use_colors`, `show_timestamps`,
`show_source_info` and `base_path` control how lines look.

Helpers: `level_label`, `short_file_path`, `normalize_base_path`,
`log_file_name`, `timestamp` and `gl_error_to_string`.

### GL objects (`glrenderer.shader`, `glrenderer.buffers`)

`Shader(vertex_file, fragment_file)` reads, compiles and links a program.
`activate()` uses it, `delete()` releases it, and `shader[name] = value` sets a
uniform, skipping names the program does not have. `get_file_contents` reads a
whole file.

`VBO(vertices)` uploads 32-bit floats and `EBO(indices)` uploads 32-bit unsigned
indices. `VAO()` records the attribute layout set through
`link_attrib(vbo, layout, num_components, type, stride, offset)`. Each has `bind`,
`unbind` and `delete`. Use them while an OpenGL context is current.

### The window (`glrenderer.app`)

`RendererWindow` builds the pyramid from `pyramid_vertices()` and
`pyramid_indices()` in a pyglet window and handles its draw, resize, close and
input events. `main(argv=None)` is what the `glrenderer` command runs.

## Tests

```
pip install .[test]
pytest
```