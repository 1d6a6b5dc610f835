"""Window that draws a colour-shaded pyramid seen through a fly-through camera."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

import numpy as np

from .buffers import EBO, GL_FLOAT, GL_UNSIGNED_INT, VAO, VBO
from .camera import Camera
from .logger import Logger, get_instance
from .shader import Shader

GL_TRIANGLES = 0x0004
GL_DEPTH_TEST = 0x0B71
GL_COLOR_BUFFER_BIT = 0x4000
GL_DEPTH_BUFFER_BIT = 0x0100

WINDOW_WIDTH = 1300
WINDOW_HEIGHT = 900
WINDOW_TITLE = "OpenGL Renderer"

FIELD_OF_VIEW = 45.0
NEAR_PLANE = 0.1
FAR_PLANE = 100.0
CAMERA_UNIFORM = "camMatrix"

_MOUSE_RIGHT = 4
# Letter key symbols are the lower-case character codes.
_MOVE_KEYS = {ord(letter): letter for letter in "wasdeq"}


def _default_gl() -> Any:
    from pyglet import gl

    return gl


def _create_window() -> Any:
    import pyglet

    config = pyglet.gl.Config(
        major_version=3,
        minor_version=3,
        forward_compatible=True,
        double_buffer=True,
        depth_size=24,
    )
    return pyglet.window.Window(
        width=WINDOW_WIDTH,
        height=WINDOW_HEIGHT,
        caption=WINDOW_TITLE,
        resizable=True,
        config=config,
    )


def _gl_version(gl: Any) -> str:
    version = gl.gl_info.get_version()
    if isinstance(version, tuple):
        return ".".join(str(part) for part in version)
    return str(version)


def pyramid_vertices() -> np.ndarray:
    """Pyramid corners, one row per vertex: x, y, z followed by r, g, b."""
    return np.array(
        [
            [-0.5, 0.0, 0.5, 1.0, 0.0, 0.0],  # lower left
            [-0.5, 0.0, -0.5, 0.0, 1.0, 0.0],  # upper left
            [0.5, 0.0, -0.5, 0.0, 0.0, 1.0],  # upper right
            [0.5, 0.0, 0.5, 1.0, 1.0, 1.0],  # lower right
            [0.0, 0.8, 0.0, 1.0, 1.0, 0.0],  # top
        ],
        dtype=np.float32,
    )


def pyramid_indices() -> np.ndarray:
    """Triangles of the pyramid, one row of three vertex indices each."""
    return np.array(
        [
            [0, 1, 2],
            [0, 2, 3],
            [0, 1, 4],
            [1, 2, 4],
            [2, 3, 4],
            [3, 0, 4],
        ],
        dtype=np.uint32,
    )


class RendererWindow:
    """Draws the pyramid into a window and steers the camera from its input events."""

    def __init__(
        self,
        window: Optional[Any] = None,
        *,
        gl: Optional[Any] = None,
        shader_dir: str | Path = "shaders",
        logger: Optional[Logger] = None,
    ) -> None:
        self._gl = gl if gl is not None else _default_gl()
        self.logger = logger if logger is not None else get_instance()
        self.window = window if window is not None else _create_window()
        self.clear_color = [0.2, 0.3, 0.3, 1.0]
        self.closed = False
        self._held: set[str] = set()
        self._right_down = False
        self._mouse = (0.0, 0.0)

        self.logger.debug("Creating vertex data...")
        vertices = pyramid_vertices()
        self.indices = pyramid_indices()

        self.logger.info("Initializing shaders...")
        shader_dir = Path(shader_dir)
        self.shader = Shader(shader_dir / "default.vert", shader_dir / "default.frag")

        self.logger.info("Setting up VAO, VBO, EBO...")
        self.vao = VAO(gl=self._gl)
        self.vao.bind()
        self.vbo = VBO(vertices, gl=self._gl)
        self.ebo = EBO(self.indices, gl=self._gl)

        stride = vertices.strides[0]
        self.vao.link_attrib(self.vbo, 0, 3, GL_FLOAT, stride, 0)
        self.vao.link_attrib(self.vbo, 1, 3, GL_FLOAT, stride, 3 * vertices.itemsize)

        self.vao.unbind()
        self.vbo.unbind()
        self.ebo.unbind()

        self._gl.glEnable(GL_DEPTH_TEST)
        self.camera = Camera(WINDOW_WIDTH, WINDOW_HEIGHT, (0.0, 0.0, 2.0))

        self.window.push_handlers(
            on_draw=self.on_draw,
            on_resize=self.on_resize,
            on_close=self.on_close,
            on_key_press=self._on_key_press,
            on_key_release=self._on_key_release,
            on_mouse_press=self._on_mouse_press,
            on_mouse_release=self._on_mouse_release,
            on_mouse_motion=self._on_mouse_motion,
            on_mouse_drag=self._on_mouse_drag,
        )

    def on_draw(self) -> None:
        """Clear the frame, apply camera input and draw the pyramid."""
        if self.closed:
            return
        red, green, blue = self.clear_color[:3]
        self._gl.glClearColor(red, green, blue, 1.0)
        self._gl.glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        width, height = self.window.get_framebuffer_size()
        self._gl.glViewport(0, 0, width, height)

        self.shader.activate()
        self._update_camera()
        self.camera.upload(FIELD_OF_VIEW, NEAR_PLANE, FAR_PLANE, self.shader, CAMERA_UNIFORM)

        self.vao.bind()
        self._gl.glDrawElements(GL_TRIANGLES, int(self.indices.size), GL_UNSIGNED_INT, None)

    def on_resize(self, width: int, height: int) -> None:
        """Keep the viewport covering the whole window."""
        self._gl.glViewport(0, 0, width, height)

    def on_close(self) -> None:
        """Release the GL objects; the window itself closes afterwards."""
        if self.closed:
            return
        self.logger.info("Cleaning up resources...")
        self.vao.delete()
        self.vbo.delete()
        self.ebo.delete()
        self.shader.delete()
        self.closed = True

    def _update_camera(self) -> None:
        self.camera.move(self._held)
        if self._right_down:
            self.window.set_mouse_visible(False)
            start = self.camera.begin_look()
            if start is not None:
                self._warp(start)
            self._warp(self.camera.look(*self._mouse))
        elif self.camera.looking:
            self.camera.end_look()
            self.window.set_mouse_visible(True)

    def _warp(self, point: tuple[int, int]) -> None:
        x, y_down = point
        self.window.set_mouse_position(int(x), int(self.window.height - y_down))
        self._mouse = (float(x), float(y_down))

    def _track(self, x: float, y: float) -> None:
        self._mouse = (float(x), float(self.window.height - y))

    def _on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol in _MOVE_KEYS:
            self._held.add(_MOVE_KEYS[symbol])

    def _on_key_release(self, symbol: int, modifiers: int) -> None:
        self._held.discard(_MOVE_KEYS.get(symbol, ""))

    def _on_mouse_press(self, x: float, y: float, button: int, modifiers: int) -> None:
        self._track(x, y)
        if button == _MOUSE_RIGHT:
            self._right_down = True

    def _on_mouse_release(self, x: float, y: float, button: int, modifiers: int) -> None:
        self._track(x, y)
        if button == _MOUSE_RIGHT:
            self._right_down = False

    def _on_mouse_motion(self, x: float, y: float, dx: float, dy: float) -> None:
        self._track(x, y)

    def _on_mouse_drag(
        self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int
    ) -> None:
        self._track(x, y)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the renderer window and run until it is closed."""
    parser = argparse.ArgumentParser(
        prog="glrenderer", description="Draw a pyramid with a fly-through camera."
    )
    parser.add_argument(
        "--shaders", default="shaders", help="directory holding default.vert and default.frag"
    )
    args = parser.parse_args(argv)

    logger = get_instance()
    logger.use_colors = True
    try:
        logger.init()
    except OSError as exc:
        print(exc, file=sys.stderr)
        print("Failed to initialize logger!", file=sys.stderr)
        return -1

    logger.info("Application starting...")
    try:
        import pyglet
    except ImportError as exc:
        logger.fatal(f"Failed to load the windowing library: {exc}")
        return -1

    logger.info("Creating window...")
    try:
        window = _create_window()
    except Exception as exc:  # the windowing layer raises several unrelated types
        logger.fatal(f"Failed to create window: {exc}")
        return -1

    logger.info(f"OpenGL Version: {_gl_version(pyglet.gl)}")
    logger.info(f"pyglet Version: {pyglet.version}")

    try:
        RendererWindow(window, gl=pyglet.gl, shader_dir=args.shaders, logger=logger)
    except OSError as exc:
        logger.fatal(f"Failed to load shaders: {exc}")
        window.close()
        return -1

    logger.info("Entering main rendering loop")
    pyglet.app.run()
    logger.info("Application terminated normally")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())