"""Vertex buffer, element buffer and vertex array objects."""

from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np
from numpy.typing import ArrayLike

GL_FALSE = 0
GL_FLOAT = 0x1406
GL_UNSIGNED_INT = 0x1405
GL_ARRAY_BUFFER = 0x8892
GL_ELEMENT_ARRAY_BUFFER = 0x8893
GL_STATIC_DRAW = 0x88E4


def _default_gl() -> Any:
    from pyglet import gl

    return gl


def _generate(gl: Any, generator: Callable[[int, Any], None]) -> int:
    ident = gl.GLuint(0)
    generator(1, ident)
    return int(ident.value)


def _upload(gl: Any, target: int, data: np.ndarray) -> int:
    ident = _generate(gl, gl.glGenBuffers)
    gl.glBindBuffer(target, ident)
    gl.glBufferData(target, data.nbytes, data.tobytes(), GL_STATIC_DRAW)
    return ident


class VBO:
    """Static array buffer holding 32-bit float vertex data."""

    def __init__(self, vertices: ArrayLike, *, gl: Optional[Any] = None) -> None:
        self._gl = gl if gl is not None else _default_gl()
        self._data = np.ascontiguousarray(vertices, dtype=np.float32).ravel()
        self.id: int = _upload(self._gl, GL_ARRAY_BUFFER, self._data)

    @property
    def size(self) -> int:
        """Size of the uploaded data in bytes."""
        return int(self._data.nbytes)

    def bind(self) -> None:
        self._gl.glBindBuffer(GL_ARRAY_BUFFER, self.id)

    def unbind(self) -> None:
        self._gl.glBindBuffer(GL_ARRAY_BUFFER, 0)

    def delete(self) -> None:
        self._gl.glDeleteBuffers(1, self._gl.GLuint(self.id))


class EBO:
    """Static element buffer holding 32-bit unsigned indices."""

    def __init__(self, indices: ArrayLike, *, gl: Optional[Any] = None) -> None:
        self._gl = gl if gl is not None else _default_gl()
        self._data = np.ascontiguousarray(indices, dtype=np.uint32).ravel()
        self.id: int = _upload(self._gl, GL_ELEMENT_ARRAY_BUFFER, self._data)

    @property
    def size(self) -> int:
        """Size of the uploaded data in bytes."""
        return int(self._data.nbytes)

    def bind(self) -> None:
        self._gl.glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, self.id)

    def unbind(self) -> None:
        self._gl.glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, 0)

    def delete(self) -> None:
        self._gl.glDeleteBuffers(1, self._gl.GLuint(self.id))


class VAO:
    """Vertex array object recording attribute layouts."""

    def __init__(self, *, gl: Optional[Any] = None) -> None:
        self._gl = gl if gl is not None else _default_gl()
        self.id: int = _generate(self._gl, self._gl.glGenVertexArrays)

    def link_attrib(
        self,
        vbo: VBO,
        layout: int,
        num_components: int,
        type: int,
        stride: int,
        offset: int,
    ) -> None:
        """Describe one vertex attribute read from ``vbo``; offset and stride in bytes."""
        vbo.bind()
        self._gl.glVertexAttribPointer(
            layout, num_components, type, GL_FALSE, stride, offset
        )
        self._gl.glEnableVertexAttribArray(layout)
        vbo.unbind()

    def bind(self) -> None:
        self._gl.glBindVertexArray(self.id)

    def unbind(self) -> None:
        self._gl.glBindVertexArray(0)

    def delete(self) -> None:
        self._gl.glDeleteVertexArrays(1, self._gl.GLuint(self.id))