import numpy as np
import pytest

from glrenderer.buffers import (
    EBO,
    GL_ARRAY_BUFFER,
    GL_ELEMENT_ARRAY_BUFFER,
    GL_FALSE,
    GL_FLOAT,
    GL_STATIC_DRAW,
    VAO,
    VBO,
)


class FakeUint:
    def __init__(self, value=0):
        self.value = value


class FakeGL:
    GLuint = FakeUint

    def __init__(self):
        self.calls = []
        self.uploads = {}
        self._next_id = 0

    def _allocate(self, ident):
        self._next_id += 1
        ident.value = self._next_id
        return self._next_id

    def glGenBuffers(self, n, ident):
        self.calls.append(("glGenBuffers", self._allocate(ident)))

    def glGenVertexArrays(self, n, ident):
        self.calls.append(("glGenVertexArrays", self._allocate(ident)))

    def glBindBuffer(self, target, ident):
        self.calls.append(("glBindBuffer", target, ident))

    def glBufferData(self, target, size, data, usage):
        self.uploads[target] = bytes(data)[:size]
        self.calls.append(("glBufferData", target, size, usage))

    def glDeleteBuffers(self, n, ident):
        self.calls.append(("glDeleteBuffers", ident.value))

    def glBindVertexArray(self, ident):
        self.calls.append(("glBindVertexArray", ident))

    def glDeleteVertexArrays(self, n, ident):
        self.calls.append(("glDeleteVertexArrays", ident.value))

    def glVertexAttribPointer(self, index, size, type_, normalized, stride, pointer):
        self.calls.append(
            ("glVertexAttribPointer", index, size, type_, normalized, stride, pointer)
        )

    def glEnableVertexAttribArray(self, index):
        self.calls.append(("glEnableVertexAttribArray", index))


VERTICES = [
    -0.5, 0.0, 0.5, 1.0, 0.0, 0.0,
    -0.5, 0.0, -0.5, 0.0, 1.0, 0.0,
    0.0, 0.8, 0.0, 1.0, 1.0, 0.0,
]
INDICES = [0, 1, 2, 2, 1, 0]


@pytest.fixture
def gl():
    return FakeGL()


def test_vbo_uploads_float_data(gl):
    vbo = VBO(VERTICES, gl=gl)
    uploaded = np.frombuffer(gl.uploads[GL_ARRAY_BUFFER], dtype=np.float32)
    np.testing.assert_array_equal(uploaded, np.array(VERTICES, dtype=np.float32))
    assert vbo.size == len(VERTICES) * np.dtype(np.float32).itemsize
    assert ("glBufferData", GL_ARRAY_BUFFER, vbo.size, GL_STATIC_DRAW) in gl.calls


def test_vbo_binds_on_creation(gl):
    vbo = VBO(VERTICES, gl=gl)
    assert gl.calls[0] == ("glGenBuffers", vbo.id)
    assert gl.calls[1] == ("glBindBuffer", GL_ARRAY_BUFFER, vbo.id)


def test_vbo_bind_unbind_delete(gl):
    vbo = VBO(np.array(VERTICES), gl=gl)
    vbo.bind()
    assert gl.calls[-1] == ("glBindBuffer", GL_ARRAY_BUFFER, vbo.id)
    vbo.unbind()
    assert gl.calls[-1] == ("glBindBuffer", GL_ARRAY_BUFFER, 0)
    vbo.delete()
    assert gl.calls[-1] == ("glDeleteBuffers", vbo.id)


def test_ebo_uploads_unsigned_indices(gl):
    ebo = EBO(INDICES, gl=gl)
    uploaded = np.frombuffer(gl.uploads[GL_ELEMENT_ARRAY_BUFFER], dtype=np.uint32)
    assert uploaded.tolist() == INDICES
    assert ebo.size == len(INDICES) * np.dtype(np.uint32).itemsize


def test_ebo_bind_unbind_delete(gl):
    ebo = EBO(INDICES, gl=gl)
    ebo.bind()
    assert gl.calls[-1] == ("glBindBuffer", GL_ELEMENT_ARRAY_BUFFER, ebo.id)
    ebo.unbind()
    assert gl.calls[-1] == ("glBindBuffer", GL_ELEMENT_ARRAY_BUFFER, 0)
    ebo.delete()
    assert gl.calls[-1] == ("glDeleteBuffers", ebo.id)


def test_buffers_get_distinct_ids(gl):
    vbo = VBO(VERTICES, gl=gl)
    ebo = EBO(INDICES, gl=gl)
    vao = VAO(gl=gl)
    assert len({vbo.id, ebo.id, vao.id}) == 3


def test_vao_bind_unbind_delete(gl):
    vao = VAO(gl=gl)
    assert gl.calls[0] == ("glGenVertexArrays", vao.id)
    vao.bind()
    assert gl.calls[-1] == ("glBindVertexArray", vao.id)
    vao.unbind()
    assert gl.calls[-1] == ("glBindVertexArray", 0)
    vao.delete()
    assert gl.calls[-1] == ("glDeleteVertexArrays", vao.id)


def test_link_attrib_sequence(gl):
    vao = VAO(gl=gl)
    vbo = VBO(VERTICES, gl=gl)
    start = len(gl.calls)
    stride = 6 * np.dtype(np.float32).itemsize
    offset = 3 * np.dtype(np.float32).itemsize
    vao.link_attrib(vbo, 1, 3, GL_FLOAT, stride, offset)
    assert gl.calls[start:] == [
        ("glBindBuffer", GL_ARRAY_BUFFER, vbo.id),
        ("glVertexAttribPointer", 1, 3, GL_FLOAT, GL_FALSE, stride, offset),
        ("glEnableVertexAttribArray", 1),
        ("glBindBuffer", GL_ARRAY_BUFFER, 0),
    ]


def test_link_attrib_zero_offset(gl):
    vao = VAO(gl=gl)
    vbo = VBO(VERTICES, gl=gl)
    vao.link_attrib(vbo, 0, 3, GL_FLOAT, 24, 0)
    pointer_calls = [c for c in gl.calls if c[0] == "glVertexAttribPointer"]
    assert pointer_calls == [("glVertexAttribPointer", 0, 3, GL_FLOAT, GL_FALSE, 24, 0)]