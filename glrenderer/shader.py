"""Loading, compiling and linking GLSL shader programs."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Optional

VERTEX_STAGE = "vertex"
FRAGMENT_STAGE = "fragment"

StageFactory = Callable[[str, str], Any]
ProgramFactory = Callable[..., Any]


def _pyglet_stage(source: str, kind: str) -> Any:
    from pyglet.graphics.shader import Shader as _Stage

    return _Stage(source, kind)


def _pyglet_program(*stages: Any) -> Any:
    from pyglet.graphics.shader import ShaderProgram

    return ShaderProgram(*stages)


def get_file_contents(filename: str | os.PathLike) -> str:
    """Return the whole contents of a text file; raises OSError if it cannot be read."""
    return Path(filename).read_bytes().decode("utf-8")


class Shader:
    """A linked shader program built from a vertex and a fragment source file."""

    def __init__(
        self,
        vertex_file: str | os.PathLike,
        fragment_file: str | os.PathLike,
        *,
        stage_factory: Optional[StageFactory] = None,
        program_factory: Optional[ProgramFactory] = None,
    ) -> None:
        make_stage = stage_factory if stage_factory is not None else _pyglet_stage
        make_program = program_factory if program_factory is not None else _pyglet_program

        vertex_code = get_file_contents(vertex_file)
        fragment_code = get_file_contents(fragment_file)

        vertex_shader = make_stage(vertex_code, VERTEX_STAGE)
        fragment_shader = make_stage(fragment_code, FRAGMENT_STAGE)

        self.program = make_program(vertex_shader, fragment_shader)

        # Once linked, the program keeps what it needs from the shader objects.
        vertex_shader.delete()
        fragment_shader.delete()

    @property
    def id(self) -> int:
        """Identifier of the linked program."""
        return self.program.id

    def __setitem__(self, name: str, value: Any) -> None:
        """Set a uniform of the program; names the program does not have are ignored."""
        if name in self.program.uniforms:
            self.program[name] = value

    def activate(self) -> None:
        """Make this program the current one."""
        self.program.use()

    def delete(self) -> None:
        """Release the program."""
        self.program.delete()