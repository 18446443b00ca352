from __future__ import annotations

import moderngl

from . import shaders as S
from .errors import CompileError
from .logging import get_logger
from .surface import Surface
from .uniforms import UniformStore

logger = get_logger(__name__)


def compile_program(
    ctx: moderngl.Context, vertex_source: str, fragment_source: str
) -> moderngl.Program:
    """Build a moderngl program, turning driver errors into CompileError."""
    try:
        return ctx.program(vertex_shader=vertex_source, fragment_shader=fragment_source)
    except moderngl.Error as e:
        logger.error(f"Shader compilation failed: {e}")
        raise CompileError(str(e)) from e


class ShaderProgram:
    """A compiled flow program. Immutable once built; use ``compile``."""

    def __init__(self, ctx: moderngl.Context, program: moderngl.Program):
        self.ctx = ctx
        self.program = program

    @classmethod
    def compile(
        cls,
        ctx: moderngl.Context,
        vertex_source: str = S.VS_FLOW,
        fragment_source: str = S.FS_FLOW,
    ) -> "ShaderProgram":
        prog = compile_program(ctx, vertex_source, fragment_source)
        logger.info(f"Compiled flow program (shader version {S.SHADER_VERSION})")
        return cls(ctx, prog)

    def draw(self, surface: Surface, uniforms: UniformStore):
        """One full-screen pass using the current uniform values."""
        w, h = uniforms.resolution
        self.ctx.viewport = (0, 0, int(w), int(h))
        uniforms.apply(self.program)
        mvp = self.program.get("u_mvp", None)
        if mvp is not None:
            mvp.write(surface.camera.mvp_bytes())
        surface.render(self.program)

    def release(self):
        self.program.release()
