from __future__ import annotations

import moderngl
import numpy as np

from .logging import get_logger


def _quad_vertices() -> np.ndarray:
    # x, y, u, v -- triangle strip order
    v = np.array(
        [
            [-1.0, -1.0, 0.0, 0.0],
            [1.0, -1.0, 1.0, 0.0],
            [-1.0, 1.0, 0.0, 1.0],
            [1.0, 1.0, 1.0, 1.0],
        ],
        dtype="f4",
    )
    v.setflags(write=False)
    return v


QUAD_VERTICES = _quad_vertices()


class OrthographicCamera:
    """A fixed orthographic projection; the view transform is the identity."""

    def __init__(
        self,
        left: float = -1.0,
        right: float = 1.0,
        top: float = 1.0,
        bottom: float = -1.0,
        near: float = 0.0,
        far: float = 1.0,
    ):
        if right == left or top == bottom or far == near:
            raise ValueError("Degenerate orthographic frustum")
        self.left, self.right = left, right
        self.top, self.bottom = top, bottom
        self.near, self.far = near, far

    @property
    def projection(self) -> np.ndarray:
        l, r, t, b, n, f = (
            self.left,
            self.right,
            self.top,
            self.bottom,
            self.near,
            self.far,
        )
        m = np.identity(4, dtype="f4")
        m[0, 0] = 2.0 / (r - l)
        m[1, 1] = 2.0 / (t - b)
        m[2, 2] = -2.0 / (f - n)
        m[0, 3] = -(r + l) / (r - l)
        m[1, 3] = -(t + b) / (t - b)
        m[2, 3] = -(f + n) / (f - n)
        return m

    def mvp_bytes(self) -> bytes:
        # GLSL expects column-major
        return np.ascontiguousarray(self.projection.T).tobytes()


class Surface:
    """
    The screen-filling quad the flow program is rasterised onto.

    One vertex buffer is uploaded at construction; a vertex array is created the
    first time each program renders it.
    """

    def __init__(self, ctx: moderngl.Context, camera: OrthographicCamera | None = None):
        self.ctx = ctx
        self.camera = camera or OrthographicCamera()
        self.vbo = ctx.buffer(QUAD_VERTICES.tobytes())
        self._vaos = {}
        get_logger(__name__).debug("Created full-screen quad surface")

    def vertex_array(self, program: moderngl.Program):
        # Entries hold the program itself, so its id cannot be recycled while cached
        entry = self._vaos.get(id(program))
        if entry is not None and entry[0] is program:
            return entry[1]
        vao = self.ctx.vertex_array(
            program, [(self.vbo, "2f 2f", "in_vert", "in_uv")]
        )
        self._vaos[id(program)] = (program, vao)
        return vao

    def forget(self, program: moderngl.Program):
        """Drop and release the vertex array built for ``program``."""
        entry = self._vaos.pop(id(program), None)
        if entry is not None:
            entry[1].release()

    def render(self, program: moderngl.Program):
        self.vertex_array(program).render(moderngl.TRIANGLE_STRIP)

    def release(self):
        for _program, vao in self._vaos.values():
            vao.release()
        self._vaos.clear()
        self.vbo.release()
