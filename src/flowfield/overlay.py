from __future__ import annotations
import os
import freetype
import moderngl
import numpy as np

from . import shaders as S
from .logging import get_logger
from .program import compile_program


class TextOverlay:
    """
    Draws lines of ASCII text over the flow field from a freetype glyph atlas.

    Coordinates are device pixels with the origin at the bottom-left, matching
    the framebuffer. Without a usable font the overlay stays disabled and every
    draw is a no-op.
    """

    def __init__(self, ctx: moderngl.Context, font_path: str, size: int = 16):
        self.ctx = ctx
        self.size = size
        self.line_height = int(size * 1.25)
        self.logger = get_logger(__name__)
        self.prog = compile_program(ctx, S.VS_TEXT, S.FS_TEXT)

        self.sampler = self.ctx.sampler(
            filter=(moderngl.LINEAR, moderngl.LINEAR),
            repeat_x=False,
            repeat_y=False,
        )

        self.max_chars = 1024
        # 6 vertices per char, 4 floats per vertex (x, y, u, v)
        self.vertices = np.zeros((self.max_chars * 6, 4), dtype="f4")
        self.vbo = self.ctx.buffer(self.vertices.tobytes(), dynamic=True)
        self.vao = self.ctx.vertex_array(
            self.prog, [(self.vbo, "2f 2f", "in_vert", "in_uv")]
        )
        self.char_count = 0
        self.viewport = (1, 1)

        self.font_map = {}
        self.font_texture = None
        self.font_loaded = False

        if font_path and os.path.exists(font_path):
            try:
                self._load_font(font_path, size)
                self.logger.info(f"Loaded font: {font_path}")
            except (freetype.FT_Exception, OSError) as e:
                self.logger.warning(f"Failed to load font '{font_path}': {e}")
        else:
            self.logger.warning(f"Font not found at '{font_path}', text overlay disabled")

    def _load_font(self, font_path: str, size: int):
        face = freetype.Face(font_path)
        face.set_pixel_sizes(0, size)

        # Single-row atlas of the printable ASCII range
        width, height = 0, 0
        for i in range(32, 128):
            face.load_char(chr(i), freetype.FT_LOAD_RENDER)
            width += face.glyph.bitmap.width
            height = max(height, face.glyph.bitmap.rows)

        if not width or not height:
            self.logger.warning("Font atlas is empty, text overlay will not render.")
            return

        atlas = np.zeros((height, width), dtype="u1")
        x = 0
        for i in range(32, 128):
            face.load_char(chr(i), freetype.FT_LOAD_RENDER)
            bitmap = face.glyph.bitmap
            w, h = bitmap.width, bitmap.rows
            if w > 0 and h > 0:
                atlas[0:h, x : x + w] = np.array(bitmap.buffer, dtype="u1").reshape(
                    (h, w)
                )
            self.font_map[chr(i)] = {
                "size": (w, h),
                "bearing": (face.glyph.bitmap_left, face.glyph.bitmap_top),
                "advance": face.glyph.advance.x >> 6,
                "uv_offset": x / width,
            }
            x += w

        self.ctx.pack_alignment = 1
        self.font_texture = self.ctx.texture((width, height), 1, atlas.tobytes())
        self.ctx.pack_alignment = 4
        self.font_loaded = True

    def text_width(self, line: str) -> int:
        return sum(self.font_map[c]["advance"] for c in line if c in self.font_map)

    def render(
        self,
        lines: list[str],
        x: float,
        y: float,
        color=(1.0, 1.0, 1.0),
        alpha: float = 1.0,
    ):
        """Draw ``lines`` top-down starting with the baseline of the first at (x, y)."""
        if not self.font_loaded or alpha <= 0.0:
            return
        self.char_count = 0
        cursor_x, cursor_y = x, y

        for line in lines:
            for char in line:
                if char in self.font_map and self.char_count < self.max_chars:
                    self._add_char_quad(char, cursor_x, cursor_y)
                    cursor_x += self.font_map[char]["advance"]
            cursor_y -= self.line_height
            cursor_x = x

        if self.char_count > 0:
            self.vbo.write(self.vertices[: self.char_count * 6].tobytes())
            self.prog["textColor"].value = color
            self.prog["alpha"].value = float(min(1.0, alpha))
            self.font_texture.use(location=0)
            self.sampler.use(location=0)
            self.ctx.enable(moderngl.BLEND)
            self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA
            self.vao.render(moderngl.TRIANGLES, vertices=self.char_count * 6)
            self.ctx.disable(moderngl.BLEND)

    def _add_char_quad(self, char, x, y):
        info = self.font_map[char]
        w, h = info["size"]
        if w == 0 or h == 0:
            return
        vw, vh = self.viewport

        xpos = x + info["bearing"][0]
        ypos = y - (h - info["bearing"][1])

        u = info["uv_offset"]
        u_w = w / self.font_texture.width
        v_h = h / self.font_texture.height

        # Pixels to normalized device coordinates
        px = (xpos / vw) * 2.0 - 1.0
        py = (ypos / vh) * 2.0 - 1.0
        pw = (w / vw) * 2.0
        ph = (h / vh) * 2.0

        i = self.char_count * 6
        self.vertices[i] = (px, py + ph, u, 0.0)
        self.vertices[i + 1] = (px, py, u, v_h)
        self.vertices[i + 2] = (px + pw, py, u + u_w, v_h)
        self.vertices[i + 3] = (px, py + ph, u, 0.0)
        self.vertices[i + 4] = (px + pw, py, u + u_w, v_h)
        self.vertices[i + 5] = (px + pw, py + ph, u + u_w, 0.0)

        self.char_count += 1

    def release(self):
        self.vao.release()
        self.vbo.release()
        self.sampler.release()
        if self.font_texture is not None:
            self.font_texture.release()
            self.font_texture = None
        self.prog.release()
        self.font_loaded = False
