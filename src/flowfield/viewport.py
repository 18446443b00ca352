from __future__ import annotations

from .logging import get_logger
from .uniforms import UniformStore


class ViewportController:
    """
    Turns resize and pointer events into UniformStore writes.

    ``on_resize`` receives the framebuffer size in device pixels. Pointer events
    arrive in window coordinates (top-left origin), so the logical window size is
    tracked separately to normalise them.
    """

    def __init__(self, uniforms: UniformStore, window_size: tuple[int, int]):
        self.uniforms = uniforms
        w, h = window_size
        if w <= 0 or h <= 0:
            w, h = uniforms.resolution
        self.window_size = (float(w), float(h))
        self.logger = get_logger(__name__)

    def attach(self, host):
        host.on_framebuffer_resize(self.on_resize)
        host.on_window_resize(self.on_window_resize)
        host.on_pointer_move(self.on_pointer_move)

    def on_resize(self, width: int, height: int):
        if self.uniforms.set_resolution(width, height):
            self.logger.debug(f"Resolution -> {width}x{height}")

    def on_window_resize(self, width: int, height: int):
        if width <= 0 or height <= 0:
            return
        self.window_size = (float(width), float(height))

    def on_pointer_move(self, x: float, y: float):
        w, h = self.window_size
        self.uniforms.set_pointer(x / w, 1.0 - y / h)
