from __future__ import annotations

import glfw

from .config import AppConfig
from .errors import DeviceError
from .logging import get_logger


class GlfwHost:
    """
    The window that owns the drawable and the GL context.

    ``present`` swaps buffers; with vsync on that blocks until the next display
    refresh and is the loop's frame signal.
    """

    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self.logger = get_logger(__name__)
        # Keep references so glfw does not drop the callbacks
        self._callbacks = []

        if not glfw.init():
            raise DeviceError("GLFW init failed")
        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, True)
        if cfg.samples > 0:
            glfw.window_hint(glfw.SAMPLES, cfg.samples)

        monitor = None
        if cfg.fullscreen:
            monitor = glfw.get_primary_monitor()
            mode = glfw.get_video_mode(monitor)
            cfg.width, cfg.height = mode.size.width, mode.size.height

        self.window = glfw.create_window(cfg.width, cfg.height, cfg.title, monitor, None)
        if not self.window:
            glfw.terminate()
            raise DeviceError("Failed to create window")
        glfw.make_context_current(self.window)
        glfw.swap_interval(1 if cfg.vsync else 0)
        self.logger.info(
            f"Opened {cfg.width}x{cfg.height} window"
            f" (fullscreen={cfg.fullscreen}, vsync={cfg.vsync})"
        )

    def framebuffer_size(self) -> tuple[int, int]:
        return glfw.get_framebuffer_size(self.window)

    def window_size(self) -> tuple[int, int]:
        return glfw.get_window_size(self.window)

    def should_close(self) -> bool:
        return bool(glfw.window_should_close(self.window))

    def request_close(self):
        glfw.set_window_should_close(self.window, True)

    def present(self):
        glfw.swap_buffers(self.window)

    def poll_events(self):
        glfw.poll_events()
        if glfw.get_key(self.window, glfw.KEY_ESCAPE) == glfw.PRESS:
            self.request_close()

    def set_opacity(self, opacity: float):
        glfw.set_window_opacity(self.window, max(0.0, min(1.0, float(opacity))))

    def on_framebuffer_resize(self, handler):
        cb = lambda _win, w, h: handler(w, h)
        self._callbacks.append(cb)
        glfw.set_framebuffer_size_callback(self.window, cb)

    def on_window_resize(self, handler):
        cb = lambda _win, w, h: handler(w, h)
        self._callbacks.append(cb)
        glfw.set_window_size_callback(self.window, cb)

    def on_pointer_move(self, handler):
        cb = lambda _win, x, y: handler(x, y)
        self._callbacks.append(cb)
        glfw.set_cursor_pos_callback(self.window, cb)

    def close(self):
        self._callbacks.clear()
        glfw.terminate()
