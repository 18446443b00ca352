from __future__ import annotations

import enum
import time
from typing import Callable

from .logging import get_logger
from .profiler import get_profiler
from .program import ShaderProgram
from .surface import Surface
from .uniforms import UniformStore


class LoopState(enum.Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    FINISHED = "finished"


class RenderLoop:
    """
    Drives the per-frame update: time -> uniforms -> draw -> present.

    The loop starts once and runs until the host asks to close or ``stop`` is
    called. Frames are paced by ``host.present`` (a vsync'd buffer swap); a slow
    frame simply delays the next one.
    """

    def __init__(
        self,
        program: ShaderProgram,
        surface: Surface,
        uniforms: UniformStore,
        clock: Callable[[], float] = time.perf_counter,
        profiler=None,
    ):
        self.program = program
        self.surface = surface
        self.uniforms = uniforms
        self.clock = clock
        self.profiler = profiler or get_profiler()
        self.logger = get_logger(__name__)

        self.state = LoopState.STOPPED
        self.frame_count = 0
        self._t0 = 0.0
        self._first_frame_callbacks: list[Callable[[float], None]] = []
        self._frame_callbacks: list[Callable[[float], None]] = []

    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    def on_first_frame(self, callback: Callable[[float], None]):
        """Call ``callback(elapsed)`` once, right after the first draw."""
        self._first_frame_callbacks.append(callback)

    def on_frame(self, callback: Callable[[float], None]):
        """Call ``callback(elapsed)`` after every draw, before present."""
        self._frame_callbacks.append(callback)

    def start(self):
        if self.state is not LoopState.STOPPED:
            raise RuntimeError(f"Render loop cannot start from state {self.state.value}")
        self._t0 = self.clock()
        self.state = LoopState.RUNNING
        self.logger.info("Render loop started")

    def stop(self):
        if self.state is LoopState.RUNNING:
            self.logger.info(f"Render loop stopped after {self.frame_count} frames")
        self.state = LoopState.FINISHED

    def tick(self) -> float:
        """Advance time, draw one frame and notify listeners. Returns elapsed time."""
        if not self.running:
            raise RuntimeError("tick() called on a loop that is not running")
        elapsed = max(self.uniforms.elapsed_time, self.clock() - self._t0)
        self.uniforms.set_elapsed_time(elapsed)

        with self.profiler.record("draw"):
            self.program.draw(self.surface, self.uniforms)
        self.frame_count += 1

        if self.frame_count == 1:
            for cb in self._first_frame_callbacks:
                cb(elapsed)
        for cb in self._frame_callbacks:
            cb(elapsed)
        return elapsed

    def run(self, host):
        if self.state is LoopState.STOPPED:
            self.start()
        prev_t = self.clock()
        try:
            while self.running:
                if host.should_close():
                    break
                with self.profiler.record("frame"):
                    self.tick()
                with self.profiler.record("swap"):
                    host.present()
                host.poll_events()

                now = self.clock()
                self.profiler.frame(now - prev_t)
                prev_t = now
        finally:
            self.stop()
