from __future__ import annotations
import time
from contextlib import contextmanager

from .logging import get_logger

_profiler = None


def get_profiler():
    global _profiler
    if _profiler is None:
        _profiler = Profiler()
    return _profiler


class Profiler:
    """EMA section timings plus frame-rate accounting for the render loop."""

    def __init__(self, ema_alpha=0.1, log_interval=5.0):
        self._w_stats = {}
        self.ema_alpha = ema_alpha
        self.log_interval = log_interval
        self.logger = get_logger("Profiler")

        self.fps = 0.0
        self._frames = 0
        self._since_log = 0.0

    @contextmanager
    def record(self, name: str):
        start_t = time.perf_counter()
        try:
            yield
        finally:
            dt = time.perf_counter() - start_t
            prev = self._w_stats.get(name)
            if prev is None:
                self._w_stats[name] = dt
            else:
                self._w_stats[name] = self.ema_alpha * dt + (1.0 - self.ema_alpha) * prev

    def frame(self, dt: float) -> bool:
        """
        Count one presented frame that took ``dt`` seconds.

        Every ``log_interval`` seconds the averaged FPS and the section timings
        are logged; returns True when that happened.
        """
        self._frames += 1
        self._since_log += dt
        if self._since_log < self.log_interval:
            return False
        self.fps = self._frames / self._since_log
        frame_t_ms = (self._since_log / self._frames) * 1000.0
        self.logger.info(f"FPS: {self.fps:.2f} | frame_t: {frame_t_ms:.2f}ms")
        self.log_stats()
        self._frames = 0
        self._since_log = 0.0
        return True

    def get_timings(self):
        return self._w_stats.copy()

    def log_stats(self):
        stats = []
        for k, v in sorted(self._w_stats.items()):
            stats.append(f"{k}: {v*1000:.2f}ms")
        self.logger.info(" | ".join(stats))
