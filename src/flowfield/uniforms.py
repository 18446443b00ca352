from __future__ import annotations

from typing import Sequence

from .logging import get_logger

logger = get_logger(__name__)

RGB = tuple[float, float, float]


class UniformStore:
    """
    Live parameter state handed to the flow program on every draw.

    Written by the render loop (time) and the viewport controller (resolution,
    pointer); read once per frame by ``ShaderProgram.draw``. The pointer is kept
    exactly as written: callers normalise it, nothing here clamps it.
    """

    def __init__(
        self,
        resolution: tuple[float, float],
        color_stops: Sequence[Sequence[float]],
        pointer: tuple[float, float] = (0.5, 0.5),
    ):
        w, h = resolution
        if w <= 0 or h <= 0:
            raise ValueError(f"Initial resolution must be positive, got {w}x{h}")
        if len(color_stops) != 4:
            raise ValueError(f"Expected 4 color stops, got {len(color_stops)}")
        stops = []
        for c in color_stops:
            if len(c) != 3:
                raise ValueError(f"Color stop must be an RGB triple, got {c!r}")
            stops.append(tuple(float(v) for v in c))
        self._color_stops: tuple[RGB, ...] = tuple(stops)
        self._elapsed_time = 0.0
        self._resolution = (float(w), float(h))
        self._pointer = (float(pointer[0]), float(pointer[1]))

    @property
    def elapsed_time(self) -> float:
        return self._elapsed_time

    @property
    def resolution(self) -> tuple[float, float]:
        return self._resolution

    @property
    def pointer(self) -> tuple[float, float]:
        return self._pointer

    @property
    def color_stops(self) -> tuple[RGB, ...]:
        return self._color_stops

    def set_elapsed_time(self, seconds: float):
        if seconds < self._elapsed_time:
            raise ValueError(
                f"elapsed_time must not decrease ({seconds} < {self._elapsed_time})"
            )
        self._elapsed_time = float(seconds)

    def set_resolution(self, width: float, height: float) -> bool:
        """Store a new drawable size. Non-positive sizes are ignored."""
        if width <= 0 or height <= 0:
            logger.debug(f"Ignoring degenerate resolution {width}x{height}")
            return False
        self._resolution = (float(width), float(height))
        return True

    def set_pointer(self, x: float, y: float):
        self._pointer = (float(x), float(y))

    def snapshot(self) -> dict:
        """Uniform name -> value for the current frame."""
        c1, c2, c3, c4 = self._color_stops
        return {
            "u_time": self._elapsed_time,
            "u_resolution": self._resolution,
            "u_pointer": self._pointer,
            "u_color1": c1,
            "u_color2": c2,
            "u_color3": c3,
            "u_color4": c4,
        }

    def apply(self, program) -> list[str]:
        """
        Write the snapshot into a moderngl program.

        Uniforms the GLSL compiler eliminated (u_pointer is never read) are
        skipped. Returns the names that were written.
        """
        written = []
        for name, value in self.snapshot().items():
            member = program.get(name, None)
            if member is None:
                continue
            member.value = value
            written.append(name)
        return written
