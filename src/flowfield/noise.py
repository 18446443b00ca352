"""
Value noise and fractal Brownian motion, evaluated with numpy.

These follow the GLSL helpers in ``shaders.FS_FLOW`` step for step, in float32
like the GPU. ``hash`` amplifies sin() by 43758.5 before taking the fraction,
so CPU and GPU only agree approximately: drivers differ in sin() precision
and the last bits of the argument decide the result. Every function takes
coordinates whose last axis has length 2 and returns an array of the leading
shape.
"""
from __future__ import annotations

import numpy as np

DTYPE = np.float32

HASH_DOT = np.array([12.9898, 78.233], dtype=DTYPE)
HASH_SCALE = DTYPE(43758.5453123)

OCTAVES = 3
START_AMPLITUDE = 0.5
GAIN = 0.5  # amplitude multiplier per octave
LACUNARITY = 2.0  # frequency multiplier per octave

_RIGHT = np.array([1.0, 0.0], dtype=DTYPE)
_UP = np.array([0.0, 1.0], dtype=DTYPE)
_DIAG = np.array([1.0, 1.0], dtype=DTYPE)


def _as_points(p) -> np.ndarray:
    p = np.asarray(p, dtype=DTYPE)
    if p.shape[-1] != 2:
        raise ValueError(f"Expected a trailing axis of length 2, got shape {p.shape}")
    return p


def fract(x):
    """GLSL fract(), kept strictly below 1.0."""
    f = x - np.floor(x)
    # x - floor(x) rounds up to exactly 1.0 for tiny negative x
    return np.where(f >= 1.0, np.zeros_like(f), f)


def smoothstep(edge0, edge1, x):
    t = np.clip((np.asarray(x, dtype=DTYPE) - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def mix(x, y, a):
    """GLSL mix(): x*(1-a) + y*a, broadcasting ``a`` over trailing color axes."""
    return x * (1.0 - a) + y * a


def hash(p) -> np.ndarray:
    """Deterministic pseudo-random value in [0, 1) for each 2D point."""
    p = _as_points(p)
    return fract(np.sin(p @ HASH_DOT) * HASH_SCALE)


def noise(p) -> np.ndarray:
    """Value noise: corner hashes of the unit lattice cell, blended with a cubic."""
    p = _as_points(p)
    i = np.floor(p)
    f = p - i

    a = hash(i)
    b = hash(i + _RIGHT)
    c = hash(i + _UP)
    d = hash(i + _DIAG)

    u = f * f * (3.0 - 2.0 * f)
    ux, uy = u[..., 0], u[..., 1]
    return mix(a, b, ux) + (c - a) * uy * (1.0 - ux) + (d - b) * ux * uy


def fbm(p) -> np.ndarray:
    """Three octaves of ``noise`` at doubling frequency and halving amplitude."""
    p = _as_points(p)
    value = np.zeros(p.shape[:-1], dtype=DTYPE)
    amplitude = START_AMPLITUDE
    for _ in range(OCTAVES):
        value = value + amplitude * noise(p)
        p = p * LACUNARITY
        amplitude *= GAIN
    return value
