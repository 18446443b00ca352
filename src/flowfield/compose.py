"""
CPU reference of the flow-field fragment program.

``shade_frame`` evaluates the same steps as ``shaders.FS_FLOW`` for every pixel
center of a width x height target, in float32. Rows are returned bottom-up,
matching ``gl_FragCoord`` and ``Framebuffer.read``.

Everything downstream of the noise (color layering, grain scale, vignette,
coordinate normalisation) matches the GPU to float rounding. The noise itself
only agrees approximately, see ``noise``.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from .noise import DTYPE, fbm, hash, mix, smoothstep

GRAIN_STRENGTH = 0.15
VIGNETTE_INNER = 0.5
VIGNETTE_OUTER = 1.5

# Offsets and time rates of the two domain-warp passes
Q_TIME_RATE = 0.1
Q_OFFSET = np.array([1.0, 0.0], dtype=DTYPE)
R_OFFSET_X = np.array([1.7, 9.2], dtype=DTYPE)
R_OFFSET_Y = np.array([8.3, 2.8], dtype=DTYPE)
R_TIME_RATE_X = 0.15
R_TIME_RATE_Y = 0.126


def normalize_coords(frag_xy, resolution) -> np.ndarray:
    """Pixel coordinates -> ``st``: divided by resolution, x scaled by aspect."""
    w, h = resolution
    st = np.asarray(frag_xy, dtype=DTYPE) / np.array([w, h], dtype=DTYPE)
    st[..., 0] *= w / h
    return st


def warp(st, t: float):
    """Two-level domain warp. Returns ``(q, r, f)``."""
    st = np.asarray(st, dtype=DTYPE)
    q = np.stack([fbm(st + Q_TIME_RATE * t), fbm(st + Q_OFFSET)], axis=-1)
    r = np.stack(
        [
            fbm(st + q + R_OFFSET_X + R_TIME_RATE_X * t),
            fbm(st + q + R_OFFSET_Y + R_TIME_RATE_Y * t),
        ],
        axis=-1,
    )
    f = fbm(st + r)
    return q, r, f


def blend_weights(f, q, r):
    """Mix weights toward color2, color3 and color4, each clamped to [0, 1]."""
    f = np.asarray(f, dtype=DTYPE)
    q = np.asarray(q, dtype=DTYPE)
    r = np.asarray(r, dtype=DTYPE)
    w2 = np.clip(f * f * 4.0, 0.0, 1.0)
    w3 = np.clip(np.linalg.norm(q, axis=-1), 0.0, 1.0)
    # Only the x component of r, not its length
    w4 = np.clip(np.abs(r[..., 0]), 0.0, 1.0)
    return w2, w3, w4


def blend_colors(f, q, r, colors: Sequence[Sequence[float]]) -> np.ndarray:
    """Layer the four color stops by the field-derived weights."""
    c1, c2, c3, c4 = (np.asarray(c, dtype=DTYPE) for c in colors)
    w2, w3, w4 = blend_weights(f, q, r)
    color = mix(c1, c2, w2[..., None])
    color = mix(color, c3, w3[..., None])
    color = mix(color, c4, w4[..., None])
    return color


def grain(st, t: float) -> np.ndarray:
    return hash(np.asarray(st, dtype=DTYPE) * t) * GRAIN_STRENGTH


def vignette(uv) -> np.ndarray:
    """1 at the center of the frame, falling off with distance from (0.5, 0.5)."""
    d = np.linalg.norm(np.asarray(uv, dtype=DTYPE) - 0.5, axis=-1)
    return 1.0 - smoothstep(VIGNETTE_INNER, VIGNETTE_OUTER, d)


def shade_frame(
    width: int, height: int, t: float, colors: Sequence[Sequence[float]]
) -> np.ndarray:
    """Render one frame on the CPU as a (height, width, 4) float array."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid frame size {width}x{height}")
    ys, xs = np.mgrid[0:height, 0:width].astype(DTYPE)
    frag = np.stack([xs + 0.5, ys + 0.5], axis=-1)
    uv = frag / np.array([width, height], dtype=DTYPE)

    st = normalize_coords(frag, (width, height))
    q, r, f = warp(st, t)
    color = blend_colors(f, q, r, colors)
    color = color + grain(st, t)[..., None]
    color = color * vignette(uv)[..., None]

    alpha = np.ones((height, width, 1), dtype=DTYPE)
    return np.concatenate([color, alpha], axis=-1)
