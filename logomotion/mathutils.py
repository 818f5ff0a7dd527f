"""
Logo Motion — Shared Math Utilities
Interpolation, clamping, the seeded mulberry32 sequence and bilinear sampling.

This module is copied verbatim into every standalone export script, so it must
only depend on the standard library `math` module.
"""

import math


def lerp(a, b, t):
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def clamp(val, lo, hi):
    """Clamp val into [lo, hi]."""
    return min(max(val, lo), hi)


def map_range(value, in_min, in_max, out_min, out_max):
    """Re-map value from one range onto another (no clamping)."""
    return out_min + ((value - in_min) / (in_max - in_min)) * (out_max - out_min)


def ordered(a, b):
    """Return (min, max) of a pair so inverted slider ranges behave."""
    return min(a, b), max(a, b)


def merge_params(defaults, overrides=None):
    """
    Layer caller overrides over a complete default parameter set.

    Keys missing from overrides, or explicitly set to None, keep their
    default value. Extra keys are carried through untouched.
    """
    merged = dict(defaults)
    if overrides:
        for key, value in overrides.items():
            if value is None and key in defaults:
                continue
            merged[key] = value
    return merged


def mulberry32(seed):
    """
    Seeded [0, 1) sequence generator.

    All arithmetic is unsigned 32-bit with wraparound, so the sequence for a
    given seed is identical across implementations.

    Returns:
        A zero-argument callable returning the next float in the sequence.
    """
    state = [int(seed) & 0xFFFFFFFF]

    def rand():
        s = (state[0] + 0x6D2B79F5) & 0xFFFFFFFF
        state[0] = s
        t = ((s ^ (s >> 15)) * (s | 1)) & 0xFFFFFFFF
        t ^= (t + ((t ^ (t >> 7)) * (t | 61))) & 0xFFFFFFFF
        return ((t ^ (t >> 14)) & 0xFFFFFFFF) / 4294967296.0

    return rand


def sample_bilinear(grid, cols, rows, u, v):
    """
    Bilinear lookup into a row-major 2D field at normalized (u, v).

    u/v = 0 hit the first column/row and u/v = 1 the last one. Index overflow
    clamps at the last row/column; there is no wraparound or extrapolation.
    """
    x = u * (cols - 1)
    y = v * (rows - 1)
    x0 = math.floor(x)
    y0 = math.floor(y)
    x1 = min(x0 + 1, cols - 1)
    y1 = min(y0 + 1, rows - 1)
    fx = x - x0
    fy = y - y0
    return (
        grid[y0][x0] * (1 - fx) * (1 - fy)
        + grid[y0][x1] * fx * (1 - fy)
        + grid[y1][x0] * (1 - fx) * fy
        + grid[y1][x1] * fx * fy
    )
