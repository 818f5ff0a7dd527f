"""
Logo Motion — Star Glint
Four-pointed sparkles on a square lattice over the dark parts of the logo.
Each sparkle twinkles on its own hashed phase.
"""

import math

from logomotion.mathutils import clamp, lerp, merge_params, sample_bilinear
from logomotion.params import ParamSpec
from logomotion.svgdoc import fmt, svg_document

# Top-level names copied into standalone scripts.
EXPORT_SOURCE = ("DARKNESS_CUTOFF", "MIN_SIZE", "MIN_GLYPH", "SIZE_CELL_CAP",
                 "JITTER_CELL_CAP", "CURVE_STEPS", "get_default_params",
                 "_hash01", "init", "_size_at", "_glint_curves",
                 "_glint_points", "draw_frame")

DARKNESS_CUTOFF = 0.3
MIN_SIZE = 1.0
MIN_GLYPH = 0.5
SIZE_CELL_CAP = 1.5
JITTER_CELL_CAP = 0.8
CURVE_STEPS = 6          # polyline samples per quadratic arm when rasterized


def get_default_params():
    return {
        "density": 80,
        "scale": 15,
        "sharpness": 0.7,
        "jitter": 5,
        "speed": 4.0,
        "color": "#000000",
    }


def get_param_schema():
    return [
        ParamSpec("density", "Density", 30, 120, 1, 80),
        ParamSpec("scale", "Scale", 2, 20, 0.5, 15),
        ParamSpec("sharpness", "Sharpness", 0.1, 0.9, 0.05, 0.7),
        ParamSpec("jitter", "Jitter", 0, 15, 1, 5),
        ParamSpec("speed", "Speed", 0, 10, 0.1, 4.0, motion_only=True),
    ]


def _hash01(x):
    """Deterministic pseudo-random value in [0, 1) from a number."""
    s = math.sin(x) * 10000
    return s - math.floor(s)


def init(sample, params, width, height):
    p = merge_params(get_default_params(), params)
    field = sample.grid.tolist()
    cols = max(1, int(math.floor(p["density"])))
    cell = width / cols
    rows = int(math.floor(height / cell))
    max_jitter = min(p["jitter"], cell * JITTER_CELL_CAP)

    stars = []
    for r in range(rows):
        v = r / (rows - 1) if rows > 1 else 0.5
        for c in range(cols):
            u = c / (cols - 1) if cols > 1 else 0.5
            darkness = 1 - sample_bilinear(field, sample.cols, sample.rows, u, v)
            if darkness < DARKNESS_CUTOFF:
                continue
            seed = r * cols + c
            cx = c * cell + cell / 2 + (_hash01(seed * 1.1) - 0.5) * max_jitter
            cy = r * cell + cell / 2 + (_hash01(seed * 1.2) - 0.5) * max_jitter
            stars.append((cx, cy, darkness, _hash01(seed * 1.3) * math.pi * 2))

    return {"params": p, "stars": stars, "cell": cell,
            "width": width, "height": height}


def _size_at(star, p, cell, t):
    _, _, darkness, phase = star
    wave = 0.5 + 0.5 * math.sin(t * p["speed"] + phase)
    weight = lerp(darkness * 0.2, darkness, wave)
    return lerp(MIN_SIZE, min(p["scale"], cell * SIZE_CELL_CAP), weight)


def _glint_curves(cx, cy, size, sharpness):
    """
    The glyph as four quadratic arms: (start, control, end) per arm, running
    top, right, bottom, left. Controls pulled toward the center pinch the
    arms; sharpness 1 collapses them to the center.
    """
    cp = size * (1 - clamp(sharpness, 0, 1))
    top = (cx, cy - size)
    right = (cx + size, cy)
    bottom = (cx, cy + size)
    left = (cx - size, cy)
    return [
        (top, (cx + cp, cy - cp), right),
        (right, (cx + cp, cy + cp), bottom),
        (bottom, (cx - cp, cy + cp), left),
        (left, (cx - cp, cy - cp), top),
    ]


def _glint_points(cx, cy, size, sharpness):
    points = []
    for (x0, y0), (qx, qy), (x1, y1) in _glint_curves(cx, cy, size, sharpness):
        for i in range(CURVE_STEPS):
            k = i / CURVE_STEPS
            a = (1 - k) * (1 - k)
            b = 2 * (1 - k) * k
            c = k * k
            points.append((a * x0 + b * qx + c * x1, a * y0 + b * qy + c * y1))
    return points


def draw_frame(surface, state, t):
    p = state["params"]
    surface.clear()
    for star in state["stars"]:
        size = _size_at(star, p, state["cell"], t)
        if size < MIN_GLYPH:
            continue
        surface.fill_polygon(_glint_points(star[0], star[1], size, p["sharpness"]), p["color"])


def _glint_path(cx, cy, size, sharpness):
    curves = _glint_curves(cx, cy, size, sharpness)
    d = f"M{fmt(curves[0][0][0], 2)},{fmt(curves[0][0][1], 2)}"
    for _, (qx, qy), (x1, y1) in curves:
        d += f"Q{fmt(qx, 2)},{fmt(qy, 2)} {fmt(x1, 2)},{fmt(y1, 2)}"
    return d + "Z"


def generate(sample, params, width, height):
    """Static snapshot: the animation evaluated at t = 0."""
    state = init(sample, params, width, height)
    p = state["params"]
    elements = []
    for star in state["stars"]:
        size = _size_at(star, p, state["cell"], 0.0)
        if size < MIN_GLYPH:
            continue
        elements.append(
            f'<path d="{_glint_path(star[0], star[1], size, p["sharpness"])}" fill="{p["color"]}"/>'
        )
    return svg_document(width, height, elements)
