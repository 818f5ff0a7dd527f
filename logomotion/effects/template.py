"""
Logo Motion — Effect Template
Starting point for a new effect. Copy this file, rename it, then register the
module in logomotion/effects/__init__.py.

Contract:
  get_default_params()                     complete parameter set, internal keys included
  get_param_schema()                       user-facing sliders in display order
  generate(sample, params, width, height)  static SVG string, no clock
  init(sample, params, width, height)      precomputed state for draw_frame
  draw_frame(surface, state, t)            clear + draw one frame at t seconds

init, draw_frame and anything listed in EXPORT_SOURCE are copied into the
standalone script. They may only use `math`, the helpers from
logomotion.mathutils and the Surface drawing methods.
"""

import math

from logomotion.mathutils import lerp, merge_params, ordered, sample_bilinear
from logomotion.params import ParamSpec
from logomotion.svgdoc import fmt, svg_document

EXPORT_SOURCE = ("MIN_RADIUS", "get_default_params", "init", "_radius_at", "draw_frame")

MIN_RADIUS = 0.5


def get_default_params():
    return {
        "cols": 40,
        "min_radius": 0.5,
        "max_radius": 8.0,
        "speed": 1.0,
        "color": "#000000",
    }


def get_param_schema():
    return [
        ParamSpec("cols", "Columns", 10, 100, 1, 40),
        ParamSpec("min_radius", "Min Radius", 0.1, 4, 0.1, 0.5),
        ParamSpec("max_radius", "Max Radius", 1, 20, 0.5, 8.0),
        ParamSpec("speed", "Speed", 0.1, 5, 0.1, 1.0, motion_only=True),
    ]


def init(sample, params, width, height):
    p = merge_params(get_default_params(), params)
    field = sample.grid.tolist()
    cols = max(1, int(round(p["cols"])))
    cell = width / cols
    rows = max(1, int(round(height / cell)))
    dots = []
    for r in range(rows):
        v = r / (rows - 1) if rows > 1 else 0.5
        for c in range(cols):
            u = c / (cols - 1) if cols > 1 else 0.5
            darkness = 1 - sample_bilinear(field, sample.cols, sample.rows, u, v)
            dots.append((c * cell + cell / 2, r * cell + cell / 2, darkness))
    return {"params": p, "dots": dots, "width": width, "height": height}


def _radius_at(dot, p, t):
    lo, hi = ordered(p["min_radius"], p["max_radius"])
    pulse = 0.5 + 0.5 * math.sin(t * p["speed"] + dot[0] * 0.01)
    return lerp(lo, hi, dot[2] * pulse)


def draw_frame(surface, state, t):
    p = state["params"]
    surface.clear()
    for dot in state["dots"]:
        r = _radius_at(dot, p, t)
        if r >= MIN_RADIUS:
            surface.fill_circle(dot[0], dot[1], r, p["color"])


def generate(sample, params, width, height):
    state = init(sample, params, width, height)
    p = state["params"]
    elements = []
    for dot in state["dots"]:
        r = _radius_at(dot, p, 0.0)
        if r >= MIN_RADIUS:
            elements.append(
                f'<circle cx="{fmt(dot[0], 2)}" cy="{fmt(dot[1], 2)}" r="{fmt(r, 2)}" fill="{p["color"]}"/>'
            )
    return svg_document(width, height, elements)
