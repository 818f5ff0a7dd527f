"""
Logo Motion — Horizontal Lines
One horizontal line per row (grid rows unless overridden), broken into dashes
whose width follows the darkness under them. The stroke wave runs down the rows.
"""

import math

from logomotion.mathutils import lerp, merge_params, ordered, sample_bilinear
from logomotion.params import ParamSpec
from logomotion.svgdoc import fmt, stroked_path, svg_document

# Top-level names copied into standalone scripts.
EXPORT_SOURCE = ("MIN_DASH", "STROKE_CELL_CAP", "get_default_params",
                 "_stroke_range", "init", "draw_frame")

MIN_DASH = 0.3
STROKE_CELL_CAP = 1.35  # max stroke as a multiple of the row height


def get_default_params():
    return {
        "rows": None,            # None = one line per grid row
        "max_length": 1.0,
        "min_length": 0.08,
        "min_stroke": 0.5,
        "max_stroke": 6.0,
        "speed": 4.0,
        "wave_freq": 0.20,
        "color": "#000000",
    }


def get_param_schema():
    return [
        ParamSpec("min_stroke", "Min Stroke", 0.1, 3, 0.1, 0.5),
        ParamSpec("max_stroke", "Max Stroke", 1, 10, 0.5, 6.0),
        ParamSpec("max_length", "Max Length", 0.2, 1, 0.01, 1.0),
        ParamSpec("wave_freq", "Wave Frequency", 0.01, 0.5, 0.01, 0.20, motion_only=True),
        ParamSpec("speed", "Speed", 0.1, 5, 0.1, 4.0, motion_only=True),
    ]


def _stroke_range(params, row_height):
    lo, hi = ordered(params["min_stroke"], params["max_stroke"])
    hi = min(hi, row_height * STROKE_CELL_CAP)
    return min(lo, hi), hi


def init(sample, params, width, height):
    p = merge_params(get_default_params(), params)
    min_len, max_len = ordered(p["min_length"], p["max_length"])
    field = sample.grid.tolist()
    rows = max(1, int(p["rows"])) if p["rows"] is not None else sample.rows
    cols = sample.cols
    cell_w = width / cols
    cell_h = height / rows

    lines = []
    for r in range(rows):
        y = r * cell_h + cell_h / 2
        v = r / (rows - 1) if rows > 1 else 0.5
        dashes = []
        for c in range(cols):
            u = c / (cols - 1) if cols > 1 else 0.5
            darkness = 1 - sample_bilinear(field, sample.cols, sample.rows, u, v)
            length = lerp(min_len, max_len, darkness) * cell_w
            if length < MIN_DASH:
                continue
            x = c * cell_w + cell_w / 2
            dashes.append((x - length / 2, x + length / 2))
        lines.append((y, dashes))

    return {"params": p, "lines": lines, "cell_h": cell_h,
            "width": width, "height": height}


def draw_frame(surface, state, t):
    p = state["params"]
    lo, hi = _stroke_range(p, state["cell_h"])
    surface.clear()
    for r, (y, dashes) in enumerate(state["lines"]):
        if not dashes:
            continue
        wave = 0.5 + 0.5 * math.sin(t * p["speed"] - r * p["wave_freq"])
        stroke = lerp(lo, hi, wave)
        for x1, x2 in dashes:
            surface.stroke_line(x1, y, x2, y, stroke, p["color"])


def generate(sample, params, width, height):
    state = init(sample, params, width, height)
    lo, hi = _stroke_range(state["params"], state["cell_h"])
    d = "".join(
        f"M{fmt(x1)},{fmt(y)}L{fmt(x2)},{fmt(y)}"
        for y, dashes in state["lines"]
        for x1, x2 in dashes
    )
    elements = [stroked_path(d, state["params"]["color"], (lo + hi) / 2)] if d else []
    return svg_document(width, height, elements)
