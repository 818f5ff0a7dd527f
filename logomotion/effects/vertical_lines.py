"""
Logo Motion — Vertical Lines
One vertical line per grid column, broken into dashes whose length follows the
darkness under them. Animated stroke width travels across columns as a wave.
"""

import math

from logomotion.mathutils import lerp, merge_params, ordered, sample_bilinear
from logomotion.params import ParamSpec
from logomotion.svgdoc import fmt, stroked_path, svg_document

# Top-level names copied into standalone scripts.
EXPORT_SOURCE = ("MIN_DASH", "STROKE_CELL_CAP", "get_default_params",
                 "_stroke_range", "init", "draw_frame")

MIN_DASH = 0.3          # dashes shorter than this (px) are not drawn
STROKE_CELL_CAP = 1.35  # max stroke as a multiple of the column width


def get_default_params():
    return {
        "rows": None,            # None = one dash slot per grid row
        "max_length": 1.0,
        "min_length": 0.05,
        "min_stroke": 0.5,
        "max_stroke": 4.0,
        "speed": 1.5,
        "wave_freq": 0.10,
        "color": "#000000",
    }


def get_param_schema():
    return [
        ParamSpec("min_stroke", "Min Stroke", 0.1, 3, 0.1, 0.5),
        ParamSpec("max_stroke", "Max Stroke", 1, 12, 0.5, 4.0),
        ParamSpec("max_length", "Max Length", 0.2, 1, 0.01, 1.0),
        ParamSpec("wave_freq", "Wave Frequency", 0.01, 0.5, 0.01, 0.10, motion_only=True),
        ParamSpec("speed", "Speed", 0.1, 5, 0.1, 1.5, motion_only=True),
    ]


def _stroke_range(params, column_width):
    lo, hi = ordered(params["min_stroke"], params["max_stroke"])
    hi = min(hi, column_width * STROKE_CELL_CAP)
    return min(lo, hi), hi


def init(sample, params, width, height):
    """Lay out every dash once; draw_frame only varies the stroke width."""
    p = merge_params(get_default_params(), params)
    min_len, max_len = ordered(p["min_length"], p["max_length"])
    field = sample.grid.tolist()
    cols = sample.cols
    rows = max(1, int(p["rows"])) if p["rows"] is not None else sample.rows
    cell_w = width / cols
    cell_h = height / rows

    columns = []
    for c in range(cols):
        x = c * cell_w + cell_w / 2
        u = c / (cols - 1) if cols > 1 else 0.5
        dashes = []
        for r in range(rows):
            v = r / (rows - 1) if rows > 1 else 0.5
            darkness = 1 - sample_bilinear(field, sample.cols, sample.rows, u, v)
            length = lerp(min_len, max_len, darkness) * cell_h
            if length < MIN_DASH:
                continue
            y = r * cell_h + cell_h / 2
            dashes.append((y - length / 2, y + length / 2))
        columns.append((x, dashes))

    return {"params": p, "columns": columns, "cell_w": cell_w,
            "width": width, "height": height}


def draw_frame(surface, state, t):
    p = state["params"]
    lo, hi = _stroke_range(p, state["cell_w"])
    surface.clear()
    for c, (x, dashes) in enumerate(state["columns"]):
        if not dashes:
            continue
        wave = 0.5 + 0.5 * math.sin(t * p["speed"] - c * p["wave_freq"])
        stroke = lerp(lo, hi, wave)
        for y1, y2 in dashes:
            surface.stroke_line(x, y1, x, y2, stroke, p["color"])


def generate(sample, params, width, height):
    """Static snapshot: same dashes, uniform mid-range stroke."""
    state = init(sample, params, width, height)
    lo, hi = _stroke_range(state["params"], state["cell_w"])
    d = "".join(
        f"M{fmt(x)},{fmt(y1)}L{fmt(x)},{fmt(y2)}"
        for x, dashes in state["columns"]
        for y1, y2 in dashes
    )
    elements = [stroked_path(d, state["params"]["color"], (lo + hi) / 2)] if d else []
    return svg_document(width, height, elements)
