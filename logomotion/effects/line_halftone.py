"""
Logo Motion — Line Halftone
Engraving-style horizontal scanlines whose thickness follows the darkness.
A sine wave travelling along each line modulates the thickness over time.
"""

import math

from logomotion.mathutils import lerp, merge_params, sample_bilinear
from logomotion.params import ParamSpec
from logomotion.svgdoc import fmt, svg_document

# Top-level names copied into standalone scripts.
EXPORT_SOURCE = ("STEPS_PER_LINE", "DARKNESS_CUTOFF", "MIN_STROKE",
                 "STROKE_CELL_CAP", "SEGMENT_OVERLAP", "get_default_params",
                 "init", "_stroke_at", "draw_frame")

STEPS_PER_LINE = 300
DARKNESS_CUTOFF = 0.3
MIN_STROKE = 0.5
STROKE_CELL_CAP = 1.8     # max thickness as a multiple of the line spacing
SEGMENT_OVERLAP = 0.5     # px added to each segment to hide seams


def get_default_params():
    return {
        "density": 80,
        "contrast": 15.0,
        "pulse": 1.5,
        "speed": 3.0,
        "color": "#000000",
    }


def get_param_schema():
    return [
        ParamSpec("density", "Density", 20, 150, 1, 80),
        ParamSpec("contrast", "Contrast", 1, 20, 0.5, 15.0),
        ParamSpec("pulse", "Pulse", 0.1, 5, 0.1, 1.5, motion_only=True),
        ParamSpec("speed", "Speed", 0, 10, 0.1, 3.0, motion_only=True),
    ]


def init(sample, params, width, height):
    p = merge_params(get_default_params(), params)
    field = sample.grid.tolist()
    rows = max(1, int(math.floor(p["density"])))
    cell_h = height / rows
    step_w = width / STEPS_PER_LINE

    segments = []
    for r in range(rows):
        y = r * cell_h + cell_h / 2
        v = r / (rows - 1) if rows > 1 else 0.5
        for c in range(STEPS_PER_LINE):
            u = c / (STEPS_PER_LINE - 1)
            darkness = 1 - sample_bilinear(field, sample.cols, sample.rows, u, v)
            if darkness < DARKNESS_CUTOFF:
                continue
            x = c * step_w + step_w / 2
            segments.append((x, y, darkness, x / width))

    return {"params": p, "segments": segments, "cell_h": cell_h,
            "step_w": step_w, "width": width, "height": height}


def _stroke_at(segment, p, max_stroke, t):
    _, _, darkness, u = segment
    phase = u * math.pi * 2 * p["pulse"] + t * p["speed"] * 2
    wave = 0.5 + 0.5 * math.sin(phase)
    return lerp(MIN_STROKE, max_stroke, lerp(darkness * 0.2, darkness, wave))


def draw_frame(surface, state, t):
    p = state["params"]
    max_stroke = min(p["contrast"], state["cell_h"] * STROKE_CELL_CAP)
    half = state["step_w"] / 2
    surface.clear()
    for seg in state["segments"]:
        x, y = seg[0], seg[1]
        surface.stroke_line(x - half, y, x + half + SEGMENT_OVERLAP, y,
                            _stroke_at(seg, p, max_stroke, t), p["color"])


def generate(sample, params, width, height):
    """Static snapshot: the animation evaluated at t = 0."""
    state = init(sample, params, width, height)
    p = state["params"]
    max_stroke = min(p["contrast"], state["cell_h"] * STROKE_CELL_CAP)
    half = state["step_w"] / 2
    elements = []
    for seg in state["segments"]:
        x, y = seg[0], seg[1]
        elements.append(
            f'<line x1="{fmt(x - half, 2)}" y1="{fmt(y, 2)}" '
            f'x2="{fmt(x + half + SEGMENT_OVERLAP, 2)}" y2="{fmt(y, 2)}" '
            f'stroke="{p["color"]}" stroke-width="{fmt(_stroke_at(seg, p, max_stroke, 0.0), 2)}" '
            f'stroke-linecap="butt"/>'
        )
    return svg_document(width, height, elements)
