"""
Logo Motion — Ellipse Grid
A regular grid of vertical ellipses sized by darkness. Each one pulses with a
diagonal phase offset so the motion sweeps across the logo.
"""

import math

from logomotion.mathutils import clamp, lerp, merge_params, sample_bilinear
from logomotion.params import ParamSpec
from logomotion.svgdoc import fmt, svg_document

# Top-level names copied into standalone scripts.
EXPORT_SOURCE = ("PHASE_STEP", "REFERENCE_HEIGHT", "MIN_RADIUS",
                 "get_default_params", "init", "_ellipse_at", "draw_frame")

PHASE_STEP = 0.35          # phase advance per (row + col)
REFERENCE_HEIGHT = 1000.0  # max_ry is expressed for a 1000px tall output
MIN_RADIUS = 0.5


def get_default_params():
    return {
        "cols": 60,
        "max_ry": 18,
        "eccentricity": 0.40,
        "speed": 2.0,
        "pulse_frac": 0.5,
        "color": "#000000",
    }


def get_param_schema():
    return [
        ParamSpec("cols", "Columns", 10, 120, 1, 60),
        ParamSpec("max_ry", "Max Height", 4, 40, 1, 18),
        ParamSpec("eccentricity", "Eccentricity", 0, 1, 0.01, 0.40),
        ParamSpec("pulse_frac", "Pulse Depth", 0, 1, 0.01, 0.5, motion_only=True),
        ParamSpec("speed", "Speed", 0.1, 6, 0.1, 2.0, motion_only=True),
    ]


def init(sample, params, width, height):
    p = merge_params(get_default_params(), params)
    field = sample.grid.tolist()
    cols = max(1, int(round(p["cols"])))
    rows = max(1, int(round(cols / (sample.cols / sample.rows))))
    cell_w = width / cols
    cell_h = height / rows
    ry_max = p["max_ry"] * height / REFERENCE_HEIGHT

    cells = []
    for r in range(rows):
        v = r / (rows - 1) if rows > 1 else 0.5
        for c in range(cols):
            u = c / (cols - 1) if cols > 1 else 0.5
            darkness = 1 - sample_bilinear(field, sample.cols, sample.rows, u, v)
            base = lerp(0, ry_max, darkness)
            if base < MIN_RADIUS:
                continue  # pulsing never grows past base
            cx = c * cell_w + cell_w / 2
            cy = r * cell_h + cell_h / 2
            cells.append((cx, cy, base, (r + c) * PHASE_STEP))

    return {"params": p, "cells": cells, "width": width, "height": height}


def _ellipse_at(cell, p, t):
    cx, cy, base, phase = cell
    depth = clamp(p["pulse_frac"], 0, 1)
    pulse = 0.5 + 0.5 * math.sin(t * p["speed"] + phase)
    ry = lerp(base * (1 - depth), base, pulse)
    rx = max(ry * max(p["eccentricity"], 0), MIN_RADIUS)
    return cx, cy, rx, ry


def draw_frame(surface, state, t):
    p = state["params"]
    surface.clear()
    for cell in state["cells"]:
        cx, cy, rx, ry = _ellipse_at(cell, p, t)
        if ry < MIN_RADIUS:
            continue
        surface.fill_ellipse(cx, cy, rx, ry, p["color"])


def generate(sample, params, width, height):
    """Static snapshot: the animation evaluated at t = 0."""
    state = init(sample, params, width, height)
    p = state["params"]
    elements = []
    for cell in state["cells"]:
        cx, cy, rx, ry = _ellipse_at(cell, p, 0.0)
        if ry < MIN_RADIUS:
            continue
        elements.append(
            f'<ellipse cx="{fmt(cx, 2)}" cy="{fmt(cy, 2)}" rx="{fmt(rx, 2)}" '
            f'ry="{fmt(ry, 2)}" fill="{p["color"]}"/>'
        )
    return svg_document(width, height, elements)
