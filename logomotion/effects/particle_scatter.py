"""
Logo Motion — Particle Scatter
Seeded dots scattered with a density that follows the logo's darkness. Every
dot keeps its own breathing phase so the cloud shimmers.
"""

import math
from bisect import bisect_left

from logomotion.mathutils import lerp, merge_params, mulberry32, ordered, sample_bilinear
from logomotion.params import ParamSpec
from logomotion.svgdoc import fmt, svg_document

# Top-level names copied into standalone scripts.
EXPORT_SOURCE = ("DENSITY_POWER", "WEIGHT_FLOOR", "MIN_RADIUS",
                 "get_default_params", "init", "_radius_at", "draw_frame")

DENSITY_POWER = 1.8   # > 1 concentrates dots into the darkest areas
WEIGHT_FLOOR = 0.02   # light areas still get the occasional dot
MIN_RADIUS = 0.15


def get_default_params():
    return {
        "max_dots": 6000,
        "max_radius": 6,
        "min_radius": 0.5,
        "seed": 42,
        "scatter": 1.0,
        "speed": 1.8,
        "color": "#000000",
    }


def get_param_schema():
    return [
        ParamSpec("max_dots", "Max Dots", 500, 12000, 100, 6000),
        ParamSpec("max_radius", "Max Radius", 1, 15, 0.5, 6),
        ParamSpec("min_radius", "Min Radius", 0.1, 3, 0.1, 0.5),
        ParamSpec("scatter", "Scatter", 0, 3, 0.1, 1.0),
        ParamSpec("speed", "Speed", 0.1, 6, 0.1, 1.8, motion_only=True),
    ]


def init(sample, params, width, height):
    """
    Place up to max_dots particles.

    The PRNG is drawn in a fixed order per dot (cell pick, x jitter, y jitter,
    radius, phase) so a seed always produces the same layout.
    """
    p = merge_params(get_default_params(), params)
    min_r, max_r = ordered(p["min_radius"], p["max_radius"])
    rand = mulberry32(p["seed"])
    field = sample.grid.tolist()
    cols, rows = sample.cols, sample.rows
    cell_w = width / cols
    cell_h = height / rows
    spread = 1 + p["scatter"]
    dot_count = max(1, int(round(p["max_dots"])))

    cumulative = []
    total = 0.0
    for row in field:
        for value in row:
            total += (1 - value) ** DENSITY_POWER + WEIGHT_FLOOR
            cumulative.append(total)

    particles = []
    for _ in range(dot_count):
        idx = min(bisect_left(cumulative, rand() * total), len(cumulative) - 1)
        cell_row, cell_col = divmod(idx, cols)
        x = (cell_col + 0.5 + (rand() - 0.5) * spread) * cell_w
        y = (cell_row + 0.5 + (rand() - 0.5) * spread) * cell_h
        if x < 0 or x > width or y < 0 or y > height:
            continue

        darkness = 1 - sample_bilinear(field, cols, rows, x / width, y / height)
        base_r = lerp(min_r, max_r, darkness * (0.3 + rand() * 0.7))
        if base_r < MIN_RADIUS:
            continue
        particles.append((x, y, base_r, rand() * math.pi * 2))

    return {"params": p, "particles": particles, "min_radius": min_r,
            "width": width, "height": height}


def _radius_at(particle, min_r, speed, t):
    _, _, base_r, phase = particle
    return lerp(min_r, base_r, 0.5 + 0.5 * math.sin(t * speed + phase))


def draw_frame(surface, state, t):
    p = state["params"]
    min_r = state["min_radius"]
    surface.clear()
    for particle in state["particles"]:
        r = _radius_at(particle, min_r, p["speed"], t)
        if r < MIN_RADIUS:
            continue
        surface.fill_circle(particle[0], particle[1], r, p["color"])


def generate(sample, params, width, height):
    """Static snapshot: the animation evaluated at t = 0."""
    state = init(sample, params, width, height)
    p = state["params"]
    elements = []
    for particle in state["particles"]:
        r = _radius_at(particle, state["min_radius"], p["speed"], 0.0)
        if r < MIN_RADIUS:
            continue
        elements.append(
            f'<circle cx="{fmt(particle[0], 2)}" cy="{fmt(particle[1], 2)}" '
            f'r="{fmt(r, 2)}" fill="{p["color"]}"/>'
        )
    return svg_document(width, height, elements)
