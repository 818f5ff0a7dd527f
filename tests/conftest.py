"""
Shared fixtures: synthetic brightness grids and a surface that records draw calls.
"""

import numpy as np
import pytest

from logomotion.sampler import make_grid


class RecordingSurface:
    """Stand-in for Surface that keeps the primitives drawn since the last clear."""

    def __init__(self, width=1000, height=500):
        self.width = width
        self.height = height
        self.ops = []
        self.clears = 0

    def clear(self):
        self.ops = []
        self.clears += 1

    def stroke_line(self, x1, y1, x2, y2, width, color):
        self.ops.append(("line", x1, y1, x2, y2, width, color))

    def fill_ellipse(self, cx, cy, rx, ry, color):
        self.ops.append(("ellipse", cx, cy, rx, ry, color))

    def fill_circle(self, cx, cy, r, color):
        self.ops.append(("circle", cx, cy, r, color))

    def fill_polygon(self, points, color):
        self.ops.append(("polygon", list(points), color))

    def kinds(self):
        return {op[0] for op in self.ops}


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def white_grid():
    return make_grid(np.ones((20, 30)))


@pytest.fixture
def black_grid():
    return make_grid(np.zeros((20, 30)))


@pytest.fixture
def logo_grid():
    """White field with a dark block in the middle, 2:1 logo."""
    values = np.ones((30, 60))
    values[8:22, 15:45] = 0.0
    return make_grid(values, svg_width=200, svg_height=100)


@pytest.fixture
def gradient_grid():
    """Dark on the left fading to white on the right."""
    values = np.tile(np.linspace(0.0, 1.0, 40), (20, 1))
    return make_grid(values, svg_width=200, svg_height=100)


def uniform_grid(brightness, rows=10, cols=10):
    return make_grid(np.full((rows, cols), brightness))
