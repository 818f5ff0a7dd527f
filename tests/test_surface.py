"""
Tests for the raster drawing surface.
"""

import numpy as np
import pytest

from logomotion import surface as surface_module
from logomotion.surface import Surface, hex_to_rgb


class TestColors:

    def test_long_and_short_hex(self):
        assert hex_to_rgb("#ff8800") == (255, 136, 0)
        assert hex_to_rgb("#f80") == (255, 136, 0)

    def test_bad_hex_raises(self):
        with pytest.raises(ValueError):
            hex_to_rgb("#12345")

    def test_only_runtime_helpers_are_public(self):
        """The module is pasted into standalone scripts, so it carries no unused helpers."""
        assert not hasattr(surface_module, "rgb_to_hex")
        assert not hasattr(Surface, "to_rgba")


class TestSurface:

    def test_pixel_size_follows_scale(self):
        s = Surface(1000, 500, 0.1)
        assert (s.pixel_width, s.pixel_height) == (100, 50)
        assert s.pixels.shape == (50, 100, 4)

    def test_clear_restores_transparency(self):
        s = Surface(20, 20)
        s.fill_circle(10, 10, 5, "#000000")
        assert s.pixels[..., 3].max() == 255
        s.clear()
        assert s.pixels.max() == 0

    def test_composite_puts_backdrop_underneath(self):
        s = Surface(40, 20)
        s.fill_ellipse(10, 10, 6, 6, "#ff0000")
        frame = s.composite_over("#00ff00")
        assert frame.shape == (20, 40, 3)
        assert frame[10, 10].tolist() == [255, 0, 0]
        assert frame[10, 35].tolist() == [0, 255, 0]

    def test_degenerate_shapes_draw_nothing(self):
        s = Surface(20, 20)
        s.stroke_line(5, 5, 5, 5, 3, "#000000")
        s.stroke_line(0, 5, 10, 5, 0, "#000000")
        s.fill_circle(10, 10, 0, "#000000")
        s.fill_polygon([(0, 0), (5, 5)], "#000000")
        assert s.pixels.max() == 0
