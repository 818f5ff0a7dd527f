"""
Tests for SVG dimension parsing and brightness sampling.

The rasterizer is replaced by a fake so these run without a cairo install;
one test renders for real when cairosvg is usable.
"""

import numpy as np
import pytest
from PIL import Image

from logomotion import sampler
from logomotion.sampler import (
    LoadError, brightness_from_image, ensure_svg_size, grid_rows_for, make_grid,
    output_size, parse_svg_dimensions, sample_svg,
)

SVG_NS = 'xmlns="http://www.w3.org/2000/svg"'


def _half_dark_renderer(calls):
    """Fake render_svg: left half black, right half white."""
    def render(svg_text, width, height):
        calls.append((svg_text, width, height))
        arr = np.full((height, width, 3), 255, dtype=np.uint8)
        arr[:, : width // 2] = 0
        return Image.fromarray(arr)
    return render


class TestDimensions:

    def test_viewbox_wins(self):
        svg = f'<svg {SVG_NS} width="10" height="10" viewBox="0 0 200 100"/>'
        assert parse_svg_dimensions(svg) == (200.0, 100.0)

    def test_viewbox_with_commas(self):
        svg = f'<svg {SVG_NS} viewBox="0,0,30,60"/>'
        assert parse_svg_dimensions(svg) == (30.0, 60.0)

    def test_width_height_with_units(self):
        svg = f'<svg {SVG_NS} width="120px" height="40px"/>'
        assert parse_svg_dimensions(svg) == (120.0, 40.0)

    def test_degenerate_viewbox_falls_through(self):
        svg = f'<svg {SVG_NS} viewBox="0 0 0 0" width="50" height="25"/>'
        assert parse_svg_dimensions(svg) == (50.0, 25.0)

    def test_fallback_size(self):
        assert parse_svg_dimensions(f'<svg {SVG_NS}/>') == (100.0, 100.0)

    def test_unparsable_raises(self):
        with pytest.raises(LoadError):
            parse_svg_dimensions("<svg <<< not xml")

    def test_rows_follow_aspect(self):
        assert grid_rows_for(300, 2.0) == 150
        assert grid_rows_for(300, 0.25) == 1200
        assert grid_rows_for(300, 1000.0) == 1


class TestSampleSvg:

    def test_grid_keeps_logo_aspect(self, monkeypatch):
        calls = []
        monkeypatch.setattr(sampler, "render_svg", _half_dark_renderer(calls))
        grid = sample_svg(f'<svg {SVG_NS} viewBox="0 0 200 100"><rect width="100" height="100"/></svg>')

        assert (grid.cols, grid.rows) == (300, 150)
        assert grid.aspect == pytest.approx(2.0)
        assert grid.grid.shape == (150, 300)
        assert (grid.svg_width, grid.svg_height) == (200.0, 100.0)
        # Rendered at exactly the grid size
        assert calls[0][1:] == (300, 150)

    def test_brightness_values(self, monkeypatch):
        monkeypatch.setattr(sampler, "render_svg", _half_dark_renderer([]))
        grid = sample_svg(f'<svg {SVG_NS} viewBox="0 0 100 100"/>', target_cols=10)
        assert grid.grid[0, 0] == 0.0
        assert grid.grid[0, 9] == 1.0

    def test_grid_is_read_only(self, monkeypatch):
        monkeypatch.setattr(sampler, "render_svg", _half_dark_renderer([]))
        grid = sample_svg(f'<svg {SVG_NS} viewBox="0 0 100 100"/>', target_cols=10)
        with pytest.raises(ValueError):
            grid.grid[0, 0] = 0.5

    def test_sized_svg_is_stretched(self, monkeypatch):
        calls = []
        monkeypatch.setattr(sampler, "render_svg", _half_dark_renderer(calls))
        sample_svg(f'<svg {SVG_NS} width="400" viewBox="0 0 400 100"/>', target_cols=40)
        sized = calls[0][0]
        assert 'width="40"' in sized
        assert 'height="10"' in sized
        assert 'preserveAspectRatio="none"' in sized
        assert 'width="400"' not in sized

    def test_empty_source_raises(self):
        with pytest.raises(LoadError):
            sample_svg("   ")

    def test_all_renderers_failing_raises(self, monkeypatch):
        def broken(svg_text, width, height):
            raise RuntimeError("no backend")
        monkeypatch.setattr(sampler, "_RENDERERS", (("broken", broken),))
        with pytest.raises(LoadError):
            sample_svg(f'<svg {SVG_NS} viewBox="0 0 10 10"/>')

    def test_renderer_fallback(self, monkeypatch):
        def broken(svg_text, width, height):
            raise OSError("cairo missing")

        def working(svg_text, width, height):
            return Image.new("RGBA", (width, height), (0, 0, 0, 0))

        monkeypatch.setattr(sampler, "_RENDERERS", (("a", broken), ("b", working)))
        grid = sample_svg(f'<svg {SVG_NS} viewBox="0 0 10 10"/>', target_cols=5)
        # Transparent pixels land on the white backdrop
        assert np.all(grid.grid == 1.0)


class TestHelpers:

    def test_brightness_is_channel_mean(self):
        img = Image.new("RGB", (2, 2), (255, 0, 0))
        assert brightness_from_image(img)[0, 0] == pytest.approx(1 / 3)

    def test_ensure_svg_size_keeps_other_attributes(self):
        out = ensure_svg_size(f'<svg {SVG_NS} viewBox="0 0 5 5" height="9"><g/></svg>', 30, 20)
        assert 'viewBox="0 0 5 5"' in out
        assert 'height="9"' not in out
        assert out.endswith("<g/></svg>")

    def test_output_size_uses_svg_proportions(self):
        grid = make_grid(np.ones((3, 7)), svg_width=200, svg_height=100)
        assert output_size(grid) == (1000, 500)

    def test_make_grid_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            make_grid([1.0, 2.0])


def test_real_render_when_cairo_available():
    """Left half black rect renders dark on the left, light on the right."""
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        pytest.skip("cairosvg is not usable here")

    svg = f'<svg {SVG_NS} viewBox="0 0 200 100"><rect x="0" y="0" width="100" height="100" fill="#000"/></svg>'
    grid = sample_svg(svg)
    assert (grid.cols, grid.rows) == (300, 150)
    assert grid.grid[75, 10] < 0.05
    assert grid.grid[75, 290] > 0.95
