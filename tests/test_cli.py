"""
Tests for the command line entry point.

Sampling is replaced by a synthetic grid so no rasterizer is needed.
"""

import numpy as np
import pytest

from logomotion import cli
from logomotion.sampler import make_grid


@pytest.fixture
def fake_sampling(monkeypatch):
    values = np.ones((20, 40))
    values[5:15, 10:30] = 0.0
    grid = make_grid(values, svg_width=200, svg_height=100)
    monkeypatch.setattr(cli, "sample_svg_file", lambda path: grid)
    return grid


def test_effects_lists_every_effect(capsys):
    assert cli.main(["effects", "-v"]) == 0
    out = capsys.readouterr().out
    for name in ("particle_scatter", "ellipse_grid", "horizontal_lines",
                 "vertical_lines", "star_glint", "line_halftone"):
        assert name in out
    assert "(motion)" in out


class TestStatic:

    def test_all_effects(self, tmp_path, fake_sampling):
        assert cli.main(["static", "Acme Logo.svg", "--out-dir", str(tmp_path)]) == 0
        names = sorted(p.name for p in tmp_path.iterdir())
        assert len(names) == 6
        assert "acme-logo_star-glint.svg" in names

    def test_single_effect_with_output(self, tmp_path, fake_sampling):
        out = tmp_path / "snap.svg"
        code = cli.main(["static", "logo.svg", "ellipse grid", "-o", str(out),
                         "--param", "cols=20", "--width", "400"])
        assert code == 0
        text = out.read_text(encoding="utf-8")
        assert 'width="400" height="200"' in text

    def test_unknown_effect_fails(self, tmp_path, fake_sampling):
        assert cli.main(["static", "logo.svg", "sparkles", "--out-dir", str(tmp_path)]) == 1

    def test_bad_param_fails(self, tmp_path, fake_sampling):
        assert cli.main(["static", "logo.svg", "star_glint", "--param", "scale",
                         "--out-dir", str(tmp_path)]) == 1

    def test_missing_file_fails(self, tmp_path):
        assert cli.main(["static", str(tmp_path / "missing.svg")]) == 1


def test_standalone_script(tmp_path, fake_sampling):
    out = tmp_path / "anim.py"
    assert cli.main(["standalone", "logo.svg", "particle_scatter", "-o", str(out)]) == 0
    compile(out.read_text(encoding="utf-8"), str(out), "exec")


def test_gif(tmp_path, fake_sampling):
    out = tmp_path / "anim.gif"
    code = cli.main(["gif", "logo.svg", "vertical_lines", "-o", str(out),
                     "--fps", "2", "--seconds", "1", "--height", "40"])
    assert code == 0
    assert out.exists()
