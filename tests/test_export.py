"""
Tests for the SVG, GIF and video export adapters.
"""

import threading

import numpy as np
import pytest
from PIL import Image

from logomotion import export
from logomotion.effects import EffectId, get_effect
from logomotion.export import (
    ExportEncodingFailure, LogoExporter, build_ffmpeg_command, export_basename,
    export_svg, render_frames, write_gif, write_video,
)


def test_export_basename():
    effect = get_effect(EffectId.STAR_GLINT)
    assert export_basename("/logos/My Logo.svg", effect) == "my-logo_star-glint"
    assert export_basename("", effect) == "logo_star-glint"


def test_export_svg(tmp_path, logo_grid):
    path = tmp_path / "out.svg"
    export_svg(get_effect(EffectId.ELLIPSE_GRID), logo_grid, {}, str(path))
    text = path.read_text(encoding="utf-8")
    assert 'width="1000" height="500"' in text
    assert "<ellipse" in text


class TestRenderFrames:

    def test_frame_count_and_size(self, logo_grid):
        frames = list(render_frames(get_effect(EffectId.ELLIPSE_GRID), logo_grid, {},
                                    fps=4, seconds=1, backdrop="#ffffff", height=60))
        assert len(frames) == 4
        assert frames[0].shape == (60, 120, 3)
        assert frames[0].dtype == np.uint8

    def test_empty_frame_is_pure_backdrop(self, white_grid):
        frames = list(render_frames(get_effect(EffectId.STAR_GLINT), white_grid, {},
                                    fps=2, seconds=1, backdrop="#00ff00", height=40))
        assert np.all(frames[0] == np.array([0, 255, 0], dtype=np.uint8))

    def test_backdrop_sits_beneath_drawing(self, logo_grid):
        frames = list(render_frames(get_effect(EffectId.LINE_HALFTONE), logo_grid,
                                    {"density": 20, "contrast": 20, "color": "#000000"},
                                    fps=1, seconds=1, backdrop="#00ff00", height=300))
        frame = frames[0]
        # Solid strokes over the dark block, untouched backdrop off the logo
        assert np.all(frame == 0, axis=2).any()
        assert frame[0, 0].tolist() == [0, 255, 0]
        assert frame[-1, -1].tolist() == [0, 255, 0]

    def test_frames_animate(self, logo_grid):
        frames = list(render_frames(get_effect(EffectId.PARTICLE_SCATTER), logo_grid, {},
                                    fps=2, seconds=1, backdrop="#ffffff", height=200))
        assert not np.array_equal(frames[0], frames[1])

    def test_stop_event_cancels(self, logo_grid):
        stop = threading.Event()
        stop.set()
        frames = list(render_frames(get_effect(EffectId.STAR_GLINT), logo_grid, {},
                                    fps=10, seconds=1, backdrop="#ffffff", stop_event=stop))
        assert frames == []


class TestGif:

    def test_writes_looping_gif(self, tmp_path, logo_grid):
        path = tmp_path / "anim.gif"
        progress = []
        ok = write_gif(get_effect(EffectId.ELLIPSE_GRID), logo_grid, {}, str(path),
                       fps=5, seconds=1, height=100,
                       progress_callback=lambda p, t: progress.append(p))
        assert ok
        with Image.open(path) as img:
            assert img.n_frames == 5
            assert img.size == (200, 100)
            assert img.info.get("loop") == 0
        assert progress[-1] == 1.0

    def test_cancelled_gif_leaves_no_file(self, tmp_path, logo_grid):
        path = tmp_path / "anim.gif"
        stop = threading.Event()
        stop.set()
        assert write_gif(get_effect(EffectId.ELLIPSE_GRID), logo_grid, {}, str(path),
                         fps=5, seconds=1, height=50, stop_event=stop) is False
        assert not path.exists()

    def test_unwritable_path_is_encoding_failure(self, tmp_path, logo_grid):
        path = tmp_path / "missing-dir" / "anim.gif"
        with pytest.raises(ExportEncodingFailure):
            write_gif(get_effect(EffectId.ELLIPSE_GRID), logo_grid, {}, str(path),
                      fps=2, seconds=1, height=20)

    def test_background_exporter_reports_done(self, tmp_path, logo_grid):
        path = tmp_path / "bg.gif"
        results = []
        exporter = LogoExporter()
        exporter.export_gif(get_effect(EffectId.STAR_GLINT), logo_grid, {}, str(path),
                            done_callback=lambda ok, msg: results.append((ok, msg)),
                            fps=2, seconds=1, height=40)
        exporter.wait(timeout=60)
        assert results and results[0][0] is True
        assert path.exists()
        assert not exporter.is_exporting

    def test_background_exporter_reports_failure(self, tmp_path, logo_grid):
        path = tmp_path / "nowhere" / "bg.gif"
        results = []
        exporter = LogoExporter()
        exporter.export_gif(get_effect(EffectId.STAR_GLINT), logo_grid, {}, str(path),
                            done_callback=lambda ok, msg: results.append((ok, msg)),
                            fps=2, seconds=1, height=20)
        exporter.wait(timeout=60)
        assert results[0][0] is False
        assert results[0][1].startswith("Error:")


class TestVideo:

    def test_cpu_command(self):
        cmd = build_ffmpeg_command("out.mp4", (101, 50), 60, 8, None)
        assert cmd[cmd.index("-c:v") + 1] == "libx264"
        assert "101x50" in cmd
        assert cmd[cmd.index("-r") + 1] == "60"
        assert "+faststart" in cmd
        assert cmd[-1] == "out.mp4"

    def test_hw_command(self):
        cmd = build_ffmpeg_command("out.webm", (100, 50), 30, 4, "h264_nvenc")
        assert cmd[cmd.index("-c:v") + 1] == "h264_nvenc"
        assert "-movflags" not in cmd

    def test_missing_ffmpeg_is_encoding_failure(self, tmp_path, logo_grid, monkeypatch):
        monkeypatch.setattr(export, "get_ffmpeg_path", lambda: str(tmp_path / "no-ffmpeg"))
        path = tmp_path / "out.mp4"
        with pytest.raises(ExportEncodingFailure):
            write_video(get_effect(EffectId.STAR_GLINT), logo_grid, {}, str(path),
                        fps=2, seconds=1, height=20, use_hw_encoder=False)
        assert not path.exists()
