"""
Logo Motion — Export Adapters
Writes static SVG snapshots, looping GIFs and green-screen videos.

Raster exports run the effect exactly like the preview: init once, then
draw_frame at a fixed virtual frame rate. A solid backdrop is composited
beneath each finished frame.
"""

import os
import sys
import shutil
import subprocess
import tempfile
import threading
import time
import logging
from typing import Callable, Iterator, Optional, Tuple

import numpy as np
from PIL import Image

from logomotion.config import (
    APP_DIR, EXPORT_HEIGHT, GIF_BACKDROP, GIF_FPS, GIF_SECONDS,
    VIDEO_BACKDROP, VIDEO_BITRATE_MBPS, VIDEO_FPS, VIDEO_SECONDS,
)
from logomotion.effects import slugify
from logomotion.mathutils import merge_params
from logomotion.sampler import output_size
from logomotion.surface import Surface

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]
DoneCallback = Callable[[bool, str], None]

# Windows-only flag; 0 elsewhere.
_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0)


class ExportEncodingFailure(RuntimeError):
    """The GIF writer or the video encoder failed."""


def export_basename(logo_name: str, effect) -> str:
    """'<logo-slug>_<effect-slug>' without extension."""
    stem = os.path.splitext(os.path.basename(logo_name or ""))[0]
    return f"{slugify(stem or 'logo')}_{effect.slug}"


def _remove_partial(path: str):
    if os.path.exists(path):
        try:
            os.remove(path)
        except OSError as e:
            logger.warning("Could not remove partial export %s: %s", path, e)


# ═══════════════════════════════════════════════════════════════════════════════
# STATIC SVG
# ═══════════════════════════════════════════════════════════════════════════════

def export_svg(effect, sample, params, path: str, width: Optional[int] = None) -> str:
    """Write the effect's static SVG snapshot to path. Returns the path."""
    if width is None:
        width, height = output_size(sample)
    else:
        width, height = output_size(sample, width)
    svg = effect.generate(sample, params, width, height)
    with open(path, "w", encoding="utf-8") as f:
        f.write(svg)
    logger.info("SVG saved: %s (%dx%d)", path, width, height)
    return path


# ═══════════════════════════════════════════════════════════════════════════════
# FRAME RENDERING
# ═══════════════════════════════════════════════════════════════════════════════

def export_geometry(sample, height: int = EXPORT_HEIGHT) -> Tuple[int, int, float]:
    """Logical (width, height) the effect lays out in, and the pixel scale."""
    width, logical_h = output_size(sample)
    return width, logical_h, height / logical_h


def render_frames(
    effect,
    sample,
    params,
    fps: int,
    seconds: float,
    backdrop: str,
    height: int = EXPORT_HEIGHT,
    stop_event: Optional[threading.Event] = None,
) -> Iterator[np.ndarray]:
    """
    Yield RGB frames for t = 0, 1/fps, ... with the backdrop composited
    beneath every frame.

    State is initialised once at the logical output size and the surface is
    scaled to the requested pixel height, so the layout is identical to the
    preview. Stops early when stop_event is set.
    """
    width, logical_h, scale = export_geometry(sample, height)
    state = effect.init(sample, merge_params(effect.get_default_params(), params),
                        width, logical_h)
    surface = Surface(width, logical_h, scale)
    total = int(round(fps * seconds))
    for i in range(total):
        if stop_event is not None and stop_event.is_set():
            return
        effect.draw_frame(surface, state, i / fps)
        yield surface.composite_over(backdrop)


# ═══════════════════════════════════════════════════════════════════════════════
# GIF
# ═══════════════════════════════════════════════════════════════════════════════

def write_gif(
    effect,
    sample,
    params,
    path: str,
    fps: int = GIF_FPS,
    seconds: float = GIF_SECONDS,
    height: int = EXPORT_HEIGHT,
    backdrop: str = GIF_BACKDROP,
    stop_event: Optional[threading.Event] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> bool:
    """
    Render and save a looping GIF.

    Returns:
        True when written, False when cancelled (no file is left behind).

    Raises:
        ExportEncodingFailure: the GIF could not be written.
    """
    total = int(round(fps * seconds))
    images = []
    for i, frame in enumerate(render_frames(effect, sample, params, fps, seconds,
                                            backdrop, height, stop_event)):
        images.append(Image.fromarray(frame))
        if progress_callback:
            progress_callback((i + 1) / total * 0.9, f"Frame {i + 1}/{total}")

    if stop_event is not None and stop_event.is_set():
        return False
    if not images:
        raise ExportEncodingFailure("No frames rendered")

    if progress_callback:
        progress_callback(0.95, "Encoding GIF...")
    try:
        images[0].save(
            path,
            format="GIF",
            save_all=True,
            append_images=images[1:],
            duration=int(round(1000 / fps)),
            loop=0,
            optimize=False,
        )
    except (OSError, ValueError) as e:
        _remove_partial(path)
        raise ExportEncodingFailure(f"GIF encoding failed: {e}") from e

    logger.info("GIF saved: %s (%d frames @ %d fps)", path, len(images), fps)
    if progress_callback:
        progress_callback(1.0, "Complete!")
    return True


# ═══════════════════════════════════════════════════════════════════════════════
# VIDEO (FFmpeg)
# ═══════════════════════════════════════════════════════════════════════════════

def get_ffmpeg_path() -> str:
    """Find FFmpeg: bundled next to the app first, then the app folder, then PATH."""
    exe = "ffmpeg.exe" if os.name == "nt" else "ffmpeg"
    search_bases = [os.path.dirname(os.path.dirname(os.path.abspath(__file__))), os.getcwd()]
    if getattr(sys, "frozen", False):
        search_bases.insert(0, os.path.dirname(sys.executable))
    search_bases.append(APP_DIR)
    for base in search_bases:
        bundled = os.path.join(base, "ffmpeg", exe)
        if os.path.isfile(bundled):
            return bundled
    found = shutil.which("ffmpeg")
    if found:
        return found
    # Let the OS resolve it (Popen raises if it is really missing)
    return "ffmpeg"


# Module-level cache so detection runs once per session
_hw_encoder_cache = None

_HW_ENCODERS = [
    ("h264_nvenc", "NVENC (NVIDIA GPU)", ["-preset", "p1"]),
    ("h264_amf", "AMF (AMD GPU)", ["-quality", "speed"]),
    ("h264_qsv", "QSV (Intel GPU)", ["-preset", "veryfast"]),
    ("h264_videotoolbox", "VideoToolbox (Apple)", []),
]


def detect_working_hw_encoder(force_recheck: bool = False) -> Tuple[Optional[str], str]:
    """
    Find a hardware H.264 encoder that actually works.

    FFmpeg builds list encoders whether or not the hardware exists, so each
    listed candidate is verified with a one-frame 8×8 test encode.

    Returns:
        (encoder_name, label), or (None, "libx264 (CPU)").
    """
    global _hw_encoder_cache
    if _hw_encoder_cache is not None and not force_recheck:
        return _hw_encoder_cache

    ffmpeg = get_ffmpeg_path()
    try:
        listing = subprocess.run(
            [ffmpeg, "-hide_banner", "-encoders"],
            capture_output=True, text=True, timeout=5, creationflags=_NO_WINDOW,
        ).stdout
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("FFmpeg encoder listing failed: %s", e)
        listing = ""

    for enc_name, enc_label, preset_args in _HW_ENCODERS:
        if enc_name not in listing:
            continue
        fd, tmp_path = tempfile.mkstemp(suffix=".mp4")
        os.close(fd)
        try:
            result = subprocess.run(
                [ffmpeg, "-y", "-hide_banner", "-loglevel", "error",
                 "-f", "lavfi", "-i", "color=black:s=8x8:d=0.04:r=25",
                 "-c:v", enc_name] + preset_args + ["-pix_fmt", "yuv420p", tmp_path],
                capture_output=True, text=True, timeout=10, creationflags=_NO_WINDOW,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("HW encoder test for %s failed: %s", enc_name, e)
            continue
        finally:
            _remove_partial(tmp_path)

        if result.returncode == 0:
            logger.info("HW encoder verified: %s (%s)", enc_name, enc_label)
            _hw_encoder_cache = (enc_name, enc_label)
            return _hw_encoder_cache
        logger.info("HW encoder %s listed but failed test: %s",
                    enc_name, (result.stderr or "unknown")[:200])

    logger.info("No working HW encoder found, will use libx264 (CPU)")
    _hw_encoder_cache = (None, "libx264 (CPU)")
    return _hw_encoder_cache


def build_ffmpeg_command(
    output_path: str,
    frame_size: Tuple[int, int],
    fps: int,
    bitrate: int,
    encoder: Optional[str],
) -> list:
    """FFmpeg command reading raw rgb24 frames from stdin."""
    frame_w, frame_h = frame_size
    bitrate_str = f"{bitrate}M"
    cmd = [
        get_ffmpeg_path(), "-y", "-hide_banner",
        "-f", "rawvideo",
        "-vcodec", "rawvideo",
        "-pix_fmt", "rgb24",
        "-s", f"{frame_w}x{frame_h}",
        "-r", str(fps),
        "-i", "pipe:0",
        # yuv420p needs even dimensions
        "-vf", "pad=ceil(iw/2)*2:ceil(ih/2)*2",
        "-c:v", encoder or "libx264",
    ]
    if encoder is None:
        cmd.extend(["-preset", "medium"])
    cmd.extend([
        "-b:v", bitrate_str,
        "-maxrate", f"{int(bitrate * 1.2)}M",
        "-bufsize", f"{bitrate * 2}M",
        "-pix_fmt", "yuv420p",
    ])
    if output_path.lower().endswith((".mp4", ".mov")):
        cmd.extend(["-movflags", "+faststart"])
    cmd.append(output_path)
    return cmd


def write_video(
    effect,
    sample,
    params,
    path: str,
    fps: int = VIDEO_FPS,
    seconds: float = VIDEO_SECONDS,
    height: int = EXPORT_HEIGHT,
    backdrop: str = VIDEO_BACKDROP,
    bitrate: int = VIDEO_BITRATE_MBPS,
    stop_event: Optional[threading.Event] = None,
    progress_callback: Optional[ProgressCallback] = None,
    use_hw_encoder: bool = True,
) -> bool:
    """
    Render frames straight into an FFmpeg pipe.

    Returns:
        True when written, False when cancelled (partial file removed).

    Raises:
        ExportEncodingFailure: FFmpeg is missing or exits with an error.
    """
    width, logical_h, scale = export_geometry(sample, height)
    probe = Surface(width, logical_h, scale)
    frame_size = (probe.pixel_width, probe.pixel_height)
    total = int(round(fps * seconds))

    encoder, encoder_label = detect_working_hw_encoder() if use_hw_encoder else (None, "libx264 (CPU)")
    cmd = build_ffmpeg_command(path, frame_size, fps, bitrate, encoder)
    logger.info("FFmpeg cmd: %s", " ".join(cmd))

    if progress_callback:
        progress_callback(0.0, f"Starting encoder ({encoder_label})...")

    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            creationflags=_NO_WINDOW,
        )
    except OSError as e:
        raise ExportEncodingFailure(f"Could not start FFmpeg: {e}") from e

    stderr_lines = []

    def _drain_stderr():
        for line in iter(proc.stderr.readline, b""):
            stderr_lines.append(line.decode("utf-8", errors="replace").strip())

    stderr_thread = threading.Thread(target=_drain_stderr, daemon=True)
    stderr_thread.start()

    render_start = time.time()
    written = 0
    cancelled = False
    try:
        for frame in render_frames(effect, sample, params, fps, seconds,
                                   backdrop, height, stop_event):
            try:
                proc.stdin.write(frame.tobytes())
            except (BrokenPipeError, OSError):
                break
            written += 1
            if progress_callback and written % 3 == 0:
                elapsed = time.time() - render_start
                fps_actual = written / elapsed if elapsed > 0 else 0
                eta = (total - written) / fps_actual if fps_actual > 0 else 0
                progress_callback(
                    written / total * 0.98,
                    f"[{encoder_label}] Frame {written}/{total} "
                    f"({int(written / total * 100)}%) • {fps_actual:.1f} fps • "
                    f"ETA {int(eta)}s",
                )

        cancelled = stop_event is not None and stop_event.is_set()
        if cancelled:
            proc.kill()
        else:
            if progress_callback:
                progress_callback(0.99, "Finalizing video...")
            try:
                proc.stdin.close()
            except OSError:
                pass
        proc.wait()
        stderr_thread.join(timeout=5)
    except BaseException:
        proc.kill()
        proc.wait()
        _remove_partial(path)
        raise
    finally:
        for stream in (proc.stdin, proc.stderr):
            if stream and not stream.closed:
                try:
                    stream.close()
                except OSError:
                    pass

    if cancelled:
        _remove_partial(path)
        return False

    if proc.returncode != 0 or written < total:
        _remove_partial(path)
        err = "\n".join(stderr_lines[-10:]) if stderr_lines else "Unknown error"
        raise ExportEncodingFailure(
            f"FFmpeg encoding failed (code {proc.returncode}, "
            f"{written}/{total} frames):\n{err[-500:]}"
        )

    mb = os.path.getsize(path) / (1024 * 1024) if os.path.exists(path) else 0.0
    logger.info("Video saved: %s (%d frames, %.1f MB)", path, written, mb)
    if progress_callback:
        progress_callback(1.0, f"Complete! ({mb:.1f} MB in {int(time.time() - render_start)}s)")
    return True


# ═══════════════════════════════════════════════════════════════════════════════
# BACKGROUND EXPORTER
# ═══════════════════════════════════════════════════════════════════════════════

class LogoExporter:
    """
    Runs one raster export at a time on a background thread.

    Each export initialises its own effect state and surface, so the live
    preview keeps running untouched.
    """

    def __init__(self):
        self._stop_event = threading.Event()
        self._exporting = False
        self._thread: Optional[threading.Thread] = None

    @property
    def is_exporting(self) -> bool:
        return self._exporting

    def stop(self):
        """Ask the running export to stop after the current frame."""
        self._stop_event.set()

    def wait(self, timeout: Optional[float] = None):
        if self._thread is not None:
            self._thread.join(timeout)

    def export_gif(self, effect, sample, params, path: str,
                   progress_callback: Optional[ProgressCallback] = None,
                   done_callback: Optional[DoneCallback] = None, **options):
        self._start(write_gif, "GIF", effect, sample, params, path,
                    progress_callback, done_callback, options)

    def export_video(self, effect, sample, params, path: str,
                     progress_callback: Optional[ProgressCallback] = None,
                     done_callback: Optional[DoneCallback] = None, **options):
        self._start(write_video, "Video", effect, sample, params, path,
                    progress_callback, done_callback, options)

    def _start(self, writer, kind, effect, sample, params, path,
               progress_callback, done_callback, options):
        if self._exporting:
            if done_callback:
                done_callback(False, "Already exporting")
            return

        self._stop_event.clear()
        self._exporting = True

        def _worker():
            try:
                logger.info("%s export started: %s -> %s", kind, effect.title, path)
                finished = writer(effect, sample, params, path,
                                  stop_event=self._stop_event,
                                  progress_callback=progress_callback, **options)
                if done_callback:
                    if finished:
                        done_callback(True, f"{kind} saved to:\n{path}")
                    else:
                        done_callback(False, "Export cancelled")
            except Exception as e:
                logger.error("%s export error: %s", kind, e, exc_info=True)
                _remove_partial(path)
                if done_callback:
                    done_callback(False, f"Error: {e}")
            finally:
                self._exporting = False

        self._thread = threading.Thread(target=_worker, daemon=True)
        self._thread.start()
