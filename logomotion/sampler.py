"""
Logo Motion — SVG Brightness Sampler
Renders an SVG logo to a small raster and extracts a 2D brightness grid that
keeps the logo's natural aspect ratio.

brightness: 0 = fully dark (logo ink), 1 = fully light (empty)
"""

import io
import re
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from logomotion.config import TARGET_COLS, FALLBACK_SVG_SIZE, OUTPUT_WIDTH

logger = logging.getLogger(__name__)


class LoadError(Exception):
    """The SVG source could not be parsed or rendered; no grid was produced."""


@dataclass(frozen=True)
class BrightnessGrid:
    """Immutable brightness field sampled from one SVG source."""

    grid: np.ndarray          # rows × cols, float64 in [0, 1]
    cols: int
    rows: int
    aspect: float             # cols / rows
    svg_width: float
    svg_height: float

    def to_dict(self) -> dict:
        """JSON-ready copy of the grid, used by the standalone export."""
        return {
            "grid": self.grid.tolist(),
            "cols": self.cols,
            "rows": self.rows,
            "aspect": self.aspect,
            "svg_width": self.svg_width,
            "svg_height": self.svg_height,
        }


def make_grid(values, svg_width: Optional[float] = None,
              svg_height: Optional[float] = None) -> BrightnessGrid:
    """
    Wrap an existing 2D brightness array as a BrightnessGrid.

    The source size defaults to the array shape, so the logo aspect equals
    the grid aspect.
    """
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 2 or arr.size == 0:
        raise ValueError(f"Brightness grid must be a non-empty 2D array, got shape {arr.shape}")
    arr = np.clip(arr, 0.0, 1.0)
    arr.setflags(write=False)
    rows, cols = arr.shape
    return BrightnessGrid(
        grid=arr,
        cols=cols,
        rows=rows,
        aspect=cols / rows,
        svg_width=float(svg_width if svg_width is not None else cols),
        svg_height=float(svg_height if svg_height is not None else rows),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# DIMENSION PARSING
# ═══════════════════════════════════════════════════════════════════════════════

_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def _leading_number(value: Optional[str]) -> Optional[float]:
    """Numeric prefix of an attribute like '120px' or '50%'."""
    if not value:
        return None
    match = _NUMBER_RE.match(value)
    if not match:
        return None
    return float(match.group(1))


def _parse_root(svg_text: str) -> ET.Element:
    try:
        return ET.fromstring(svg_text.encode("utf-8") if isinstance(svg_text, str) else svg_text)
    except ET.ParseError as e:
        raise LoadError(f"SVG could not be parsed: {e}") from e


def _is_svg_root(root: ET.Element) -> bool:
    return root.tag == "svg" or root.tag.endswith("}svg")


def parse_svg_dimensions(svg_text: str) -> Tuple[float, float]:
    """
    Intrinsic (width, height) of an SVG.

    Priority: viewBox width/height, then the width/height attributes, then a
    100×100 fallback. Non-positive values are treated as missing.
    """
    root = _parse_root(svg_text)
    if not _is_svg_root(root):
        return FALLBACK_SVG_SIZE

    view_box = root.get("viewBox")
    if view_box:
        parts = [p for p in re.split(r"[\s,]+", view_box.strip()) if p]
        if len(parts) == 4:
            try:
                w, h = float(parts[2]), float(parts[3])
            except ValueError:
                w = h = 0.0
            if w > 0 and h > 0:
                return w, h

    w = _leading_number(root.get("width")) or FALLBACK_SVG_SIZE[0]
    h = _leading_number(root.get("height")) or FALLBACK_SVG_SIZE[1]
    if w <= 0:
        w = FALLBACK_SVG_SIZE[0]
    if h <= 0:
        h = FALLBACK_SVG_SIZE[1]
    return w, h


def grid_rows_for(target_cols: int, aspect: float) -> int:
    """Row count that keeps cell aspect equal to the logo aspect."""
    return max(1, int(round(target_cols / aspect)))


def output_size(sample: BrightnessGrid, width: int = OUTPUT_WIDTH) -> Tuple[int, int]:
    """
    Output (width, height) following the logo's true proportions.

    Uses the source SVG size rather than the grid, whose rows are rounded.
    """
    logo_aspect = sample.svg_width / sample.svg_height
    return width, max(1, int(round(width / logo_aspect)))


# ═══════════════════════════════════════════════════════════════════════════════
# RENDERING
# ═══════════════════════════════════════════════════════════════════════════════

_SVG_OPEN_TAG_RE = re.compile(r"<svg\b([^>]*?)(/?)>", re.DOTALL)
_SIZE_ATTR_RE = re.compile(r"\s(?:width|height|preserveAspectRatio)\s*=\s*(\"[^\"]*\"|'[^']*')")


def ensure_svg_size(svg_text: str, width: int, height: int) -> str:
    """
    Force explicit width/height on the root <svg> and stretch the artwork to
    fill them exactly (no letterboxing).
    """
    def _replace(match):
        attrs = _SIZE_ATTR_RE.sub("", " " + match.group(1)).rstrip()
        return (f'<svg{attrs} width="{width}" height="{height}" '
                f'preserveAspectRatio="none"{match.group(2)}>')

    return _SVG_OPEN_TAG_RE.sub(_replace, svg_text, count=1)


def _render_with_cairosvg(svg_text: str, width: int, height: int) -> Image.Image:
    import cairosvg
    png_data = cairosvg.svg2png(
        bytestring=svg_text.encode("utf-8"),
        output_width=width,
        output_height=height,
        background_color="white",
    )
    return Image.open(io.BytesIO(png_data))


def _render_with_svglib(svg_text: str, width: int, height: int) -> Image.Image:
    from svglib.svglib import svg2rlg
    from reportlab.graphics import renderPM
    drawing = svg2rlg(io.BytesIO(svg_text.encode("utf-8")))
    if drawing is None or not drawing.width or not drawing.height:
        raise ValueError("svglib returned an empty drawing")
    scale_x = width / drawing.width
    scale_y = height / drawing.height
    drawing.width = width
    drawing.height = height
    drawing.scale(scale_x, scale_y)
    png_data = renderPM.drawToString(drawing, fmt="PNG", bg=0xFFFFFF)
    return Image.open(io.BytesIO(png_data))


_RENDERERS = (
    ("cairosvg", _render_with_cairosvg),
    ("svglib", _render_with_svglib),
)


def render_svg(svg_text: str, width: int, height: int) -> Image.Image:
    """
    Rasterize SVG text to exactly width×height RGB over a white backdrop.

    Tries cairosvg first, then svglib + reportlab.

    Raises:
        LoadError: if no renderer can draw the source.
    """
    errors = []
    for name, renderer in _RENDERERS:
        try:
            img = renderer(svg_text, width, height)
            img.load()
        except Exception as e:
            logger.debug("SVG renderer %s failed: %s", name, e)
            errors.append(f"{name}: {e}")
            continue

        if img.mode != "RGB":
            bg = Image.new("RGB", img.size, (255, 255, 255))
            rgba = img.convert("RGBA")
            bg.paste(rgba, mask=rgba.split()[3])
            img = bg
        if img.size != (width, height):
            img = img.resize((width, height), Image.LANCZOS)
        logger.debug("SVG rendered with %s at %dx%d", name, width, height)
        return img

    raise LoadError("SVG could not be rendered (" + "; ".join(errors) + ")")


# ═══════════════════════════════════════════════════════════════════════════════
# SAMPLING
# ═══════════════════════════════════════════════════════════════════════════════

def brightness_from_image(img: Image.Image) -> np.ndarray:
    """Per-pixel mean of R, G, B normalized to [0, 1]."""
    rgb = np.asarray(img.convert("RGB"), dtype=np.float64)
    return rgb.sum(axis=2) / (3 * 255.0)


def sample_svg(svg_text: str, target_cols: int = TARGET_COLS) -> BrightnessGrid:
    """
    Sample an SVG into a brightness grid.

    Args:
        svg_text: SVG source.
        target_cols: Fixed grid width; rows are derived from the logo aspect.

    Returns:
        BrightnessGrid with cols, rows, aspect = cols/rows and the
        original SVG width/height.

    Raises:
        LoadError: the source is not parsable or cannot be rendered.
    """
    if not svg_text or not svg_text.strip():
        raise LoadError("SVG source is empty")

    svg_w, svg_h = parse_svg_dimensions(svg_text)
    logo_aspect = svg_w / svg_h

    cols = max(1, int(target_cols))
    rows = grid_rows_for(cols, logo_aspect)

    sized_svg = ensure_svg_size(svg_text, cols, rows)
    img = render_svg(sized_svg, cols, rows)

    values = brightness_from_image(img)
    values.setflags(write=False)

    logger.info(
        "Sampled SVG %gx%g (aspect %.3f) into %dx%d brightness grid",
        svg_w, svg_h, logo_aspect, cols, rows,
    )
    return BrightnessGrid(
        grid=values,
        cols=cols,
        rows=rows,
        aspect=cols / rows,
        svg_width=svg_w,
        svg_height=svg_h,
    )


def sample_svg_file(path: str, target_cols: int = TARGET_COLS) -> BrightnessGrid:
    """Read an SVG file and sample it."""
    try:
        with open(path, "r", encoding="utf-8", errors="ignore") as f:
            svg_text = f.read()
    except OSError as e:
        raise LoadError(f"Cannot read SVG file: {path}") from e
    return sample_svg(svg_text, target_cols)
