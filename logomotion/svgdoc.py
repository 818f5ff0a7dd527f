"""
Logo Motion — SVG Output Helpers
Builds the self-contained SVG documents returned by every static generator.
"""

from typing import Iterable


def fmt(value: float, digits: int = 1) -> str:
    """Fixed-point number for SVG attributes and path data."""
    return f"{value:.{digits}f}"


def svg_document(width, height, elements: Iterable[str]) -> str:
    """
    Wrap elements in an <svg> root whose width/height/viewBox match the output
    size exactly. The background rect is transparent.
    """
    body = "\n  ".join(elements)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">\n'
        f'  <rect width="{width}" height="{height}" fill="none"/>\n'
        f'  {body}\n'
        f'</svg>'
    )


def stroked_path(d: str, color: str, stroke_width: float, digits: int = 2) -> str:
    """Single unfilled path with butt caps."""
    return (
        f'<path d="{d}" stroke="{color}" stroke-width="{fmt(stroke_width, digits)}" '
        f'stroke-linecap="butt" fill="none"/>'
    )
