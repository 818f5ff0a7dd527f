"""
Logo Motion — Raster Drawing Surface
A small canvas-like drawing target backed by a numpy RGBA buffer and OpenCV
anti-aliased primitives. Effects draw in logical coordinates; `scale` maps
them onto the pixel buffer (e.g. a 1000px-wide layout exported at 1080p).

The buffer holds premultiplied RGBA on a transparent background, so a backdrop
can be composited underneath after drawing.

This module is copied verbatim into standalone export scripts: it may only
import numpy and cv2.
"""

import math

import cv2
import numpy as np

# Sub-pixel precision for cv2 drawing calls (coordinates × 2**_SHIFT).
_SHIFT = 4
_ONE = 1 << _SHIFT


def hex_to_rgb(hex_color):
    """Convert '#rrggbb' (or '#rgb') to an (R, G, B) tuple."""
    hex_color = hex_color.strip().lstrip('#')
    if len(hex_color) == 3:
        hex_color = ''.join(ch * 2 for ch in hex_color)
    if len(hex_color) != 6:
        raise ValueError(f"Invalid hex color: #{hex_color}")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def _to_rgb(color):
    if isinstance(color, str):
        return hex_to_rgb(color)
    return tuple(int(c) for c in color[:3])


class Surface:
    """
    Fixed-resolution drawing surface.

    Args:
        width, height: Logical size effects draw into.
        scale: Pixel scale applied to every coordinate and size.
    """

    def __init__(self, width, height, scale=1.0):
        self.width = width
        self.height = height
        self.scale = float(scale)
        self.pixel_width = max(1, int(round(width * self.scale)))
        self.pixel_height = max(1, int(round(height * self.scale)))
        self.pixels = np.zeros((self.pixel_height, self.pixel_width, 4), dtype=np.uint8)
        self._color_cache = {}

    # ── Helpers ──

    def _rgba(self, color):
        key = color if isinstance(color, str) else tuple(color)
        rgba = self._color_cache.get(key)
        if rgba is None:
            r, g, b = _to_rgb(color)
            rgba = (r, g, b, 255)
            self._color_cache[key] = rgba
        return rgba

    def _fixed(self, v):
        return int(round(v * self.scale * _ONE))

    # ── Drawing ──

    def clear(self):
        """Erase everything back to transparent."""
        self.pixels[:] = 0

    def stroke_line(self, x1, y1, x2, y2, width, color):
        """Straight segment with butt caps; width may be fractional."""
        dx = x2 - x1
        dy = y2 - y1
        length = math.hypot(dx, dy)
        if length <= 0 or width <= 0:
            return
        nx = -dy / length * width / 2
        ny = dx / length * width / 2
        pts = np.array([
            [self._fixed(x1 + nx), self._fixed(y1 + ny)],
            [self._fixed(x2 + nx), self._fixed(y2 + ny)],
            [self._fixed(x2 - nx), self._fixed(y2 - ny)],
            [self._fixed(x1 - nx), self._fixed(y1 - ny)],
        ], dtype=np.int32)
        cv2.fillConvexPoly(self.pixels, pts, self._rgba(color), cv2.LINE_AA, _SHIFT)

    def fill_ellipse(self, cx, cy, rx, ry, color):
        """Axis-aligned filled ellipse."""
        if rx <= 0 or ry <= 0:
            return
        cv2.ellipse(
            self.pixels,
            (self._fixed(cx), self._fixed(cy)),
            (max(1, self._fixed(rx)), max(1, self._fixed(ry))),
            0, 0, 360, self._rgba(color), -1, cv2.LINE_AA, _SHIFT,
        )

    def fill_circle(self, cx, cy, r, color):
        """Filled circle."""
        if r <= 0:
            return
        cv2.circle(
            self.pixels,
            (self._fixed(cx), self._fixed(cy)),
            max(1, self._fixed(r)),
            self._rgba(color), -1, cv2.LINE_AA, _SHIFT,
        )

    def fill_polygon(self, points, color):
        """Filled polygon from a list of (x, y) points."""
        if len(points) < 3:
            return
        pts = np.array([[self._fixed(x), self._fixed(y)] for x, y in points], dtype=np.int32)
        cv2.fillPoly(self.pixels, [pts], self._rgba(color), cv2.LINE_AA, _SHIFT)

    # ── Output ──

    def composite_over(self, backdrop):
        """
        Flatten onto a solid backdrop placed beneath the drawn pixels.

        Returns:
            RGB uint8 array of shape (pixel_height, pixel_width, 3).
        """
        bg = np.array(_to_rgb(backdrop), dtype=np.float32)
        fg = self.pixels[..., :3].astype(np.float32)
        alpha = self.pixels[..., 3:4].astype(np.float32) / 255.0
        out = fg + bg[np.newaxis, np.newaxis, :] * (1.0 - alpha)
        return np.clip(out, 0, 255).astype(np.uint8)
