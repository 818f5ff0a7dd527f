"""
Logo Motion — Live Preview Panel
Hosts the AnimationDriver on Tk's `after` loop and shows either the animated
effect or its static SVG snapshot.
"""

import time
import logging

import customtkinter as ctk
from PIL import ImageTk

from logomotion.driver import AnimationDriver, PreviewController
from logomotion.sampler import LoadError, output_size, render_svg
from logomotion.ui.theme import COLORS, surface_to_image

logger = logging.getLogger(__name__)

MODE_MOTION = "Motion"
MODE_STATIC = "Static"


class PreviewMixin:
    """Mixin that adds the preview area. Expects self.sample and self.effect."""

    def _build_preview(self, parent):
        frame = ctk.CTkFrame(parent, fg_color=COLORS["bg_card"], corner_radius=10)
        frame.grid(row=0, column=1, sticky="nsew", padx=(8, 12), pady=12)
        frame.grid_rowconfigure(0, weight=1)
        frame.grid_columnconfigure(0, weight=1)

        self._pv_label = ctk.CTkLabel(
            frame, text="Load an SVG logo to start",
            fg_color=COLORS["preview_bg"], text_color=COLORS["text_muted"],
            font=ctk.CTkFont(size=14), corner_radius=6,
        )
        self._pv_label.grid(row=0, column=0, sticky="nsew", padx=10, pady=(10, 4))

        self._pv_fps_label = ctk.CTkLabel(
            frame, text="", font=ctk.CTkFont(size=9), text_color=COLORS["text_muted"]
        )
        self._pv_fps_label.grid(row=1, column=0, sticky="e", padx=12, pady=(0, 6))

        self._pv_photo = None
        self._pv_mode = MODE_MOTION
        self._pv_controller = PreviewController(self.effect)
        self._pv_driver = AnimationDriver(self.after, self._pv_on_frame, cancel=self.after_cancel)

    # ═══════════════════════════════════════════════════════════════════════════
    # STATE
    # ═══════════════════════════════════════════════════════════════════════════

    def _pv_rebuild(self):
        """Re-init the effect after any change of logo, effect or params."""
        self._pv_controller.effect = self.effect
        self._pv_controller.rebuild(self.sample, self.params)
        if self._pv_mode == MODE_STATIC:
            self._pv_show_static()

    def _pv_set_mode(self, mode):
        self._pv_mode = mode
        if mode == MODE_STATIC:
            self._pv_driver.pause()
            self._pv_show_static()
        elif self._pv_driver.elapsed > 0:
            self._pv_driver.resume()
        else:
            self._pv_driver.start()

    def _pv_stop(self):
        self._pv_driver.stop()

    # ═══════════════════════════════════════════════════════════════════════════
    # DRAWING
    # ═══════════════════════════════════════════════════════════════════════════

    def _pv_display_size(self, surface_w, surface_h):
        box_w = self._pv_label.winfo_width()
        box_h = self._pv_label.winfo_height()
        if box_w < 100 or box_h < 100:
            return surface_w, surface_h
        fit = min(box_w / surface_w, box_h / surface_h)
        return max(1, int(surface_w * fit)), max(1, int(surface_h * fit))

    def _pv_show_image(self, img):
        photo = ImageTk.PhotoImage(img)
        self._pv_photo = photo  # Keep reference
        self._pv_label.configure(image=photo, text="")

    def _pv_on_frame(self, t):
        t_start = time.time()
        surface = self._pv_controller.render(t)
        if surface is None:
            return
        size = self._pv_display_size(surface.pixel_width, surface.pixel_height)
        self._pv_show_image(surface_to_image(surface, display_size=size))

        elapsed = time.time() - t_start
        fps_display = 1.0 / elapsed if elapsed > 0 else 0
        self._pv_fps_label.configure(text=f"{fps_display:.0f} preview fps")

    def _pv_show_static(self):
        """Rasterize the static SVG snapshot for display."""
        if self.sample is None:
            return
        width, height = output_size(self.sample)
        svg = self.effect.generate(self.sample, self.params, width, height)
        display_w, display_h = self._pv_display_size(width, height)
        try:
            img = render_svg(svg, display_w, display_h)
        except LoadError as e:
            logger.debug("Static preview render failed: %s", e)
            self._pv_label.configure(image=None, text="Static preview unavailable")
            return
        self._pv_show_image(img)
        self._pv_fps_label.configure(text="static snapshot")
