"""
Logo Motion — Desktop Window
Assembles the sidebar and preview mixins into the main window.
"""

import os
import logging

import customtkinter as ctk

import logomotion.settings as db
from logomotion.effects import EffectId, UnknownEffectError, get_effect
from logomotion.ui.controls import ControlsMixin
from logomotion.ui.preview import PreviewMixin
from logomotion.ui.theme import COLORS

logger = logging.getLogger(__name__)


class LogoMotionApp(ControlsMixin, PreviewMixin, ctk.CTk):
    def __init__(self, logo_path=None, effect=None, params=None):
        super().__init__()

        # ─── Window Setup ────────────────────────────────────────────────
        self.title("Logo Motion — Animated Logo Effects")
        self.geometry("1280x800")
        self.minsize(1000, 640)
        self.configure(fg_color=COLORS["bg_darkest"])
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        # ─── State ───────────────────────────────────────────────────────
        self.sample = None
        self.logo_path = None
        self.effect = effect or self._saved_effect()
        self._ctl_load_params()
        if params:
            self.params.update(params)

        # ─── Build UI ────────────────────────────────────────────────────
        body = ctk.CTkFrame(self, fg_color="transparent")
        body.pack(fill="both", expand=True)
        body.grid_rowconfigure(0, weight=1)
        body.grid_columnconfigure(0, weight=0)  # Sidebar
        body.grid_columnconfigure(1, weight=1)  # Preview

        self._build_preview(body)
        self._build_controls(body)

        logo_path = logo_path or db.get_setting("last_logo", "")
        if logo_path and os.path.isfile(logo_path):
            self._ctl_open_logo(logo_path)

        self._pv_set_mode(self.mode_var.get())
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    @staticmethod
    def _saved_effect():
        try:
            return get_effect(db.get_setting("effect", EffectId.PARTICLE_SCATTER.value))
        except UnknownEffectError:
            return get_effect(EffectId.PARTICLE_SCATTER)

    def _on_close(self):
        """Save params, stop any export, then exit."""
        self._ctl_save_params()
        self._exporter.stop()
        self._pv_stop()
        self.destroy()


def run_app(logo_path=None, effect=None, params=None):
    app = LogoMotionApp(logo_path, effect, params)
    app.mainloop()
