"""
Logo Motion — Controls Sidebar
Logo loading, effect selection, schema-driven sliders and the export actions.
"""

import os
import logging
from tkinter import filedialog, messagebox, colorchooser

import customtkinter as ctk

import logomotion.settings as db
from logomotion.effects import list_effects, get_effect
from logomotion.export import LogoExporter, export_basename, export_svg
from logomotion.mathutils import merge_params
from logomotion.params import clamp_to_schema, static_schema
from logomotion.sampler import LoadError, sample_svg_file
from logomotion.standalone import write_standalone
from logomotion.ui.preview import MODE_MOTION, MODE_STATIC
from logomotion.ui.theme import COLORS

logger = logging.getLogger(__name__)


class ControlsMixin:
    """Mixin that adds the left sidebar."""

    def _build_controls(self, parent):
        side = ctk.CTkScrollableFrame(parent, width=300, fg_color=COLORS["bg_dark"], corner_radius=10)
        side.grid(row=0, column=0, sticky="nsw", padx=(12, 0), pady=12)

        self._exporter = LogoExporter()
        self._slider_vars = {}

        # ═══════════════════════════════════════════════════════════════════════
        # LOGO
        # ═══════════════════════════════════════════════════════════════════════
        self._ctl_lbl(side, "🖼  Logo")
        self._logo_label = ctk.CTkLabel(
            side, text="No SVG loaded", text_color=COLORS["text_secondary"],
            font=ctk.CTkFont(size=10), wraplength=270, justify="left"
        )
        self._logo_label.pack(pady=(0, 4), anchor="w")
        self._ctl_button(side, "📁 Load SVG", self._ctl_load_svg)
        self._ctl_sep(side)

        # ═══════════════════════════════════════════════════════════════════════
        # EFFECT
        # ═══════════════════════════════════════════════════════════════════════
        self._ctl_lbl(side, "✨  Effect")
        titles = [e.title for e in list_effects()]
        self.effect_var = ctk.StringVar(value=self.effect.title)
        ctk.CTkOptionMenu(
            side, values=titles, variable=self.effect_var,
            command=self._ctl_on_effect_change,
            fg_color=COLORS["bg_input"], button_color=COLORS["accent_blue"],
            button_hover_color=COLORS["neon_blue"],
            dropdown_fg_color=COLORS["bg_card"],
            dropdown_hover_color=COLORS["bg_card_hover"],
            font=ctk.CTkFont(size=11), dropdown_font=ctk.CTkFont(size=11),
            height=32, corner_radius=6
        ).pack(fill="x", pady=(0, 8))

        self.mode_var = ctk.StringVar(value=MODE_MOTION)
        ctk.CTkSegmentedButton(
            side, values=[MODE_MOTION, MODE_STATIC], variable=self.mode_var,
            command=self._ctl_on_mode_change,
        ).pack(fill="x", pady=(0, 8))
        self._ctl_sep(side)

        # ═══════════════════════════════════════════════════════════════════════
        # PARAMETERS
        # ═══════════════════════════════════════════════════════════════════════
        self._ctl_lbl(side, "🎚  Parameters")
        self._sliders_frame = ctk.CTkFrame(side, fg_color="transparent")
        self._sliders_frame.pack(fill="x", pady=(0, 4))
        self._color_btn = self._ctl_button(side, "🎨 Color", self._ctl_pick_color)
        self._ctl_button(side, "↺ Reset", self._ctl_reset_params)
        self._ctl_sep(side)

        # ═══════════════════════════════════════════════════════════════════════
        # EXPORT
        # ═══════════════════════════════════════════════════════════════════════
        self._ctl_lbl(side, "💾  Export")
        self._output_dir = db.get_setting("output_dir", "") or os.path.expanduser("~")
        self._path_label = ctk.CTkLabel(
            side, text=self._output_dir, text_color=COLORS["text_secondary"],
            font=ctk.CTkFont(size=10), wraplength=270, justify="left"
        )
        self._path_label.pack(pady=(0, 4), anchor="w")
        self._ctl_button(side, "📁 Change Folder", self._ctl_change_output)
        self._ctl_button(side, "Export SVG", self._ctl_export_svg)
        self._ctl_button(side, "Export Script", self._ctl_export_script)
        self._ctl_button(side, "Export GIF", lambda: self._ctl_export_raster("gif"))
        self._ctl_button(side, "Export Video", lambda: self._ctl_export_raster("mp4"))

        self._stop_btn = ctk.CTkButton(
            side, text="⏹  Stop Export", command=self._exporter.stop,
            fg_color=COLORS["stop_red"], hover_color="#aa2244",
            text_color="white", font=ctk.CTkFont(size=12, weight="bold"),
            height=36, corner_radius=8
        )
        # Packed only while exporting

        self._progress_bar = ctk.CTkProgressBar(
            side, height=10, progress_color=COLORS["accent_blue"],
            fg_color=COLORS["bg_input"], corner_radius=6
        )
        self._progress_bar.set(0)
        self._progress_bar.pack(fill="x", pady=(8, 2))
        self._status_label = ctk.CTkLabel(
            side, text="", font=ctk.CTkFont(size=10),
            text_color=COLORS["text_secondary"], wraplength=270, justify="left"
        )
        self._status_label.pack(anchor="w")

        self._ctl_build_sliders()

    # ─── Small builders ──────────────────────────────────────────────────────────

    def _ctl_lbl(self, parent, text):
        ctk.CTkLabel(
            parent, text=text,
            font=ctk.CTkFont(size=11, weight="bold"), text_color=COLORS["text_primary"]
        ).pack(pady=(0, 3), anchor="w")

    def _ctl_sep(self, parent):
        ctk.CTkFrame(parent, height=1, fg_color=COLORS["divider"]).pack(fill="x", pady=(4, 8))

    def _ctl_button(self, parent, text, command):
        btn = ctk.CTkButton(
            parent, text=text, height=28, corner_radius=6, command=command,
            fg_color=COLORS["bg_input"], hover_color=COLORS["bg_card_hover"],
            text_color=COLORS["text_primary"],
            border_width=1, border_color=COLORS["border"],
            font=ctk.CTkFont(size=11)
        )
        btn.pack(fill="x", pady=(0, 4))
        return btn

    # ═══════════════════════════════════════════════════════════════════════════
    # PARAMETERS
    # ═══════════════════════════════════════════════════════════════════════════

    def _ctl_build_sliders(self):
        for child in self._sliders_frame.winfo_children():
            child.destroy()
        self._slider_vars = {}

        schema = self.effect.get_param_schema()
        if self.mode_var.get() == MODE_STATIC:
            schema = static_schema(schema)

        for spec in schema:
            value = self.params.get(spec.key, spec.default)
            var = ctk.DoubleVar(value=value)
            self._slider_vars[spec.key] = var

            row = ctk.CTkFrame(self._sliders_frame, fg_color="transparent")
            row.pack(fill="x", pady=(0, 2))
            readout = ctk.CTkLabel(row, text=self._ctl_fmt(spec, value),
                                   font=ctk.CTkFont(size=10), text_color=COLORS["text_secondary"])
            ctk.CTkLabel(row, text=spec.label, font=ctk.CTkFont(size=10),
                         text_color=COLORS["text_primary"]).pack(side="left")
            readout.pack(side="right")

            steps = max(1, int(round((spec.max - spec.min) / spec.step)))
            ctk.CTkSlider(
                self._sliders_frame, from_=spec.min, to=spec.max, number_of_steps=steps,
                variable=var, button_color=COLORS["accent_blue"],
                progress_color=COLORS["neon_blue"],
                command=lambda v, s=spec, lbl=readout: self._ctl_on_slider(s, v, lbl),
            ).pack(fill="x", pady=(0, 6))

    @staticmethod
    def _ctl_fmt(spec, value):
        return str(int(round(value))) if spec.is_integer else f"{value:.2f}"

    def _ctl_on_slider(self, spec, value, readout):
        value = int(round(value)) if spec.is_integer else round(value, 4)
        readout.configure(text=self._ctl_fmt(spec, value))
        self.params[spec.key] = value
        self._pv_rebuild()

    def _ctl_pick_color(self):
        result = colorchooser.askcolor(color=self.params.get("color", "#000000"))
        if result and result[1]:
            self.params["color"] = result[1]
            self._pv_rebuild()

    def _ctl_reset_params(self):
        self.params = self.effect.get_default_params()
        self._ctl_build_sliders()
        self._pv_rebuild()

    def _ctl_load_params(self):
        saved = clamp_to_schema(db.load_effect_params(self.effect.effect_id),
                                self.effect.get_param_schema())
        self.params = merge_params(self.effect.get_default_params(), saved)

    def _ctl_save_params(self):
        db.save_effect_params(self.effect.effect_id, self.params)

    # ═══════════════════════════════════════════════════════════════════════════
    # EVENTS
    # ═══════════════════════════════════════════════════════════════════════════

    def _ctl_on_effect_change(self, title):
        self._ctl_save_params()
        self.effect = get_effect(title)
        self._ctl_load_params()
        db.save_setting("effect", self.effect.effect_id.value)
        self._ctl_build_sliders()
        self._pv_rebuild()

    def _ctl_on_mode_change(self, mode):
        self._ctl_build_sliders()
        self._pv_set_mode(mode)

    def _ctl_load_svg(self):
        path = filedialog.askopenfilename(filetypes=[("SVG files", "*.svg"), ("All files", "*.*")])
        if not path:
            return
        self._ctl_open_logo(path)

    def _ctl_open_logo(self, path):
        try:
            self.sample = sample_svg_file(path)
        except LoadError as e:
            logger.warning("Could not load %s: %s", path, e)
            messagebox.showerror("Invalid SVG", str(e))
            return
        self.logo_path = path
        self._logo_label.configure(
            text=f"{os.path.basename(path)}  ({self.sample.cols}×{self.sample.rows} grid)"
        )
        db.save_setting("last_logo", path)
        self._pv_rebuild()

    def _ctl_change_output(self):
        folder = filedialog.askdirectory(initialdir=self._output_dir)
        if folder:
            self._output_dir = folder
            self._path_label.configure(text=folder)
            db.save_setting("output_dir", folder)

    # ═══════════════════════════════════════════════════════════════════════════
    # EXPORT
    # ═══════════════════════════════════════════════════════════════════════════

    def _ctl_output_path(self, ext):
        name = export_basename(self.logo_path or "logo", self.effect)
        return os.path.join(self._output_dir, f"{name}.{ext}")

    def _ctl_require_logo(self):
        if self.sample is None:
            messagebox.showwarning("No Logo", "Load an SVG logo first.")
            return False
        return True

    def _ctl_export_svg(self):
        if not self._ctl_require_logo():
            return
        try:
            path = export_svg(self.effect, self.sample, self.params, self._ctl_output_path("svg"))
        except OSError as e:
            logger.error("SVG export failed: %s", e)
            messagebox.showerror("Export Failed", str(e))
            return
        self._ctl_on_progress(1.0, f"SVG saved to:\n{path}")

    def _ctl_export_script(self):
        if not self._ctl_require_logo():
            return
        try:
            path = write_standalone(self._ctl_output_path("py"), self.effect, self.sample,
                                    self.params, logo_name=os.path.basename(self.logo_path or ""))
        except OSError as e:
            logger.error("Script export failed: %s", e)
            messagebox.showerror("Export Failed", str(e))
            return
        self._ctl_on_progress(1.0, f"Script saved to:\n{path}")

    def _ctl_export_raster(self, ext):
        if not self._ctl_require_logo():
            return
        if self._exporter.is_exporting:
            messagebox.showwarning("Busy", "Already exporting. Please wait or stop.")
            return

        def on_progress(pct, text):
            self.after(0, lambda: self._ctl_on_progress(pct, text))

        def on_done(success, message):
            self.after(0, lambda: self._ctl_on_done(success, message))

        start = self._exporter.export_gif if ext == "gif" else self._exporter.export_video
        start(self.effect, self.sample, dict(self.params), self._ctl_output_path(ext),
              progress_callback=on_progress, done_callback=on_done)
        self._stop_btn.pack(fill="x", pady=(4, 0), before=self._progress_bar)

    def _ctl_on_progress(self, pct: float, text: str):
        self._progress_bar.set(pct)
        self._status_label.configure(text=text, text_color=COLORS["neon_blue"])

    def _ctl_on_done(self, success: bool, message: str):
        self._stop_btn.pack_forget()
        color = COLORS["success"] if success else COLORS["error"]
        self._status_label.configure(text=message, text_color=color)
        if not success:
            self._progress_bar.set(0)
