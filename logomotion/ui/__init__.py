"""
Logo Motion - UI Package
Desktop preview window built from customtkinter mixins.
"""

from logomotion.ui.theme import COLORS, surface_to_image
from logomotion.ui.preview import PreviewMixin
from logomotion.ui.controls import ControlsMixin

__all__ = [
    "COLORS", "surface_to_image",
    "PreviewMixin", "ControlsMixin",
]
