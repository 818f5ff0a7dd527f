"""
Logo Motion - Theme Constants & Utilities
Shared color palette and the helper that turns a drawing surface into a
displayable image.
"""

from PIL import Image

# ─── Theme Colors ────────────────────────────────────────────────────────────────
COLORS = {
    "bg_darkest":       "#060918",
    "bg_dark":          "#0a0e27",
    "bg_card":          "#0f1538",
    "bg_card_hover":    "#151d4a",
    "bg_input":         "#0c1230",
    "border":           "#1a2555",
    "neon_blue":        "#00d4ff",
    "accent_blue":      "#0066ff",
    "text_primary":     "#e8eaff",
    "text_secondary":   "#8890b5",
    "text_muted":       "#4a5280",
    "success":          "#00ff88",
    "error":            "#ff4466",
    "stop_red":         "#cc3355",
    "divider":          "#1a2555",
    "preview_bg":       "#ffffff",
}

# Backdrop the preview composites the effect onto (matches the GIF export)
PREVIEW_BACKDROP = "#ffffff"


def surface_to_image(surface, backdrop=PREVIEW_BACKDROP, display_size=None):
    """Flatten a Surface onto a backdrop as an RGB PIL image, optionally resized."""
    img = Image.fromarray(surface.composite_over(backdrop))
    if display_size and display_size != img.size:
        img = img.resize(display_size, Image.LANCZOS)
    return img
