"""
Logo Motion — Configuration Constants
Shared defaults for sampling, output sizes, export presets and the app data folder.
"""

import os

# ─── Sampling ────────────────────────────────────────────────────────────────────
# Fixed horizontal resolution of the brightness grid; rows follow the logo aspect.
TARGET_COLS = 300

# Fallback intrinsic size when an SVG declares neither viewBox nor width/height.
FALLBACK_SVG_SIZE = (100.0, 100.0)

# ─── Output ──────────────────────────────────────────────────────────────────────
# SVG coordinate width; the height is derived per logo from its true aspect ratio.
OUTPUT_WIDTH = 1000

# ─── Live Preview ────────────────────────────────────────────────────────────────
PREVIEW_FPS = 24
PREVIEW_MIN_DELAY_MS = 16
PREVIEW_MAX_SIZE = (960, 540)

# ─── Export Presets ──────────────────────────────────────────────────────────────
EXPORT_HEIGHT = 1080

GIF_FPS = 20
GIF_SECONDS = 3
GIF_BACKDROP = "#ffffff"

VIDEO_FPS = 60
VIDEO_SECONDS = 10
VIDEO_BACKDROP = "#00ff00"   # green screen for keying
VIDEO_BITRATE_MBPS = 8

# ─── App Data Folder ─────────────────────────────────────────────────────────────
# LOGOMOTION_HOME wins, then APPDATA (Windows), then the home directory.
APP_DIR = os.environ.get("LOGOMOTION_HOME") or os.path.join(
    os.environ.get("APPDATA", os.path.expanduser("~")), "LogoMotion"
)
SETTINGS_DB_PATH = os.path.join(APP_DIR, "logomotion.db")
