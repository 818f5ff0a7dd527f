"""
Logo Motion - Desktop Application
Animated procedural effects for SVG logos.
Built with CustomTkinter

Main entry point — without arguments opens the preview window, otherwise runs
the command line (see `python app.py --help`).
"""

import os
import sys

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from logomotion.cli import main


# ═════════════════════════════════════════════════════════════════════════════════
# ENTRY POINT
# ═════════════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sys.exit(main())
