"""
Logo Motion
Turns an SVG logo into procedural line, dot, ellipse and sparkle artwork,
as static SVG or as a time-driven animation.
"""

__version__ = "1.0.0"
