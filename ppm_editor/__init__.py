"""
Plain-text (P3) PPM image editor: grayscale, invert, emboss and motion blur.
"""

__version__ = "1.0.0"
