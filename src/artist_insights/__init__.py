"""Streaming, social-impact and lyrical-theme analytics for a featured artist."""

__version__ = "0.1.0"
