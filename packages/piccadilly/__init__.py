"""Piccadilly - animated images with random frame timing."""

__version__ = "0.1.0"
