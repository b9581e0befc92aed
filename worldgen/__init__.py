"""Cube-sphere geometry, fractal noise and heightmap export for planet terrain."""

__version__ = "0.1.0"
__all__ = ["geometry", "noise", "export"]