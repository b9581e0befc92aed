"""Seeded 4D simplex and multi-octave fractal noise for terrain synthesis."""

__all__ = ["fractal"]