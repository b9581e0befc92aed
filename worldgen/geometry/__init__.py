"""Cube face identifiers and the cube-to-sphere spherification mapping."""

__all__ = ["face", "spherify"]