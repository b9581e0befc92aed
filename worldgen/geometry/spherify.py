"""Analytical cube-to-sphere mapping with low area distortion."""

from __future__ import annotations

import math
from typing import Sequence

Vec3 = tuple[float, float, float]


def spherify_point(cube_pos: Sequence[float]) -> Vec3:
    """Map a point on the unit cube surface onto the unit sphere.

    This gives a more uniform distribution than plain normalisation,
    reducing area distortion near the cube corners.
    """
    x, y, z = cube_pos
    x2, y2, z2 = x * x, y * y, z * z
    return (
        x * math.sqrt(max(1.0 - y2 / 2.0 - z2 / 2.0 + y2 * z2 / 3.0, 0.0)),
        y * math.sqrt(max(1.0 - x2 / 2.0 - z2 / 2.0 + x2 * z2 / 3.0, 0.0)),
        z * math.sqrt(max(1.0 - x2 / 2.0 - y2 / 2.0 + x2 * y2 / 3.0, 0.0)),
    )