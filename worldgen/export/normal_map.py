"""Normal map generation from heightmaps using a Sobel filter."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from ..geometry.face import CubeFaceId
from .png import PngExportError, write_png

Vec3 = tuple[float, float, float]


class NormalMapError(Exception):
    """Raised when a normal map cannot be generated or written."""


@dataclass
class NormalMapOptions:
    """Normal map settings; higher ``strength`` gives stronger normals."""

    strength: float = 2.0


def _height_at_clamped(heights: Sequence[float], resolution: int, x: int, y: int) -> float:
    xi = min(max(x, 0), resolution - 1)
    yi = min(max(y, 0), resolution - 1)
    return heights[yi * resolution + xi]


def normal_from_sobel(
    heights: Sequence[float], resolution: int, x: int, y: int, strength: float
) -> Vec3:
    """Return the unit normal at pixel ``(x, y)`` from Sobel gradients.

    Pixels outside the face are clamped to the nearest edge pixel.
    """

    def h(dx: int, dy: int) -> float:
        return _height_at_clamped(heights, resolution, x + dx, y + dy)

    tl, tc, tr = h(-1, -1), h(0, -1), h(1, -1)
    ml, mr = h(-1, 0), h(1, 0)
    bl, bc, br = h(-1, 1), h(0, 1), h(1, 1)

    gx = -tl + tr - 2.0 * ml + 2.0 * mr - bl + br
    gy = -tl - 2.0 * tc - tr + bl + 2.0 * bc + br

    nx, ny, nz = -gx * strength, -gy * strength, 1.0
    length = math.sqrt(nx * nx + ny * ny + nz * nz)
    if not math.isfinite(length) or length <= 0.0:
        return (0.0, 0.0, 0.0)
    return (nx / length, ny / length, nz / length)


def encode_normal_rgb8(n: Sequence[float]) -> tuple[int, int, int]:
    """Encode a unit normal into RGB bytes, mapping [-1, 1] to [0, 255]."""

    def channel(c: float) -> int:
        value = c * 0.5 + 0.5
        if math.isnan(value):
            return 0
        return int(min(max(value, 0.0), 1.0) * 255.0)

    x, y, z = n
    return channel(x), channel(y), channel(z)


def export_face_normal_map_png(
    resolution: int,
    heights: Sequence[float],
    path: str | os.PathLike[str],
    options: NormalMapOptions | None = None,
) -> None:
    """Write one face's normal map as an RGB PNG with Z out of the image."""
    options = options or NormalMapOptions()
    strength = options.strength
    if not math.isfinite(strength) or strength <= 0.0:
        raise NormalMapError(f"Invalid normal strength: {strength} (must be > 0)")
    if len(heights) != resolution * resolution:
        raise NormalMapError(
            f"height data length {len(heights)} != expected {resolution * resolution}"
        )

    samples: list[int] = []
    for y in range(resolution):
        for x in range(resolution):
            samples.extend(
                encode_normal_rgb8(normal_from_sobel(heights, resolution, x, y, strength))
            )
    try:
        write_png(path, resolution, resolution, samples, 3, 8)
    except PngExportError as exc:
        raise NormalMapError(str(exc)) from exc


def export_planet_normal_maps_png(
    faces: Mapping[CubeFaceId, Sequence[float]],
    resolution: int,
    output_dir: str | os.PathLike[str],
    base_name: str,
    options: NormalMapOptions | None = None,
) -> None:
    """Write every face as ``{base_name}_normal_{face}.png`` in ``output_dir``."""
    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise NormalMapError(f"IO error: {exc}") from exc
    for face_id, heights in faces.items():
        path = out / f"{base_name}_normal_{CubeFaceId(face_id).short_name()}.png"
        export_face_normal_map_png(resolution, heights, path, options)