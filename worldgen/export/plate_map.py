"""Plate map export for visualising tectonic plates and their boundaries."""

from __future__ import annotations

import math
import os
import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from ..geometry.face import CubeFaceId
from .png import PngExportError, write_png

RGB = tuple[int, int, int]

_GOLDEN_RATIO = 0.618033988749895
_PLATE_COLOR_SEED = 12345


class CrustType(Enum):
    """Kind of crust a tectonic plate carries."""

    CONTINENTAL = "continental"
    OCEANIC = "oceanic"


class BoundaryType(Enum):
    """Relative motion of two plates along their shared boundary."""

    CONVERGENT = "convergent"
    DIVERGENT = "divergent"
    TRANSFORM = "transform"


class PlateMapError(Exception):
    """Raised when a plate map cannot be produced or written."""


@dataclass
class PlateMapOptions:
    """Plate map settings."""

    show_boundaries: bool = True
    boundary_width: int = 2


def _to_u8(value: float) -> int:
    """Convert to a byte the way a saturating float-to-u8 cast does."""
    if math.isnan(value):
        return 0
    return int(min(max(value, 0.0), 255.0))


def hsv_to_rgb(h: float, s: float, v: float) -> RGB:
    """Convert an HSV colour with components in [0, 1] to RGB bytes."""
    h *= 6.0
    i = math.floor(h)
    f = h - i
    p = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))

    sector = int(math.fmod(i, 6))
    if sector == 0:
        r, g, b = v, t, p
    elif sector == 1:
        r, g, b = q, v, p
    elif sector == 2:
        r, g, b = p, v, t
    elif sector == 3:
        r, g, b = p, q, v
    elif sector == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q
    return _to_u8(r * 255.0), _to_u8(g * 255.0), _to_u8(b * 255.0)


_BOUNDARY_COLORS = {
    BoundaryType.CONVERGENT: (255, 50, 50),
    BoundaryType.DIVERGENT: (50, 100, 255),
    BoundaryType.TRANSFORM: (50, 255, 50),
}


def boundary_color(boundary_type: BoundaryType) -> RGB:
    """Colour of a boundary: red convergent, blue divergent, green transform."""
    return _BOUNDARY_COLORS[boundary_type]


def generate_plate_colors(num_plates: int, seed: int) -> list[RGB]:
    """Generate visually distinct colours, spreading hues by the golden ratio."""
    rng = random.Random(seed)
    hue = rng.random()
    colors = []
    for _ in range(num_plates):
        hue = (hue + _GOLDEN_RATIO) % 1.0
        saturation = 0.5 + rng.random() * 0.4
        value = 0.6 + rng.random() * 0.3
        colors.append(hsv_to_rgb(hue, saturation, value))
    return colors


def generate_plate_colors_by_type(crust_types: Iterable[CrustType], seed: int) -> list[RGB]:
    """Colour plates by crust: earth tones for continental, blues for oceanic."""
    rng = random.Random(seed)
    colors = []
    for crust in crust_types:
        if crust is CrustType.CONTINENTAL:
            hue = 0.08 + rng.random() * 0.12
            saturation = 0.3 + rng.random() * 0.4
            value = 0.5 + rng.random() * 0.4
        else:
            hue = 0.5 + rng.random() * 0.15
            saturation = 0.4 + rng.random() * 0.4
            value = 0.3 + rng.random() * 0.4
        colors.append(hsv_to_rgb(hue, saturation, value))
    return colors


def export_face_plate_map(
    resolution: int,
    plate_ids: Sequence[int] | None,
    crust_types: Sequence[CrustType],
    path: str | os.PathLike[str],
    options: PlateMapOptions | None = None,
) -> None:
    """Write one face as an RGB PNG with every plate in its own colour."""
    if plate_ids is None:
        raise PlateMapError("No tectonic data available - run tectonic stage first")
    expected = resolution * resolution
    if len(plate_ids) != expected:
        raise PlateMapError(f"plate id data length {len(plate_ids)} != expected {expected}")

    colors = generate_plate_colors_by_type(crust_types, _PLATE_COLOR_SEED)
    samples: list[int] = []
    for plate_id in plate_ids:
        if not 0 <= plate_id < len(colors):
            raise PlateMapError(f"Plate ID {plate_id} out of range")
        samples.extend(colors[plate_id])
    try:
        write_png(path, resolution, resolution, samples, 3, 8)
    except PngExportError as exc:
        raise PlateMapError(str(exc)) from exc


def export_planet_plate_map(
    faces: Mapping[CubeFaceId, Sequence[int] | None],
    resolution: int,
    crust_types: Sequence[CrustType] | None,
    output_dir: str | os.PathLike[str],
    base_name: str,
    options: PlateMapOptions | None = None,
) -> None:
    """Write every face as ``{base_name}_{face}.png`` in ``output_dir``."""
    if crust_types is None:
        raise PlateMapError("No tectonic data available - run tectonic stage first")
    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PlateMapError(f"IO error: {exc}") from exc
    for face_id, plate_ids in faces.items():
        path = out / f"{base_name}_{CubeFaceId(face_id).short_name()}.png"
        export_face_plate_map(resolution, plate_ids, crust_types, path, options)