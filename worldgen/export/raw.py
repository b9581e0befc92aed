"""RAW heightmap export for game engine imports."""

from __future__ import annotations

import os
import struct
from enum import Enum
from pathlib import Path
from typing import Mapping, Sequence

from ..geometry.face import CubeFaceId
from .png import _quantize16


class RawExportError(Exception):
    """Raised when a RAW heightmap cannot be written."""


class RawFormat(Enum):
    """Sample layout of a RAW heightmap."""

    R16_LITTLE_ENDIAN = "r16le"
    R16_BIG_ENDIAN = "r16be"
    R32_FLOAT = "r32f"

    @property
    def bytes_per_sample(self) -> int:
        """Number of bytes written per height sample."""
        return 4 if self is RawFormat.R32_FLOAT else 2


def _encode(heights: Sequence[float], fmt: RawFormat, min_height: float, max_height: float) -> bytes:
    count = len(heights)
    if fmt is RawFormat.R32_FLOAT:
        return struct.pack(f"<{count}f", *heights)
    span = max_height - min_height
    values = [_quantize16(h, min_height, span) for h in heights]
    order = "<" if fmt is RawFormat.R16_LITTLE_ENDIAN else ">"
    return struct.pack(f"{order}{count}H", *values)


def export_face_raw(
    heights: Sequence[float],
    path: str | os.PathLike[str],
    format: RawFormat = RawFormat.R16_LITTLE_ENDIAN,
    min_height: float = -1.0,
    max_height: float = 1.0,
) -> None:
    """Write one face's heights as a RAW file.

    The 16-bit formats normalise heights to ``min_height..max_height``;
    the float format writes heights unchanged as little-endian f32.
    """
    if format is not RawFormat.R32_FLOAT and min_height >= max_height:
        raise RawExportError(
            f"Invalid height range: min ({min_height}) >= max ({max_height})"
        )
    payload = _encode(heights, format, min_height, max_height)
    try:
        Path(path).write_bytes(payload)
    except OSError as exc:
        raise RawExportError(f"IO error: {exc}") from exc


def export_planet_raw(
    faces: Mapping[CubeFaceId, Sequence[float]],
    output_dir: str | os.PathLike[str],
    base_name: str,
    format: RawFormat = RawFormat.R16_LITTLE_ENDIAN,
    min_height: float = -1.0,
    max_height: float = 1.0,
) -> None:
    """Write every face as ``{base_name}_{face}.raw`` in ``output_dir``."""
    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RawExportError(f"IO error: {exc}") from exc
    for face_id, heights in faces.items():
        path = out / f"{base_name}_{CubeFaceId(face_id).short_name()}.raw"
        export_face_raw(heights, path, format, min_height, max_height)


def expected_file_size(resolution: int, format: RawFormat) -> int:
    """Size in bytes of one face exported in ``format``."""
    return resolution * resolution * format.bytes_per_sample