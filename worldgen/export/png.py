"""PNG export of heightmaps, scalar fields and masks."""

from __future__ import annotations

import math
import os
import struct
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from ..geometry.face import CubeFaceId

_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_COLOR_TYPES = {1: 0, 2: 4, 3: 2, 4: 6}
_CHANNELS_BY_COLOR_TYPE = {v: k for k, v in _COLOR_TYPES.items()}


class PngExportError(Exception):
    """Raised when a PNG cannot be written or read."""


@dataclass
class PngExportOptions:
    """Height range used to normalise heights into 16-bit values."""

    min_height: float = -1.0
    max_height: float = 1.0

    @classmethod
    def auto_range(cls, heights: Iterable[float]) -> PngExportOptions:
        """Options whose range is the minimum and maximum of ``heights``."""
        values = list(heights)
        if not values:
            raise ValueError("cannot compute a height range of no heights")
        return cls(min_height=min(values), max_height=max(values))


def _chunk(kind: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(kind + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", crc)


def write_png(
    path: str | os.PathLike[str],
    width: int,
    height: int,
    data: Sequence[int],
    channels: int,
    bit_depth: int,
) -> None:
    """Write row-major samples as a PNG with 1-4 channels at 8 or 16 bits."""
    if channels not in _COLOR_TYPES:
        raise PngExportError(f"unsupported channel count: {channels}")
    if bit_depth not in (8, 16):
        raise PngExportError(f"unsupported bit depth: {bit_depth}")
    if width < 1 or height < 1:
        raise PngExportError(f"invalid image size: {width}x{height}")
    row_len = width * channels
    if len(data) != row_len * height:
        raise PngExportError(
            f"sample count {len(data)} != expected {row_len * height}"
        )
    limit = (1 << bit_depth) - 1
    if any(not 0 <= v <= limit for v in data):
        raise PngExportError(f"sample out of range for {bit_depth}-bit image")

    raw = bytearray()
    for start in range(0, len(data), row_len):
        row = data[start:start + row_len]
        raw.append(0)
        if bit_depth == 8:
            raw.extend(bytes(row))
        else:
            raw.extend(struct.pack(f">{row_len}H", *row))

    header = struct.pack(
        ">IIBBBBB", width, height, bit_depth, _COLOR_TYPES[channels], 0, 0, 0
    )
    try:
        with open(path, "wb") as fh:
            fh.write(_SIGNATURE)
            fh.write(_chunk(b"IHDR", header))
            fh.write(_chunk(b"IDAT", zlib.compress(bytes(raw))))
            fh.write(_chunk(b"IEND", b""))
    except OSError as exc:
        raise PngExportError(f"IO error: {exc}") from exc


def _paeth(a: int, b: int, c: int) -> int:
    p = a + b - c
    pa, pb, pc = abs(p - a), abs(p - b), abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    return b if pb <= pc else c


def _unfilter(raw: bytes, height: int, stride: int, bpp: int) -> bytes:
    out = bytearray()
    prev = bytearray(stride)
    pos = 0
    for _ in range(height):
        if pos + 1 + stride > len(raw):
            raise PngExportError("truncated image data")
        kind = raw[pos]
        line = bytearray(raw[pos + 1:pos + 1 + stride])
        pos += 1 + stride
        for idx, value in enumerate(line):
            left = line[idx - bpp] if idx >= bpp else 0
            up = prev[idx]
            up_left = prev[idx - bpp] if idx >= bpp else 0
            if kind == 0:
                pred = 0
            elif kind == 1:
                pred = left
            elif kind == 2:
                pred = up
            elif kind == 3:
                pred = (left + up) // 2
            elif kind == 4:
                pred = _paeth(left, up, up_left)
            else:
                raise PngExportError(f"unknown filter type: {kind}")
            line[idx] = (value + pred) & 0xFF
        out.extend(line)
        prev = line
    return bytes(out)


def read_png(path: str | os.PathLike[str]) -> tuple[int, int, int, int, list[int]]:
    """Read a non-interlaced 8- or 16-bit PNG.

    Returns ``(width, height, channels, bit_depth, samples)`` with samples
    in row-major order.
    """
    try:
        blob = Path(path).read_bytes()
    except OSError as exc:
        raise PngExportError(f"IO error: {exc}") from exc
    if not blob.startswith(_SIGNATURE):
        raise PngExportError("not a PNG file")

    pos = len(_SIGNATURE)
    header = None
    idat = bytearray()
    while pos + 8 <= len(blob):
        (length,) = struct.unpack(">I", blob[pos:pos + 4])
        kind = blob[pos + 4:pos + 8]
        payload = blob[pos + 8:pos + 8 + length]
        crc_bytes = blob[pos + 8 + length:pos + 12 + length]
        if len(payload) != length or len(crc_bytes) != 4:
            raise PngExportError("truncated chunk")
        if zlib.crc32(kind + payload) & 0xFFFFFFFF != struct.unpack(">I", crc_bytes)[0]:
            raise PngExportError(f"CRC mismatch in {kind!r} chunk")
        pos += 12 + length
        if kind == b"IHDR":
            header = struct.unpack(">IIBBBBB", payload)
        elif kind == b"IDAT":
            idat.extend(payload)
        elif kind == b"IEND":
            break
    if header is None:
        raise PngExportError("missing IHDR chunk")

    width, height, bit_depth, color_type, _, _, interlace = header
    if bit_depth not in (8, 16) or color_type not in _CHANNELS_BY_COLOR_TYPE:
        raise PngExportError(f"unsupported format: depth {bit_depth}, color type {color_type}")
    if interlace:
        raise PngExportError("interlaced images are not supported")

    channels = _CHANNELS_BY_COLOR_TYPE[color_type]
    bpp = channels * bit_depth // 8
    try:
        raw = zlib.decompress(bytes(idat))
    except zlib.error as exc:
        raise PngExportError(f"corrupt image data: {exc}") from exc
    pixels = _unfilter(raw, height, width * bpp, bpp)
    if bit_depth == 8:
        samples = list(pixels)
    else:
        samples = list(struct.unpack(f">{len(pixels) // 2}H", pixels))
    return width, height, channels, bit_depth, samples


def _quantize16(value: float, min_value: float, span: float) -> int:
    normalized = (value - min_value) / span
    if math.isnan(normalized):
        return 0
    return int(min(max(normalized, 0.0), 1.0) * 65535.0)


def _check_length(kind: str, data: Sequence, resolution: int) -> None:
    expected = resolution * resolution
    if len(data) != expected:
        raise PngExportError(f"{kind} data length {len(data)} != expected {expected}")


def export_face_scalar_png_f32(
    resolution: int,
    data: Sequence[float],
    path: str | os.PathLike[str],
    min_value: float,
    max_value: float,
) -> None:
    """Write a row-major scalar field as a 16-bit grayscale PNG."""
    if min_value >= max_value:
        raise PngExportError(
            f"Invalid height range: min ({min_value}) >= max ({max_value})"
        )
    _check_length("scalar", data, resolution)
    span = max_value - min_value
    samples = [_quantize16(v, min_value, span) for v in data]
    write_png(path, resolution, resolution, samples, 1, 16)


def export_face_png(
    resolution: int,
    heights: Sequence[float],
    path: str | os.PathLike[str],
    options: PngExportOptions,
) -> None:
    """Write one face's heights as a 16-bit grayscale PNG."""
    export_face_scalar_png_f32(
        resolution, heights, path, options.min_height, options.max_height
    )


def export_planet_png(
    faces: Mapping[CubeFaceId, Sequence[float]],
    resolution: int,
    output_dir: str | os.PathLike[str],
    base_name: str,
    options: PngExportOptions,
) -> None:
    """Write every face as ``{base_name}_{face}.png`` in ``output_dir``."""
    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PngExportError(f"IO error: {exc}") from exc
    for face_id, heights in faces.items():
        path = out / f"{base_name}_{CubeFaceId(face_id).short_name()}.png"
        export_face_png(resolution, heights, path, options)


def export_face_mask_png_u8(
    resolution: int, data: Sequence[int], path: str | os.PathLike[str]
) -> None:
    """Write a row-major byte mask as an 8-bit grayscale PNG."""
    _check_length("mask", data, resolution)
    write_png(path, resolution, resolution, data, 1, 8)