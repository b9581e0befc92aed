import pytest

from worldgen.export.png import (
    PngExportError,
    PngExportOptions,
    export_face_mask_png_u8,
    export_face_png,
    export_face_scalar_png_f32,
    export_planet_png,
    read_png,
    write_png,
)
from worldgen.geometry.face import CubeFaceId


def test_export_face_png(tmp_path):
    res = 64
    heights = [(x + y) / 126.0 * 2.0 - 1.0 for y in range(res) for x in range(res)]
    path = tmp_path / "test.png"
    export_face_png(res, heights, path, PngExportOptions())
    assert path.stat().st_size > 0
    width, height, channels, depth, samples = read_png(path)
    assert (width, height, channels, depth) == (64, 64, 1, 16)
    assert samples[0] == 0
    assert samples[-1] == 65535


def test_export_planet_png(tmp_path):
    res = 32
    faces = {face: [0.0] * (res * res) for face in CubeFaceId.all()}
    export_planet_png(faces, res, tmp_path, "planet", PngExportOptions())
    for face in CubeFaceId.all():
        assert (tmp_path / f"planet_{face.short_name()}.png").exists()


def test_invalid_height_range(tmp_path):
    options = PngExportOptions(min_height=1.0, max_height=-1.0)
    with pytest.raises(PngExportError):
        export_face_png(16, [0.0] * 256, tmp_path / "test.png", options)


def test_auto_range():
    heights = [0.0] * 256
    heights[0] = -0.5
    heights[255] = 0.75
    options = PngExportOptions.auto_range(heights)
    assert options.min_height == -0.5
    assert options.max_height == 0.75


def test_auto_range_empty():
    with pytest.raises(ValueError):
        PngExportOptions.auto_range([])


def test_scalar_quantization(tmp_path):
    path = tmp_path / "scalar.png"
    export_face_scalar_png_f32(2, [-1.0, 0.0, 1.0, 5.0], path, -1.0, 1.0)
    _, _, _, _, samples = read_png(path)
    assert samples == [0, 32767, 65535, 65535]


def test_scalar_length_mismatch(tmp_path):
    with pytest.raises(PngExportError):
        export_face_scalar_png_f32(4, [0.0] * 3, tmp_path / "s.png", 0.0, 1.0)


def test_mask_roundtrip(tmp_path):
    data = [0, 255, 128, 7]
    path = tmp_path / "mask.png"
    export_face_mask_png_u8(2, data, path)
    assert read_png(path) == (2, 2, 1, 8, data)


def test_mask_length_mismatch(tmp_path):
    with pytest.raises(PngExportError):
        export_face_mask_png_u8(2, [0, 1, 2], tmp_path / "mask.png")


def test_rgb_roundtrip(tmp_path):
    data = [10, 20, 30, 40, 50, 60, 70, 80, 90, 255, 0, 1]
    path = tmp_path / "rgb.png"
    write_png(path, 2, 2, data, 3, 8)
    assert read_png(path) == (2, 2, 3, 8, data)


def test_16bit_roundtrip(tmp_path):
    data = [0, 1, 256, 65535, 40000, 12345]
    path = tmp_path / "g16.png"
    write_png(path, 3, 2, data, 1, 16)
    assert read_png(path) == (3, 2, 1, 16, data)


def test_png_signature(tmp_path):
    path = tmp_path / "sig.png"
    write_png(path, 1, 1, [0], 1, 8)
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


@pytest.mark.parametrize(
    "data,channels,depth",
    [([0, 0], 1, 8), ([256], 1, 8), ([0], 5, 8), ([0], 1, 4)],
)
def test_write_png_rejects_bad_input(tmp_path, data, channels, depth):
    with pytest.raises(PngExportError):
        write_png(tmp_path / "bad.png", 1, 1, data, channels, depth)


def test_read_png_rejects_non_png(tmp_path):
    path = tmp_path / "x.png"
    path.write_bytes(b"not an image")
    with pytest.raises(PngExportError):
        read_png(path)