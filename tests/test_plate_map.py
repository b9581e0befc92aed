import pytest

from worldgen.export.plate_map import (
    BoundaryType,
    CrustType,
    PlateMapError,
    PlateMapOptions,
    boundary_color,
    export_face_plate_map,
    export_planet_plate_map,
    generate_plate_colors,
    generate_plate_colors_by_type,
    hsv_to_rgb,
)
from worldgen.export.png import read_png
from worldgen.geometry.face import CubeFaceId

CRUSTS = [
    CrustType.CONTINENTAL,
    CrustType.OCEANIC,
    CrustType.CONTINENTAL,
    CrustType.OCEANIC,
]


def quadrant_plate_ids(res=64):
    half = res // 2
    ids = []
    for y in range(res):
        for x in range(res):
            ids.append({(True, True): 0, (False, True): 1, (True, False): 2, (False, False): 3}[
                (x < half, y < half)
            ])
    return ids


def test_generate_plate_colors_distinct():
    colors = generate_plate_colors(12, 42)
    assert len(colors) == 12
    for i, a in enumerate(colors):
        for j in range(i + 1, len(colors)):
            b = colors[j]
            diff = sum(abs(a[k] - b[k]) for k in range(3))
            assert diff > 20, f"colors {i} and {j} too similar"


def test_generate_plate_colors_deterministic():
    first = generate_plate_colors(8, 7)
    assert len(first) == 8
    assert all(len(c) == 3 and all(0 <= ch <= 255 for ch in c) for c in first)
    assert first == generate_plate_colors(8, 7)
    assert first != generate_plate_colors(8, 8)


@pytest.mark.parametrize("seed", [0, 1, 42, 12345])
def test_generate_plate_colors_by_type_tones(seed):
    colors = generate_plate_colors_by_type(CRUSTS, seed)
    assert len(colors) == 4
    for crust, (r, g, b) in zip(CRUSTS, colors):
        if crust is CrustType.OCEANIC:
            assert b >= r and b >= g
        else:
            assert b <= r and b <= g


def test_hsv_to_rgb():
    assert hsv_to_rgb(0.0, 1.0, 1.0) == (255, 0, 0)
    assert hsv_to_rgb(1.0 / 3.0, 1.0, 1.0) == (0, 255, 0)
    assert hsv_to_rgb(2.0 / 3.0, 1.0, 1.0) == (0, 0, 255)
    assert hsv_to_rgb(0.0, 0.0, 1.0) == (255, 255, 255)
    assert hsv_to_rgb(0.0, 1.0, 0.0) == (0, 0, 0)


def test_boundary_colors():
    convergent = boundary_color(BoundaryType.CONVERGENT)
    divergent = boundary_color(BoundaryType.DIVERGENT)
    transform = boundary_color(BoundaryType.TRANSFORM)
    assert convergent[0] > convergent[1] and convergent[0] > convergent[2]
    assert divergent[2] > divergent[0] and divergent[2] > divergent[1]
    assert transform[1] > transform[0] and transform[1] > transform[2]


def test_default_options():
    options = PlateMapOptions()
    assert options.show_boundaries is True
    assert options.boundary_width == 2


def test_export_face_plate_map(tmp_path):
    path = tmp_path / "plate_map.png"
    export_face_plate_map(64, quadrant_plate_ids(), CRUSTS, path, PlateMapOptions())
    width, height, channels, depth, samples = read_png(path)
    assert (width, height, channels, depth) == (64, 64, 3, 8)
    colors = generate_plate_colors_by_type(CRUSTS, 12345)
    assert tuple(samples[0:3]) == colors[0]
    right_top = 63 * 3
    assert tuple(samples[right_top:right_top + 3]) == colors[1]
    bottom_right = (63 * 64 + 63) * 3
    assert tuple(samples[bottom_right:bottom_right + 3]) == colors[3]


def test_export_face_plate_map_no_data(tmp_path):
    with pytest.raises(PlateMapError, match="No tectonic data"):
        export_face_plate_map(32, None, CRUSTS, tmp_path / "p.png", PlateMapOptions())


def test_export_face_plate_map_invalid_id(tmp_path):
    ids = [0] * 15 + [9]
    with pytest.raises(PlateMapError, match="Plate ID 9 out of range"):
        export_face_plate_map(4, ids, CRUSTS, tmp_path / "p.png")


def test_export_face_plate_map_wrong_length(tmp_path):
    with pytest.raises(PlateMapError):
        export_face_plate_map(4, [0] * 10, CRUSTS, tmp_path / "p.png")


def test_export_planet_plate_map(tmp_path):
    faces = {face: [face.index % 4] * 16 for face in CubeFaceId.all()}
    out = tmp_path / "maps"
    export_planet_plate_map(faces, 4, CRUSTS, out, "plates", PlateMapOptions())
    for face in CubeFaceId.all():
        path = out / f"plates_{face.short_name()}.png"
        assert path.exists()
    _, _, _, _, samples = read_png(out / "plates_negx.png")
    colors = generate_plate_colors_by_type(CRUSTS, 12345)
    assert tuple(samples[0:3]) == colors[1]


def test_export_planet_plate_map_no_plates(tmp_path):
    faces = {face: [0] * 16 for face in CubeFaceId.all()}
    with pytest.raises(PlateMapError, match="No tectonic data"):
        export_planet_plate_map(faces, 4, None, tmp_path, "plates")