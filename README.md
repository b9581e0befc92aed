# worldgen

Building blocks for procedural planet terrain on a cube-sphere, in pure
Python with no third-party dependencies: cube face identifiers, the
cube-to-sphere spherification mapping, seeded 4D simplex and fractal
noise, and writers for PNG and RAW heightmaps, normal maps and tectonic
plate colour maps.

## Modules

### `worldgen.geometry.face`

`CubeFaceId` is an `IntEnum` of the six faces: `POS_X`, `NEG_X`, `POS_Y`,
`NEG_Y`, `POS_Z`, `NEG_Z` (indices 0–5).

- `CubeFaceId.all()` returns the six faces in index order.
- `CubeFaceId.from_index(i)` returns the face for `i`, raising
  `ValueError` outside 0–5.
- `face.index` is the face's index; `face.short_name()` returns `"posx"`,
  `"negy"` and so on. These short names are used in every exported file
  name.

### `worldgen.geometry.spherify`

`spherify_point((x, y, z))` maps a point on the surface of the cube
`[-1, 1]³` onto the unit sphere with an analytical formula that distorts
area less near the corners than plain normalisation. Face centres are
left unchanged.

### `worldgen.noise.fractal`

- `simplex_4d(x, y, z, w, seed)` — seeded 4D simplex noise, roughly in
  `[-1, 1]`.
- `FractalNoiseConfig` — dataclass with `octaves` (6), `frequency` (2.0),
  `lacunarity` (2.0), `persistence` (0.5) and `seed` (42); presets
  `FractalNoiseConfig.with_seed(seed)`, `.earth_like(seed)` and
  `.moon_like(seed)`.
- `sample_fractal_noise(pos, config)` — sums the octaves of
  `simplex_4d` at `pos` scaled by the current frequency (with `w = 0`),
  each octave with its own seed, and divides by the sum of amplitudes. With
  zero octaves it returns NaN.
- `sample_fractal_noise_batch(positions, config)` — the same for a list of
  positions, in order.

### `worldgen.export.png`

- `write_png(path, width, height, data, channels, bit_depth)` writes
  row-major samples as a PNG with 1–4 channels at 8 or 16 bits;
  `read_png(path)` reads such a file back as
  `(width, height, channels, bit_depth, samples)`.
- `PngExportOptions(min_height=-1.0, max_height=1.0)` sets the height range
  mapped onto `0..65535`; `PngExportOptions.auto_range(heights)` takes it
  from the data.
- `export_face_png(resolution, heights, path, options)` writes one face as
  16-bit grayscale; values outside the range are clamped.
- `export_planet_png(faces, resolution, output_dir, base_name, options)`
  takes a mapping of `CubeFaceId` to heights and writes
  `{base_name}_{face}.png` for each, creating `output_dir`.
- `export_face_scalar_png_f32(resolution, data, path, min_value, max_value)`
  writes any scalar field as 16-bit grayscale.
- `export_face_mask_png_u8(resolution, data, path)` writes a byte mask as
  8-bit grayscale.

Errors (empty or inverted ranges, wrong data length, I/O failures) raise
`PngExportError`.

### `worldgen.export.raw`

- `RawFormat.R16_LITTLE_ENDIAN`, `R16_BIG_ENDIAN` and `R32_FLOAT`.
- `export_face_raw(heights, path, format, min_height, max_height)` — the
  16-bit formats normalise to the given range; `R32_FLOAT` writes heights
  unchanged as little-endian floats and ignores the range.
- `export_planet_raw(faces, output_dir, base_name, format, min_height, max_height)`
  writes `{base_name}_{face}.raw` for each face.
- `expected_file_size(resolution, format)` gives the size of one face in
  bytes.

Errors raise `RawExportError`.

### `worldgen.export.normal_map`

- `normal_from_sobel(heights, resolution, x, y, strength)` returns the
  unit normal at a pixel from Sobel gradients, clamping at the face edges.
- `encode_normal_rgb8(n)` maps a normal from `[-1, 1]` to RGB bytes.
- `export_face_normal_map_png(resolution, heights, path, options)` and
  `export_planet_normal_maps_png(faces, resolution, output_dir, base_name, options)`
  write RGB PNGs, the latter as `{base_name}_normal_{face}.png`.
  `NormalMapOptions(strength=2.0)`; a strength that is not a positive
  finite number raises `NormalMapError`.

### `worldgen.export.plate_map`

- `CrustType` (`CONTINENTAL`, `OCEANIC`) and `BoundaryType`
  (`CONVERGENT`, `DIVERGENT`, `TRANSFORM`).
- `hsv_to_rgb(h, s, v)` converts an HSV colour in `[0, 1]` to RGB bytes.
- `boundary_color(boundary_type)` — red, blue or green respectively.
- `generate_plate_colors(num_plates, seed)` spreads hues by the golden
  ratio; `generate_plate_colors_by_type(crust_types, seed)` gives earth
  tones to continental plates and blues to oceanic ones. Both are
  reproducible for a given seed.
- `export_face_plate_map(resolution, plate_ids, crust_types, path, options)`
  writes one face with every plate in its own colour;
  `export_planet_plate_map(faces, resolution, crust_types, output_dir, base_name, options)`
  writes `{base_name}_{face}.png` for each face. Missing plate data or a
  plate id with no crust type raises `PlateMapError`.

## Example

```python
from pathlib import Path

from worldgen.geometry.face import CubeFaceId
from worldgen.geometry.spherify import spherify_point
from worldgen.noise.fractal import FractalNoiseConfig, sample_fractal_noise
from worldgen.export.png import PngExportOptions, export_face_png, read_png

resolution = 64
config = FractalNoiseConfig.earth_like(42)

# The +Z face of the cube: (s, t, 1) with s, t in [-1, 1].
heights = []
for y in range(resolution):
    for x in range(resolution):
        s = (x + 0.5) / resolution * 2.0 - 1.0
        t = (y + 0.5) / resolution * 2.0 - 1.0
        point = spherify_point((s, t, 1.0))
        heights.append(sample_fractal_noise(point, config))

out = Path("output")
out.mkdir(exist_ok=True)
path = out / f"planet_{CubeFaceId.POS_Z.short_name()}.png"
export_face_png(resolution, heights, path, PngExportOptions.auto_range(heights))

width, height, channels, bit_depth, samples = read_png(path)
```

## What it does not do

- There is no command-line program; everything is used from Python.
- It does not generate a whole planet: there is no pipeline that runs
  tectonics, erosion, climate or biomes, and no type that holds a planet's
  six faces. The export functions take plain mappings of `CubeFaceId` to
  row-major lists.
- Geometry stops at `spherify_point`: there is no conversion between face
  UV coordinates and sphere points in either direction, and no lookup of
  pixel neighbours across face seams.
- There is no latitude/longitude (equirectangular) export, no OpenEXR
  export and no biome map export.
- The plate map writer only colours plates; it does not draw plate
  boundaries, and the `PlateMapOptions` fields do not change its output.

## Running the tests

```
pip install .[test]
pytest
```