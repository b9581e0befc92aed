[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "worldgen"
version = "0.1.0"
description = "Cube-sphere faces, spherification, fractal noise and heightmap, normal map and plate map export"
requires-python = ">=3.10"
dependencies = []
keywords = ["procedural", "terrain", "heightmap", "cube-sphere", "noise", "simplex", "png", "normal-map"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["worldgen"]

[tool.pytest.ini_options]
addopts = "-ra"
