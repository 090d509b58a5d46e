[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hexterrain"
version = "0.1.0"
description = "Hexagonal terrain map model: cells, coordinates, terraced mesh triangulation, roads and a map editor"
requires-python = ">=3.10"
dependencies = []
keywords = ["hexagon", "hex grid", "terrain", "mesh", "map editor", "strategy game"]
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
    "Topic :: Games/Entertainment :: Turn Based Strategy",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hexterrain"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
