# hexterrain

A model of a hexagonal terrain map of the kind used in turn-based strategy
games. It has no dependencies outside the standard library.

## Modules

- `hexterrain.directions` – `HexDirection`, the six pointy-top directions
  (`NE`, `E`, `SE`, `SW`, `W`, `NW`) with `next()`, `previous()`,
  `opposite()` and a `display_name`.
- `hexterrain.coordinates` – `HexCoordinates`, cube coordinates whose `y` is
  derived so that `x + y + z == 0`. Built with
  `HexCoordinates.from_offset_coordinates(offset_x, offset_z)` or
  `HexCoordinates.from_position(position)`; `str()` gives `"(x, y, z)"` and
  `to_string_on_separate_lines()` gives one value per line.
- `hexterrain.geometry` – value types: `Vec3` (add, subtract, scale, `lerp`,
  `length`, `normalized`, `replace`), `LinearColor` (`lerp`,
  `lerp_using_hsv`, `to_color8` with sRGB encoding), `Color8`, and
  `MeshData`, which collects vertices, triangle indices, normals and vertex
  colours (`add_triangle`, `add_quad`, `add_colors`, `clear`).
- `hexterrain.metrics` – grid constants (radii, solid and blend factors,
  chunk size, terrace steps), corner helpers (`first_corner`,
  `second_corner`, `first_solid_corner`, `second_solid_corner`, `bridge`),
  `EdgeType` and `edge_type` (flat, slope, cliff), `EdgeVertices`, terrace
  interpolation (`terrace_lerp`, `terrace_lerp_color`, `terrace_lerp_edge`)
  and noise perturbation: `NoiseTexture` samples an RGBA pixel grid with
  bilinear filtering, and `perturb(position, noise)` shifts a point
  horizontally. Without a noise texture the sample is neutral and points are
  left where they are.
- `hexterrain.cell` – `HexCell`: position, coordinates, colour, elevation,
  neighbour links (`set_neighbor` links both ways), edge types, incoming and
  outgoing roads, and a highlight outline built as a `MeshData` in
  `highlight_mesh` by `set_highlighted(True)`. Changes call `refresh()` on the
  cell's chunk, if it has one.
- `hexterrain.chunk` – `HexGridChunk`: holds up to 5 × 5 cells, triangulates
  them into `mesh` with solid hexes, edge strips, terraced slopes, and corner
  fills for slopes and cliffs, and keeps a list of `RoadDecal` records made by
  `create_road_decal`. An optional `ground_height` callable places decals on
  the terrain surface.
- `hexterrain.editor` – `HexMapEditor` with `EditMode` (`COLOR`,
  `ELEVATION`, `ROAD`) and `RoadMode` (`NO`, `YES`, `IGNORE`): paints colour
  with a brush of `brush_size` rings, sets elevation, removes roads, or draws
  a road between two neighbouring cells selected by successive clicks.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from hexterrain.cell import HexCell
from hexterrain.chunk import HexGridChunk
from hexterrain.directions import HexDirection
from hexterrain.geometry import Vec3

chunk = HexGridChunk()
a, b = HexCell(), HexCell()
a.setup(0, 0, Vec3(0.0, 0.0, 0.0))
b.setup(1, 0, Vec3(1.732, 0.0, 0.0))
chunk.add_cell(0, a)
chunk.add_cell(1, b)
a.set_neighbor(HexDirection.E, b)

b.set_elevation(1)          # the chunk re-triangulates itself
a.set_outgoing_road(HexDirection.E)
assert b.has_road_through_edge(HexDirection.W)
```

The editor needs a grid, any object with a `refresh()` method, and works on
cells that belong to a chunk:

```python
from hexterrain.editor import EditMode, HexMapEditor

editor = HexMapEditor(grid=chunk)
editor.edit_mode = EditMode.ELEVATION
editor.set_elevation(2)
editor.edit_cells(a)
assert a.elevation == 2 and a.is_highlighted
```

## What it does not do

- It does not draw anything. Meshes, highlight outlines and road decals are
  plain data for a renderer to use.
- There is no grid class that creates cells, links neighbours or splits a
  map into chunks; the caller builds cells and chunks and wires them up.
- There is no input handling, mouse picking or camera; the editor is driven
  by calling its methods with the cells to edit.
- Noise textures are not loaded from image files; a `NoiseTexture` is built
  from a list of `Color8` pixels.
- Maps are not saved or loaded.