import pytest

from hexterrain.cell import HexCell
from hexterrain.chunk import HexGridChunk
from hexterrain.directions import HexDirection
from hexterrain.editor import EditMode, HexMapEditor, RoadMode
from hexterrain.geometry import WHITE, LinearColor, Vec3

RED = LinearColor(1.0, 0.0, 0.0)
BLUE = LinearColor(0.0, 0.0, 1.0)


class _Grid:
    def __init__(self):
        self.refreshes = 0

    def refresh(self):
        self.refreshes += 1


def _row(count):
    chunk = HexGridChunk()
    cells = []
    for i in range(count):
        cell = HexCell()
        cell.setup(i, 0, Vec3(float(i), 0.0, 0.0))
        chunk.add_cell(i, cell)
        if cells:
            cells[-1].set_neighbor(HexDirection.E, cell)
        cells.append(cell)
    return chunk, cells


def test_mode_options():
    editor = HexMapEditor()
    assert editor.edit_mode_options() == ["Color", "Elevation", "Road"]
    assert editor.road_mode_options() == ["No", "Yes", "Ignore"]


def test_select_color_valid_and_invalid():
    editor = HexMapEditor(colors=[RED, BLUE])
    assert editor.active_color == RED
    editor.select_color(1)
    assert editor.active_color == BLUE
    editor.select_color(5)
    assert editor.active_color == BLUE
    editor.select_color(-1)
    assert editor.active_color == BLUE


def test_no_colors_keeps_default():
    assert HexMapEditor().active_color == WHITE


@pytest.mark.parametrize("value", [0.0, 1.0, 2.0, 4.0])
def test_brush_and_elevation_round_integers(value):
    editor = HexMapEditor()
    editor.set_brush_size(value)
    editor.set_elevation(value)
    assert editor.brush_size == int(value)
    assert editor.active_elevation == int(value)


def test_brush_and_elevation_round_half_up():
    editor = HexMapEditor()
    editor.set_brush_size(1.5)
    editor.set_elevation(2.4)
    assert editor.brush_size == 2
    assert editor.active_elevation == 2


def test_color_edit_single_cell():
    grid = _Grid()
    _, cells = _row(3)
    editor = HexMapEditor(grid=grid, colors=[RED])
    editor.edit_cells(cells[0])
    assert cells[0].color == RED
    assert cells[1].color == WHITE
    assert grid.refreshes == 1
    assert cells[0].is_highlighted
    assert editor.current_highlighted_cell is cells[0]


def test_highlight_moves_to_new_center():
    _, cells = _row(2)
    editor = HexMapEditor(grid=_Grid(), colors=[RED])
    editor.edit_cells(cells[0])
    editor.edit_cells(cells[1])
    assert not cells[0].is_highlighted
    assert cells[1].is_highlighted


def test_large_brush_paints_neighbours():
    _, cells = _row(4)
    editor = HexMapEditor(grid=_Grid(), colors=[BLUE])
    editor.set_brush_size(2)
    editor.edit_cells(cells[0])
    assert all(cell.color == BLUE for cell in cells)


def test_missing_grid_or_chunk_does_nothing():
    cell = HexCell()
    editor = HexMapEditor(grid=_Grid(), colors=[RED])
    editor.edit_cells(cell)
    assert cell.color == WHITE
    assert not cell.is_highlighted

    _, cells = _row(1)
    HexMapEditor(colors=[RED]).edit_cells(cells[0])
    assert cells[0].color == WHITE


def test_elevation_edit_ignores_brush():
    _, cells = _row(2)
    editor = HexMapEditor(grid=_Grid(), edit_mode=EditMode.ELEVATION)
    editor.set_brush_size(3)
    editor.set_elevation(2)
    editor.edit_cells(cells[0])
    assert cells[0].elevation == 2
    assert cells[0].position.z == 2.0
    assert cells[1].elevation == 0


def test_road_between_neighbours():
    grid = _Grid()
    chunk, cells = _row(2)
    editor = HexMapEditor(grid=grid, edit_mode=EditMode.ROAD, road_mode=RoadMode.YES)
    editor.edit_cells(cells[0])
    assert editor.previous_cell is cells[0]
    assert not editor.is_first_click
    editor.edit_cells(cells[1])
    assert cells[0].has_outgoing_road
    assert cells[0].outgoing_road is HexDirection.E
    assert cells[1].has_incoming_road
    assert cells[1].incoming_road is HexDirection.W
    assert len(chunk.road_decals) == 1
    assert chunk.road_decals[0].size.y == 0.5
    assert editor.previous_cell is cells[1]
    assert grid.refreshes == 0


def test_same_cell_twice_resets_road_selection():
    _, cells = _row(2)
    editor = HexMapEditor(grid=_Grid(), edit_mode=EditMode.ROAD, road_mode=RoadMode.YES)
    editor.edit_cells(cells[0])
    editor.edit_cells(cells[0])
    assert editor.previous_cell is None
    assert editor.is_first_click
    assert not cells[0].has_road()


def test_non_neighbour_makes_no_road():
    chunk, cells = _row(3)
    editor = HexMapEditor(grid=_Grid(), edit_mode=EditMode.ROAD, road_mode=RoadMode.YES)
    editor.edit_cells(cells[0])
    editor.edit_cells(cells[2])
    assert not cells[0].has_road()
    assert not cells[2].has_road()
    assert chunk.road_decals == []
    assert editor.previous_cell is cells[2]


def test_road_removal_clears_decals_and_refreshes():
    grid = _Grid()
    chunk, cells = _row(2)
    editor = HexMapEditor(grid=grid, edit_mode=EditMode.ROAD, road_mode=RoadMode.YES)
    editor.edit_cells(cells[0])
    editor.edit_cells(cells[1])
    editor.road_mode = RoadMode.NO
    editor.edit_cells(cells[0])
    assert not cells[0].has_road()
    assert not cells[1].has_incoming_road
    assert chunk.road_decals == []
    assert grid.refreshes == 1


def test_ignore_road_mode_changes_nothing():
    grid = _Grid()
    _, cells = _row(2)
    cells[0].set_outgoing_road(HexDirection.E)
    editor = HexMapEditor(grid=grid, edit_mode=EditMode.ROAD, road_mode=RoadMode.IGNORE)
    editor.edit_cells(cells[0])
    assert cells[0].has_outgoing_road
    assert grid.refreshes == 0