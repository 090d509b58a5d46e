"""Interactive editing of a hex map: painting colours, elevation and roads."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from hexterrain.cell import HexCell
from hexterrain.directions import HexDirection
from hexterrain.geometry import WHITE, LinearColor

log = logging.getLogger(__name__)

ROAD_DECAL_WIDTH = 0.5


class EditMode(Enum):
    COLOR = "Color"
    ELEVATION = "Elevation"
    ROAD = "Road"


class RoadMode(Enum):
    NO = "No"
    YES = "Yes"
    IGNORE = "Ignore"


class Refreshable(Protocol):
    def refresh(self) -> None: ...


def _round_to_int(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(eq=False)
class HexMapEditor:
    """Applies the active brush to cells of a hex grid."""

    grid: Optional[Refreshable] = None
    colors: list[LinearColor] = field(default_factory=list)
    edit_mode: EditMode = EditMode.COLOR
    road_mode: RoadMode = RoadMode.NO
    brush_size: int = 1
    active_elevation: int = 0
    active_color: LinearColor = WHITE
    current_highlighted_cell: Optional[HexCell] = field(default=None, repr=False)
    previous_cell: Optional[HexCell] = field(default=None, repr=False)
    is_first_click: bool = True

    def __post_init__(self) -> None:
        self.select_color(0)

    def edit_cells(self, center: Optional[HexCell]) -> None:
        """Highlight ``center`` and apply the current brush around it."""
        if center is None or self.grid is None:
            log.warning("edit_cells: missing center cell or grid")
            return
        if center.chunk is None:
            log.warning("edit_cells: center cell has no chunk")
            return

        highlighted = self.current_highlighted_cell
        if highlighted is not None and highlighted is not center:
            highlighted.set_highlighted(False)
        center.set_highlighted(True)
        self.current_highlighted_cell = center

        if self.edit_mode in (EditMode.ROAD, EditMode.ELEVATION) or self.brush_size <= 1:
            self.edit_cell(center)
        else:
            for cell in self._brush_cells(center):
                self.edit_cell(cell)

        if self.edit_mode is not EditMode.ROAD or self.road_mode is RoadMode.NO:
            self.grid.refresh()

    def _brush_cells(self, center: HexCell) -> list[HexCell]:
        cells = [center]

        def add(cell: HexCell) -> None:
            if all(cell is not existing for existing in cells):
                cells.append(cell)

        for ring in range(1, self.brush_size + 1):
            for direction in HexDirection:
                cell: Optional[HexCell] = center
                for _ in range(ring):
                    if cell is None:
                        break
                    cell = cell.get_neighbor(direction)
                if cell is None:
                    continue
                add(cell)
                for around in HexDirection:
                    sub = cell.get_neighbor(around)
                    if sub is not None:
                        add(sub)
        return cells

    def edit_cell(self, cell: Optional[HexCell]) -> None:
        """Apply the current edit mode to a single cell."""
        if cell is None:
            log.warning("edit_cell: no cell")
            return

        if self.edit_mode is EditMode.COLOR:
            cell.color = self.active_color
            cell.refresh()
        elif self.edit_mode is EditMode.ELEVATION:
            cell.set_elevation(self.active_elevation)
        elif self.road_mode is RoadMode.NO:
            cell.remove_road()
            if cell.chunk is not None:
                cell.chunk.clear_road_decals()
        elif self.road_mode is RoadMode.YES:
            self._road_click(cell)

    def _road_click(self, cell: HexCell) -> None:
        previous = self.previous_cell
        if self.is_first_click or previous is None:
            self.previous_cell = cell
            self.is_first_click = False
            return

        if previous is cell:
            self.previous_cell = None
            self.is_first_click = True
            return

        direction = next(
            (d for d in HexDirection if previous.get_neighbor(d) is cell), None
        )
        if direction is not None:
            previous.set_outgoing_road(direction)
            chunk = previous.chunk
            if chunk is not None:
                chunk.create_road_decal(
                    previous.position,
                    cell.position,
                    ROAD_DECAL_WIDTH,
                    chunk.road_decal_material,
                )
                log.debug(
                    "road from %s to %s, direction %s",
                    previous.coordinates,
                    cell.coordinates,
                    direction.name,
                )
        else:
            log.warning(
                "cell %s is not a neighbour of %s", cell.coordinates, previous.coordinates
            )

        self.previous_cell = cell
        self.is_first_click = False

    def select_color(self, index: int) -> None:
        """Make the palette colour at ``index`` active; ignore invalid indices."""
        if 0 <= index < len(self.colors):
            self.active_color = self.colors[index]

    def set_brush_size(self, size: float) -> None:
        self.brush_size = _round_to_int(size)

    def set_elevation(self, elevation: float) -> None:
        self.active_elevation = _round_to_int(elevation)

    def edit_mode_options(self) -> list[str]:
        return [mode.value for mode in EditMode]

    def road_mode_options(self) -> list[str]:
        return [mode.value for mode in RoadMode]