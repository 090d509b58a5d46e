"""A single hex cell: elevation, neighbours, roads and highlight outline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

from hexterrain.coordinates import HexCoordinates
from hexterrain.directions import HexDirection
from hexterrain.geometry import UP, WHITE, YELLOW, LinearColor, MeshData, Vec3
from hexterrain.metrics import (
    CORNERS,
    ELEVATION_STEP,
    INNER_RADIUS,
    OUTER_RADIUS,
    EdgeType,
    edge_type,
)

log = logging.getLogger(__name__)

HIGHLIGHT_OUTLINE_WIDTH = 0.2
HIGHLIGHT_OFFSET_Z = 0.0


class Refreshable(Protocol):
    def refresh(self) -> None: ...


def _trunc_half(value: int) -> int:
    return -((-value) // 2) if value < 0 else value // 2


@dataclass(eq=False)
class HexCell:
    """One cell of the hex map, linked to up to six neighbours."""

    position: Vec3 = Vec3()
    coordinates: HexCoordinates = HexCoordinates()
    color: LinearColor = WHITE
    elevation: int = 0
    chunk: Optional[Refreshable] = field(default=None, repr=False)
    perturbed_corners: list[Vec3] = field(default_factory=list, repr=False)
    has_incoming_road: bool = False
    has_outgoing_road: bool = False
    incoming_road: HexDirection = HexDirection.NE
    outgoing_road: HexDirection = HexDirection.NE
    highlight_mesh: Optional[MeshData] = field(default=None, repr=False)
    _neighbors: list[Optional[HexCell]] = field(
        default_factory=lambda: [None] * 6, repr=False
    )
    _highlighted: bool = field(default=False, repr=False)

    def setup(self, x: int, z: int, position: Vec3) -> None:
        """Place the cell at ``position`` with offset grid coordinates (x, z)."""
        self.position = position
        self.coordinates = HexCoordinates.from_offset_coordinates(x, z)
        log.debug("cell at (%d, %d) has coordinates %s", x, z, self.coordinates)

    @property
    def is_highlighted(self) -> bool:
        return self._highlighted

    def get_neighbor(self, direction: HexDirection) -> Optional[HexCell]:
        return self._neighbors[direction]

    def set_neighbor(self, direction: HexDirection, cell: Optional[HexCell]) -> None:
        """Link ``cell`` in ``direction``, and this cell back from it."""
        self._neighbors[direction] = cell
        if cell is not None:
            cell._neighbors[HexDirection(direction).opposite()] = self

    def edge_type(self, direction: HexDirection) -> EdgeType:
        return self.edge_type_to(self.get_neighbor(direction))

    def edge_type_to(self, other: Optional[HexCell]) -> EdgeType:
        if other is None:
            return EdgeType.CLIFF
        return edge_type(self.elevation, other.elevation)

    def set_elevation(self, elevation: int) -> None:
        """Change the elevation and lift the cell's position to match."""
        self.elevation = elevation
        self.position = self.position.replace(z=elevation * ELEVATION_STEP)
        self.refresh()

    def remove_outgoing_road(self) -> None:
        if not self.has_outgoing_road:
            return
        self.has_outgoing_road = False
        self.refresh()
        neighbor = self.get_neighbor(self.outgoing_road)
        if neighbor is not None:
            neighbor.has_incoming_road = False
            neighbor.refresh()

    def remove_incoming_road(self) -> None:
        if not self.has_incoming_road:
            return
        self.has_incoming_road = False
        self.refresh()
        neighbor = self.get_neighbor(self.incoming_road)
        if neighbor is not None:
            neighbor.has_outgoing_road = False
            neighbor.refresh()

    def remove_road(self) -> None:
        self.remove_outgoing_road()
        self.remove_incoming_road()

    def set_outgoing_road(self, direction: HexDirection) -> None:
        """Run a road out of this cell towards the neighbour in ``direction``."""
        direction = HexDirection(direction)
        if self.has_outgoing_road and self.outgoing_road == direction:
            return
        neighbor = self.get_neighbor(direction)
        if neighbor is None:
            return

        self.remove_outgoing_road()
        if self.has_incoming_road and self.incoming_road == direction:
            self.remove_incoming_road()

        self.has_outgoing_road = True
        self.outgoing_road = direction
        self.refresh()

        neighbor.remove_incoming_road()
        neighbor.has_incoming_road = True
        neighbor.incoming_road = direction.opposite()
        neighbor.refresh()

    def set_incoming_road(self, direction: HexDirection) -> None:
        """Mark a road entering this cell from the neighbour in ``direction``."""
        direction = HexDirection(direction)
        if self.has_incoming_road and self.incoming_road == direction:
            return
        if self.get_neighbor(direction) is None:
            return

        self.remove_incoming_road()
        if self.has_outgoing_road and self.outgoing_road == direction:
            self.remove_outgoing_road()

        self.has_incoming_road = True
        self.incoming_road = direction
        self.refresh()

    def has_road(self) -> bool:
        return self.has_incoming_road or self.has_outgoing_road

    def has_road_begin_or_end(self) -> bool:
        return self.has_incoming_road != self.has_outgoing_road

    def has_road_through_edge(self, direction: HexDirection) -> bool:
        return (self.has_incoming_road and self.incoming_road == direction) or (
            self.has_outgoing_road and self.outgoing_road == direction
        )

    def refresh(self) -> None:
        """Ask the owning chunk, if any, to rebuild its mesh."""
        if self.chunk is not None:
            self.chunk.refresh()

    def _grid_center(self) -> Vec3:
        coords = self.coordinates
        z = coords.z
        x = coords.x + (z - (z & 1)) // 2
        world = Vec3(
            (x + z * 0.5 - _trunc_half(z)) * (INNER_RADIUS * 2.0),
            z * (OUTER_RADIUS * 1.5),
            0.0,
        )
        return world - self.position

    def set_highlighted(self, highlight: bool) -> None:
        """Show or hide a flat outline around the cell."""
        if self._highlighted == highlight:
            return
        self._highlighted = highlight

        if not highlight:
            self.highlight_mesh = None
            return

        center = self._grid_center()
        corners = list(self.perturbed_corners)
        if len(corners) != 6:
            log.warning(
                "perturbed corners missing for cell %s, using default corners",
                self.coordinates,
            )
            corners = [center + corner for corner in CORNERS]

        mesh = MeshData()
        for i, outer in enumerate(corners):
            next_outer = corners[(i + 1) % 6]
            inner = outer + (center - outer).normalized() * HIGHLIGHT_OUTLINE_WIDTH
            next_inner = (
                next_outer
                + (center - next_outer).normalized() * HIGHLIGHT_OUTLINE_WIDTH
            )
            start = len(mesh.vertices)
            mesh.vertices.extend(
                v.replace(z=HIGHLIGHT_OFFSET_Z)
                for v in (outer, inner, next_outer, next_inner)
            )
            mesh.normals.extend((UP, UP, UP, UP))
            mesh.colors.extend((YELLOW, YELLOW, YELLOW, YELLOW))
            mesh.triangles.extend(
                (start, start + 1, start + 2, start + 1, start + 3, start + 2)
            )
        self.highlight_mesh = mesh