"""A block of hex cells triangulated into one terrain mesh, plus road decals."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Optional

from hexterrain.cell import HexCell
from hexterrain.directions import HexDirection
from hexterrain.geometry import Color8, LinearColor, MeshData, Vec3
from hexterrain.metrics import (
    CHUNK_SIZE_X,
    CHUNK_SIZE_Z,
    TERRACE_STEPS,
    EdgeType,
    EdgeVertices,
    NoiseTexture,
    bridge,
    first_solid_corner,
    perturb,
    second_solid_corner,
    terrace_lerp,
    terrace_lerp_color,
    terrace_lerp_edge,
)

log = logging.getLogger(__name__)

DEFAULT_MATERIAL = "/Game/Materials/M_HexGrid.M_HexGrid"
DEFAULT_ROAD_DECAL_MATERIAL = "/Game/Materials/M_RoadDecal"

DECAL_DEPTH = 10.0
DECAL_GROUND_OFFSET = 0.01


def _color(cell: HexCell) -> Color8:
    return cell.color.to_color8()


@dataclass(frozen=True)
class RoadDecal:
    """A flat road marking projected onto the terrain between two points."""

    location: Vec3
    yaw: float
    pitch: float
    size: Vec3
    material: str


@dataclass(eq=False)
class HexGridChunk:
    """A fixed-size block of cells sharing one terrain mesh."""

    noise: Optional[NoiseTexture] = None
    material: str = DEFAULT_MATERIAL
    road_decal_material: Optional[str] = DEFAULT_ROAD_DECAL_MATERIAL
    ground_height: Optional[Callable[[Vec3], Optional[float]]] = field(
        default=None, repr=False
    )
    cells: list[Optional[HexCell]] = field(
        default_factory=lambda: [None] * (CHUNK_SIZE_X * CHUNK_SIZE_Z), repr=False
    )
    mesh: MeshData = field(default_factory=MeshData, repr=False)
    road_decals: list[RoadDecal] = field(default_factory=list, repr=False)

    def add_cell(self, index: int, cell: HexCell) -> None:
        """Place ``cell`` in slot ``index`` and make this chunk its owner."""
        self.cells[index] = cell
        cell.chunk = self

    def refresh(self) -> None:
        self.triangulate_cells()

    def _perturb(self, position: Vec3) -> Vec3:
        return perturb(position, self.noise)

    def triangulate_cells(self) -> None:
        """Rebuild the mesh from every cell in the chunk."""
        self.mesh.clear()
        for cell in self.cells:
            if cell is None:
                continue
            center = cell.position
            color = _color(cell)
            cell.perturbed_corners = [
                self._perturb(center + first_solid_corner(direction))
                for direction in HexDirection
            ]
            for direction in HexDirection:
                edge = EdgeVertices.between(
                    center + first_solid_corner(direction),
                    center + second_solid_corner(direction),
                )
                self._triangulate_edge_fan(center, edge, color)
                if direction <= HexDirection.SE:
                    self._triangulate_connection(direction, cell, edge)
        log.debug("chunk triangulated: %d vertices", len(self.mesh.vertices))

    def _add_triangle(self, v1: Vec3, v2: Vec3, v3: Vec3) -> None:
        self.mesh.add_triangle(self._perturb(v1), self._perturb(v2), self._perturb(v3))

    def _add_quad(self, v1: Vec3, v2: Vec3, v3: Vec3, v4: Vec3) -> None:
        self.mesh.add_quad(
            self._perturb(v1), self._perturb(v2), self._perturb(v3), self._perturb(v4)
        )

    def _triangulate_edge_fan(self, center: Vec3, edge: EdgeVertices, color: Color8) -> None:
        points = list(edge)
        for a, b in zip(points, points[1:]):
            self._add_triangle(center, a, b)
            self.mesh.add_colors(color, color, color)

    def _triangulate_edge_strip(
        self, e1: EdgeVertices, c1: Color8, e2: EdgeVertices, c2: Color8
    ) -> None:
        near = list(e1)
        far = list(e2)
        for a, b, c, d in zip(near, near[1:], far, far[1:]):
            self._add_quad(a, b, c, d)
            self.mesh.add_colors(c1, c1, c2, c2)

    def _triangulate_connection(
        self, direction: HexDirection, cell: HexCell, e1: EdgeVertices
    ) -> None:
        neighbor = cell.get_neighbor(direction)
        if neighbor is None:
            return

        offset = bridge(direction).replace(z=neighbor.position.z - cell.position.z)
        e2 = EdgeVertices.between(e1.v1 + offset, e1.v5 + offset, 1.0 / 6.0)

        if cell.edge_type(direction) is EdgeType.SLOPE:
            self._triangulate_edge_terraces(e1, cell, e2, neighbor)
        else:
            self._triangulate_edge_strip(e1, _color(cell), e2, _color(neighbor))

        next_direction = direction.next()
        next_neighbor = cell.get_neighbor(next_direction)
        if direction > HexDirection.E or next_neighbor is None:
            return

        v5 = (e1.v5 + bridge(next_direction)).replace(z=next_neighbor.position.z)
        if cell.elevation <= neighbor.elevation:
            if cell.elevation <= next_neighbor.elevation:
                self._triangulate_corner(e1.v5, cell, e2.v5, neighbor, v5, next_neighbor)
            else:
                self._triangulate_corner(v5, next_neighbor, e1.v5, cell, e2.v5, neighbor)
        elif neighbor.elevation <= next_neighbor.elevation:
            self._triangulate_corner(e2.v5, neighbor, v5, next_neighbor, e1.v5, cell)
        else:
            self._triangulate_corner(v5, next_neighbor, e1.v5, cell, e2.v5, neighbor)

    def _triangulate_edge_terraces(
        self, begin: EdgeVertices, begin_cell: HexCell, end: EdgeVertices, end_cell: HexCell
    ) -> None:
        e2 = terrace_lerp_edge(begin, end, 1)
        c2 = terrace_lerp_color(begin_cell.color, end_cell.color, 1)
        self._triangulate_edge_strip(begin, _color(begin_cell), e2, c2.to_color8())

        for step in range(2, TERRACE_STEPS):
            e1, c1 = e2, c2
            e2 = terrace_lerp_edge(begin, end, step)
            c2 = terrace_lerp_color(begin_cell.color, end_cell.color, step)
            self._triangulate_edge_strip(e1, c1.to_color8(), e2, c2.to_color8())

        self._triangulate_edge_strip(e2, c2.to_color8(), end, _color(end_cell))

    def _triangulate_corner(
        self,
        bottom: Vec3,
        bottom_cell: HexCell,
        left: Vec3,
        left_cell: HexCell,
        right: Vec3,
        right_cell: HexCell,
    ) -> None:
        left_type = bottom_cell.edge_type_to(left_cell)
        right_type = bottom_cell.edge_type_to(right_cell)

        if left_type is EdgeType.SLOPE:
            if right_type is EdgeType.SLOPE:
                self._triangulate_corner_terraces(
                    bottom, bottom_cell, left, left_cell, right, right_cell
                )
            elif right_type is EdgeType.FLAT:
                self._triangulate_corner_terraces(
                    left, left_cell, right, right_cell, bottom, bottom_cell
                )
            else:
                self._triangulate_corner_terraces_cliff(
                    bottom, bottom_cell, left, left_cell, right, right_cell
                )
        elif right_type is EdgeType.SLOPE:
            if left_type is EdgeType.FLAT:
                self._triangulate_corner_terraces(
                    right, right_cell, bottom, bottom_cell, left, left_cell
                )
            else:
                self._triangulate_corner_cliff_terraces(
                    bottom, bottom_cell, left, left_cell, right, right_cell
                )
        elif left_cell.edge_type_to(right_cell) is EdgeType.SLOPE:
            if left_cell.elevation < right_cell.elevation:
                self._triangulate_corner_cliff_terraces(
                    right, right_cell, bottom, bottom_cell, left, left_cell
                )
            else:
                self._triangulate_corner_terraces_cliff(
                    left, left_cell, right, right_cell, bottom, bottom_cell
                )
        else:
            self._add_triangle(bottom, left, right)
            self.mesh.add_colors(_color(bottom_cell), _color(left_cell), _color(right_cell))

    def _triangulate_corner_terraces(
        self,
        begin: Vec3,
        begin_cell: HexCell,
        left: Vec3,
        left_cell: HexCell,
        right: Vec3,
        right_cell: HexCell,
    ) -> None:
        v3 = terrace_lerp(begin, left, 1)
        v4 = terrace_lerp(begin, right, 1)
        c3 = terrace_lerp_color(begin_cell.color, left_cell.color, 1)
        c4 = terrace_lerp_color(begin_cell.color, right_cell.color, 1)

        self._add_triangle(begin, v3, v4)
        self.mesh.add_colors(_color(begin_cell), c3.to_color8(), c4.to_color8())

        for step in range(2, TERRACE_STEPS):
            v1, v2, c1, c2 = v3, v4, c3, c4
            v3 = terrace_lerp(begin, left, step)
            v4 = terrace_lerp(begin, right, step)
            c3 = terrace_lerp_color(begin_cell.color, left_cell.color, step)
            c4 = terrace_lerp_color(begin_cell.color, right_cell.color, step)
            self._add_quad(v1, v2, v3, v4)
            self.mesh.add_colors(
                c1.to_color8(), c2.to_color8(), c3.to_color8(), c4.to_color8()
            )

        self._add_quad(v3, v4, left, right)
        self.mesh.add_colors(
            c3.to_color8(), c4.to_color8(), _color(left_cell), _color(right_cell)
        )

    def _cliff_boundary(
        self, begin: Vec3, begin_cell: HexCell, target: Vec3, target_cell: HexCell
    ) -> tuple[Vec3, LinearColor]:
        b = abs(1.0 / (target_cell.elevation - begin_cell.elevation))
        boundary = self._perturb(begin).lerp(self._perturb(target), b)
        return boundary, begin_cell.color.lerp(target_cell.color, b)

    def _close_cliff_corner(
        self,
        left: Vec3,
        left_cell: HexCell,
        right: Vec3,
        right_cell: HexCell,
        boundary: Vec3,
        boundary_color: LinearColor,
    ) -> None:
        if left_cell.edge_type_to(right_cell) is EdgeType.SLOPE:
            self._triangulate_boundary_triangle(
                left, left_cell, right, right_cell, boundary, boundary_color
            )
        else:
            self.mesh.add_triangle(self._perturb(left), self._perturb(right), boundary)
            self.mesh.add_colors(
                _color(left_cell), _color(right_cell), boundary_color.to_color8()
            )

    def _triangulate_corner_terraces_cliff(
        self,
        begin: Vec3,
        begin_cell: HexCell,
        left: Vec3,
        left_cell: HexCell,
        right: Vec3,
        right_cell: HexCell,
    ) -> None:
        boundary, boundary_color = self._cliff_boundary(begin, begin_cell, right, right_cell)
        self._triangulate_boundary_triangle(
            begin, begin_cell, left, left_cell, boundary, boundary_color
        )
        self._close_cliff_corner(left, left_cell, right, right_cell, boundary, boundary_color)

    def _triangulate_corner_cliff_terraces(
        self,
        begin: Vec3,
        begin_cell: HexCell,
        left: Vec3,
        left_cell: HexCell,
        right: Vec3,
        right_cell: HexCell,
    ) -> None:
        boundary, boundary_color = self._cliff_boundary(begin, begin_cell, left, left_cell)
        self._triangulate_boundary_triangle(
            right, right_cell, begin, begin_cell, boundary, boundary_color
        )
        self._close_cliff_corner(left, left_cell, right, right_cell, boundary, boundary_color)

    def _triangulate_boundary_triangle(
        self,
        begin: Vec3,
        begin_cell: HexCell,
        left: Vec3,
        left_cell: HexCell,
        boundary: Vec3,
        boundary_color: LinearColor,
    ) -> None:
        boundary_c8 = boundary_color.to_color8()
        v2 = self._perturb(terrace_lerp(begin, left, 1))
        c2 = terrace_lerp_color(begin_cell.color, left_cell.color, 1)

        self.mesh.add_triangle(self._perturb(begin), v2, boundary)
        self.mesh.add_colors(_color(begin_cell), c2.to_color8(), boundary_c8)

        for step in range(2, TERRACE_STEPS):
            v1, c1 = v2, c2
            v2 = self._perturb(terrace_lerp(begin, left, step))
            c2 = terrace_lerp_color(begin_cell.color, left_cell.color, step)
            self.mesh.add_triangle(v1, v2, boundary)
            self.mesh.add_colors(c1.to_color8(), c2.to_color8(), boundary_c8)

        self.mesh.add_triangle(v2, self._perturb(left), boundary)
        self.mesh.add_colors(c2.to_color8(), _color(left_cell), boundary_c8)

    def clear_road_decals(self) -> None:
        self.road_decals.clear()

    def create_road_decal(
        self, start: Vec3, end: Vec3, width: float, material: Optional[str]
    ) -> Optional[RoadDecal]:
        """Lay a road decal from ``start`` to ``end``; nothing without a material."""
        if not material:
            log.warning("create_road_decal: no decal material")
            return None

        location = (start + end) * 0.5
        span = end - start
        direction = span.normalized()
        yaw = math.degrees(math.atan2(direction.y, direction.x))
        pitch = math.degrees(
            math.atan2(direction.z, math.hypot(direction.x, direction.y))
        )

        if self.ground_height is not None:
            ground = self.ground_height(location)
            if ground is not None:
                location = location.replace(z=ground + DECAL_GROUND_OFFSET)

        decal = RoadDecal(
            location=location,
            yaw=yaw,
            pitch=pitch,
            size=Vec3(span.length() * 0.5, width, DECAL_DEPTH),
            material=material,
        )
        self.road_decals.append(decal)
        log.debug("created road decal %s", decal)
        return decal