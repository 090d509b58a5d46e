"""Cube coordinates of hex cells."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from hexterrain.geometry import Vec3
from hexterrain.metrics import INNER_RADIUS, OUTER_RADIUS

log = logging.getLogger(__name__)


def _half_toward_zero(value: int) -> int:
    return -((-value) // 2) if value < 0 else value // 2


def _round(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class HexCoordinates:
    """Cube coordinates; ``y`` is derived so that ``x + y + z == 0``."""

    x: int = 0
    z: int = 0
    y: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "y", -self.x - self.z)

    @classmethod
    def from_offset_coordinates(cls, offset_x: int, offset_z: int) -> HexCoordinates:
        """Convert row-offset grid coordinates to cube coordinates."""
        return cls(offset_x - _half_toward_zero(offset_z), offset_z)

    @classmethod
    def from_position(cls, position: Vec3) -> HexCoordinates:
        """The coordinates of the cell containing a point on the grid plane."""
        x = position.x / (INNER_RADIUS * 2.0)
        y = -x
        offset = position.y / (OUTER_RADIUS * 3.0)
        x -= offset
        y -= offset

        ix = _round(x)
        iy = _round(y)
        iz = _round(-x - y)

        if ix + iy + iz != 0:
            dx = abs(x - ix)
            dy = abs(y - iy)
            dz = abs(-x - y - iz)
            if dx > dy and dx > dz:
                ix = -iy - iz
            elif dz > dy:
                iz = -ix - iy
            log.debug("rounding deltas %f %f %f -> (%d, %d, %d)", dx, dy, dz, ix, iy, iz)

        return cls(ix, iz)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def to_string_on_separate_lines(self) -> str:
        return f"{self.x}\n{self.y}\n{self.z}"