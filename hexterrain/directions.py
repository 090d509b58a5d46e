"""The six edge directions of a pointy-topped hexagon."""

from __future__ import annotations

from enum import IntEnum


class HexDirection(IntEnum):
    """Directions around a hex cell, clockwise from north-east."""

    NE = 0
    E = 1
    SE = 2
    SW = 3
    W = 4
    NW = 5

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def next(self) -> HexDirection:
        """The direction one step clockwise."""
        return HexDirection((self + 1) % 6)

    def previous(self) -> HexDirection:
        """The direction one step counter-clockwise."""
        return HexDirection((self + 5) % 6)

    def opposite(self) -> HexDirection:
        """The direction pointing the other way."""
        return HexDirection(self + 3 if self < 3 else self - 3)


_DISPLAY_NAMES = {
    HexDirection.NE: "Northeast",
    HexDirection.E: "East",
    HexDirection.SE: "Southeast",
    HexDirection.SW: "Southwest",
    HexDirection.W: "West",
    HexDirection.NW: "Northwest",
}