"""Vectors, colours and a simple triangle mesh buffer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

_SMALL_NUMBER_SQUARED = 1e-8


@dataclass(frozen=True)
class Vec3:
    """An immutable three-dimensional vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vec3:
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def replace(self, *, x: float | None = None, y: float | None = None, z: float | None = None) -> Vec3:
        """A copy with the given components changed."""
        return Vec3(
            self.x if x is None else x,
            self.y if y is None else y,
            self.z if z is None else z,
        )

    def lerp(self, other: Vec3, t: float) -> Vec3:
        """Linear interpolation towards ``other``."""
        return self + (other - self) * t

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vec3:
        """Unit vector in the same direction, or the zero vector if too short."""
        squared = self.x * self.x + self.y * self.y + self.z * self.z
        if squared == 1.0:
            return self
        if squared < _SMALL_NUMBER_SQUARED:
            return Vec3()
        return self * (1.0 / math.sqrt(squared))


@dataclass(frozen=True)
class Color8:
    """An 8-bit-per-channel RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for value in (self.r, self.g, self.b, self.a):
            if not 0 <= value <= 255:
                raise ValueError(f"channel value {value} is outside 0..255")


YELLOW = Color8(255, 255, 0)


def _to_srgb_byte(value: float) -> int:
    value = min(max(value, 0.0), 1.0)
    if value <= 0.0031308:
        value *= 12.92
    else:
        value = math.pow(value, 1.0 / 2.4) * 1.055 - 0.055
    return math.floor(value * 255.999)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass(frozen=True)
class LinearColor:
    """A floating-point RGBA colour in linear space."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def lerp(self, other: LinearColor, t: float) -> LinearColor:
        return LinearColor(
            _lerp(self.r, other.r, t),
            _lerp(self.g, other.g, t),
            _lerp(self.b, other.b, t),
            _lerp(self.a, other.a, t),
        )

    def _to_hsv(self) -> tuple[float, float, float]:
        low = min(self.r, self.g, self.b)
        high = max(self.r, self.g, self.b)
        spread = high - low
        if high == low:
            hue = 0.0
        elif high == self.r:
            hue = math.fmod((self.g - self.b) / spread * 60.0 + 360.0, 360.0)
        elif high == self.g:
            hue = (self.b - self.r) / spread * 60.0 + 120.0
        else:
            hue = (self.r - self.g) / spread * 60.0 + 240.0
        saturation = 0.0 if high == 0 else spread / high
        return hue, saturation, high

    @staticmethod
    def _from_hsv(hue: float, saturation: float, value: float, alpha: float) -> LinearColor:
        sector = hue / 60.0
        sector_floor = math.floor(sector)
        fraction = sector - sector_floor
        values = (
            value,
            value * (1.0 - saturation),
            value * (1.0 - fraction * saturation),
            value * (1.0 - (1.0 - fraction) * saturation),
        )
        swizzle = ((0, 3, 1), (2, 0, 1), (1, 0, 3), (1, 2, 0), (3, 1, 0), (0, 1, 2))
        r, g, b = (values[i] for i in swizzle[int(sector_floor) % 6])
        return LinearColor(r, g, b, alpha)

    def lerp_using_hsv(self, other: LinearColor, t: float) -> LinearColor:
        """Interpolate through HSV space along the shorter hue arc."""
        from_hue, from_sat, from_val = self._to_hsv()
        to_hue, to_sat, to_val = other._to_hsv()
        if abs(from_hue - to_hue) > 180.0:
            if to_hue > from_hue:
                from_hue += 360.0
            else:
                to_hue += 360.0
        hue = math.fmod(_lerp(from_hue, to_hue, t), 360.0)
        if hue < 0.0:
            hue += 360.0
        return self._from_hsv(
            hue,
            _lerp(from_sat, to_sat, t),
            _lerp(from_val, to_val, t),
            _lerp(self.a, other.a, t),
        )

    def to_color8(self) -> Color8:
        """Convert to an sRGB-encoded 8-bit colour."""
        alpha = math.floor(min(max(self.a, 0.0), 1.0) * 255.999)
        return Color8(
            _to_srgb_byte(self.r), _to_srgb_byte(self.g), _to_srgb_byte(self.b), alpha
        )


WHITE = LinearColor(1.0, 1.0, 1.0, 1.0)

UP = Vec3(0.0, 0.0, 1.0)


@dataclass
class MeshData:
    """Vertex, index, normal and colour buffers of a triangle mesh."""

    vertices: list[Vec3] = field(default_factory=list)
    triangles: list[int] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)
    colors: list[Color8] = field(default_factory=list)

    def clear(self) -> None:
        self.vertices.clear()
        self.triangles.clear()
        self.normals.clear()
        self.colors.clear()

    def add_triangle(self, v1: Vec3, v2: Vec3, v3: Vec3) -> None:
        start = len(self.vertices)
        self.vertices.extend((v1, v2, v3))
        self.normals.extend((UP, UP, UP))
        self.triangles.extend((start, start + 1, start + 2))

    def add_quad(self, v1: Vec3, v2: Vec3, v3: Vec3, v4: Vec3) -> None:
        start = len(self.vertices)
        self.vertices.extend((v1, v2, v3, v4))
        self.normals.extend((UP, UP, UP, UP))
        self.triangles.extend(
            (start, start + 2, start + 1, start + 1, start + 2, start + 3)
        )

    def add_colors(self, *args: Color8) -> None:
        """Append vertex colours in the order given."""
        self.colors.extend(args)