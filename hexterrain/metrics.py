"""Hex grid dimensions, terrace interpolation and noise perturbation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from hexterrain.directions import HexDirection
from hexterrain.geometry import Color8, LinearColor, Vec3

OUTER_RADIUS = 1.0
INNER_RADIUS = OUTER_RADIUS * math.sqrt(3.0) / 2.0

CHUNK_SIZE_X = 5
CHUNK_SIZE_Z = 5

SOLID_FACTOR = 0.75
BLEND_FACTOR = 1.0 - SOLID_FACTOR

ELEVATION_STEP = 1.0
STREAM_BED_ELEVATION_OFFSET = 0.0

TERRACES_PER_SLOPE = 2
TERRACE_STEPS = TERRACES_PER_SLOPE * 2 + 1
HORIZONTAL_TERRACE_STEP_SIZE = 1.0 / TERRACE_STEPS
VERTICAL_TERRACE_STEP_SIZE = 1.0 / (TERRACES_PER_SLOPE + 1)

CELL_PERTURB_STRENGTH = 0.5
NOISE_SCALE = 0.01

CORNERS: tuple[Vec3, ...] = (
    Vec3(0.0, OUTER_RADIUS, 0.0),
    Vec3(INNER_RADIUS, OUTER_RADIUS / 2, 0.0),
    Vec3(INNER_RADIUS, -OUTER_RADIUS / 2, 0.0),
    Vec3(0.0, -OUTER_RADIUS, 0.0),
    Vec3(-INNER_RADIUS, -OUTER_RADIUS / 2, 0.0),
    Vec3(-INNER_RADIUS, OUTER_RADIUS / 2, 0.0),
)

NEUTRAL_SAMPLE = (0.5, 0.5, 0.5, 0.5)


class EdgeType(Enum):
    FLAT = "flat"
    SLOPE = "slope"
    CLIFF = "cliff"


def edge_type(elevation1: int, elevation2: int) -> EdgeType:
    """Classify the connection between two elevations."""
    if elevation1 == elevation2:
        return EdgeType.FLAT
    if abs(elevation2 - elevation1) == 1:
        return EdgeType.SLOPE
    return EdgeType.CLIFF


@dataclass(frozen=True)
class EdgeVertices:
    """Five vertices subdividing one hexagon edge."""

    v1: Vec3 = Vec3()
    v2: Vec3 = Vec3()
    v3: Vec3 = Vec3()
    v4: Vec3 = Vec3()
    v5: Vec3 = Vec3()

    @classmethod
    def between(cls, corner1: Vec3, corner2: Vec3, outer_step: float = 0.25) -> EdgeVertices:
        """Subdivide the edge from ``corner1`` to ``corner2``."""
        return cls(
            corner1,
            corner1.lerp(corner2, outer_step),
            corner1.lerp(corner2, 0.5),
            corner1.lerp(corner2, 1.0 - outer_step),
            corner2,
        )

    def __iter__(self):
        return iter((self.v1, self.v2, self.v3, self.v4, self.v5))


def _channels(color: Color8) -> tuple[float, float, float, float]:
    return (color.r / 255.0, color.g / 255.0, color.b / 255.0, color.a / 255.0)


@dataclass(frozen=True)
class NoiseTexture:
    """A tiling RGBA noise image sampled with bilinear filtering."""

    width: int
    height: int
    pixels: Sequence[Color8]
    scale: float = NOISE_SCALE

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("noise texture dimensions must be positive")
        object.__setattr__(self, "pixels", tuple(self.pixels))
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} pixels, got {len(self.pixels)}"
            )

    def _pixel(self, x: int, y: int) -> tuple[float, float, float, float]:
        return _channels(self.pixels[y * self.width + x])

    def sample(self, position: Vec3) -> tuple[float, float, float, float]:
        """Bilinear RGBA sample at the wrapped texture coordinate of ``position``."""
        su = position.x * self.scale
        sv = position.y * self.scale
        u = min(max(su - math.floor(su), 0.0), 1.0)
        v = min(max(sv - math.floor(sv), 0.0), 1.0)

        fx = u * (self.width - 1)
        fy = v * (self.height - 1)
        x0 = math.floor(fx)
        y0 = math.floor(fy)
        x1 = min(x0 + 1, self.width - 1)
        y1 = min(y0 + 1, self.height - 1)
        frac_x = fx - x0
        frac_y = fy - y0

        c00 = self._pixel(x0, y0)
        c10 = self._pixel(x1, y0)
        c01 = self._pixel(x0, y1)
        c11 = self._pixel(x1, y1)

        def blend(a: float, b: float, t: float) -> float:
            return a + (b - a) * t

        return tuple(
            blend(blend(p00, p10, frac_x), blend(p01, p11, frac_x), frac_y)
            for p00, p10, p01, p11 in zip(c00, c10, c01, c11)
        )


def first_corner(direction: HexDirection) -> Vec3:
    return CORNERS[direction]


def second_corner(direction: HexDirection) -> Vec3:
    return CORNERS[(direction + 1) % 6]


def first_solid_corner(direction: HexDirection) -> Vec3:
    return first_corner(direction) * SOLID_FACTOR


def second_solid_corner(direction: HexDirection) -> Vec3:
    return second_corner(direction) * SOLID_FACTOR


def bridge(direction: HexDirection) -> Vec3:
    """Offset across the blend region towards the neighbour in ``direction``."""
    return (first_corner(direction) + second_corner(direction)) * BLEND_FACTOR


def sample_noise(position: Vec3, noise: NoiseTexture | None = None) -> tuple[float, float, float, float]:
    """Sample ``noise`` at ``position``; neutral when there is no noise."""
    if noise is None:
        return NEUTRAL_SAMPLE
    return noise.sample(position)


def perturb(position: Vec3, noise: NoiseTexture | None = None) -> Vec3:
    """Displace ``position`` horizontally by the noise sample."""
    sample = sample_noise(position, noise)
    return position.replace(
        x=position.x + (sample[0] * 2.0 - 1.0) * CELL_PERTURB_STRENGTH,
        y=position.y + (sample[1] * 2.0 - 1.0) * CELL_PERTURB_STRENGTH,
    )


def terrace_lerp(a: Vec3, b: Vec3, step: int) -> Vec3:
    """Position ``step`` along a terraced slope from ``a`` to ``b``."""
    h = step * HORIZONTAL_TERRACE_STEP_SIZE
    v = int((step + 1) / 2) * VERTICAL_TERRACE_STEP_SIZE
    return Vec3(
        a.x + (b.x - a.x) * h,
        a.y + (b.y - a.y) * h,
        a.z + (b.z - a.z) * v,
    )


def terrace_lerp_color(a: LinearColor, b: LinearColor, step: int) -> LinearColor:
    return a.lerp_using_hsv(b, step * HORIZONTAL_TERRACE_STEP_SIZE)


def terrace_lerp_edge(a: EdgeVertices, b: EdgeVertices, step: int) -> EdgeVertices:
    return EdgeVertices(*(terrace_lerp(p, q, step) for p, q in zip(a, b)))