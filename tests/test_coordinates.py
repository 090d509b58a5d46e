import pytest

from hexterrain.coordinates import HexCoordinates
from hexterrain.geometry import Vec3
from hexterrain.metrics import INNER_RADIUS, OUTER_RADIUS


def cell_center(offset_x, offset_z):
    x = (offset_x + offset_z * 0.5 - offset_z // 2) * (INNER_RADIUS * 2.0)
    y = offset_z * (OUTER_RADIUS * 1.5)
    return Vec3(x, y, 0.0)


def test_default_is_origin():
    c = HexCoordinates()
    assert (c.x, c.y, c.z) == (0, 0, 0)


@pytest.mark.parametrize("x, z", [(0, 0), (3, -1), (-4, 7), (2, 2)])
def test_cube_invariant(x, z):
    c = HexCoordinates(x, z)
    assert c.x + c.y + c.z == 0


def test_str_formats():
    c = HexCoordinates(3, -1)
    assert str(c) == f"({c.x}, {c.y}, {c.z})"
    assert c.to_string_on_separate_lines() == f"{c.x}\n{c.y}\n{c.z}"
    assert str(c).count(",") == 2


@pytest.mark.parametrize("offset_x", range(0, 5))
def test_from_offset_even_rows_keep_z(offset_x):
    c = HexCoordinates.from_offset_coordinates(offset_x, 4)
    assert c.z == 4
    assert c.x + c.y + c.z == 0


def test_from_offset_row_zero_is_identity_on_x():
    assert HexCoordinates.from_offset_coordinates(3, 0) == HexCoordinates(3, 0)


def test_from_offset_neighbouring_columns_differ_by_one():
    a = HexCoordinates.from_offset_coordinates(1, 3)
    b = HexCoordinates.from_offset_coordinates(2, 3)
    assert b.x - a.x == 1
    assert a.z == b.z


def test_equality_and_hash():
    a = HexCoordinates.from_offset_coordinates(2, 5)
    b = HexCoordinates.from_offset_coordinates(2, 5)
    assert a == b
    assert len({a, b}) == 1


@pytest.mark.parametrize("offset_x", range(0, 5))
@pytest.mark.parametrize("offset_z", range(0, 5))
def test_from_position_round_trips_cell_centers(offset_x, offset_z):
    expected = HexCoordinates.from_offset_coordinates(offset_x, offset_z)
    assert HexCoordinates.from_position(cell_center(offset_x, offset_z)) == expected


@pytest.mark.parametrize("dx, dy", [(0.2, 0.1), (-0.3, 0.2), (0.1, -0.35), (-0.25, -0.2)])
def test_from_position_near_center_stays_in_cell(dx, dy):
    center = cell_center(2, 3)
    expected = HexCoordinates.from_offset_coordinates(2, 3)
    assert HexCoordinates.from_position(center + Vec3(dx, dy, 0.0)) == expected


def test_from_position_ignores_height():
    center = cell_center(1, 2)
    assert HexCoordinates.from_position(center) == HexCoordinates.from_position(
        center + Vec3(0.0, 0.0, 50.0)
    )