import logging

import pytest

from hexwar.board import Board
from hexwar.errors import InvalidTerrainError
from hexwar.hexes import (
    CLEAR_COST,
    IMPASSABLE,
    ROAD_COST,
    WOODS_COST,
    WOODS_COVER,
    ClearHex,
    Hex,
    RoadHex,
    TerrainHex,
    WoodsHex,
    hex_factory,
    is_passable,
)
from hexwar.hexgrid import CanonCoords, UserCoords
from hexwar.hexside import Hexside


def clear_board(size=(5, 5)):
    return Board(size, lambda board, coords: ClearHex(board, coords))


def test_heights_at_elevation_100():
    board = clear_board()
    h = board.set_elevation((1, 1), 100)
    assert h.elevation_asl == 100
    assert h.height_observer == 101
    assert h.height_target == 101
    assert h.height_terrain == 100


def test_woods_cover_above_ground():
    board = Board((2, 2), hex_factory("W", elevation_asl=3))
    woods = board.hex_at((0, 0))
    assert isinstance(woods, WoodsHex)
    assert woods.height_terrain == 3 + WOODS_COVER
    assert woods.height_observer >= woods.elevation_asl
    assert woods.step_cost(Hexside.N) == WOODS_COST


def test_range_accepts_hex_and_coordinates():
    board = clear_board()
    a = board.hex_at((0, 0))
    b = board.hex_at((3, 0))
    assert a.range(b) == 3
    assert b.range(a) == 3
    assert a.range(UserCoords(3, 0)) == 3
    assert a.range(CanonCoords(3, 1)) == 3
    assert a.range((0, 0)) == 0


def test_coordinates_are_read_only():
    h = clear_board().hex_at((2, 3))
    assert h.coords == (2, 3)
    assert h.canon == (2, 4)
    with pytest.raises(AttributeError):
        h.coords = UserCoords(0, 0)
    with pytest.raises(AttributeError):
        h.elevation_asl = 5


def test_road_cost_depends_on_direction():
    build = hex_factory("r", roads=[Hexside.N, Hexside.S])
    board = Board((3, 3), build)
    road = board.hex_at((1, 1))
    assert isinstance(road, RoadHex)
    # heading south enters through the north hexside
    assert road.step_cost(Hexside.S) == ROAD_COST
    assert road.step_cost(Hexside.N) == ROAD_COST
    assert road.step_cost(Hexside.NE) == CLEAR_COST
    assert road.step_cost(4) == CLEAR_COST


@pytest.mark.parametrize("code", ["~", "#"])
def test_impassable_terrain(code):
    h = Board((2, 2), hex_factory(code)).hex_at((0, 0))
    for side in Hexside:
        cost = h.step_cost(side)
        assert cost is IMPASSABLE
        assert not is_passable(cost)


@pytest.mark.parametrize("direction", [6, -1, "north", None])
def test_invalid_direction_is_impassable(direction):
    h = clear_board().hex_at((0, 0))
    assert h.step_cost(direction) is IMPASSABLE
    assert is_passable(h.step_cost(Hexside.SE))


class CausewayHex(TerrainHex):
    """Only enterable along its north-south axis."""

    def terrain_cost(self, direction):
        if direction not in (Hexside.N, Hexside.S):
            raise InvalidTerrainError(f"no causeway heading {direction.name}")
        return 3


def test_invalid_terrain_becomes_impassable(caplog):
    board = Board((2, 2), lambda b, c: CausewayHex(b, c))
    h = board.hex_at((1, 1))
    assert h.step_cost(Hexside.S) == 3
    with caplog.at_level(logging.DEBUG, logger="hexwar.hexes"):
        assert h.step_cost(Hexside.NE) is IMPASSABLE
    assert "no causeway heading NE" in caplog.text


def test_abstract_hex_cannot_be_built():
    board = clear_board()
    with pytest.raises(TypeError):
        Hex(board, (0, 0))


def test_negative_eye_height_rejected():
    class Sunken(ClearHex):
        eye_height = -1

    with pytest.raises(ValueError):
        Board((1, 1), lambda b, c: Sunken(b, c))


def test_custom_eye_height():
    class Tower(ClearHex):
        eye_height = 4

    h = Board((1, 1), lambda b, c: Tower(b, c, elevation_asl=10)).hex_at((0, 0))
    assert h.height_observer == 14
    assert h.height_target == 14


def test_hex_requires_board():
    with pytest.raises(ValueError):
        ClearHex(None, (0, 0))


def test_factory_rejects_unknown_code_and_stray_roads():
    with pytest.raises(InvalidTerrainError):
        hex_factory("?")
    with pytest.raises(InvalidTerrainError):
        hex_factory("W", roads=[Hexside.N])


def test_hex_rejects_fractional_coordinates():
    board = clear_board()
    with pytest.raises(ValueError):
        ClearHex(board, (1.7, 2.9))
