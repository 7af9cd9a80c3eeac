import pytest

from hexwar.hexside import HEXSIDE_DELTAS, Hexside


def test_opposites():
    assert Hexside.N.opposite is Hexside.S
    assert Hexside.NE.opposite is Hexside.SW
    assert Hexside.SE.opposite is Hexside.NW
    for side in Hexside:
        assert side.opposite.opposite is side


def test_opposite_deltas_cancel():
    for side in Hexside:
        dx, dy = side.delta
        ox, oy = side.opposite.delta
        assert (dx + ox, dy + oy) == (0, 0)


def test_rotation():
    assert Hexside.N.clockwise() is Hexside.NE
    assert Hexside.NW.clockwise() is Hexside.N
    assert Hexside.N.counterclockwise() is Hexside.NW
    assert Hexside.SE.clockwise(3) is Hexside.NW
    assert Hexside.S.counterclockwise(-2) is Hexside.NW
    for side in Hexside:
        assert side.clockwise(6) is side
        assert side.clockwise(2).counterclockwise(2) is side


def test_from_int():
    assert Hexside.from_int(4) is Hexside.SW
    with pytest.raises(ValueError):
        Hexside.from_int(6)
    with pytest.raises(ValueError):
        Hexside.from_int(-1)


def test_deltas_are_distinct():
    assert len(set(HEXSIDE_DELTAS)) == 6
