"""
Per-hex terrain and elevation model.

A :class:`Hex` knows where it is, which board it belongs to and how high its
ground lies; concrete terrain variants say how tall their cover is and what it
costs to enter them from each direction.
"""
from __future__ import annotations
import logging
import weakref
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, Optional, Tuple, Type, Union

from .errors import InvalidTerrainError
from .hexgrid import CanonCoords, UserCoords, canon_from_user, hex_range, whole
from .hexside import Hexside

logger = logging.getLogger(__name__)

# Height of an observer's (or target's) eye above the ground it stands on.
EYE_HEIGHT = 1

# Step cost of terrain that cannot be entered; never a number.
IMPASSABLE = None

CLEAR_COST = 4
ROAD_COST = 2
FORD_COST = 5
HILL_COST = 5
MOUNTAIN_COST = 6
WOODS_COST = 8

WOODS_COVER = 7
MOUNTAIN_COVER = 2


def is_passable(cost: Optional[int]) -> bool:
    return cost is not IMPASSABLE


class Hex(ABC):
    """
    One cell of a :class:`~hexwar.board.Board`.

    Coordinates are fixed at construction. The board is held through a weak
    reference; the board owns its hexes, not the other way round.
    """

    eye_height: int = EYE_HEIGHT

    def __init__(self, board, coords: Tuple[int, int], elevation_asl: int = 0):
        if board is None:
            raise ValueError("A hex must belong to a board.")
        if self.eye_height < 0:
            raise ValueError(f"{type(self).__name__}.eye_height must be non-negative, got {self.eye_height}.")
        self._board_ref = weakref.ref(board)
        self._coords = UserCoords(whole(coords[0]), whole(coords[1]))
        self._canon = canon_from_user(self._coords)
        self._elevation_asl = int(elevation_asl)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._coords.col}, {self._coords.row}, elevation={self._elevation_asl})"

    @property
    def board(self):
        """The owning board, or None once it has been discarded."""
        return self._board_ref()

    @property
    def coords(self) -> UserCoords:
        return self._coords

    @property
    def canon(self) -> CanonCoords:
        return self._canon

    @property
    def elevation_asl(self) -> int:
        """Ground elevation above sea level."""
        return self._elevation_asl

    def _set_elevation(self, elevation_asl: int) -> None:
        # Only Board.set_elevation calls this.
        self._elevation_asl = int(elevation_asl)

    @property
    def height_observer(self) -> int:
        return self._elevation_asl + self.eye_height

    @property
    def height_target(self) -> int:
        return self._elevation_asl + self.eye_height

    @property
    @abstractmethod
    def height_terrain(self) -> int:
        """Height of the top of this hex's terrain (cover), above sea level."""

    def range(self, target: Union["Hex", CanonCoords, UserCoords, Tuple[int, int]]) -> int:
        """
        Distance in hexes to ``target``: another hex, canonical coordinates, or
        user coordinates (plain tuples are read as user coordinates).
        """
        if isinstance(target, Hex):
            other = target.canon
        elif isinstance(target, CanonCoords):
            other = target
        else:
            other = canon_from_user(target)
        return hex_range(self._canon, other)

    def step_cost(self, direction) -> Optional[int]:
        """
        Cost to enter this hex heading in ``direction`` (a Hexside or 0..5).
        Returns IMPASSABLE when the hex cannot be entered that way, including
        for a direction that is not a hexside at all.
        """
        try:
            hexside = Hexside.from_int(int(direction))
        except (TypeError, ValueError):
            logger.debug("%r: %r is not a hexside, treating as impassable", self, direction)
            return IMPASSABLE
        try:
            return self.terrain_cost(hexside)
        except InvalidTerrainError as exc:
            logger.debug("%r cannot be entered heading %s: %s", self, hexside.name, exc)
            return IMPASSABLE

    @abstractmethod
    def terrain_cost(self, direction: Hexside) -> Optional[int]:
        """
        Entry cost for this terrain heading ``direction``. May return
        IMPASSABLE, or raise InvalidTerrainError when the direction cannot be
        priced.
        """


class TerrainHex(Hex):
    """A hex whose cost and cover do not depend on direction."""

    code: str = ""
    cost: Optional[int] = CLEAR_COST
    cover: int = 0

    @property
    def height_terrain(self) -> int:
        return self._elevation_asl + self.cover

    def terrain_cost(self, direction: Hexside) -> Optional[int]:
        return self.cost


class ClearHex(TerrainHex):
    code = "."


class FordHex(TerrainHex):
    code = "F"
    cost = FORD_COST


class HillHex(TerrainHex):
    code = "H"
    cost = HILL_COST


class MountainHex(TerrainHex):
    code = "M"
    cost = MOUNTAIN_COST
    cover = MOUNTAIN_COVER


class WoodsHex(TerrainHex):
    code = "W"
    cost = WOODS_COST
    cover = WOODS_COVER


class RiverHex(TerrainHex):
    code = "~"
    cost = IMPASSABLE


class ImpassableHex(TerrainHex):
    code = "#"
    cost = IMPASSABLE


class RoadHex(TerrainHex):
    """Clear terrain with a road leaving through some of its hexsides."""

    code = "r"

    def __init__(self, board, coords: Tuple[int, int], elevation_asl: int = 0,
                 roads: Iterable[int] = ()):
        super().__init__(board, coords, elevation_asl)
        self.roads = frozenset(Hexside.from_int(int(r)) for r in roads)

    def terrain_cost(self, direction: Hexside) -> Optional[int]:
        # Heading ``direction`` means crossing into this hex through its opposite side.
        if direction.opposite in self.roads:
            return ROAD_COST
        return CLEAR_COST


TERRAIN_CODES: Dict[str, Type[TerrainHex]] = {
    cls.code: cls
    for cls in (ClearHex, RoadHex, FordHex, HillHex, MountainHex, WoodsHex, RiverHex, ImpassableHex)
}

HexFactory = Callable[[object, UserCoords], Hex]


def hex_factory(code: str, elevation_asl: int = 0, roads: Iterable[int] = ()) -> HexFactory:
    """
    Constructor for the terrain variant registered under ``code``, to be
    called by the board with itself and the cell's coordinates.
    """
    try:
        cls = TERRAIN_CODES[code]
    except KeyError:
        raise InvalidTerrainError(f"Unknown terrain code {code!r}.") from None
    roads = tuple(roads)
    if roads and cls is not RoadHex:
        raise InvalidTerrainError(f"Terrain {code!r} cannot carry roads.")

    def build(board, coords: UserCoords) -> Hex:
        if cls is RoadHex:
            return RoadHex(board, coords, elevation_asl, roads=roads)
        return cls(board, coords, elevation_asl)

    return build
