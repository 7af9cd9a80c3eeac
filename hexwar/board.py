from __future__ import annotations
import logging
from collections import Counter
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple

from .coords import AnyCoords, CoordinateSystem
from .errors import OutOfRangeError
from .hexes import Hex, HexFactory, hex_factory
from .hexgrid import CanonCoords, UserCoords, user_from_canon, whole

logger = logging.getLogger(__name__)


class Board:
    """
    A fixed-size hex map: one :class:`~hexwar.hexes.Hex` for every user
    coordinate in ``[0, width) x [0, height)``.

    - ``factory(board, coords)`` builds the hex for each cell; it is called
      once per cell, column by column, before the constructor returns.
    - ``coordinates`` is the board's :class:`CoordinateSystem`; one is made
      from ``geometry`` (grid_size, margin, scales, ...) when not given.
    """

    def __init__(
        self,
        size: Tuple[int, int],
        factory: HexFactory,
        coordinates: Optional[CoordinateSystem] = None,
        **geometry,
    ):
        width, height = int(size[0]), int(size[1])
        if width < 1 or height < 1:
            raise ValueError(f"Board needs at least one column and one row, got {size!r}.")
        if coordinates is None:
            coordinates = CoordinateSystem((width, height), **geometry)
        elif geometry:
            raise TypeError("Pass either a CoordinateSystem or geometry keywords, not both.")
        elif coordinates.grid_extent != (width, height):
            raise ValueError(
                f"Coordinate extent {coordinates.grid_extent!r} does not match board size {(width, height)!r}."
            )

        self._size = (width, height)
        self.coordinates = coordinates
        self._hexes: Dict[UserCoords, Hex] = self._build(factory)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Built %dx%d board: %s", width, height, dict(self.terrain_counts()))

    def _build(self, factory: HexFactory) -> Dict[UserCoords, Hex]:
        hexes: Dict[UserCoords, Hex] = {}
        for col in range(self._size[0]):
            for row in range(self._size[1]):
                coords = UserCoords(col, row)
                h = factory(self, coords)
                if h.coords != coords:
                    raise ValueError(f"Hex factory built {h!r} for cell {coords!r}.")
                if h.board is not self:
                    raise ValueError(f"Hex factory built {h!r} for another board.")
                hexes[coords] = h
        return hexes

    @classmethod
    def from_terrain(
        cls,
        rows: Sequence[str],
        elevations: Optional[Sequence[Sequence[int]]] = None,
        roads: Optional[Mapping[Tuple[int, int], Sequence[int]]] = None,
        **geometry,
    ) -> "Board":
        """
        Build a board from rows of one-character terrain codes (see
        ``hexwar.hexes.TERRAIN_CODES``). ``rows[r][c]`` is the hex at user
        coordinates (c, r); ``elevations`` has the same shape; ``roads`` maps
        (c, r) to the hexsides its road leaves through.
        """
        if not rows:
            raise ValueError("Terrain map has no rows.")
        width = len(rows[0])
        if any(len(line) != width for line in rows):
            raise ValueError("Terrain map rows differ in length.")
        if elevations is not None and (
            len(elevations) != len(rows) or any(len(line) != width for line in elevations)
        ):
            raise ValueError("Elevation map does not match the terrain map.")
        roads = roads or {}

        def build(board: "Board", coords: UserCoords) -> Hex:
            col, row = coords
            elevation = 0 if elevations is None else elevations[row][col]
            factory = hex_factory(rows[row][col], elevation, roads.get((col, row), ()))
            return factory(board, coords)

        return cls((width, len(rows)), build, **geometry)

    # --- grid access ---
    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) in hexes."""
        return self._size

    def _user(self, coords: AnyCoords) -> UserCoords:
        if isinstance(coords, CanonCoords):
            return user_from_canon(coords)
        return UserCoords(whole(coords[0]), whole(coords[1]))

    def contains(self, coords: AnyCoords) -> bool:
        return self.coordinates.is_on_board(coords)

    __contains__ = contains

    def hex_at(self, coords: AnyCoords) -> Hex:
        """The hex at ``coords`` (user or canonical); raises OutOfRangeError off the board."""
        if not self.contains(coords):
            raise OutOfRangeError(coords, self._size)
        return self._hexes[self._user(coords)]

    def get_hex(self, coords: AnyCoords) -> Optional[Hex]:
        if not self.contains(coords):
            return None
        return self._hexes[self._user(coords)]

    def __iter__(self) -> Iterator[Hex]:
        return iter(self._hexes.values())

    def __len__(self) -> int:
        return len(self._hexes)

    def pick_hex(self, point, offset=(0.0, 0.0)) -> Optional[Hex]:
        """The hex under screen ``point`` for scroll ``offset``, or None."""
        canon = self.coordinates.pick_hex(point, offset)
        if canon.is_empty:
            return None
        return self.hex_at(canon)

    def terrain_counts(self) -> Counter:
        return Counter(type(h).__name__ for h in self._hexes.values())

    # --- map editing ---
    def set_elevation(self, coords: AnyCoords, elevation_asl: int) -> Hex:
        """Change the ground elevation of one hex while the map is being edited."""
        h = self.hex_at(coords)
        h._set_elevation(elevation_asl)
        return h
