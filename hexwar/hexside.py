from __future__ import annotations

from enum import IntEnum
from typing import Tuple


class Hexside(IntEnum):
    """The six directions around a flat-topped hex, clockwise from north.

    Each direction carries its step in canonical coordinates, where ``x`` runs
    along the oblique axis (up and to the right) and ``y`` along the straight
    axis (vertically down):

      N : ( 0, -1)
      NE: ( 1,  0)
      SE: ( 1,  1)
      S : ( 0,  1)
      SW: (-1,  0)
      NW: (-1, -1)
    """

    N = 0
    NE = 1
    SE = 2
    S = 3
    SW = 4
    NW = 5

    @property
    def delta(self) -> Tuple[int, int]:
        return HEXSIDE_DELTAS[self]

    @property
    def opposite(self) -> "Hexside":
        return Hexside((int(self) + 3) % 6)

    def clockwise(self, steps: int = 1) -> "Hexside":
        """Rotate clockwise by ``steps`` sixths of a turn."""
        return Hexside((int(self) + steps) % 6)

    def counterclockwise(self, steps: int = 1) -> "Hexside":
        """Rotate counter-clockwise by ``steps`` sixths of a turn."""
        return Hexside((int(self) - steps) % 6)

    @staticmethod
    def from_int(value: int) -> "Hexside":
        if not 0 <= value <= 5:
            raise ValueError(f"Hexside must be in 0..5, got {value}")
        return Hexside(value)


HEXSIDE_DELTAS: Tuple[Tuple[int, int], ...] = (
    (0, -1),   # N
    (1, 0),    # NE
    (1, 1),    # SE
    (0, 1),    # S
    (-1, 0),   # SW
    (-1, -1),  # NW
)
