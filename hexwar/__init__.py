"""
Hex-grid wargame map engine.

Core modules:
- hexside: the six directions around a hex
- hexgrid: canonical/user coordinates, distance and picking math
- coords: CoordinateSystem (grid extent, pixel geometry, map scale)
- hexes: Hex base class and stock terrain variants
- board: Board
"""
from .board import Board
from .coords import CoordinateSystem
from .errors import HexwarError, InvalidTerrainError, OutOfRangeError
from .hexes import (
    IMPASSABLE,
    ClearHex,
    FordHex,
    Hex,
    HillHex,
    ImpassableHex,
    MountainHex,
    RiverHex,
    RoadHex,
    TerrainHex,
    WoodsHex,
    hex_factory,
    is_passable,
)
from .hexgrid import EMPTY_CANON, EMPTY_USER, CanonCoords, UserCoords, hex_range
from .hexside import Hexside

__all__ = [
    "Board", "CoordinateSystem",
    "HexwarError", "InvalidTerrainError", "OutOfRangeError",
    "Hex", "TerrainHex", "ClearHex", "RoadHex", "FordHex", "HillHex", "MountainHex",
    "WoodsHex", "RiverHex", "ImpassableHex", "IMPASSABLE", "hex_factory", "is_passable",
    "CanonCoords", "UserCoords", "EMPTY_CANON", "EMPTY_USER", "hex_range",
    "Hexside",
]
