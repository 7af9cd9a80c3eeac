"""Exceptions raised by the hex-grid engine."""
from __future__ import annotations


class HexwarError(Exception):
    """Base class for every error raised by this package."""


class OutOfRangeError(HexwarError, IndexError):
    """A coordinate lies outside the extent of the grid."""

    def __init__(self, coords, extent=None):
        self.coords = coords
        self.extent = extent
        if extent is None:
            msg = f"{coords!r} is not a valid grid coordinate"
        else:
            msg = f"{coords!r} is outside grid extent {tuple(extent)!r}"
        super().__init__(msg)


class InvalidTerrainError(HexwarError, ValueError):
    """A terrain variant cannot be built, or cannot price an entry direction."""
