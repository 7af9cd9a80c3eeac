from __future__ import annotations
import logging
from typing import Dict, Optional, Sequence, Tuple, Union
import numpy as np

from .errors import OutOfRangeError
from .hexgrid import (
    CanonCoords,
    UserCoords,
    EMPTY_CANON,
    EMPTY_USER,
    PixelSize,
    canon_from_pixel,
    canon_from_user,
    hex_range,
    step,
    user_from_canon,
    whole,
)
from .hexside import Hexside

logger = logging.getLogger(__name__)

# Unscaled pixel pitch between columns, and full hex height.
DEFAULT_GRID_SIZE: PixelSize = (27.0, 30.0)
DEFAULT_MARGIN: PixelSize = (0.0, 0.0)
DEFAULT_SCALES: Tuple[float, ...] = (1.0,)

AnyCoords = Union[CanonCoords, UserCoords]


class CoordinateSystem:
    """
    Addressing and pixel geometry for a rectangular hex grid.

    - ``grid_extent`` is (columns, rows) in user coordinates.
    - ``grid_size`` is the unscaled (pitch between columns, full hex height) in
      pixels, or None while the host has not supplied it; picking then finds
      nothing.
    - ``margin`` is the unscaled blank border around the map, in pixels.
    - ``scales`` are the available map scales; the current one is selected by
      index (see :meth:`set_scale_index`).

    All pixel geometry is derived from these inputs on every call.
    """

    def __init__(
        self,
        grid_extent: Tuple[int, int],
        grid_size: Optional[PixelSize] = DEFAULT_GRID_SIZE,
        margin: PixelSize = DEFAULT_MARGIN,
        scales: Sequence[float] = DEFAULT_SCALES,
        scale_index: int = 0,
    ):
        cols, rows = int(grid_extent[0]), int(grid_extent[1])
        if cols < 1 or rows < 1:
            raise ValueError(f"Grid needs at least one column and one row, got {grid_extent!r}.")
        if grid_size is not None and (grid_size[0] <= 0 or grid_size[1] <= 0):
            raise ValueError(f"Hex grid size must be positive, got {grid_size!r}.")

        self.grid_extent: Tuple[int, int] = (cols, rows)
        self.grid_size: Optional[PixelSize] = (
            None if grid_size is None else (float(grid_size[0]), float(grid_size[1]))
        )
        self.margin: PixelSize = (float(margin[0]), float(margin[1]))
        self._scales: Tuple[float, ...] = self._checked_scales(scales)
        self._scale_index = 0
        self.set_scale_index(scale_index)

    def __repr__(self) -> str:
        return (f"CoordinateSystem(grid_extent={self.grid_extent!r}, grid_size={self.grid_size!r}, "
                f"margin={self.margin!r}, scale={self.scale!r})")

    # --- scale state ---
    @staticmethod
    def _checked_scales(scales: Sequence[float]) -> Tuple[float, ...]:
        scales = tuple(float(s) for s in scales)
        if not scales:
            raise ValueError("At least one map scale is required.")
        if any(s <= 0 for s in scales):
            raise ValueError(f"Map scales must be positive, got {scales!r}.")
        return scales

    @property
    def scales(self) -> Tuple[float, ...]:
        return self._scales

    @property
    def scale_index(self) -> int:
        return self._scale_index

    @property
    def scale(self) -> float:
        """Current scaling factor for map display."""
        return self._scales[self._scale_index]

    def set_scale_index(self, index: int) -> bool:
        """
        Select the map scale at ``index``, clamped to the available scales.
        Returns True if the current scale index changed, so the caller knows
        to redraw and re-pick.
        """
        new_index = max(0, min(len(self._scales) - 1, int(index)))
        if new_index == self._scale_index:
            return False
        self._scale_index = new_index
        logger.debug("Map scale index -> %d (scale %.3f)", new_index, self.scale)
        return True

    def set_scales(self, scales: Sequence[float]) -> bool:
        """Replace the available scales; the current index is re-clamped."""
        self._scales = self._checked_scales(scales)
        old_index = self._scale_index
        self._scale_index = min(old_index, len(self._scales) - 1)
        return self._scale_index != old_index

    # --- derived pixel geometry ---
    @property
    def grid_size_scaled(self) -> Optional[Tuple[float, float]]:
        if self.grid_size is None:
            return None
        return (self.grid_size[0] * self.scale, self.grid_size[1] * self.scale)

    @property
    def margin_scaled(self) -> Tuple[float, float]:
        return (self.margin[0] * self.scale, self.margin[1] * self.scale)

    @property
    def map_size_pixels(self) -> Optional[Tuple[float, float]]:
        """Scaled pixel size of the whole map, margins included."""
        if self.grid_size is None:
            return None
        w, h = self.grid_size
        cols, rows = self.grid_extent
        mx, my = self.margin
        return ((w * cols + w / 3.0 + 2.0 * mx) * self.scale,
                (h * rows + h / 2.0 + 2.0 * my) * self.scale)

    # --- coordinate helpers ---
    def _in_extent(self, user: Tuple[int, int]) -> bool:
        try:
            col, row = whole(user[0]), whole(user[1])
        except (TypeError, ValueError):
            # fractional or non-numeric coordinates name no cell
            return False
        cols, rows = self.grid_extent
        return 0 <= col < cols and 0 <= row < rows

    def to_canonical(self, user: Tuple[int, int]) -> CanonCoords:
        """Canonical coordinates for ``user``, or EMPTY_CANON when off the grid."""
        if not self._in_extent(user):
            return EMPTY_CANON
        return canon_from_user(user)

    def to_user(self, canon: Tuple[int, int]) -> UserCoords:
        """User coordinates for ``canon``, or EMPTY_USER when off the grid."""
        if canon == EMPTY_CANON:
            return EMPTY_USER
        try:
            user = user_from_canon(canon)
        except (TypeError, ValueError):
            return EMPTY_USER
        if not self._in_extent(user):
            return EMPTY_USER
        return user

    def as_canonical(self, coords: AnyCoords) -> CanonCoords:
        """
        Canonical form of either flavour of coordinates, without an extent
        check. Plain tuples are read as user coordinates.
        """
        if isinstance(coords, CanonCoords):
            return coords
        return canon_from_user(coords)

    def is_on_board(self, coords: AnyCoords) -> bool:
        if isinstance(coords, CanonCoords):
            return not self.to_user(coords).is_empty
        return self._in_extent(coords)

    def range(self, a: AnyCoords, b: AnyCoords) -> int:
        """Hex distance between ``a`` and ``b``, either flavour of coordinates."""
        return hex_range(self.as_canonical(a), self.as_canonical(b))

    def neighbor(self, canon: CanonCoords, hexside: Hexside) -> CanonCoords:
        """The hex one step from ``canon`` towards ``hexside``; EMPTY_CANON past the grid edge."""
        if canon == EMPTY_CANON:
            return EMPTY_CANON
        candidate = step(canon, hexside)
        if self.to_user(candidate).is_empty:
            return EMPTY_CANON
        return candidate

    def neighbors(self, canon: CanonCoords) -> Dict[Hexside, CanonCoords]:
        """In-grid neighbours of ``canon`` keyed by direction."""
        found = {}
        for hexside in Hexside:
            n = self.neighbor(canon, hexside)
            if not n.is_empty:
                found[hexside] = n
        return found

    # --- pixel helpers ---
    def _origin(self) -> np.ndarray:
        """Scaled pixel offset of the centre of hex (0,0) from the map's top-left, margin excluded."""
        w, h = self.grid_size_scaled
        return np.array([w * 2.0 / 3.0, h], dtype=float)

    def pick_hex(self, point, offset=(0.0, 0.0)) -> CanonCoords:
        """
        Canonical coordinates of the hex under screen ``point``.

        ``offset`` is the current scroll position of the viewport (the pixel
        location of the map's top-left corner on screen). Returns EMPTY_CANON
        when no grid size is known or the point is off the map.
        """
        if self.grid_size is None:
            return EMPTY_CANON
        w, h = self.grid_size_scaled
        p = (np.asarray(point, dtype=float)
             - np.asarray(offset, dtype=float)
             - np.asarray(self.margin_scaled, dtype=float)
             - self._origin())
        canon = canon_from_pixel(p, w, h)
        if self.to_user(canon).is_empty:
            return EMPTY_CANON
        return canon

    def hex_center_pixel(self, user: Tuple[int, int]) -> np.ndarray:
        """
        Pixel location of the centre of the hex at ``user``, in the map's own
        (unscrolled) frame at the current scale.
        """
        if self.grid_size is None:
            raise ValueError("No grid size available to locate hexes.")
        if not self._in_extent(user):
            raise OutOfRangeError(user, self.grid_extent)
        w, h = self.grid_size_scaled
        col, row = user[0], user[1]
        xy = np.array([w * col,
                       h * row + (h / 2.0) * ((col + 1) % 2)], dtype=float)
        # odd columns start flush with the top edge, even columns half a hex lower
        return xy + np.array([w * 2.0 / 3.0, h / 2.0]) + np.asarray(self.margin_scaled, dtype=float)
