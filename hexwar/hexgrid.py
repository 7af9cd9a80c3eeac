from __future__ import annotations
from typing import NamedTuple, Tuple
import math
import numpy as np

from .hexside import Hexside

_EMPTY = -(2 ** 31)


class CanonCoords(NamedTuple):
    """
    Canonical (axial) coordinates of a hex.

    ``x`` runs along the oblique hex-axis (up and to the right), ``y`` along
    the straight hex-axis (vertically down). Distance and picking are computed
    in this basis.
    """
    x: int
    y: int

    @property
    def is_empty(self) -> bool:
        return self == EMPTY_CANON


class UserCoords(NamedTuple):
    """
    User (rectangular, "offset") coordinates of a hex: the (col, row) pair a
    map file or a UI uses. Even columns sit half a row lower than odd ones.
    """
    col: int
    row: int

    @property
    def is_empty(self) -> bool:
        return self == EMPTY_USER


EMPTY_CANON = CanonCoords(_EMPTY, _EMPTY)
EMPTY_USER = UserCoords(_EMPTY, _EMPTY)

PixelSize = Tuple[float, float]

# --- coordinate conversion ---

def whole(value) -> int:
    """A coordinate component as an int; fractional or non-numeric values are rejected."""
    i = int(value)
    if i != value:
        raise ValueError(f"Hex coordinates must be whole numbers, got {value!r}.")
    return i

def canon_from_user(user: Tuple[int, int]) -> CanonCoords:
    """User -> canonical, without any extent check."""
    col, row = whole(user[0]), whole(user[1])
    if (col, row) == EMPTY_USER:
        return EMPTY_CANON
    return CanonCoords(col, row + col // 2)

def user_from_canon(canon: Tuple[int, int]) -> UserCoords:
    """Canonical -> user, without any extent check."""
    x, y = whole(canon[0]), whole(canon[1])
    if (x, y) == EMPTY_CANON:
        return EMPTY_USER
    return UserCoords(x, y - x // 2)

# --- distance and neighbours ---

def hex_range(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """
    Number of single-hexside steps between two canonical coordinates.

    Steps along either axis, or along both at once (SE/NW), cost one; so the
    distance is the largest of |dx|, |dy| and |dx - dy|.
    """
    if a == EMPTY_CANON or b == EMPTY_CANON:
        raise ValueError("range is undefined for the empty coordinate")
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return max(abs(dx), abs(dy), abs(dx - dy))

def step(canon: Tuple[int, int], hexside: Hexside, count: int = 1) -> CanonCoords:
    """Canonical coordinate ``count`` hexes away in direction ``hexside``."""
    dx, dy = Hexside(hexside).delta
    return CanonCoords(canon[0] + dx * count, canon[1] + dy * count)

# --- picking ---

def picking_matrices(grid_width: float, grid_height: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    The two 'picking' shear matrices (2x3 affine, last column is the
    translation) for hexes of pitch ``grid_width`` and height ``grid_height``.

    Assumes the origin at the centre of hex (0,0), the straight hex-axis
    vertically down and the oblique hex-axis up and to the right, at 120
    degrees from the straight one. Each matrix maps a pixel onto two of the
    three families of lines through hex centres and corners; rounding the
    transformed point counts the lines crossed on each family.
    """
    w = 1.5 / grid_width
    h = 1.0 / grid_height
    matrix_x = np.array([[w,  h, -0.5],
                         [w, -h, -0.5]], dtype=float)
    matrix_y = np.array([[0.0, 2.0 * h, -0.5],
                         [w,   h,       -0.5]], dtype=float)
    return matrix_x, matrix_y

def pick_axis(matrix: np.ndarray, point) -> int:
    """
    One canonical component of the hex containing ``point``.

    Both transformed components are rounded (half up) to integers first; the
    floor of (tx + ty + 2) / 3 then merges the triangles of the line lattice
    into whole hexes.
    """
    px, py = float(point[0]), float(point[1])
    tx, ty = np.floor(matrix @ np.array([px, py, 1.0]) + 0.5)
    return int(math.floor((tx + ty + 2.0) / 3.0))

def canon_from_pixel(point, grid_width: float, grid_height: float) -> CanonCoords:
    """Canonical coordinates of the hex containing ``point``, relative to the centre of hex (0,0)."""
    matrix_x, matrix_y = picking_matrices(grid_width, grid_height)
    return CanonCoords(pick_axis(matrix_x, point), pick_axis(matrix_y, point))

# --- drawing helpers ---

def hex_corners(center_xy, grid_width: float, grid_height: float) -> np.ndarray:
    """
    Six corner points of a flat-topped hex, clockwise (screen y down) from the
    rightmost corner. The hex is ``4/3 * grid_width`` wide.
    """
    cx, cy = float(center_xy[0]), float(center_xy[1])
    half_w = grid_width * 2.0 / 3.0
    half_h = grid_height / 2.0
    offsets = np.array([
        [half_w, 0.0],
        [half_w / 2.0, half_h],
        [-half_w / 2.0, half_h],
        [-half_w, 0.0],
        [-half_w / 2.0, -half_h],
        [half_w / 2.0, -half_h],
    ], dtype=float)
    return offsets + np.array([cx, cy], dtype=float)
