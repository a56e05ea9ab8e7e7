"""Symmetry enforcement on scalar fields.

Folding runs before classification, so terrain boundaries derived from the
fields inherit the symmetry exactly.
"""

from enum import Enum

import numpy as np
from numpy.typing import NDArray


class SymmetryMode(str, Enum):
    """Which fold was applied to the fields."""

    NONE = "none"
    DIAGONAL = "diagonal"
    POINT = "point"
    QUADRANT = "quadrant"


def apply_diagonal_symmetry(field: NDArray[np.float32]) -> NDArray[np.float32]:
    """Mirror a square field across its main diagonal.

    Each (y, x) / (x, y) pair is replaced by the average of both values.

    Raises:
        ValueError: If the field is not square.
    """
    height, width = field.shape
    if height != width:
        raise ValueError(f"Diagonal symmetry needs a square field, got {width}x{height}")
    # (a + b) / 2 == (b + a) / 2 exactly, so the result equals its transpose
    return ((field + field.T) / 2.0).astype(field.dtype)


def apply_point_symmetry(field: NDArray[np.float32]) -> NDArray[np.float32]:
    """Make a field symmetric under 180 degree rotation about its centre."""
    rotated = field[::-1, ::-1]
    return ((field + rotated) / 2.0).astype(field.dtype)


def apply_quadrant_symmetry(field: NDArray[np.float32]) -> NDArray[np.float32]:
    """Copy the top-left quadrant onto the other three.

    The result satisfies f[y, x] == f[y, w-1-x] == f[h-1-y, x] ==
    f[h-1-y, w-1-x]. Odd centre rows and columns map onto themselves.
    """
    height, width = field.shape
    result = field.copy()
    half_w = width // 2
    half_h = height // 2

    if half_w:
        result[:, width - half_w :] = result[:, :half_w][:, ::-1]
    if half_h:
        result[height - half_h :, :] = result[:half_h, :][::-1, :]

    return result


def symmetry_mode_for(player_count: int, width: int, height: int) -> SymmetryMode:
    """Pick the fold that makes spawn areas equivalent.

    Two players get a diagonal mirror (or a point fold on non-square maps),
    four players get quadrant symmetry, any other count none.
    """
    if player_count == 2:
        return SymmetryMode.DIAGONAL if width == height else SymmetryMode.POINT
    if player_count == 4:
        return SymmetryMode.QUADRANT
    return SymmetryMode.NONE


_FOLDS = {
    SymmetryMode.DIAGONAL: apply_diagonal_symmetry,
    SymmetryMode.POINT: apply_point_symmetry,
    SymmetryMode.QUADRANT: apply_quadrant_symmetry,
}


def enforce_symmetry(
    elevation: NDArray[np.float32],
    moisture: NDArray[np.float32],
    player_count: int,
) -> tuple[NDArray[np.float32], NDArray[np.float32], SymmetryMode]:
    """Fold both fields for the given player count.

    Returns:
        Tuple of (elevation, moisture, mode applied).
    """
    height, width = elevation.shape
    mode = symmetry_mode_for(player_count, width, height)
    fold = _FOLDS.get(mode)
    if fold is None:
        return elevation, moisture, mode
    return fold(elevation), fold(moisture), mode
