"""Custom exceptions for map generation."""


class MapGenError(Exception):
    """Base exception for map generation errors."""

    pass


class GridAllocationError(MapGenError):
    """Raised when a tile grid or scratch field cannot be allocated."""

    pass


class GridReleasedError(MapGenError):
    """Raised when a released tile grid is accessed."""

    pass


class TileOutOfBoundsError(MapGenError, IndexError):
    """Raised when a tile lookup falls outside the grid."""

    pass
