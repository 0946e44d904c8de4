"""Exceptions raised by the grid core. Routine conditions are return values, not exceptions."""


class GridError(Exception):
    """Base class for grid core errors."""


class OutOfBounds(GridError, IndexError):
    """Coordinate outside the declared world dimensions."""

    def __init__(self, coord: tuple[int, ...], dims: tuple[int, ...]) -> None:
        super().__init__(f"coordinate {coord} outside world of size {dims}")
        self.coord = coord
        self.dims = dims


class SelectionError(GridError, ValueError):
    """Malformed category-selection input."""
