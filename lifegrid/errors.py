"""Error types raised by lifegrid.

Every error derives from LifeGridError and from the builtin exception a
caller would naturally catch, so ``except IndexError`` still works around
``grid.get``.
"""


class LifeGridError(Exception):
    """Base class for all lifegrid errors."""


class OutOfRange(LifeGridError, IndexError):
    """A coordinate lies outside ``[0, width) x [0, height)``."""

    def __init__(self, axis, value, limit, operation='access'):
        self.axis = axis
        self.value = value
        self.limit = limit
        super().__init__(
            f"{axis}={value} is out of bounds for {operation} "
            f"(valid range is 0 <= {axis} < {limit})"
        )


class InvalidArgument(LifeGridError, ValueError):
    """An argument is malformed: negative sizes, inverted windows, bad cell values."""


class GridFileError(LifeGridError, OSError):
    """A grid file could not be opened, was truncated or is malformed."""
