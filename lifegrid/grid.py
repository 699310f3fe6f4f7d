import logging
import operator
from enum import IntEnum

import numpy as np

from .constants import ALIVE_CHAR, DEAD_CHAR
from .errors import InvalidArgument, OutOfRange

logger = logging.getLogger(__name__)


class Cell(IntEnum):
    """The two states a cell can take."""

    DEAD = 0
    ALIVE = 1

    @property
    def char(self):
        return ALIVE_CHAR if self is Cell.ALIVE else DEAD_CHAR

    @classmethod
    def from_char(cls, char):
        if char == ALIVE_CHAR:
            return cls.ALIVE
        if char == DEAD_CHAR:
            return cls.DEAD
        raise InvalidArgument(f"{char!r} is not a cell character")


def _as_cell(value):
    if isinstance(value, Cell):
        return value
    # bools and 0/1 ints are accepted, anything else is not a cell state
    if isinstance(value, (bool, int, np.integer, np.bool_)) and value in (0, 1):
        return Cell(int(value))
    raise InvalidArgument(f"{value!r} is not a cell state")


def _as_index(value, name):
    try:
        return operator.index(value)
    except TypeError:
        raise InvalidArgument(f"{name} must be an integer, got {value!r}") from None


def _check_size(width, height):
    width, height = _as_index(width, 'width'), _as_index(height, 'height')
    if width < 0 or height < 0:
        raise InvalidArgument(f"grid dimensions must be non-negative, got {width}x{height}")
    return width, height


class CellRef:
    """Handle to a single cell of a Grid.

    The offset is resolved once, when the handle is created, so repeated
    reads and writes through it skip the bounds check.
    """

    __slots__ = ('_flat', '_offset', '_writable')

    def __init__(self, flat, offset, writable=True):
        self._flat = flat
        self._offset = offset
        self._writable = writable

    @property
    def writable(self):
        return self._writable

    @property
    def value(self):
        return Cell(int(self._flat[self._offset]))

    @value.setter
    def value(self, value):
        if not self._writable:
            raise AttributeError("cell handle is read-only")
        self._flat[self._offset] = _as_cell(value)

    def __eq__(self, other):
        if isinstance(other, CellRef):
            return self.value == other.value
        return self.value == other

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"CellRef({self.value.name}{'' if self._writable else ', read-only'})"


class Grid:
    """A dense, fixed-size rectangular board of cells.

    Cells live in a single ``(height, width)`` uint8 numpy array, so the
    cell at ``(x, y)`` sits at row-major offset ``y * width + x``. Every
    structural transform returns a new Grid with its own storage.

    Args:
        width: Number of columns. With no height given the grid is square.
        height: Number of rows.
    """

    def __init__(self, width=0, height=None):
        if height is None:
            height = width
        self._width, self._height = _check_size(width, height)
        self._cells = np.zeros((self._height, self._width), dtype=np.uint8)

    @classmethod
    def from_numpy(cls, array):
        """Build a grid from a 2-D array of booleans or 0/1 values indexed ``[y, x]``."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise InvalidArgument(f"expected a 2-D array, got {array.ndim} dimensions")
        if array.size and not np.isin(array, (0, 1)).all():
            raise InvalidArgument("array contains values other than 0 and 1")
        height, width = array.shape
        grid = cls(width, height)
        grid._cells[...] = array
        return grid

    def to_numpy(self):
        """Return an independent ``(height, width)`` uint8 copy of the cells."""
        return self._cells.copy()

    @classmethod
    def _wrap(cls, cells):
        # Takes ownership of an already validated uint8 array
        grid = cls.__new__(cls)
        grid._height, grid._width = cells.shape
        grid._cells = cells
        return grid

    def copy(self):
        return Grid._wrap(self._cells.copy())

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def total_cells(self):
        return self._width * self._height

    def alive_count(self):
        return int(np.count_nonzero(self._cells))

    def dead_count(self):
        return self.total_cells - self.alive_count()

    def resize(self, width, height=None):
        """Reallocate the grid, keeping every cell that lies inside both the old and new bounds.

        Cells outside the old bounds come back DEAD. ``resize(n)`` makes the grid n x n.
        """
        if height is None:
            height = width
        width, height = _check_size(width, height)
        cells = np.zeros((height, width), dtype=np.uint8)
        keep_h = min(self._height, height)
        keep_w = min(self._width, width)
        cells[:keep_h, :keep_w] = self._cells[:keep_h, :keep_w]
        logger.debug("Resized grid from %dx%d to %dx%d", self._width, self._height, width, height)
        self._cells = cells
        self._width = width
        self._height = height

    @property
    def _array(self):
        # Live (height, width) storage for lifegrid internals; replaced by resize
        return self._cells

    def offset(self, x, y, operation='access'):
        """Return the row-major offset of ``(x, y)``, raising OutOfRange off the grid."""
        x, y = _as_index(x, 'x'), _as_index(y, 'y')
        if not 0 <= x < self._width:
            raise OutOfRange('x', x, self._width, operation)
        if not 0 <= y < self._height:
            raise OutOfRange('y', y, self._height, operation)
        return y * self._width + x

    def get(self, x, y):
        offset = self.offset(x, y, 'get')
        return Cell(int(self._cells.flat[offset]))

    def set(self, x, y, value):
        offset = self.offset(x, y, 'set')
        self._cells.flat[offset] = _as_cell(value)

    def cell(self, x, y, writable=True):
        """Return a CellRef for ``(x, y)``; pass ``writable=False`` for a read-only handle.

        The handle refers to the current storage and is stale after ``resize``.
        """
        offset = self.offset(x, y, 'cell')
        return CellRef(self._cells.reshape(-1), offset, writable)

    def _unpack_key(self, key):
        try:
            x, y = key
        except (TypeError, ValueError):
            raise InvalidArgument(f"grid indices must be an (x, y) pair, got {key!r}") from None
        return x, y

    def __getitem__(self, key):
        x, y = self._unpack_key(key)
        return self.get(x, y)

    def __setitem__(self, key, value):
        x, y = self._unpack_key(key)
        self.set(x, y, value)

    def crop(self, x0, y0, x1, y1):
        """Copy the window ``[x0, x1) x [y0, y1)`` into a new grid."""
        x0, y0 = _as_index(x0, 'x0'), _as_index(y0, 'y0')
        x1, y1 = _as_index(x1, 'x1'), _as_index(y1, 'y1')
        if min(x0, y0, x1, y1) < 0:
            raise InvalidArgument(f"crop window ({x0}, {y0}, {x1}, {y1}) has a negative coordinate")
        if x0 > x1:
            raise InvalidArgument(f"crop window is inverted on x: x0={x0} > x1={x1}")
        if y0 > y1:
            raise InvalidArgument(f"crop window is inverted on y: y0={y0} > y1={y1}")
        if x1 > self._width or y1 > self._height:
            raise InvalidArgument(
                f"crop window ({x0}, {y0}, {x1}, {y1}) exceeds the {self._width}x{self._height} grid"
            )
        cropped = Grid(x1 - x0, y1 - y0)
        cropped._cells[...] = self._cells[y0:y1, x0:x1]
        return cropped

    def merge(self, other, x0, y0, alive_only=False):
        """Overlay ``other`` onto this grid with its top-left corner at ``(x0, y0)``.

        With ``alive_only`` the overlay can only bring cells to life: a cell
        that is already ALIVE stays ALIVE whatever ``other`` holds.
        """
        x0, y0 = _as_index(x0, 'x0'), _as_index(y0, 'y0')
        if other.width > self._width or other.height > self._height:
            raise InvalidArgument(
                f"cannot merge a {other.width}x{other.height} grid into a {self._width}x{self._height} grid"
            )
        if other.total_cells > self.total_cells:
            raise InvalidArgument("the merged grid has a larger area than the target grid")
        if x0 < 0 or y0 < 0:
            raise InvalidArgument(f"merge origin ({x0}, {y0}) must be non-negative")
        if x0 + other.width > self._width or y0 + other.height > self._height:
            raise InvalidArgument(
                f"a {other.width}x{other.height} grid at ({x0}, {y0}) does not fit "
                f"in a {self._width}x{self._height} grid"
            )
        target = self._cells[y0:y0 + other.height, x0:x0 + other.width]
        if alive_only:
            np.bitwise_or(target, other._cells, out=target)
        else:
            target[...] = other._cells

    def rotate(self, rotation):
        """Return a copy rotated clockwise by ``rotation`` quarter turns.

        Any integer works; it is reduced modulo 4 first so the cost does not
        depend on its magnitude.
        """
        rotation = _as_index(rotation, 'rotation') % 4
        # np.rot90 turns anticlockwise for positive k
        return Grid._wrap(np.ascontiguousarray(np.rot90(self._cells, -rotation)))

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._width == other._width and self._height == other._height
                and np.array_equal(self._cells, other._cells))

    __hash__ = None

    def __str__(self):
        border = '+' + '-' * self._width + '+\n'
        glyphs = np.array([DEAD_CHAR, ALIVE_CHAR])
        rows = [''.join(glyphs[row]) for row in self._cells]
        return border + ''.join(f"|{row}|\n" for row in rows) + border

    def __repr__(self):
        return f"Grid(width={self._width}, height={self._height}, alive={self.alive_count()})"
