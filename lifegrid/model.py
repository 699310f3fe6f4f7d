import logging

import numpy as np
import torch

from .errors import InvalidArgument
from .grid import Grid

logger = logging.getLogger(__name__)

NEIGHBOUR_OFFSETS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


def _bounded(value, size):
    """Map an off-grid coordinate to None so it counts as permanently dead."""
    return value if 0 <= value < size else None


def _toroidal(value, size):
    return value % size


def _padding_mode(toroidal):
    # Zero padding treats the border as dead cells, circular padding wraps it
    return 'circular' if toroidal else 'constant'


class World:
    """A running Game of Life automaton.

    The world owns two equally sized grids: ``current`` holds the published
    generation and ``next`` is scratch space the following generation is
    written into before the two are swapped.

    Args:
        width: Number of columns, square when ``height`` is omitted.
        height: Number of rows.
        initial_state: Optional Grid to start from. It is copied, and its
            dimensions take precedence over ``width``/``height``.
        device: Torch device used for neighbour counting ('cuda' or 'cpu').
            Falls back to 'cpu' when CUDA is not available.
    """

    def __init__(self, width=0, height=None, initial_state=None, device='cpu'):
        self.device = device if torch.cuda.is_available() and device == 'cuda' else 'cpu'

        if initial_state is not None:
            self._current = initial_state.copy()
        else:
            self._current = Grid(width, height)
        self._next = Grid(self._current.width, self._current.height)

        # Create convolution kernel for counting neighbors
        self.kernel = torch.tensor([
            [1, 1, 1],
            [1, 0, 1],
            [1, 1, 1]
        ], dtype=torch.float32, device=self.device).view(1, 1, 3, 3)

        logger.debug("Created %dx%d world on %s", self.width, self.height, self.device)

    @property
    def width(self):
        return self._current.width

    @property
    def height(self):
        return self._current.height

    @property
    def total_cells(self):
        return self._current.total_cells

    def alive_count(self):
        return self._current.alive_count()

    def dead_count(self):
        return self._current.dead_count()

    def get_state(self):
        """Return a copy of the current generation."""
        return self._current.copy()

    def get_grid(self):
        """Return the current generation as a ``(height, width)`` numpy array."""
        return self._current.to_numpy()

    def resize(self, width, height=None):
        self._current.resize(width, height)
        self._next.resize(width, height)

    def count_neighbours(self, x, y, toroidal=False):
        """Count the live cells among the eight neighbours of ``(x, y)``.

        With ``toroidal`` each axis wraps around, otherwise cells beyond the
        edge count as dead.
        """
        self._current.offset(x, y, 'count_neighbours')
        normalise = _toroidal if toroidal else _bounded
        cells = self._current._array
        width, height = self.width, self.height

        count = 0
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx = normalise(x + dx, width)
            ny = normalise(y + dy, height)
            if nx is None or ny is None:
                continue
            count += int(cells[ny, nx])
        return count

    def _neighbour_counts(self, mode):
        grid_float = torch.from_numpy(self._current._array).to(self.device, dtype=torch.float32)
        padded_grid = torch.nn.functional.pad(
            grid_float.unsqueeze(0).unsqueeze(0),
            (1, 1, 1, 1),
            mode=mode
        )
        return torch.nn.functional.conv2d(padded_grid, self.kernel, padding=0)[0, 0]

    def _step(self, mode):
        if self.total_cells == 0:
            return

        neighbors = self._neighbour_counts(mode)
        is_alive = torch.from_numpy(self._current._array).to(self.device) == 1

        survives = is_alive & ((neighbors == 2) | (neighbors == 3))
        births = ~is_alive & (neighbors == 3)

        # Write into the spare buffer, then promote it
        np.copyto(self._next._array, (survives | births).to(torch.uint8).cpu().numpy())
        self._current, self._next = self._next, self._current

    def step(self, toroidal=False):
        """Advance the world by one generation."""
        self._step(_padding_mode(toroidal))

    def advance(self, steps, toroidal=False):
        """Advance the world by ``steps`` generations using one edge policy throughout."""
        if steps < 0:
            raise InvalidArgument(f"steps must be non-negative, got {steps}")
        mode = _padding_mode(toroidal)
        for _ in range(steps):
            self._step(mode)

    def __repr__(self):
        return f"World(width={self.width}, height={self.height}, alive={self.alive_count()}, device={self.device!r})"
