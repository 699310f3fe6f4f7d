"""
Pattern factories and file formats for grids.

Two on-disk formats are supported:

- ascii ``.gol``: a ``"<width> <height>"`` header line followed by
  ``height`` lines of exactly ``width`` characters, ``' '`` for a dead cell
  and ``'#'`` for a live one, every line terminated by a newline.
- binary ``.bgol``: a native-endian 4 byte width, a 4 byte height, then
  one bit per cell in row-major order, least significant bit first, with
  the last byte padded with zero bits.
"""

import logging
import os

import numpy as np
import torch

from .constants import ALIVE_CHAR, ASCII_EXTENSION, BINARY_EXTENSION, DEAD_CHAR
from .errors import GridFileError, InvalidArgument
from .grid import Cell, Grid

logger = logging.getLogger(__name__)

HEADER_DTYPE = np.dtype(np.int32)


def _from_points(width, height, points):
    grid = Grid(width, height)
    for x, y in points:
        grid.set(x, y, Cell.ALIVE)
    return grid


def glider():
    """
    A 3x3 glider::

        +---+
        | # |
        |  #|
        |###|
        +---+
    """
    return _from_points(3, 3, [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)])


def r_pentomino():
    """
    A 3x3 r-pentomino::

        +---+
        | ##|
        |## |
        | # |
        +---+
    """
    return _from_points(3, 3, [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2)])


def light_weight_spaceship():
    """
    A 5x4 light weight spaceship::

        +-----+
        | #  #|
        |#    |
        |#   #|
        |#### |
        +-----+
    """
    return _from_points(5, 4, [(1, 0), (4, 0), (0, 1), (0, 2), (4, 2),
                               (0, 3), (1, 3), (2, 3), (3, 3)])


PATTERNS = {
    'glider': glider,
    'r_pentomino': r_pentomino,
    'light_weight_spaceship': light_weight_spaceship,
}


def random_grid(width, height, density, seed=None, device='cpu'):
    """Fill a grid with live cells at the given density."""
    if not 0.0 <= density <= 1.0:
        raise InvalidArgument(f"density must be between 0 and 1, got {density}")
    if width < 0 or height < 0:
        raise InvalidArgument(f"grid dimensions must be non-negative, got {width}x{height}")
    device = device if torch.cuda.is_available() and device == 'cuda' else 'cpu'

    generator = torch.Generator(device=device)
    if seed is not None:
        generator.manual_seed(seed)
    else:
        generator.seed()

    cells = torch.bernoulli(torch.full((height, width), float(density), device=device), generator=generator)
    return Grid.from_numpy(cells.to(torch.uint8).cpu().numpy())


def centred(pattern, width, height):
    """Place a pattern in the middle of an otherwise dead width x height grid."""
    grid = Grid(width, height)
    grid.merge(pattern, (width - pattern.width) // 2, (height - pattern.height) // 2)
    return grid


def _open(path, mode, **kwargs):
    try:
        return open(path, mode, **kwargs)
    except OSError as err:
        raise GridFileError(f"cannot open {path}: {err.strerror or err}") from err


def load_ascii(path):
    """Parse an ascii ``.gol`` file into a grid."""
    with _open(path, 'r', encoding='ascii', newline='') as file:
        try:
            text = file.read()
        except UnicodeDecodeError as err:
            raise GridFileError(f"{path}: invalid cell character at byte {err.start}") from err

    header, newline, body = text.partition('\n')
    if not newline:
        raise GridFileError(f"{path}: missing newline after the header")
    fields = header.split()
    if len(fields) != 2 or not all(value.isdigit() for value in fields):
        raise GridFileError(f"{path}: header {header!r} is not '<width> <height>'")
    width, height = (int(value) for value in fields)
    if width <= 0 or height <= 0:
        raise GridFileError(f"{path}: the width and height must be positive, got {width}x{height}")

    grid = Grid(width, height)
    line_length = width + 1
    for y in range(height):
        line = body[y * line_length:(y + 1) * line_length]
        if len(line) < width:
            raise GridFileError(f"{path}: file ends unexpectedly on row {y}")
        for x, char in enumerate(line[:width]):
            try:
                grid.set(x, y, Cell.from_char(char))
            except InvalidArgument:
                raise GridFileError(f"{path}: invalid cell character {char!r} at ({x}, {y})") from None
        if line[width:] != '\n':
            raise GridFileError(f"{path}: expected a newline at the end of row {y}")

    logger.debug("Loaded %dx%d grid from %s", width, height, path)
    return grid


def save_ascii(path, grid):
    """Write a grid as an ascii ``.gol`` file."""
    if grid.width == 0 or grid.height == 0:
        raise GridFileError(f"cannot save a {grid.width}x{grid.height} grid in the ascii format")
    glyphs = np.array([DEAD_CHAR, ALIVE_CHAR])
    with _open(path, 'w', encoding='ascii', newline='') as file:
        file.write(f"{grid.width} {grid.height}\n")
        for row in grid.to_numpy():
            file.write(''.join(glyphs[row]) + '\n')
    logger.debug("Saved %dx%d grid to %s", grid.width, grid.height, path)


def load_binary(path):
    """Parse a binary ``.bgol`` file into a grid."""
    with _open(path, 'rb') as file:
        data = file.read()

    header_size = 2 * HEADER_DTYPE.itemsize
    if len(data) < header_size:
        raise GridFileError(f"{path}: file ends unexpectedly inside the header")
    width, height = (int(value) for value in np.frombuffer(data, dtype=HEADER_DTYPE, count=2))
    if width < 0 or height < 0:
        raise GridFileError(f"{path}: the width and height must not be negative, got {width}x{height}")

    total = width * height
    payload_size = (total + 7) // 8
    payload = data[header_size:header_size + payload_size]
    if len(payload) < payload_size:
        raise GridFileError(
            f"{path}: file ends unexpectedly, expected {payload_size} bytes of cells but found {len(payload)}"
        )

    if total == 0:
        return Grid(width, height)
    bits = np.unpackbits(np.frombuffer(payload, dtype=np.uint8), count=total, bitorder='little')
    logger.debug("Loaded %dx%d grid from %s", width, height, path)
    return Grid.from_numpy(bits.reshape(height, width))


def save_binary(path, grid):
    """Write a grid as a binary ``.bgol`` file."""
    header = np.array([grid.width, grid.height], dtype=HEADER_DTYPE)
    # packbits pads the final byte with zero bits
    payload = np.packbits(grid.to_numpy().reshape(-1), bitorder='little')
    with _open(path, 'wb') as file:
        file.write(header.tobytes())
        file.write(payload.tobytes())
    logger.debug("Saved %dx%d grid to %s", grid.width, grid.height, path)


def _codec(path):
    extension = os.path.splitext(os.fspath(path))[1].lower()
    if extension == ASCII_EXTENSION:
        return load_ascii, save_ascii
    if extension == BINARY_EXTENSION:
        return load_binary, save_binary
    raise GridFileError(f"{path}: unknown grid file extension {extension!r}, "
                        f"expected {ASCII_EXTENSION} or {BINARY_EXTENSION}")


def load(path):
    """Load a grid, picking the format from the file extension."""
    return _codec(path)[0](path)


def save(path, grid):
    """Save a grid, picking the format from the file extension."""
    _codec(path)[1](path, grid)
