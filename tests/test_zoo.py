import sys

import numpy as np
import pytest

from lifegrid import zoo
from lifegrid.errors import GridFileError, InvalidArgument, LifeGridError
from lifegrid.grid import Cell, Grid


# =============================================================================
# Patterns
# =============================================================================


def test_glider_shape():
    assert str(zoo.glider()) == "+---+\n| # |\n|  #|\n|###|\n+---+\n"


def test_r_pentomino_shape():
    assert str(zoo.r_pentomino()) == "+---+\n| ##|\n|## |\n| # |\n+---+\n"


def test_light_weight_spaceship_shape():
    ship = zoo.light_weight_spaceship()
    assert (ship.width, ship.height) == (5, 4)
    assert str(ship) == "+-----+\n| #  #|\n|#    |\n|#   #|\n|#### |\n+-----+\n"


def test_patterns_are_fresh_grids():
    first = zoo.PATTERNS['glider']()
    first.set(0, 0, Cell.ALIVE)
    assert zoo.glider().get(0, 0) == Cell.DEAD


def test_centred(live_cells):
    grid = zoo.centred(zoo.glider(), 7, 5)
    assert (grid.width, grid.height) == (7, 5)
    assert live_cells(grid) == {(x + 2, y + 1) for x, y in live_cells(zoo.glider())}


def test_centred_rejects_small_grid():
    with pytest.raises(InvalidArgument):
        zoo.centred(zoo.light_weight_spaceship(), 4, 4)


# =============================================================================
# Random grids
# =============================================================================


def test_random_grid_is_reproducible():
    first = zoo.random_grid(16, 12, 0.5, seed=42)
    second = zoo.random_grid(16, 12, 0.5, seed=42)
    assert (first.width, first.height) == (16, 12)
    assert first == second


def test_random_grid_density_extremes():
    assert zoo.random_grid(6, 4, 0.0, seed=1).alive_count() == 0
    assert zoo.random_grid(6, 4, 1.0, seed=1).alive_count() == 24


@pytest.mark.parametrize("density", [-0.1, 1.5])
def test_random_grid_rejects_bad_density(density):
    with pytest.raises(InvalidArgument):
        zoo.random_grid(4, 4, density)


# =============================================================================
# Ascii format
# =============================================================================


def test_save_ascii_layout(tmp_path, grid_factory):
    path = tmp_path / "grid.gol"
    zoo.save_ascii(path, grid_factory(3, 2, [(0, 0), (2, 1)]))
    assert path.read_bytes() == b"3 2\n#  \n  #\n"


def test_ascii_round_trip(tmp_path):
    grid = zoo.random_grid(9, 7, 0.5, seed=3)
    path = tmp_path / "soup.gol"
    zoo.save_ascii(path, grid)
    assert zoo.load_ascii(path) == grid


@pytest.mark.parametrize("content", [
    b"3 2\n#x \n  #\n",      # invalid character
    b"3 2\n#  \n  #",        # last newline missing
    b"3 2\n#   \n  #\n",     # row too long
    b"3 2\n#  \n",           # row missing
    b"0 2\n\n\n",            # zero width
    b"3 -1\n",               # negative height
    b"three 2\n#  \n  #\n",  # bad header
    b"3\n#  \n",             # header with one number
    b"3 2",                  # no newline after header
    b"3 1\n\xff  \n",        # not ascii
    b"1_0 1\n          \n",  # underscore digit separator
    b"+3 1\n#  \n",          # signed width
    b"3 1 1\n#  \n",         # extra header field
])
def test_load_ascii_rejects_malformed_files(tmp_path, content):
    path = tmp_path / "bad.gol"
    path.write_bytes(content)
    with pytest.raises(GridFileError):
        zoo.load_ascii(path)


def test_missing_file_is_a_file_error(tmp_path):
    with pytest.raises(GridFileError) as excinfo:
        zoo.load_ascii(tmp_path / "missing.gol")
    assert isinstance(excinfo.value, OSError)
    assert isinstance(excinfo.value, LifeGridError)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_save_ascii_rejects_empty_grid(tmp_path):
    with pytest.raises(GridFileError):
        zoo.save_ascii(tmp_path / "empty.gol", Grid(0, 3))


# =============================================================================
# Binary format
# =============================================================================


def test_binary_round_trip_with_padding(tmp_path):
    grid = Grid.from_numpy(np.ones((3, 5), dtype=np.uint8))
    grid.set(1, 1, Cell.DEAD)
    path = tmp_path / "grid.bgol"
    zoo.save_binary(path, grid)

    data = path.read_bytes()
    # 8 header bytes then ceil(15 / 8) cell bytes
    assert len(data) == 8 + 2
    # the final byte holds 7 cells and one zero padding bit
    assert data[-1] == 0b01111111

    loaded = zoo.load_binary(path)
    assert loaded == grid
    assert loaded.get(4, 2) == Cell.ALIVE


def test_binary_layout(tmp_path, grid_factory):
    path = tmp_path / "grid.bgol"
    zoo.save_binary(path, grid_factory(3, 3, [(0, 0), (2, 0), (1, 2)]))
    data = path.read_bytes()

    width, height = np.frombuffer(data[:8], dtype=np.int32)
    assert (width, height) == (3, 3)
    assert data[:4] == (3).to_bytes(4, sys.byteorder)
    # bits 0, 2 and 7 of the row-major stream
    assert data[8:] == bytes([0b10000101, 0b00000000])


def test_binary_round_trip_random(tmp_path):
    grid = zoo.random_grid(13, 11, 0.5, seed=11)
    path = tmp_path / "soup.bgol"
    zoo.save_binary(path, grid)
    assert zoo.load_binary(path) == grid


def test_load_binary_ignores_padding_bits(tmp_path):
    path = tmp_path / "padded.bgol"
    path.write_bytes(np.array([1, 1], dtype=np.int32).tobytes() + bytes([0xFF]))
    grid = zoo.load_binary(path)
    assert (grid.width, grid.height) == (1, 1)
    assert grid.get(0, 0) == Cell.ALIVE


@pytest.mark.parametrize("content", [
    b"",
    b"\x03\x00\x00",
    np.array([4, 4], dtype=np.int32).tobytes() + b"\x01",
    np.array([3, 3], dtype=np.int32).tobytes() + b"\x01",
    np.array([-2, 3], dtype=np.int32).tobytes(),
])
def test_load_binary_rejects_truncated_or_bad_files(tmp_path, content):
    path = tmp_path / "bad.bgol"
    path.write_bytes(content)
    with pytest.raises(GridFileError):
        zoo.load_binary(path)


def test_binary_zero_sized_grid(tmp_path):
    path = tmp_path / "empty.bgol"
    zoo.save_binary(path, Grid(0, 4))
    assert len(path.read_bytes()) == 8
    loaded = zoo.load_binary(path)
    assert (loaded.width, loaded.height) == (0, 4)


# =============================================================================
# Extension dispatch
# =============================================================================


@pytest.mark.parametrize("name", ["grid.gol", "grid.bgol", "GRID.BGOL"])
def test_load_save_by_extension(tmp_path, name):
    grid = zoo.centred(zoo.r_pentomino(), 6, 6)
    path = tmp_path / name
    zoo.save(path, grid)
    assert zoo.load(path) == grid


def test_ascii_extension_writes_text(tmp_path):
    path = tmp_path / "glider.gol"
    zoo.save(path, zoo.glider())
    assert path.read_text() == "3 3\n # \n  #\n###\n"


def test_unknown_extension(tmp_path):
    with pytest.raises(GridFileError):
        zoo.save(tmp_path / "grid.txt", Grid(2, 2))
