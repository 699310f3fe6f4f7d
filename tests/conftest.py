"""Pytest configuration to make the project root importable.

This ensures that ``import lifegrid`` and ``import main`` work when tests are
run from the repository root or other locations without installing.
"""

import os
import sys

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from lifegrid.grid import Cell, Grid  # noqa: E402


def make_grid(width, height, alive):
    grid = Grid(width, height)
    for x, y in alive:
        grid.set(x, y, Cell.ALIVE)
    return grid


def alive_cells(grid):
    return {(x, y) for y in range(grid.height) for x in range(grid.width)
            if grid.get(x, y) == Cell.ALIVE}


@pytest.fixture
def grid_factory():
    """Build a grid with the given live cells."""
    return make_grid


@pytest.fixture
def live_cells():
    """Collect the coordinates of every live cell in a grid."""
    return alive_cells
