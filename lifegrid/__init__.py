"""
Conway's Game of Life on a finite grid - dense grids, torch-backed stepping and file formats
"""

from .errors import LifeGridError, OutOfRange, InvalidArgument, GridFileError
from .grid import Cell, CellRef, Grid
from .model import World
from .constants import *

__version__ = "0.1.0"
