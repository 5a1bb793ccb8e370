"""Grid module for board state."""

from .position import GridPosition
from .cell import CellState, GridCell
from .grid import Grid, GridStats

__all__ = [
    "GridPosition",
    "CellState",
    "GridCell",
    "Grid",
    "GridStats",
]
