"""A single board cell."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from .position import GridPosition

if TYPE_CHECKING:
    from ..pipes.pipe import Pipe


class CellState(Enum):
    """What a cell currently holds."""
    BLOCKED = auto()
    EMPTY = auto()
    OCCUPIED = auto()


@dataclass
class GridCell:
    """
    A cell in the grid.

    Simple data holder: placement rules live in ``Grid``, which owns every
    cell and is the only code that should mutate one.
    """
    position: GridPosition
    blocked: bool = False
    pipe: Optional["Pipe"] = None

    @property
    def state(self) -> CellState:
        if self.blocked:
            return CellState.BLOCKED
        if self.pipe is None:
            return CellState.EMPTY
        return CellState.OCCUPIED

    @property
    def is_blocked(self) -> bool:
        return self.blocked

    @property
    def is_empty(self) -> bool:
        return not self.blocked and self.pipe is None

    @property
    def has_pipe(self) -> bool:
        return self.pipe is not None

    def __str__(self) -> str:
        return f"{self.position} {self.state.name}"
