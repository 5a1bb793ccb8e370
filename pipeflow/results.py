"""Result objects for player commands and their error types."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class GridError(Enum):
    """Failures of grid mutations."""
    OUT_OF_BOUNDS = auto()
    CELL_BLOCKED = auto()
    CELL_OCCUPIED = auto()
    CELL_EMPTY = auto()
    CANNOT_REMOVE_START = auto()


class BombError(Enum):
    """Failures of bomb detonation."""
    NO_BOMBS_REMAINING = auto()
    INVALID_TARGET = auto()


class PlacePipeError(Enum):
    """Failures of the session-level place command that are not grid errors."""
    INVALID_POSITION = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class Result:
    """Outcome of a command: success with an optional value, or a typed error."""
    success: bool
    value: Any = None
    error: Any = None

    @classmethod
    def ok(cls, value: Any = None) -> "Result":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: Any) -> "Result":
        return cls(success=False, error=error)

    @property
    def failed(self) -> bool:
        return not self.success

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        if self.success:
            return f"Result.ok({self.value!r})"
        return f"Result.fail({self.error})"
