"""Bounds-checked grid coordinates."""

from dataclasses import dataclass
from typing import Optional

from ..direction import Direction


@dataclass(frozen=True)
class GridPosition:
    """
    An immutable (x, y) cell coordinate.

    Use ``GridPosition.create`` to obtain positions for a board; it returns
    None instead of an out-of-range position. Equality and hashing are by value,
    so positions can be used as dictionary keys.
    """
    x: int
    y: int

    @classmethod
    def create(cls, x: int, y: int, width: int, height: int) -> Optional["GridPosition"]:
        """Create a position if (x, y) lies inside a width x height board."""
        if x < 0 or y < 0 or x >= width or y >= height:
            return None
        return cls(x, y)

    def is_within(self, width: int, height: int) -> bool:
        return 0 <= self.x < width and 0 <= self.y < height

    def move(self, direction: Direction, width: int, height: int) -> Optional["GridPosition"]:
        """The adjacent position in ``direction``, or None at the board edge."""
        x, y = direction.offset(self.x, self.y)
        return GridPosition.create(x, y, width, height)

    def direction_to(self, other: "GridPosition") -> Optional[Direction]:
        """Direction from this position to an orthogonally adjacent one."""
        delta = (other.x - self.x, other.y - self.y)
        for direction in Direction:
            if direction.value == delta:
                return direction
        return None

    def __str__(self) -> str:
        return f"({self.x},{self.y})"
