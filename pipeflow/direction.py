"""Cardinal directions on the pipe grid."""

from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Cardinal directions in screen coordinates (y grows downwards)."""
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)
    NORTH = (0, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def angle(self) -> int:
        """Clockwise angle in degrees, EAST being 0."""
        return _ANGLES[self]

    @property
    def opposite(self) -> "Direction":
        opposites = {
            Direction.EAST: Direction.WEST,
            Direction.WEST: Direction.EAST,
            Direction.NORTH: Direction.SOUTH,
            Direction.SOUTH: Direction.NORTH,
        }
        return opposites[self]

    @property
    def short_name(self) -> str:
        return self.name[0]

    def rotate(self, steps: int = 1) -> "Direction":
        """Rotate clockwise by 90° per step (negative steps turn counter-clockwise)."""
        return Direction.from_angle(self.angle + 90 * steps)

    def offset(self, x: int, y: int) -> Tuple[int, int]:
        """Coordinates one step from (x, y) in this direction."""
        return (x + self.dx, y + self.dy)

    @classmethod
    def from_angle(cls, angle: int) -> "Direction":
        """
        Convert an angle (0, 90, 180, 270 modulo 360) to a Direction.

        Raises:
            ValueError: If the angle is not a cardinal angle
        """
        normalized = angle % 360
        for direction, direction_angle in _ANGLES.items():
            if direction_angle == normalized:
                return direction
        raise ValueError(f"Invalid angle {angle}. Must be 0, 90, 180, or 270 degrees.")

    def __str__(self) -> str:
        return self.name.lower()


_ANGLES = {
    Direction.EAST: 0,
    Direction.SOUTH: 90,
    Direction.WEST: 180,
    Direction.NORTH: 270,
}

# Clockwise from north, used wherever a stable iteration order matters
ALL_DIRECTIONS = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)
