"""Pipe pieces: queued (unplaced) and placed on the grid."""

from dataclasses import dataclass, field
from typing import FrozenSet, List

from ..direction import ALL_DIRECTIONS, Direction
from ..grid.position import GridPosition
from .shapes import PIPE_SHAPES, PipeShape, PipeType, normalize_orientation, rotate_ports


@dataclass(frozen=True)
class PipeBase:
    """A pipe shape with an orientation, not yet bound to a cell."""
    pipe_type: PipeType
    orientation: int = 0

    def __post_init__(self):
        # Collapse equivalent rotations; the start pipe keeps all four
        object.__setattr__(
            self, "orientation", normalize_orientation(self.pipe_type, self.orientation))

    @property
    def shape(self) -> PipeShape:
        return PIPE_SHAPES[self.pipe_type]

    @property
    def ports(self) -> FrozenSet[Direction]:
        """Open connection directions after rotation."""
        return rotate_ports(self.shape.ports, self.orientation)

    @property
    def is_start(self) -> bool:
        return self.pipe_type == PipeType.START

    def has_port(self, direction: Direction) -> bool:
        return direction in self.ports

    def sorted_ports(self) -> List[Direction]:
        """Ports in clockwise order starting from north."""
        ports = self.ports
        return [d for d in ALL_DIRECTIONS if d in ports]

    def place_at(self, position: GridPosition) -> "Pipe":
        return Pipe(self.pipe_type, self.orientation, position)

    def __str__(self) -> str:
        return f"{self.pipe_type.value}({self.orientation}°)"


@dataclass(frozen=True, eq=False)
class Pipe(PipeBase):
    """
    A pipe placed on the grid.

    Placed pipes compare by identity: two straight pipes on different cells
    (or the same pipe placed again after a bomb) are different pieces.
    """
    position: GridPosition = field(default=GridPosition(0, 0))

    __eq__ = object.__eq__
    __hash__ = object.__hash__

    @classmethod
    def start(cls, position: GridPosition, direction: Direction) -> "Pipe":
        """Create the start pipe with its single port facing ``direction``."""
        return cls(PipeType.START, direction.angle, position)

    @property
    def start_direction(self) -> Direction:
        if not self.is_start:
            raise ValueError(f"{self} is not a start pipe")
        return next(iter(self.ports))

    def __str__(self) -> str:
        ports = ",".join(d.short_name for d in self.sorted_ports())
        return f"{self.pipe_type.value}({ports}) at {self.position}"
