"""Pipe shape definitions: canonical ports and rotation symmetry."""

from enum import Enum
from typing import Dict, FrozenSet, NamedTuple, Tuple

from ..direction import Direction


class PipeType(Enum):
    """Pipe shapes available on the board."""
    START = "start"
    STRAIGHT = "straight"
    CORNER = "corner"
    CROSS = "cross"


class PipeShape(NamedTuple):
    """Specification for a pipe shape."""
    pipe_type: PipeType
    ports: FrozenSet[Direction]      # Open ports at orientation 0
    orientations: Tuple[int, ...]    # Distinct orientations in degrees
    reusable: bool = False           # Flow may pass a second time on the unused axis
    symbol: str = "?"                # Debug rendering


# Start orientation only selects its single port, it is never drawn from the queue
PIPE_SHAPES: Dict[PipeType, PipeShape] = {
    PipeType.START: PipeShape(
        PipeType.START, frozenset({Direction.EAST}), (0, 90, 180, 270), symbol="S"),
    PipeType.STRAIGHT: PipeShape(
        PipeType.STRAIGHT, frozenset({Direction.WEST, Direction.EAST}), (0, 90), symbol="="),
    PipeType.CORNER: PipeShape(
        PipeType.CORNER, frozenset({Direction.NORTH, Direction.EAST}), (0, 90, 180, 270), symbol="L"),
    PipeType.CROSS: PipeShape(
        PipeType.CROSS, frozenset(Direction), (0,), reusable=True, symbol="+"),
}

# Shapes the queue may generate, in sampling order
PLACEABLE_TYPES: Tuple[PipeType, ...] = (PipeType.STRAIGHT, PipeType.CORNER, PipeType.CROSS)


def rotate_ports(ports: FrozenSet[Direction], orientation: int) -> FrozenSet[Direction]:
    """Rotate a port set clockwise by ``orientation`` degrees."""
    if orientation % 90 != 0:
        raise ValueError(f"Orientation must be a multiple of 90, got {orientation}")
    steps = (orientation % 360) // 90
    return frozenset(port.rotate(steps) for port in ports)


def normalize_orientation(pipe_type: PipeType, orientation: int) -> int:
    """
    Map an orientation onto the shape's symmetry class.

    A straight pipe at 180° is the same pipe as at 0°; a cross is the same at
    every angle. Raises ValueError for non-cardinal angles.
    """
    if orientation % 90 != 0:
        raise ValueError(f"Orientation must be a multiple of 90, got {orientation}")
    shape = PIPE_SHAPES[pipe_type]
    return (orientation % 360) % (90 * len(shape.orientations))
