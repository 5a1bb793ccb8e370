"""Helpers shared by the pipeflow tests."""

from pipeflow.config import (
    BombConfig,
    FlowConfig,
    GameConfig,
    GridConfig,
    PipeWeights,
    QueueConfig,
    ScoreConfig,
)
from pipeflow.direction import Direction
from pipeflow.grid import Grid, GridPosition
from pipeflow.pipes import PipeBase, PipeType


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float = 0.0):
        self.value = value

    def random(self) -> float:
        return self.value


class SequenceRandom:
    """Random source that cycles through a list of values."""

    def __init__(self, values):
        self.values = list(values)
        self.index = 0

    def random(self) -> float:
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value


def pos(x: int, y: int) -> GridPosition:
    return GridPosition(x, y)


def place(grid: Grid, x: int, y: int, pipe_type: PipeType, orientation: int = 0):
    """Place a pipe directly on the grid and return it."""
    pipe = PipeBase(pipe_type, orientation).place_at(GridPosition(x, y))
    result = grid.place_pipe(pipe.position, pipe)
    assert result.success, result
    return pipe


def line_grid(width: int = 3) -> Grid:
    """A width x 1 board with the start pipe at (0, 0) facing east."""
    grid = Grid(width, 1)
    grid.place_start_pipe(GridPosition(0, 0), Direction.EAST)
    return grid


def straight_only_config(
    width: int = 3,
    height: int = 1,
    win: int = 2,
    max_bombs: int = 1,
    bomb_timer: float = 0.5,
    speed: float = 0.5,
    delay: float = 10.0,
) -> GameConfig:
    """A valid config whose queue only ever yields straight pipes."""
    return GameConfig(
        grid=GridConfig(width=width, height=height, cell_size=32, blocked_percentage=0,
                        allow_start_pipe_on_edge=True),
        queue=QueueConfig(max_size=3, pipe_weights=PipeWeights(1.0, 0.0, 0.0)),
        bombs=BombConfig(max_bombs=max_bombs, bomb_timer_seconds=bomb_timer),
        flow=FlowConfig(pipe_flow_speed=speed, start_delay_seconds=delay),
        score=ScoreConfig(win_filled_pipes_count=win, points_per_pipe=10),
    )
