"""pipeflow - grid, pipe queue and flow simulation for a pipe-connection puzzle."""

# grid must load before pipes: pipes.pipe imports grid.position
from .direction import ALL_DIRECTIONS, Direction
from .errors import (
    ConfigurationError,
    InvalidWeightsError,
    OutOfBoundsError,
    PipeFlowError,
    QueueEmptyError,
)
from .results import BombError, GridError, PlacePipeError, Result
from .grid import CellState, Grid, GridCell, GridPosition
from .pipes import Pipe, PipeBase, PipeGenerator, PipeQueue, PipeType
from .flow import ActiveSegment, FlowMode, FlowNetwork, VisitedPorts
from .config import Difficulty, GameConfig, GameConfigValidator
from .game import BombController, GameSession, ManualClock, SessionDriver

__version__ = "0.1.0"

__all__ = [
    "ALL_DIRECTIONS",
    "Direction",
    "ConfigurationError",
    "InvalidWeightsError",
    "OutOfBoundsError",
    "PipeFlowError",
    "QueueEmptyError",
    "BombError",
    "GridError",
    "PlacePipeError",
    "Result",
    "CellState",
    "Grid",
    "GridCell",
    "GridPosition",
    "Pipe",
    "PipeBase",
    "PipeGenerator",
    "PipeQueue",
    "PipeType",
    "ActiveSegment",
    "FlowMode",
    "FlowNetwork",
    "VisitedPorts",
    "Difficulty",
    "GameConfig",
    "GameConfigValidator",
    "BombController",
    "GameSession",
    "ManualClock",
    "SessionDriver",
]
