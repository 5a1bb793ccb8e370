"""Pipe shapes, pieces and the upcoming-pipe queue."""

from .shapes import PipeType, PipeShape, PIPE_SHAPES, PLACEABLE_TYPES, rotate_ports
from .pipe import Pipe, PipeBase
from .generator import PipeGenerator, check_weights
from .queue import PipeQueue

__all__ = [
    "PipeType",
    "PipeShape",
    "PIPE_SHAPES",
    "PLACEABLE_TYPES",
    "rotate_ports",
    "Pipe",
    "PipeBase",
    "PipeGenerator",
    "check_weights",
    "PipeQueue",
]
