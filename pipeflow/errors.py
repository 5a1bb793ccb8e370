"""Exceptions raised for contract violations in the pipeflow core.

Ordinary gameplay failures (placing on a blocked cell, bombing without budget)
are reported through ``Result`` objects instead; see ``pipeflow.results``.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .config.validator import ValidationError


class PipeFlowError(Exception):
    """Base class for all pipeflow exceptions."""


class OutOfBoundsError(PipeFlowError, IndexError):
    """A position does not belong to the grid it was used with."""


class QueueEmptyError(PipeFlowError):
    """The pipe queue was popped before it was filled."""


class InvalidWeightsError(PipeFlowError, ValueError):
    """Pipe weights cannot be used for weighted generation."""


class ConfigurationError(PipeFlowError, ValueError):
    """A game configuration failed validation."""

    def __init__(self, errors: List["ValidationError"]):
        self.errors = list(errors)
        details = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid game configuration: {details}")
