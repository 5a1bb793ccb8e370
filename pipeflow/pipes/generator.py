"""Weighted random pipe generation."""

import logging
import math
from typing import Mapping, Optional

import numpy as np

from ..errors import InvalidWeightsError
from .pipe import PipeBase
from .shapes import PIPE_SHAPES, PLACEABLE_TYPES, PipeType

logger = logging.getLogger(__name__)


def check_weights(weights: Mapping[PipeType, float]) -> Optional[str]:
    """
    Check pipe weights for weighted generation.

    Returns:
        None if usable, otherwise a description of the first problem found
    """
    start_weight = weights.get(PipeType.START, 0)
    if start_weight != 0:
        return f"Start pipe weight must be 0, got {start_weight}"

    total = 0.0
    for pipe_type in PLACEABLE_TYPES:
        weight = weights.get(pipe_type, 0)
        if not isinstance(weight, (int, float)) or isinstance(weight, bool):
            return f"Weight for {pipe_type.value} must be a number, got {weight!r}"
        if not math.isfinite(weight) or weight < 0:
            return f"Invalid weight for {pipe_type.value}: {weight}"
        total += weight

    if total <= 0:
        return "Total pipe weight must be greater than zero"
    return None


class PipeGenerator:
    """
    Generates queue pipes by cumulative weighted selection.

    Weights are validated once at construction; drawing never re-checks them.
    The random source only needs a ``random()`` method returning a float in
    [0, 1), so both ``numpy.random.Generator`` and ``random.Random`` work.
    """

    def __init__(self, weights: Mapping[PipeType, float], rng=None):
        problem = check_weights(weights)
        if problem:
            raise InvalidWeightsError(problem)

        self.rng = rng if rng is not None else np.random.default_rng()
        raw = np.array([float(weights.get(t, 0)) for t in PLACEABLE_TYPES])
        self.probabilities = raw / raw.sum()
        self._cumulative = np.cumsum(self.probabilities)
        # Float rounding can leave the last bucket just short of 1.0
        self._last_index = int(np.flatnonzero(raw > 0)[-1])

    def generate_next(self) -> PipeBase:
        """Draw a shape by weight, then an orientation uniformly from its symmetry class."""
        pipe_type = self.sample_type()
        orientations = PIPE_SHAPES[pipe_type].orientations
        index = min(int(self.rng.random() * len(orientations)), len(orientations) - 1)
        return PipeBase(pipe_type, orientations[index])

    def sample_type(self) -> PipeType:
        r = self.rng.random()
        index = int(np.searchsorted(self._cumulative, r, side="right"))
        return PLACEABLE_TYPES[min(index, self._last_index)]
