"""Shared fixtures for pipeflow tests."""

import pytest

from tests.helpers import FixedRandom, line_grid


@pytest.fixture
def fixed_rng():
    # 0.0 selects the first shape with weight and orientation 0
    return FixedRandom(0.0)


@pytest.fixture
def line3():
    """A 3x1 board with the start pipe at (0, 0) facing east."""
    return line_grid(3)
