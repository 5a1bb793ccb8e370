"""Tests for pipe shapes, generation and the queue."""

from collections import Counter
import random

import numpy as np
import pytest

from pipeflow.direction import Direction
from pipeflow.errors import InvalidWeightsError, QueueEmptyError
from pipeflow.grid import GridPosition
from pipeflow.pipes import (
    PIPE_SHAPES,
    Pipe,
    PipeBase,
    PipeGenerator,
    PipeQueue,
    PipeType,
    check_weights,
)

from tests.helpers import FixedRandom, SequenceRandom

WEIGHTS = {
    PipeType.START: 0,
    PipeType.STRAIGHT: 0.25,
    PipeType.CORNER: 0.55,
    PipeType.CROSS: 0.20,
}


class TestPipePorts:
    """Tests for port sets and orientation."""

    def test_straight_ports(self):
        assert PipeBase(PipeType.STRAIGHT, 0).ports == {Direction.WEST, Direction.EAST}
        assert PipeBase(PipeType.STRAIGHT, 90).ports == {Direction.NORTH, Direction.SOUTH}

    def test_corner_rotates_clockwise(self):
        assert PipeBase(PipeType.CORNER, 0).ports == {Direction.NORTH, Direction.EAST}
        assert PipeBase(PipeType.CORNER, 90).ports == {Direction.EAST, Direction.SOUTH}
        assert PipeBase(PipeType.CORNER, 180).ports == {Direction.SOUTH, Direction.WEST}
        assert PipeBase(PipeType.CORNER, 270).ports == {Direction.WEST, Direction.NORTH}

    def test_cross_has_all_ports(self):
        assert PipeBase(PipeType.CROSS).ports == set(Direction)

    def test_symmetric_orientations_collapse(self):
        assert PipeBase(PipeType.STRAIGHT, 180).orientation == 0
        assert PipeBase(PipeType.STRAIGHT, 270).orientation == 90
        assert PipeBase(PipeType.CROSS, 90).orientation == 0
        assert PipeBase(PipeType.CORNER, 450).orientation == 90

    def test_non_cardinal_orientation_rejected(self):
        with pytest.raises(ValueError):
            PipeBase(PipeType.CORNER, 45)

    def test_start_pipe_single_port(self):
        start = Pipe.start(GridPosition(1, 1), Direction.NORTH)
        assert start.ports == {Direction.NORTH}
        assert start.start_direction == Direction.NORTH
        assert start.is_start

    def test_placed_pipes_compare_by_identity(self):
        a = PipeBase(PipeType.STRAIGHT).place_at(GridPosition(0, 0))
        b = PipeBase(PipeType.STRAIGHT).place_at(GridPosition(0, 0))
        assert a != b
        assert len({a, b}) == 2

    def test_orientation_classes(self):
        assert len(PIPE_SHAPES[PipeType.STRAIGHT].orientations) == 2
        assert len(PIPE_SHAPES[PipeType.CORNER].orientations) == 4
        assert len(PIPE_SHAPES[PipeType.CROSS].orientations) == 1


class TestPipeGenerator:
    """Tests for weighted pipe generation."""

    def test_weight_conformance(self):
        generator = PipeGenerator(WEIGHTS, rng=np.random.default_rng(12345))
        draws = 20000
        counts = Counter(generator.generate_next().pipe_type for _ in range(draws))

        assert counts[PipeType.START] == 0
        assert counts[PipeType.STRAIGHT] / draws == pytest.approx(0.25, abs=0.02)
        assert counts[PipeType.CORNER] / draws == pytest.approx(0.55, abs=0.02)
        assert counts[PipeType.CROSS] / draws == pytest.approx(0.20, abs=0.02)

    def test_low_draw_picks_first_weighted_shape(self, fixed_rng):
        generator = PipeGenerator(WEIGHTS, rng=fixed_rng)
        assert generator.generate_next() == PipeBase(PipeType.STRAIGHT, 0)

    def test_works_with_stdlib_random(self):
        generator = PipeGenerator(WEIGHTS, rng=random.Random(5))
        pipes = [generator.generate_next() for _ in range(100)]
        assert all(p.pipe_type != PipeType.START for p in pipes)

    def test_zero_weight_never_drawn(self):
        weights = {PipeType.STRAIGHT: 0, PipeType.CORNER: 1, PipeType.CROSS: 0}
        generator = PipeGenerator(weights, rng=np.random.default_rng(2))
        types = {generator.generate_next().pipe_type for _ in range(500)}
        assert types == {PipeType.CORNER}

    def test_top_of_range_stays_in_last_weighted_bucket(self):
        weights = {PipeType.STRAIGHT: 1, PipeType.CORNER: 1, PipeType.CROSS: 0}
        generator = PipeGenerator(weights, rng=FixedRandom(0.9999999999))
        assert generator.sample_type() == PipeType.CORNER

    def test_orientation_uniform_within_class(self):
        weights = {PipeType.STRAIGHT: 0, PipeType.CORNER: 1, PipeType.CROSS: 0}
        generator = PipeGenerator(weights, rng=np.random.default_rng(9))
        counts = Counter(generator.generate_next().orientation for _ in range(8000))
        assert set(counts) == {0, 90, 180, 270}
        for orientation in counts:
            assert counts[orientation] / 8000 == pytest.approx(0.25, abs=0.03)

    def test_cumulative_selection(self):
        # First draw picks the shape, second the orientation
        generator = PipeGenerator(WEIGHTS, rng=SequenceRandom([0.1, 0.0, 0.5, 0.75, 0.9, 0.0]))
        assert generator.generate_next() == PipeBase(PipeType.STRAIGHT, 0)
        assert generator.generate_next() == PipeBase(PipeType.CORNER, 270)
        assert generator.generate_next() == PipeBase(PipeType.CROSS, 0)

    @pytest.mark.parametrize("weights", [
        {PipeType.STRAIGHT: 0, PipeType.CORNER: 0, PipeType.CROSS: 0},
        {PipeType.STRAIGHT: -1, PipeType.CORNER: 2, PipeType.CROSS: 0},
        {PipeType.STRAIGHT: float("inf"), PipeType.CORNER: 1, PipeType.CROSS: 1},
        {PipeType.STRAIGHT: float("nan"), PipeType.CORNER: 1, PipeType.CROSS: 1},
        {PipeType.START: 1, PipeType.STRAIGHT: 1, PipeType.CORNER: 1, PipeType.CROSS: 1},
    ])
    def test_invalid_weights(self, weights):
        assert check_weights(weights) is not None
        with pytest.raises(InvalidWeightsError):
            PipeGenerator(weights)


class TestPipeQueue:
    """Tests for PipeQueue."""

    def make_queue(self, size=5, seed=0):
        return PipeQueue(PipeGenerator(WEIGHTS, rng=np.random.default_rng(seed)), size)

    def test_pop_before_fill(self):
        queue = self.make_queue()
        with pytest.raises(QueueEmptyError):
            queue.pop_front()

    def test_fill_to_max_size(self):
        queue = self.make_queue(size=4)
        queue.fill()
        assert len(queue) == 4

    def test_pop_preserves_length(self):
        queue = self.make_queue(size=5)
        queue.fill()
        for _ in range(50):
            queue.pop_front()
            assert len(queue) == 5

    def test_pop_returns_head_fifo(self):
        queue = self.make_queue(size=3)
        queue.fill()
        expected = queue.peek(3)

        popped = [queue.pop_front() for _ in range(3)]

        assert popped == expected

    def test_peek_does_not_mutate(self):
        queue = self.make_queue(size=5)
        queue.fill()
        before = queue.contents

        preview = queue.peek(2)
        preview.clear()

        assert queue.contents == before
        assert len(queue.peek(10)) == 5

    def test_reset_refills(self):
        queue = self.make_queue(size=3)
        queue.fill()
        queue.reset()
        assert len(queue) == 3

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            self.make_queue(size=0)
