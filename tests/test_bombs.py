"""Tests for bombs and the deferred action scheduler."""

import pytest

from pipeflow.flow import FlowMode
from pipeflow.game import DeferredActionScheduler, GameSession
from pipeflow.grid import GridPosition
from pipeflow.results import BombError

from tests.helpers import FixedRandom, line_grid, straight_only_config


def make_session(**overrides):
    config = straight_only_config(**overrides)
    return GameSession(config, rng=FixedRandom(0.0), grid_factory=line_grid)


class TestScheduler:
    """Tests for DeferredActionScheduler."""

    def test_fires_when_due(self):
        scheduler = DeferredActionScheduler()
        fired = []
        scheduler.schedule("a", 1.0, lambda: fired.append("a"))

        assert scheduler.advance(0.5) == 0
        assert scheduler.time_remaining("a") == pytest.approx(0.5)
        assert scheduler.advance(0.5) == 1
        assert fired == ["a"]
        assert len(scheduler) == 0

    def test_fires_in_due_order(self):
        scheduler = DeferredActionScheduler()
        fired = []
        scheduler.schedule("late", 2.0, lambda: fired.append("late"))
        scheduler.schedule("early", 1.0, lambda: fired.append("early"))

        scheduler.advance(5.0)

        assert fired == ["early", "late"]

    def test_cancelled_action_never_fires(self):
        scheduler = DeferredActionScheduler()
        fired = []
        scheduler.schedule("a", 1.0, lambda: fired.append("a"))

        assert scheduler.cancel("a")
        assert not scheduler.cancel("a")
        scheduler.advance(2.0)

        assert fired == []

    def test_callback_can_cancel_later_action(self):
        scheduler = DeferredActionScheduler()
        fired = []
        scheduler.schedule("first", 1.0, lambda: scheduler.cancel("second"))
        scheduler.schedule("second", 1.5, lambda: fired.append("second"))

        scheduler.advance(2.0)

        assert fired == []

    def test_fires_after_summed_frame_times(self):
        scheduler = DeferredActionScheduler()
        fired = []
        scheduler.schedule("a", 0.5, lambda: fired.append("a"))

        for _ in range(29):
            scheduler.advance(1 / 60)
        assert fired == []
        scheduler.advance(1 / 60)

        assert fired == ["a"]

    def test_one_action_per_key(self):
        scheduler = DeferredActionScheduler()
        scheduler.schedule("a", 1.0, lambda: None)
        with pytest.raises(ValueError):
            scheduler.schedule("a", 1.0, lambda: None)

    def test_negative_values_rejected(self):
        scheduler = DeferredActionScheduler()
        with pytest.raises(ValueError):
            scheduler.schedule("a", -1.0, lambda: None)
        with pytest.raises(ValueError):
            scheduler.advance(-0.1)


class TestBombs:
    """Tests for BombController through the session."""

    def test_bomb_removes_pipe_after_timer(self):
        session = make_session(max_bombs=1, bomb_timer=0.5)
        target = GridPosition(1, 0)
        assert session.place_pipe(target).success

        result = session.detonate_bomb(target)

        assert result.success
        assert session.bombs_remaining == 0
        assert session.bombs.is_bombing(target)

        session.tick(0.25)
        assert session.grid.get_pipe_at(target) is not None
        assert session.bombs.bomb_progress(target) == pytest.approx(0.5)

        session.tick(0.25)
        assert session.get_cell(target).is_empty
        assert session.bombs.active_bombs == []

    def test_bomb_at_frame_cadence(self):
        session = make_session(max_bombs=1, bomb_timer=0.5)
        target = GridPosition(1, 0)
        session.place_pipe(target)
        session.detonate_bomb(target)

        for _ in range(30):
            session.tick(1 / 60)

        assert session.get_cell(target).is_empty
        assert not session.bombs.is_bombing(target)

    def test_budget_exhausted(self):
        session = make_session(max_bombs=1, bomb_timer=0.5)
        session.place_pipe(GridPosition(1, 0))
        session.place_pipe(GridPosition(2, 0))
        session.detonate_bomb(GridPosition(1, 0))

        result = session.detonate_bomb(GridPosition(2, 0))

        assert result.error == BombError.NO_BOMBS_REMAINING
        assert session.grid.get_pipe_at(GridPosition(2, 0)) is not None

    def test_budget_checked_before_target(self):
        session = make_session(max_bombs=1)
        session.place_pipe(GridPosition(1, 0))
        session.detonate_bomb(GridPosition(1, 0))

        assert session.detonate_bomb(GridPosition(0, 0)).error == BombError.NO_BOMBS_REMAINING

    def test_start_pipe_is_invalid_target(self):
        session = make_session()
        result = session.detonate_bomb(GridPosition(0, 0))
        assert result.error == BombError.INVALID_TARGET
        assert session.bombs_remaining == 1

    def test_empty_cell_is_invalid_target(self):
        session = make_session()
        assert session.detonate_bomb(GridPosition(2, 0)).error == BombError.INVALID_TARGET

    def test_same_cell_twice_is_invalid_target(self):
        session = make_session(max_bombs=2)
        session.place_pipe(GridPosition(1, 0))
        session.detonate_bomb(GridPosition(1, 0))

        result = session.detonate_bomb(GridPosition(1, 0))

        assert result.error == BombError.INVALID_TARGET
        assert session.bombs_remaining == 1

    def test_pipe_in_flow_is_invalid_target(self):
        session = make_session(delay=0.0, speed=0.5, win=5)
        session.place_pipe(GridPosition(1, 0))
        session.tick(0)
        session.tick(2.0)
        assert session.get_active_flow_state().pipe.position == GridPosition(1, 0)

        assert session.detonate_bomb(GridPosition(1, 0)).error == BombError.INVALID_TARGET

    def test_bomb_fizzles_when_flow_arrives_first(self):
        session = make_session(delay=0.0, speed=0.5, win=5, bomb_timer=3.0)
        target = GridPosition(1, 0)
        session.place_pipe(target)
        session.tick(0)
        assert session.detonate_bomb(target).success

        session.tick(2.0)
        session.tick(1.0)

        assert session.grid.get_pipe_at(target) is not None
        assert session.mode == FlowMode.FLOWING
        assert session.bombs_remaining == 0

    def test_game_over_cancels_bombs(self):
        session = make_session(delay=0.0, speed=1.0, win=5, bomb_timer=5.0)
        session.place_pipe(GridPosition(2, 0))
        session.detonate_bomb(GridPosition(2, 0))

        session.tick(0)
        session.tick(1.0)

        assert session.is_lost
        assert session.bombs.active_bombs == []
        assert session.grid.get_pipe_at(GridPosition(2, 0)) is not None
