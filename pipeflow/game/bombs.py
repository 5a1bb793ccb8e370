"""Bombs: timed removal of misplaced pipes."""

import logging
from typing import Callable, List, Optional

from ..flow.network import FlowNetwork
from ..grid.grid import Grid
from ..grid.position import GridPosition
from ..pipes.pipe import Pipe
from ..results import BombError, Result
from .scheduler import DeferredActionScheduler

logger = logging.getLogger(__name__)


class BombController:
    """
    Removes a placed pipe after ``bomb_timer_seconds``.

    Each detonation spends one unit of the ``max_bombs`` budget at the moment it
    starts. Pending removals are independent per cell and are dropped by
    ``cancel_all`` (e.g. on restart), so no removal can hit a rebuilt grid.
    """

    def __init__(
        self,
        grid: Grid,
        flow: FlowNetwork,
        scheduler: DeferredActionScheduler,
        max_bombs: int,
        bomb_timer_seconds: float,
        on_removed: Optional[Callable[[GridPosition, Pipe], None]] = None,
    ):
        if max_bombs <= 0:
            raise ValueError(f"Max bombs must be positive, got {max_bombs}")
        if bomb_timer_seconds <= 0:
            raise ValueError(f"Bomb timer must be positive, got {bomb_timer_seconds}")
        self.grid = grid
        self.flow = flow
        self.scheduler = scheduler
        self.max_bombs = max_bombs
        self.bomb_timer_seconds = bomb_timer_seconds
        self.on_removed = on_removed
        self.bombs_remaining = max_bombs

    def detonate(self, pos: GridPosition) -> Result:
        """
        Start a bomb on the pipe at ``pos``.

        Returns:
            Result failing with NO_BOMBS_REMAINING when the budget is spent, or
            INVALID_TARGET for the start pipe, pipes the flow has reached, empty
            or blocked cells and cells that already have a bomb ticking
        """
        if self.bombs_remaining <= 0:
            logger.debug(f"Cannot bomb {pos}: no bombs remaining")
            return Result.fail(BombError.NO_BOMBS_REMAINING)

        pipe = self.grid.get_pipe_at(pos)
        if pipe is None or pipe.is_start or self.flow.is_pipe_in_flow(pipe):
            logger.debug(f"Cannot bomb {pos}: invalid target")
            return Result.fail(BombError.INVALID_TARGET)
        if self.scheduler.is_pending(pos):
            logger.debug(f"Cannot bomb {pos}: bomb already ticking")
            return Result.fail(BombError.INVALID_TARGET)

        self.bombs_remaining -= 1
        self.scheduler.schedule(pos, self.bomb_timer_seconds, lambda: self._explode(pos, pipe))
        logger.info(
            f"Bomb started at {pos} ({self.bombs_remaining}/{self.max_bombs} left, "
            f"{self.bomb_timer_seconds}s)"
        )
        return Result.ok()

    def _explode(self, pos: GridPosition, pipe: Pipe) -> None:
        if self.grid.get_pipe_at(pos) is not pipe:
            logger.warning(f"Bomb at {pos} found a different pipe; nothing removed")
            return
        result = self.grid.remove_pipe(pos)
        if result.failed:
            # The flow reached the pipe while the bomb was ticking
            logger.info(f"Bomb at {pos} fizzled: {result.error.name}")
            return
        logger.info(f"Bomb exploded at {pos}, removed {pipe}")
        if self.on_removed:
            self.on_removed(pos, pipe)

    @property
    def active_bombs(self) -> List[GridPosition]:
        return [key for key in self.scheduler.pending_keys if isinstance(key, GridPosition)]

    def is_bombing(self, pos: GridPosition) -> bool:
        return self.scheduler.is_pending(pos)

    def bomb_progress(self, pos: GridPosition) -> float:
        """Fraction of the timer elapsed for a ticking bomb, 0 if none."""
        if not self.scheduler.is_pending(pos):
            return 0.0
        remaining = self.scheduler.time_remaining(pos)
        return 1.0 - remaining / self.bomb_timer_seconds

    def cancel_all(self) -> None:
        """Drop every pending removal. Safe to call repeatedly."""
        for pos in self.active_bombs:
            self.scheduler.cancel(pos)
        logger.debug("All bombs cancelled")
