"""
A single play session.

The session owns one grid, pipe queue, flow network, bomb controller and score
tracker, and is the only object UI code needs: it accepts the player commands
(place a pipe, detonate a bomb, advance time) and answers read-only queries.
Commands and ticks must come from the same loop, one at a time.
"""

import logging
from typing import Callable, List, Optional

import numpy as np

from ..config.game_config import GameConfig
from ..config.validator import GameConfigValidator
from ..flow.network import ActiveSegment, FlowMode, FlowNetwork, VisitedPorts
from ..grid.cell import GridCell
from ..grid.grid import Grid
from ..grid.position import GridPosition
from ..pipes.generator import PipeGenerator
from ..pipes.pipe import Pipe, PipeBase
from ..pipes.queue import PipeQueue
from ..results import PlacePipeError, Result
from .bombs import BombController
from .scheduler import DeferredActionScheduler
from .score import ScoreTracker

logger = logging.getLogger(__name__)

GridFactory = Callable[[], Grid]


class GameSession:
    """
    Owns and wires the simulation objects for one level.

    Args:
        config: Game configuration; validated on construction
        rng: Random source with a ``random()`` method (defaults to a numpy
            generator seeded with ``seed``)
        seed: Seed for the default numpy generator
        grid_factory: Builds the board instead of ``Grid.build``; used for
            hand-made levels

    Raises:
        ConfigurationError: If the configuration is invalid
    """

    def __init__(
        self,
        config: GameConfig,
        rng=None,
        seed: Optional[int] = None,
        grid_factory: Optional[GridFactory] = None,
    ):
        self.config = GameConfigValidator.ensure_valid(config)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._grid_factory = grid_factory or self._build_grid
        self.restarts = 0
        self._setup()

    def _build_grid(self) -> Grid:
        grid_cfg = self.config.grid
        return Grid.build(
            grid_cfg.width,
            grid_cfg.height,
            grid_cfg.blocked_percentage,
            grid_cfg.allow_start_pipe_on_edge,
            rng=self.rng,
        )

    def _setup(self) -> None:
        cfg = self.config
        self.grid = self._grid_factory()

        generator = PipeGenerator(cfg.queue.pipe_weights.as_mapping(), rng=self.rng)
        self.queue = PipeQueue(generator, cfg.queue.max_size)
        self.queue.fill()

        self.flow = FlowNetwork(
            self.grid,
            win_filled_pipes_count=cfg.score.win_filled_pipes_count,
            pipe_flow_speed=cfg.flow.pipe_flow_speed,
            start_delay_seconds=cfg.flow.start_delay_seconds,
        )
        self.grid.set_removal_guard(self.flow.is_pipe_in_flow)

        self.scheduler = DeferredActionScheduler()
        self.bombs = BombController(
            self.grid,
            self.flow,
            self.scheduler,
            max_bombs=cfg.bombs.max_bombs,
            bomb_timer_seconds=cfg.bombs.bomb_timer_seconds,
        )
        self.score_tracker = ScoreTracker(self.grid, self.flow, cfg.score.points_per_pipe)
        self.elapsed = 0.0
        logger.info(
            f"Session started ({cfg.difficulty or 'custom'}): "
            f"{self.grid.width}x{self.grid.height} grid, queue {self.queue.describe()}"
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def place_pipe(self, position: GridPosition) -> Result:
        """
        Place the queue head at ``position``.

        The queue only advances when the placement succeeds.

        Returns:
            Result with the placed Pipe, or failing with GAME_OVER,
            INVALID_POSITION, CELL_BLOCKED or CELL_OCCUPIED
        """
        if self.is_over:
            return Result.fail(PlacePipeError.GAME_OVER)
        if not self.grid.is_valid_position(position):
            return Result.fail(PlacePipeError.INVALID_POSITION)

        pipe = self.queue.head.place_at(position)
        result = self.grid.place_pipe(position, pipe)
        if result.failed:
            logger.debug(f"Cannot place at {position}: {result.error.name}")
            return result
        self.queue.pop_front()
        return Result.ok(pipe)

    def place_pipe_at(self, x: int, y: int) -> Result:
        """Like ``place_pipe`` but with raw coordinates."""
        position = self.grid.position(x, y)
        if position is None:
            return Result.fail(PlacePipeError.INVALID_POSITION)
        return self.place_pipe(position)

    def detonate_bomb(self, position: GridPosition) -> Result:
        """Bomb the pipe at ``position``; see ``BombController.detonate``."""
        if self.is_over:
            return Result.fail(PlacePipeError.GAME_OVER)
        return self.bombs.detonate(position)

    def tick(self, elapsed_seconds: float) -> FlowMode:
        """
        Advance bombs, then the flow, then the score.

        Once the flow is terminal, ticks change nothing.

        Raises:
            ValueError: If ``elapsed_seconds`` is negative
        """
        if elapsed_seconds < 0:
            raise ValueError(f"Elapsed time cannot be negative, got {elapsed_seconds}")
        if self.is_over:
            return self.flow.mode

        self.elapsed += elapsed_seconds
        self.scheduler.advance(elapsed_seconds)
        mode = self.flow.tick(elapsed_seconds)
        self.score_tracker.update()

        if mode.is_terminal:
            self.bombs.cancel_all()
            logger.info(
                f"Game over: {mode.name} after {self.elapsed:.1f}s, "
                f"score {self.score} ({self.pipes_filled} pipes)"
            )
        return mode

    def restart(self) -> None:
        """Cancel pending bombs and rebuild every simulation object."""
        self.bombs.cancel_all()
        self.scheduler.cancel_all()
        self.restarts += 1
        self._setup()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_cell(self, position: GridPosition) -> GridCell:
        return self.grid.get_cell(position)

    def peek_queue(self, n: Optional[int] = None) -> List[PipeBase]:
        return self.queue.peek(self.queue.max_size if n is None else n)

    def get_active_flow_state(self) -> Optional[ActiveSegment]:
        return self.flow.get_active_state()

    def get_visited_ports_snapshot(self) -> List[VisitedPorts]:
        return self.flow.get_visited_ports_snapshot()

    @property
    def mode(self) -> FlowMode:
        return self.flow.mode

    @property
    def score(self) -> int:
        return self.score_tracker.score

    @property
    def pipes_filled(self) -> int:
        return self.flow.filled_pipe_count

    @property
    def bombs_remaining(self) -> int:
        return self.bombs.bombs_remaining

    @property
    def start_pipe(self) -> Optional[Pipe]:
        return self.grid.start_pipe

    @property
    def is_won(self) -> bool:
        return self.flow.mode == FlowMode.COMPLETED

    @property
    def is_lost(self) -> bool:
        return self.flow.mode == FlowMode.LEAKED

    @property
    def is_over(self) -> bool:
        return self.flow.mode.is_terminal

    def summary(self) -> str:
        """Text summary of the session for debugging."""
        lines = [
            "=" * 40,
            f"Mode: {self.mode.name}",
            f"Score: {self.score} ({self.pipes_filled}/"
            f"{self.config.score.win_filled_pipes_count} pipes)",
            f"Bombs: {self.bombs_remaining}/{self.config.bombs.max_bombs}",
            f"Queue: {self.queue.describe()}",
            "=" * 40,
            self.grid.render_ascii(),
        ]
        return "\n".join(lines)
