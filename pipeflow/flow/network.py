"""
Flow simulation through the player-built pipe path.

The network walks outward from the start pipe one cell at a time. Each cell is
traversed in two halves: entry edge to centre, then centre to exit edge. When a
traversal finishes, the used ports are recorded and the flow either moves into
a mutually connected neighbour, completes the level, or leaks.

The network only reads the grid. It is driven by ``tick`` from a single
external loop and never blocks.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Dict, FrozenSet, List, Optional, Set

from ..direction import Direction
from ..grid.grid import Grid
from ..pipes.pipe import Pipe
from ..pipes.shapes import PipeType

logger = logging.getLogger(__name__)

# Progress (percent of one cell) at which the flow reaches the cell centre
SPLIT_PERCENT = 50.0

# Tolerance for float accumulation of idle time (seconds) and progress (percent)
TIME_EPSILON = 1e-9
PROGRESS_EPSILON = 1e-7


class FlowMode(Enum):
    """Lifecycle of the flow. COMPLETED and LEAKED are terminal."""
    IDLE = auto()
    FLOWING = auto()
    COMPLETED = auto()
    LEAKED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (FlowMode.COMPLETED, FlowMode.LEAKED)


class FlowPhase(Enum):
    """Which half of the active cell the flow is in."""
    ENTRY = auto()   # entry edge -> centre
    EXIT = auto()    # centre -> exit edge


@dataclass
class ActiveSegment:
    """The pipe currently being traversed."""
    pipe: Pipe
    entry_dir: Optional[Direction]
    exit_dir: Optional[Direction]
    progress: float = 0.0  # 0..100

    @property
    def phase(self) -> FlowPhase:
        if self.entry_dir is None:
            return FlowPhase.EXIT
        if self.exit_dir is None or self.progress < SPLIT_PERCENT:
            return FlowPhase.ENTRY
        return FlowPhase.EXIT

    @property
    def center_reached(self) -> bool:
        if self.entry_dir is None:
            return True
        if self.exit_dir is None:
            return self.progress >= 100.0
        return self.progress >= SPLIT_PERCENT

    @property
    def phase_fraction(self) -> float:
        """
        Progress within the current half, 0..1.

        A segment with only one known side (the start pipe has no entry, a pipe
        without a determined exit has no exit) spends its whole traversal in
        that single half.
        """
        if self.entry_dir is None or self.exit_dir is None:
            return min(self.progress / 100.0, 1.0)
        if self.progress < SPLIT_PERCENT:
            return self.progress / SPLIT_PERCENT
        return min((self.progress - SPLIT_PERCENT) / (100.0 - SPLIT_PERCENT), 1.0)

    @property
    def used_ports(self) -> FrozenSet[Direction]:
        return frozenset(d for d in (self.entry_dir, self.exit_dir) if d is not None)


@dataclass(frozen=True)
class VisitedPorts:
    """Ports of one pipe that the flow has fully passed through."""
    pipe: Pipe
    dirs: FrozenSet[Direction]


class FlowNetwork:
    """
    State machine for the advancing flow: IDLE -> FLOWING -> COMPLETED | LEAKED.

    ``pipe_flow_speed`` is in cells per second. The win threshold counts
    distinct non-start pipes the flow has fully traversed.
    """

    def __init__(
        self,
        grid: Grid,
        win_filled_pipes_count: int,
        pipe_flow_speed: float,
        start_delay_seconds: float = 0.0,
    ):
        if pipe_flow_speed <= 0:
            raise ValueError(f"Flow speed must be positive, got {pipe_flow_speed}")
        if start_delay_seconds < 0:
            raise ValueError(f"Flow delay cannot be negative, got {start_delay_seconds}")
        if win_filled_pipes_count <= 0:
            raise ValueError(f"Win threshold must be positive, got {win_filled_pipes_count}")

        self.grid = grid
        self.win_filled_pipes_count = win_filled_pipes_count
        self.pipe_flow_speed = pipe_flow_speed
        self.start_delay_seconds = start_delay_seconds

        self.mode = FlowMode.IDLE
        self.leak_reason: Optional[str] = None
        self._idle_elapsed = 0.0
        self._active: Optional[ActiveSegment] = None
        self._visited: Dict[Pipe, Set[Direction]] = {}

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    def tick(self, elapsed_seconds: float) -> FlowMode:
        """
        Advance the simulation by ``elapsed_seconds``.

        Never raises for gameplay outcomes. Ticks after a terminal state, and
        ticks with a negative duration, are ignored.

        Returns:
            The mode after this step
        """
        if self.mode.is_terminal:
            logger.debug(f"tick() ignored: flow already {self.mode.name}")
            return self.mode
        if elapsed_seconds < 0:
            logger.warning(f"tick() ignored: negative elapsed time {elapsed_seconds}")
            return self.mode

        if self.mode == FlowMode.IDLE:
            self._idle_elapsed += elapsed_seconds
            if self._idle_elapsed + TIME_EPSILON >= self.start_delay_seconds:
                self._begin_flow()
            return self.mode

        segment = self._active
        segment.progress += elapsed_seconds * self.pipe_flow_speed * 100.0
        if segment.progress >= 100.0 - PROGRESS_EPSILON:
            segment.progress = 100.0
            self._finish_segment(segment)
        return self.mode

    def reset(self) -> None:
        """Return to IDLE with no visited ports."""
        self.mode = FlowMode.IDLE
        self.leak_reason = None
        self._idle_elapsed = 0.0
        self._active = None
        self._visited.clear()
        logger.info("Flow network reset")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_active_state(self) -> Optional[ActiveSegment]:
        """A copy of the active segment, or None before the flow starts."""
        return replace(self._active) if self._active else None

    def get_visited_ports_snapshot(self) -> List[VisitedPorts]:
        """Visited ports per pipe, in the order the flow reached the pipes."""
        return [VisitedPorts(pipe, frozenset(dirs)) for pipe, dirs in self._visited.items()]

    @property
    def filled_pipe_count(self) -> int:
        """Distinct non-start pipes the flow has fully traversed."""
        return sum(1 for pipe in self._visited if not pipe.is_start)

    @property
    def time_until_flow(self) -> float:
        if self.mode != FlowMode.IDLE:
            return 0.0
        return max(self.start_delay_seconds - self._idle_elapsed, 0.0)

    def is_pipe_in_flow(self, pipe: Pipe) -> bool:
        """Whether the flow has reached ``pipe`` (visited or currently inside it)."""
        if pipe in self._visited:
            return True
        return self._active is not None and self._active.pipe is pipe

    def visited_dirs(self, pipe: Pipe) -> FrozenSet[Direction]:
        return frozenset(self._visited.get(pipe, ()))

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _begin_flow(self) -> None:
        start = self.grid.start_pipe
        if start is None:
            self._leak("no start pipe on the grid")
            return
        self._active = ActiveSegment(start, None, start.start_direction, 0.0)
        self.mode = FlowMode.FLOWING
        logger.info(f"Flow started at {start.position} heading {start.start_direction}")

    def _finish_segment(self, segment: ActiveSegment) -> None:
        self._visited.setdefault(segment.pipe, set()).update(segment.used_ports)
        logger.debug(f"Flow filled {segment.pipe} ({self.filled_pipe_count} filled)")

        if self.filled_pipe_count >= self.win_filled_pipes_count:
            self.mode = FlowMode.COMPLETED
            logger.info(f"Flow completed after filling {self.filled_pipe_count} pipes")
            return

        exit_dir = segment.exit_dir
        position = segment.pipe.position
        next_pos = self.grid.neighbor(position, exit_dir)
        if next_pos is None:
            self._leak(f"flow left the board at {position} heading {exit_dir}")
            return

        cell = self.grid.get_cell(next_pos)
        if cell.is_blocked:
            self._leak(f"blocked cell at {next_pos}")
            return
        if cell.pipe is None:
            self._leak(f"no pipe at {next_pos}")
            return

        entry_dir = exit_dir.opposite
        next_pipe = cell.pipe
        if next_pipe in self._visited and not next_pipe.shape.reusable:
            self._leak(f"{next_pipe} already carried flow")
            return
        if not next_pipe.has_port(entry_dir) or entry_dir in self._visited.get(next_pipe, ()):
            self._leak(f"{next_pipe} does not accept flow from {entry_dir}")
            return

        next_exit = self.select_exit_direction(next_pipe, entry_dir)
        if next_exit is None:
            self._leak(f"{next_pipe} has no free exit for flow entering from {entry_dir}")
            return

        self._active = ActiveSegment(next_pipe, entry_dir, next_exit, 0.0)
        logger.debug(f"Flow advanced from {position} to {next_pos}")

    def select_exit_direction(self, pipe: Pipe, entry_dir: Direction) -> Optional[Direction]:
        """
        Exit port for flow entering ``pipe`` through ``entry_dir``.

        Straight and cross pipes pass straight through; a corner turns to its
        other port. Returns None if the required port is missing or already
        carried flow.
        """
        if pipe.pipe_type in (PipeType.STRAIGHT, PipeType.CROSS):
            candidate = entry_dir.opposite
        elif pipe.pipe_type == PipeType.CORNER:
            others = pipe.ports - {entry_dir}
            candidate = next(iter(others)) if len(others) == 1 else None
        else:
            candidate = None

        if candidate is None or not pipe.has_port(candidate):
            return None
        if candidate in self._visited.get(pipe, ()):
            return None
        return candidate

    def _leak(self, reason: str) -> None:
        self.mode = FlowMode.LEAKED
        self.leak_reason = reason
        logger.info(f"Flow leaked: {reason}")

    def __repr__(self) -> str:
        return f"FlowNetwork(mode={self.mode.name}, filled={self.filled_pipe_count})"
