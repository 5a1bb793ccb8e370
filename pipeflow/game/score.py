"""Score tracking."""

import logging
from typing import List, Set

from ..flow.network import FlowNetwork
from ..grid.grid import Grid
from ..pipes.pipe import Pipe

logger = logging.getLogger(__name__)


class ScoreTracker:
    """Points for filled pipes, plus how many pipes are connected to the start."""

    def __init__(self, grid: Grid, flow: FlowNetwork, points_per_pipe: int):
        if points_per_pipe <= 0:
            raise ValueError(f"Points per pipe must be positive, got {points_per_pipe}")
        self.grid = grid
        self.flow = flow
        self.points_per_pipe = points_per_pipe
        self._score = 0

    @property
    def score(self) -> int:
        return self._score

    @property
    def pipes_filled(self) -> int:
        return self.flow.filled_pipe_count

    def update(self) -> int:
        """Recompute the score from the flow; returns the new score."""
        score = self.flow.filled_pipe_count * self.points_per_pipe
        if score != self._score:
            logger.info(f"Score updated: {score} ({self.pipes_filled} pipes filled)")
            self._score = score
        return self._score

    def connected_pipe_count(self) -> int:
        """Number of pipes (start included) reachable from the start over connected ports."""
        return len(self.connected_pipes())

    def connected_pipes(self) -> List[Pipe]:
        """Pipes reachable from the start pipe, in flood-fill order."""
        start = self.grid.start_pipe
        if start is None:
            return []

        seen: Set[int] = set()
        order: List[Pipe] = []
        stack = [start]
        while stack:
            pipe = stack.pop()
            if id(pipe) in seen:
                continue
            seen.add(id(pipe))
            order.append(pipe)
            for neighbor in self.grid.get_connected_neighbors(pipe):
                if id(neighbor) not in seen:
                    stack.append(neighbor)
        return order
