"""
The game board.

The grid is the authoritative board state: which cells are blocked, which hold
a pipe, and which pipes are mutually connected. The flow simulation only reads
it; placement and removal happen through the session commands.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

import numpy as np

from ..direction import ALL_DIRECTIONS, Direction
from ..errors import OutOfBoundsError
from ..results import GridError, Result
from ..pipes.pipe import Pipe
from .cell import CellState, GridCell
from .position import GridPosition

logger = logging.getLogger(__name__)

# Predicate telling the grid that a pipe may no longer be removed
RemovalGuard = Callable[[Pipe], bool]


@dataclass(frozen=True)
class GridStats:
    """Summary counts of the current board."""
    total_cells: int
    blocked_cells: int
    pipes_placed: int
    empty_cells: int
    has_start_pipe: bool


class Grid:
    """A fixed-size board of blocked, empty and occupied cells."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid grid dimensions: {width}x{height}")
        self.width = width
        self.height = height
        self._cells: List[List[GridCell]] = [
            [GridCell(GridPosition(x, y)) for x in range(width)]
            for y in range(height)
        ]
        self._start_pipe: Optional[Pipe] = None
        self._removal_guard: Optional[RemovalGuard] = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        width: int,
        height: int,
        blocked_percentage: float,
        allow_start_pipe_on_edge: bool,
        rng=None,
    ) -> "Grid":
        """
        Build a playable board.

        Chooses the start cell (interior only unless ``allow_start_pipe_on_edge``),
        points the start pipe at an in-bounds neighbour and then blocks every
        other cell independently with probability ``blocked_percentage`` / 100.
        The cell in front of the start pipe is never blocked.

        Args:
            width, height: Board dimensions
            blocked_percentage: Chance in percent that a cell is blocked
            allow_start_pipe_on_edge: Whether the start pipe may sit on the border
            rng: Random source with a ``random()`` method; defaults to a fresh
                numpy generator

        Raises:
            ValueError: If no start cell is available (an interior start needs
                a board of at least 3x3)
        """
        rng = rng if rng is not None else np.random.default_rng()
        grid = cls(width, height)

        if allow_start_pipe_on_edge:
            candidates = [cell.position for cell in grid.iter_cells()]
        else:
            candidates = [
                cell.position for cell in grid.iter_cells()
                if 0 < cell.position.x < width - 1 and 0 < cell.position.y < height - 1
            ]
        # Start needs somewhere to flow to
        candidates = [pos for pos in candidates if grid._in_bound_directions(pos)]
        if not candidates:
            raise ValueError(
                f"No valid start position on a {width}x{height} grid "
                f"(allow_start_pipe_on_edge={allow_start_pipe_on_edge})"
            )

        start_pos = _pick(rng, candidates)
        start_dir = _pick(rng, grid._in_bound_directions(start_pos))
        grid.place_start_pipe(start_pos, start_dir)

        protected = {start_pos, grid.neighbor(start_pos, start_dir)}
        probability = blocked_percentage / 100.0
        blocked = 0
        for cell in grid.iter_cells():
            if cell.position in protected:
                continue
            if rng.random() < probability:
                cell.blocked = True
                blocked += 1

        logger.info(
            f"Grid {width}x{height} built: start at {start_pos} facing {start_dir}, "
            f"{blocked} cells blocked ({blocked_percentage}%)"
        )
        return grid

    def place_start_pipe(self, pos: GridPosition, direction: Direction) -> Pipe:
        """Place the start pipe with its single port facing ``direction``."""
        if self._start_pipe is not None:
            raise ValueError(f"Start pipe already placed at {self._start_pipe.position}")
        pipe = Pipe.start(pos, direction)
        result = self.place_pipe(pos, pipe)
        if result.failed:
            raise ValueError(f"Cannot place start pipe at {pos}: {result.error.name}")
        self._start_pipe = pipe
        return pipe

    def block_cell(self, pos: GridPosition) -> Result:
        """Mark an empty cell as blocked."""
        cell = self.get_cell(pos)
        if cell.has_pipe:
            logger.warning(f"Cannot block cell {pos} - contains pipe")
            return Result.fail(GridError.CELL_OCCUPIED)
        cell.blocked = True
        return Result.ok()

    def set_removal_guard(self, guard: Optional[RemovalGuard]) -> None:
        """Install a predicate that protects pipes from removal (e.g. flowed pipes)."""
        self._removal_guard = guard

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    @property
    def start_pipe(self) -> Optional[Pipe]:
        return self._start_pipe

    def position(self, x: int, y: int) -> Optional[GridPosition]:
        """Validated position on this board, or None if out of range."""
        return GridPosition.create(x, y, self.width, self.height)

    def is_valid_position(self, pos: GridPosition) -> bool:
        return pos.is_within(self.width, self.height)

    def get_cell(self, pos: GridPosition) -> GridCell:
        """
        Get the cell at a position.

        Raises:
            OutOfBoundsError: If the position lies outside this board
        """
        if not self.is_valid_position(pos):
            raise OutOfBoundsError(
                f"Position {pos} is out of bounds for {self.width}x{self.height} grid")
        return self._cells[pos.y][pos.x]

    def try_get_cell(self, pos: GridPosition) -> Optional[GridCell]:
        return self._cells[pos.y][pos.x] if self.is_valid_position(pos) else None

    def get_pipe_at(self, pos: GridPosition) -> Optional[Pipe]:
        cell = self.try_get_cell(pos)
        return cell.pipe if cell else None

    def neighbor(self, pos: GridPosition, direction: Direction) -> Optional[GridPosition]:
        """Adjacent position in ``direction``, or None at the boundary."""
        return pos.move(direction, self.width, self.height)

    def get_neighbor_cell(self, pos: GridPosition, direction: Direction) -> Optional[GridCell]:
        neighbor_pos = self.neighbor(pos, direction)
        return self.get_cell(neighbor_pos) if neighbor_pos else None

    def get_neighbor_pipe(self, pos: GridPosition, direction: Direction) -> Optional[Pipe]:
        cell = self.get_neighbor_cell(pos, direction)
        return cell.pipe if cell else None

    # ------------------------------------------------------------------
    # Pipe operations
    # ------------------------------------------------------------------

    def place_pipe(self, pos: GridPosition, pipe: Pipe) -> Result:
        """
        Place a pipe into an empty cell.

        Returns:
            Result failing with CELL_BLOCKED, CELL_OCCUPIED or OUT_OF_BOUNDS
        """
        cell = self.try_get_cell(pos)
        if cell is None:
            return Result.fail(GridError.OUT_OF_BOUNDS)
        if cell.is_blocked:
            return Result.fail(GridError.CELL_BLOCKED)
        if cell.has_pipe:
            return Result.fail(GridError.CELL_OCCUPIED)
        if pipe.position != pos:
            raise ValueError(f"Pipe position {pipe.position} does not match cell {pos}")

        cell.pipe = pipe
        logger.debug(f"Placed {pipe}")
        return Result.ok(pipe)

    def remove_pipe(self, pos: GridPosition) -> Result:
        """
        Clear a cell back to empty.

        Returns:
            Result failing with CELL_EMPTY if there is nothing to remove, or
            CANNOT_REMOVE_START for the start pipe and pipes the flow has reached
        """
        cell = self.try_get_cell(pos)
        if cell is None:
            return Result.fail(GridError.OUT_OF_BOUNDS)
        if cell.pipe is None:
            return Result.fail(GridError.CELL_EMPTY)
        pipe = cell.pipe
        if pipe is self._start_pipe or self.is_protected(pipe):
            return Result.fail(GridError.CANNOT_REMOVE_START)

        cell.pipe = None
        logger.debug(f"Removed {pipe}")
        return Result.ok(pipe)

    def is_protected(self, pipe: Pipe) -> bool:
        """Whether the removal guard forbids removing ``pipe``."""
        return self._removal_guard is not None and self._removal_guard(pipe)

    # ------------------------------------------------------------------
    # Network analysis
    # ------------------------------------------------------------------

    def is_connected(self, pipe: Pipe, direction: Direction) -> bool:
        """Whether ``pipe`` and its neighbour in ``direction`` connect to each other."""
        if not pipe.has_port(direction):
            return False
        neighbor = self.get_neighbor_pipe(pipe.position, direction)
        return neighbor is not None and neighbor.has_port(direction.opposite)

    def get_connected_neighbors(self, pipe: Pipe) -> List[Pipe]:
        """All pipes mutually connected to ``pipe``."""
        return [
            self.get_neighbor_pipe(pipe.position, direction)
            for direction in pipe.sorted_ports()
            if self.is_connected(pipe, direction)
        ]

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def iter_cells(self) -> Iterator[GridCell]:
        """Cells in row-major order."""
        for row in self._cells:
            yield from row

    def find_cells(self, predicate: Callable[[GridCell], bool]) -> List[GridCell]:
        return [cell for cell in self.iter_cells() if predicate(cell)]

    def get_empty_cells(self) -> List[GridCell]:
        return self.find_cells(lambda cell: cell.is_empty)

    def get_cells_with_pipes(self) -> List[GridCell]:
        return self.find_cells(lambda cell: cell.has_pipe)

    # ------------------------------------------------------------------
    # Management
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Remove every pipe except the start pipe."""
        for cell in self.iter_cells():
            if cell.pipe is not self._start_pipe:
                cell.pipe = None
        logger.info("Grid cleared (start pipe preserved)")

    def stats(self) -> GridStats:
        counts = {state: 0 for state in CellState}
        for cell in self.iter_cells():
            counts[cell.state] += 1
        return GridStats(
            total_cells=self.width * self.height,
            blocked_cells=counts[CellState.BLOCKED],
            pipes_placed=counts[CellState.OCCUPIED],
            empty_cells=counts[CellState.EMPTY],
            has_start_pipe=self._start_pipe is not None,
        )

    def render_ascii(self) -> str:
        """
        Debug view of the board.

        '#' blocked, '.' empty, otherwise the pipe's shape symbol. The start pipe
        is shown as an arrow pointing along its port.
        """
        arrows = {Direction.NORTH: "^", Direction.EAST: ">",
                  Direction.SOUTH: "v", Direction.WEST: "<"}
        lines = []
        for row in self._cells:
            chars = []
            for cell in row:
                if cell.is_blocked:
                    chars.append("#")
                elif cell.pipe is None:
                    chars.append(".")
                elif cell.pipe.is_start:
                    chars.append(arrows[cell.pipe.start_direction])
                else:
                    chars.append(_pipe_glyph(cell.pipe))
            lines.append("".join(chars))
        return "\n".join(lines)

    def _in_bound_directions(self, pos: GridPosition) -> List[Direction]:
        return [d for d in ALL_DIRECTIONS if self.neighbor(pos, d) is not None]

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"


# Box-drawing glyph per open port set
_GLYPHS = {
    frozenset({Direction.WEST, Direction.EAST}): "─",
    frozenset({Direction.NORTH, Direction.SOUTH}): "│",
    frozenset({Direction.NORTH, Direction.EAST}): "└",
    frozenset({Direction.EAST, Direction.SOUTH}): "┌",
    frozenset({Direction.SOUTH, Direction.WEST}): "┐",
    frozenset({Direction.WEST, Direction.NORTH}): "┘",
    frozenset(Direction): "┼",
}


def _pipe_glyph(pipe: Pipe) -> str:
    return _GLYPHS.get(pipe.ports, pipe.shape.symbol)


def _pick(rng, items: list):
    """Uniformly pick one item using a ``random()``-only source."""
    index = min(int(rng.random() * len(items)), len(items) - 1)
    return items[index]
