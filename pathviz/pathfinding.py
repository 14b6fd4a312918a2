"""
Pathfinding engine: grid-based A* that advances one expansion per step()
so the frontier can be animated.
"""

from __future__ import annotations
import enum
import logging
from typing import List, Optional, Tuple

from .config import MAX_ITERATIONS
from .errors import MissingEndpoint, SearchAlreadyRunning
from .grid import Cell, Grid
from .path import reconstruct
from .search_state import SearchState

logger = logging.getLogger(__name__)


def heuristic(a, b):
    """Manhattan distance heuristic for grid."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class EngineState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class AStarEngine:
    """
    A* over a Grid with unit edge costs and 4-connected movement.

    Lifecycle: IDLE -> RUNNING -> SUCCEEDED | FAILED | CANCELLED.
    Any edit to the grid cancels a running search and discards the
    current result, after which start() may be called again.
    """

    def __init__(self, grid: Grid, max_iterations: int = MAX_ITERATIONS) -> None:
        self.grid = grid
        # Safety bound against runaway visualization, not part of A* itself
        self.max_iterations = max_iterations
        self.search = SearchState(grid)
        self.state = EngineState.IDLE
        self.iterations = 0
        # 'exhausted' or 'iteration_cap' once FAILED
        self.failure_reason: Optional[str] = None
        self._goal: Optional[Cell] = None
        grid.add_listener(self._on_grid_changed)

    # -------------------- commands --------------------

    def start(self) -> EngineState:
        """Seed a new run from the grid's start toward its goal."""
        if self.state is EngineState.RUNNING:
            raise SearchAlreadyRunning("a search is already running")
        start, goal = self.grid.start, self.grid.goal
        if start is None or goal is None:
            raise MissingEndpoint("start and goal must both be set")
        self.grid.reset_scores()
        self.search.clear()
        self.iterations = 0
        self.failure_reason = None
        self._goal = goal
        start.g = 0
        start.h = heuristic(start.coords, goal.coords)
        start.f = start.g + start.h
        self.search.push(start)
        self.state = EngineState.RUNNING
        logger.info("Search started: %s -> %s", start.coords, goal.coords)
        return self.state

    def step(self) -> EngineState:
        """Perform exactly one expansion and return the resulting state."""
        if self.state is not EngineState.RUNNING:
            return self.state
        if self.search.open_empty():
            return self._fail("exhausted")

        current = self.search.pop_min()
        goal = self._goal
        if current is goal:
            self.search.set_path(reconstruct(self.grid, current))
            self.state = EngineState.SUCCEEDED
            logger.info(
                "Path found: %d steps after %d iterations",
                len(self.search.path) - 1,
                self.iterations + 1,
            )
            return self.state

        for neighbor in self.grid.neighbors(current):
            if neighbor.obstacle or self.search.is_closed(neighbor):
                continue
            tentative_g = current.g + 1
            if not self.search.is_open(neighbor):
                neighbor.parent = current.index
                neighbor.g = tentative_g
                neighbor.h = heuristic(neighbor.coords, goal.coords)
                neighbor.f = neighbor.g + neighbor.h
                self.search.push(neighbor)
            elif tentative_g < neighbor.g:
                neighbor.parent = current.index
                neighbor.g = tentative_g
                neighbor.f = neighbor.g + neighbor.h
                self.search.decrease(neighbor)

        self.iterations += 1
        logger.debug(
            "Expanded %s (f=%s), open=%d", current.coords, current.f, len(self.search)
        )
        if self.iterations > self.max_iterations:
            return self._fail("iteration_cap")
        return self.state

    def run_to_completion(self) -> EngineState:
        """Step until the run reaches a terminal state."""
        while self.state is EngineState.RUNNING:
            self.step()
        return self.state

    def cancel(self) -> EngineState:
        """Stop a running search; a no-op in any other state."""
        if self.state is EngineState.RUNNING:
            self.search.clear()
            self.grid.reset_scores()
            self.state = EngineState.CANCELLED
            logger.info("Search cancelled after %d iterations", self.iterations)
        return self.state

    def reset(self) -> None:
        """Discard any result and return to IDLE (cancelled runs stay CANCELLED)."""
        self.search.clear()
        self.grid.reset_scores()
        self.iterations = 0
        self.failure_reason = None
        if self.state is not EngineState.CANCELLED:
            self.state = EngineState.IDLE

    def detach(self) -> None:
        """Stop listening to grid edits."""
        self.grid.remove_listener(self._on_grid_changed)

    def _fail(self, reason: str) -> EngineState:
        self.state = EngineState.FAILED
        self.failure_reason = reason
        logger.info("Search failed (%s) after %d iterations", reason, self.iterations)
        return self.state

    def _on_grid_changed(self, reason: str) -> None:
        if self.state is EngineState.RUNNING:
            logger.info("Grid edited (%s) during search", reason)
            self.cancel()
        self.reset()

    # -------------------- queries --------------------

    @property
    def path(self) -> List[Cell]:
        return self.search.path

    def path_coords(self) -> List[Tuple[int, int]]:
        return [cell.coords for cell in self.search.path]

    def open_cells(self) -> List[Cell]:
        return self.search.open_cells()

    def closed_cells(self) -> List[Cell]:
        return self.search.closed_cells()

    def is_open(self, cell: Cell) -> bool:
        return self.search.is_open(cell)

    def is_closed(self, cell: Cell) -> bool:
        return self.search.is_closed(cell)

    def is_on_path(self, cell: Cell) -> bool:
        return self.search.is_on_path(cell)

    def cell_status(self, x: int, y: int) -> Optional[str]:
        """Return 'path', 'closed', 'open' or None for display."""
        cell = self.grid.cell_at(x, y)
        if cell is None:
            return None
        if self.is_on_path(cell):
            return "path"
        if self.is_closed(cell):
            return "closed"
        if self.is_open(cell):
            return "open"
        return None


def find_path(grid, max_iterations=MAX_ITERATIONS):
    """
    Headless search on grid from its start to its goal.
    Returns list of (x, y) coordinates from start to goal inclusive, or empty list if no path.
    """
    engine = AStarEngine(grid, max_iterations=max_iterations)
    try:
        engine.start()
        if engine.run_to_completion() is EngineState.SUCCEEDED:
            return engine.path_coords()
        return []
    finally:
        engine.detach()
