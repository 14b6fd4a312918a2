"""
Grid model: a fixed-size arena of cells with obstacle flags, orthogonal
neighbour links and the start/goal markers.
"""

from __future__ import annotations
import logging
import math
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .config import START_FRACTION, GOAL_FRACTION
from .errors import InvalidDimension

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]
GridListener = Callable[[str], None]


class Cell:
    """A single grid square plus the per-run A* bookkeeping."""

    __slots__ = ("x", "y", "index", "obstacle", "g", "h", "f", "parent", "neighbors")

    def __init__(self, x: int, y: int, index: int) -> None:
        self.x = x
        self.y = y
        # Position in the owning grid's flat cell list
        self.index = index
        self.obstacle = False
        self.neighbors: Tuple[int, ...] = ()
        self.reset_scores()

    def reset_scores(self) -> None:
        """Forget any search result stored on this cell."""
        self.g = math.inf
        self.h = 0
        self.f = math.inf
        # Index of the cell this one was reached from, if any
        self.parent: Optional[int] = None

    @property
    def coords(self) -> Coord:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return (
            f"<Cell ({self.x}, {self.y}) obstacle={self.obstacle} "
            f"g={self.g} h={self.h} f={self.f}>"
        )


class Grid:
    """
    Flat cell storage addressed by (x, y). Every successful edit resets
    all scores and notifies listeners, so a stale search never survives a
    change to obstacles, endpoints or size.
    """

    def __init__(self, cols: int, rows: int, place_endpoints: bool = True) -> None:
        self.cols = 0
        self.rows = 0
        self.cells: List[Cell] = []
        self.start: Optional[Cell] = None
        self.goal: Optional[Cell] = None
        self.place_endpoints = place_endpoints
        self._listeners: List[GridListener] = []
        self.resize(cols, rows)

    # -------------------- topology --------------------

    def resize(self, cols: int, rows: int) -> None:
        """Reallocate the cell arena and recompute neighbour links."""
        if cols < 1 or rows < 1:
            raise InvalidDimension(cols, rows)
        self.cols = cols
        self.rows = rows
        self.cells = [
            Cell(x, y, y * cols + x) for y in range(rows) for x in range(cols)
        ]
        for cell in self.cells:
            cell.neighbors = self._neighbor_indices(cell.x, cell.y)
        if self.place_endpoints:
            self.start = self.cell_at(
                math.floor(cols * START_FRACTION), math.floor(rows * START_FRACTION)
            )
            self.goal = self.cell_at(
                math.floor(cols * GOAL_FRACTION), math.floor(rows * GOAL_FRACTION)
            )
        else:
            self.start = None
            self.goal = None
        logger.info("Grid resized to %dx%d", cols, rows)
        self._changed("resize")

    def _neighbor_indices(self, x: int, y: int) -> Tuple[int, ...]:
        # Order: left, right, up, down
        out = []
        if x > 0:
            out.append(self.index_of(x - 1, y))
        if x < self.cols - 1:
            out.append(self.index_of(x + 1, y))
        if y > 0:
            out.append(self.index_of(x, y - 1))
        if y < self.rows - 1:
            out.append(self.index_of(x, y + 1))
        return tuple(out)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def index_of(self, x: int, y: int) -> int:
        return y * self.cols + x

    def cell_at(self, x: int, y: int) -> Optional[Cell]:
        """Return the cell at (x, y), or None when out of range."""
        if not self.in_bounds(x, y):
            return None
        return self.cells[self.index_of(x, y)]

    def cell_at_screen(self, px: float, py: float, cell_size: int) -> Optional[Cell]:
        """Map a pixel position to the cell under it."""
        return self.cell_at(math.floor(px / cell_size), math.floor(py / cell_size))

    def neighbors(self, cell: Cell) -> List[Cell]:
        return [self.cells[i] for i in cell.neighbors]

    # -------------------- edits --------------------

    def add_listener(self, callback: GridListener) -> None:
        """Register a callback invoked with a reason string after each edit."""
        self._listeners.append(callback)

    def remove_listener(self, callback: GridListener) -> None:
        self._listeners.remove(callback)

    def _changed(self, reason: str) -> None:
        self.reset_scores()
        for callback in list(self._listeners):
            callback(reason)

    def reset_scores(self) -> None:
        for cell in self.cells:
            cell.reset_scores()

    def is_endpoint(self, cell: Cell) -> bool:
        return cell is self.start or cell is self.goal

    def set_obstacle(self, x: int, y: int, value: bool = True) -> bool:
        """
        Mark or unmark (x, y) as an obstacle.
        Returns False without changing anything when the coordinates are out
        of range or name the current start or goal.
        """
        cell = self.cell_at(x, y)
        if cell is None or self.is_endpoint(cell):
            return False
        cell.obstacle = bool(value)
        self._changed("obstacle")
        return True

    def clear_obstacle(self, x: int, y: int) -> bool:
        return self.set_obstacle(x, y, False)

    def toggle_obstacle(self, x: int, y: int) -> bool:
        cell = self.cell_at(x, y)
        if cell is None:
            return False
        return self.set_obstacle(x, y, not cell.obstacle)

    def set_start(self, x: int, y: int) -> bool:
        """Move the start marker; the target cell stops being an obstacle."""
        cell = self.cell_at(x, y)
        if cell is None:
            return False
        cell.obstacle = False
        self.start = cell
        self._changed("start")
        return True

    def set_goal(self, x: int, y: int) -> bool:
        """Move the goal marker; the target cell stops being an obstacle."""
        cell = self.cell_at(x, y)
        if cell is None:
            return False
        cell.obstacle = False
        self.goal = cell
        self._changed("goal")
        return True

    def load_obstacles(self, mask) -> int:
        """
        Paint obstacles from a 2D array-like indexed [row][col]. Cells outside
        the grid and the start/goal cells are skipped. Returns the number of
        obstacle cells set.
        """
        data = np.asarray(mask, dtype=bool)
        if data.ndim != 2:
            raise ValueError(f"obstacle mask must be 2D, got shape {data.shape}")
        count = 0
        for y, x in zip(*np.nonzero(data)):
            cell = self.cell_at(int(x), int(y))
            if cell is None or self.is_endpoint(cell):
                continue
            cell.obstacle = True
            count += 1
        self._changed("obstacle")
        return count

    # -------------------- queries --------------------

    def cell_type(self, cell: Optional[Cell]) -> Optional[str]:
        if cell is None:
            return None
        if cell is self.start:
            return "start"
        if cell is self.goal:
            return "goal"
        if cell.obstacle:
            return "obstacle"
        return "empty"

    def cell_type_at(self, x: int, y: int) -> Optional[str]:
        return self.cell_type(self.cell_at(x, y))

    def cell_info_at(self, x: int, y: int) -> Optional[Dict[str, object]]:
        cell = self.cell_at(x, y)
        if cell is None:
            return None
        return {"x": cell.x, "y": cell.y, "type": self.cell_type(cell)}

    def endpoints(self) -> Dict[str, Optional[Coord]]:
        """Return the start and goal coordinates (None when unset)."""
        return {
            "start": self.start.coords if self.start else None,
            "goal": self.goal.coords if self.goal else None,
        }

    def obstacle_mask(self) -> np.ndarray:
        """Boolean array of shape (rows, cols), True for obstacles."""
        return np.array(
            [c.obstacle for c in self.cells], dtype=bool
        ).reshape(self.rows, self.cols)

    def score_arrays(self) -> Dict[str, np.ndarray]:
        """Snapshot of g/h/f as float arrays of shape (rows, cols)."""
        shape = (self.rows, self.cols)
        return {
            "g": np.array([c.g for c in self.cells], dtype=float).reshape(shape),
            "h": np.array([c.h for c in self.cells], dtype=float).reshape(shape),
            "f": np.array([c.f for c in self.cells], dtype=float).reshape(shape),
        }
