"""
Frontier bookkeeping for a single search run: the open set, the closed set
and the final path.
"""

from __future__ import annotations
import heapq
from typing import Dict, List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .grid import Cell, Grid


class SearchState:
    """
    Open set as a min-heap of (f, insertion_seq, index). Ties on f go to the
    cell that entered the open set first. Entries made stale by an f
    decrease or by closing the cell are skipped on pop.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self._heap: List[Tuple[float, int, int]] = []
        # index -> insertion sequence, in insertion order
        self._open: Dict[int, int] = {}
        # index -> None, in the order cells were closed
        self._closed: Dict[int, None] = {}
        self._seq = 0
        self.path: List[Cell] = []
        self._on_path: set = set()

    def clear(self) -> None:
        self._heap.clear()
        self._open.clear()
        self._closed.clear()
        self._seq = 0
        self.path = []
        self._on_path = set()

    def set_path(self, path: List[Cell]) -> None:
        self.path = path
        self._on_path = {cell.index for cell in path}

    def is_on_path(self, cell: Cell) -> bool:
        return cell.index in self._on_path

    # -------------------- open set --------------------

    def push(self, cell: Cell) -> None:
        """Add a newly discovered cell; its f must already be set."""
        if cell.index in self._open or cell.index in self._closed:
            raise ValueError(f"cell {cell.coords} was already discovered")
        self._seq += 1
        self._open[cell.index] = self._seq
        heapq.heappush(self._heap, (cell.f, self._seq, cell.index))

    def decrease(self, cell: Cell) -> None:
        """Record a lowered f for a cell that is already open."""
        seq = self._open[cell.index]
        heapq.heappush(self._heap, (cell.f, seq, cell.index))

    def pop_min(self) -> Cell:
        """Remove the open cell with the lowest f and move it to closed."""
        cells = self.grid.cells
        while self._heap:
            f, seq, index = heapq.heappop(self._heap)
            if self._open.get(index) != seq or cells[index].f != f:
                continue
            del self._open[index]
            self._closed[index] = None
            return cells[index]
        raise IndexError("pop from empty open set")

    def is_open(self, cell: Cell) -> bool:
        return cell.index in self._open

    def is_closed(self, cell: Cell) -> bool:
        return cell.index in self._closed

    def open_empty(self) -> bool:
        return not self._open

    def open_cells(self) -> List[Cell]:
        """Open cells in insertion order."""
        cells = self.grid.cells
        return [cells[i] for i in self._open]

    def closed_cells(self) -> List[Cell]:
        """Closed cells in the order they were expanded."""
        cells = self.grid.cells
        return [cells[i] for i in self._closed]

    def __len__(self) -> int:
        return len(self._open)
