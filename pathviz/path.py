"""
Path reconstruction from the parent links left by a finished search.
"""

from __future__ import annotations
from typing import List, TYPE_CHECKING

from .errors import InternalInvariantViolation

if TYPE_CHECKING:
    from .grid import Cell, Grid


def reconstruct(grid: Grid, goal: Cell) -> List[Cell]:
    """
    Walk parent links from goal back to the start and return the cells in
    start-to-goal order.
    Raises InternalInvariantViolation if the chain ends anywhere but the
    grid's start cell or loops.
    """
    path = [goal]
    current = goal
    # A valid chain visits each cell at most once
    for _ in range(len(grid.cells)):
        if current.parent is None:
            break
        current = grid.cells[current.parent]
        path.append(current)
    else:
        raise InternalInvariantViolation(
            f"parent chain from {goal.coords} does not terminate"
        )
    if current is not grid.start:
        raise InternalInvariantViolation(
            f"parent chain from {goal.coords} ends at {current.coords}, "
            f"not at the start cell"
        )
    path.reverse()
    return path
