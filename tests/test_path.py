import pytest

from pathviz.errors import InternalInvariantViolation
from pathviz.path import reconstruct
from pathviz.pathfinding import AStarEngine


def test_reconstruct_is_repeatable(make_grid):
    grid = make_grid(5, 4, start=(0, 3), goal=(4, 0), obstacles=[(2, 1), (2, 2), (2, 3)])
    engine = AStarEngine(grid)
    engine.start()
    engine.run_to_completion()
    first = reconstruct(grid, grid.goal)
    second = reconstruct(grid, grid.goal)
    assert first == second == engine.path
    assert first[0] is grid.start


def test_reconstruct_single_cell(make_grid):
    grid = make_grid(2, 2, start=(1, 0), goal=(1, 0))
    assert reconstruct(grid, grid.goal) == [grid.start]


def test_chain_not_ending_at_start_is_fatal(make_grid):
    grid = make_grid(3, 1, start=(0, 0), goal=(2, 0))
    # Goal points at (1, 0), which has no parent and is not the start
    grid.goal.parent = grid.index_of(1, 0)
    with pytest.raises(InternalInvariantViolation):
        reconstruct(grid, grid.goal)


def test_parent_cycle_is_fatal(make_grid):
    grid = make_grid(3, 1, start=(0, 0), goal=(2, 0))
    middle = grid.cell_at(1, 0)
    grid.goal.parent = middle.index
    middle.parent = grid.goal.index
    with pytest.raises(InternalInvariantViolation):
        reconstruct(grid, grid.goal)
