import pytest

from pathviz.grid import Grid


@pytest.fixture
def make_grid():
    """Build a grid with explicit endpoints and obstacle cells."""

    def _make(cols, rows, start=None, goal=None, obstacles=()):
        grid = Grid(cols, rows, place_endpoints=False)
        for x, y in obstacles:
            grid.set_obstacle(x, y)
        if start is not None:
            grid.set_start(*start)
        if goal is not None:
            grid.set_goal(*goal)
        return grid

    return _make
