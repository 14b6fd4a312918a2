import pytest

from pathviz.driver import StepDriver
from pathviz.pathfinding import AStarEngine, EngineState


def _engine(make_grid):
    grid = make_grid(
        9, 7, start=(0, 3), goal=(8, 3), obstacles=[(4, y) for y in range(1, 7)]
    )
    return AStarEngine(grid)


def test_idle_engine_is_not_stepped(make_grid):
    engine = _engine(make_grid)
    driver = StepDriver(engine, delay_ms=10, delay_enabled=True)
    assert driver.tick(100) == 0
    assert engine.state is EngineState.IDLE


def test_delay_paces_steps(make_grid):
    engine = _engine(make_grid)
    driver = StepDriver(engine, delay_ms=10, delay_enabled=True, max_steps_per_tick=8)
    engine.start()
    assert driver.tick(5) == 0
    assert driver.tick(5) == 1
    assert driver.tick(25) == 2
    # Leftover 5ms carries into the next frame
    assert driver.tick(5) == 1
    assert len(engine.closed_cells()) == 4


def test_backlog_is_capped(make_grid):
    engine = _engine(make_grid)
    driver = StepDriver(engine, delay_ms=1, delay_enabled=True, max_steps_per_tick=3)
    engine.start()
    assert driver.tick(1000) == 3
    assert driver.tick(0) == 0


def test_disabled_delay_runs_full_budget(make_grid):
    engine = _engine(make_grid)
    driver = StepDriver(engine, delay_ms=1000, delay_enabled=False, max_steps_per_tick=5)
    engine.start()
    assert driver.tick(0) == 5


def test_delay_setting_does_not_change_result(make_grid):
    def trace(delay_enabled):
        engine = _engine(make_grid)
        driver = StepDriver(
            engine, delay_ms=16, delay_enabled=delay_enabled, max_steps_per_tick=2
        )
        engine.start()
        snapshots = []
        while engine.state is EngineState.RUNNING:
            if driver.tick(16):
                snapshots.append([c.coords for c in engine.closed_cells()])
        return snapshots, engine.path_coords(), engine.state

    slow, fast = trace(True), trace(False)
    assert slow[2] is fast[2] is EngineState.SUCCEEDED
    assert slow[1] == fast[1]
    # Every intermediate closed set of the fast run also appears in the slow one
    assert all(s in slow[0] for s in fast[0])
    assert slow[0][-1] == fast[0][-1]


def test_toggle_and_set_delay(make_grid):
    driver = StepDriver(_engine(make_grid), delay_ms=5, delay_enabled=True)
    assert driver.toggle_delay() is False
    assert driver.toggle_delay() is True
    driver.set_delay(12)
    assert driver.delay_ms == 12.0
    with pytest.raises(ValueError):
        driver.set_delay(-1)
