import logging

import pygame
import pytest

from pathviz.pathfinding import EngineState


@pytest.fixture(autouse=True)
def stub_pygame_and_renderer(monkeypatch):
    """Stub out pygame display, clock and the Renderer to allow App init."""
    monkeypatch.setattr(pygame, "init", lambda: None)
    monkeypatch.setattr(pygame, "quit", lambda: None)
    monkeypatch.setattr(pygame.display, "set_mode", lambda *args, **kwargs: None)
    monkeypatch.setattr(pygame.display, "set_caption", lambda *args, **kwargs: None)

    class DummyClock:
        def tick(self, fps):
            return 16

    monkeypatch.setattr(pygame.time, "Clock", DummyClock)

    class DummyRenderer:
        def __init__(self, cell_size):
            self.cell_size = cell_size
            self.frames = 0

        def render(self, screen, grid, engine):
            self.frames += 1

        def shutdown(self):
            pass

    import pathviz.app as app_module

    monkeypatch.setattr(app_module, "Renderer", DummyRenderer)


@pytest.fixture
def app():
    from pathviz.app import App

    return App()


def _events(monkeypatch, *events):
    monkeypatch.setattr(pygame.event, "get", lambda: list(events))


def test_grid_dimensions():
    from pathviz.app import grid_dimensions

    assert grid_dimensions(1280) == (64, 40, 20)
    # Narrow windows still get MIN_COLS columns with smaller cells
    assert grid_dimensions(100) == (10, 40, 10)


def test_app_builds_grid_with_default_endpoints(app):
    assert (app.grid.cols, app.grid.rows) == (64, 40)
    assert app.grid.endpoints() == {"start": (6, 4), "goal": (57, 36)}
    assert app.engine.state is EngineState.IDLE


def test_paint_modes(app):
    cs = app.cell_size
    assert app.apply_paint(3 * cs + 1, 2 * cs + 1)
    assert app.grid.cell_type_at(3, 2) == "obstacle"
    app.input.draw_mode = "start"
    assert app.apply_paint(3 * cs + 1, 2 * cs + 1)
    assert app.grid.cell_type_at(3, 2) == "start"
    app.input.draw_mode = "obstacle"
    app.apply_paint(5 * cs, 5 * cs)
    app.input.action_mode = "erase"
    assert app.apply_paint(5 * cs, 5 * cs)
    assert app.grid.cell_type_at(5, 5) == "empty"
    # Off-grid positions are ignored
    assert not app.apply_paint(-5, 10)


def test_space_starts_search_and_update_steps_it(app, monkeypatch):
    _events(monkeypatch, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE, mod=0))
    app.handle_events()
    assert app.engine.state is EngineState.RUNNING
    app.driver.delay_enabled = False
    while app.engine.state is EngineState.RUNNING:
        app.update(16)
    assert app.engine.state is EngineState.SUCCEEDED


def test_painting_during_search_cancels(app, monkeypatch):
    app.engine.start()
    app.engine.step()
    cs = app.cell_size
    _events(monkeypatch, pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(20 * cs, 20 * cs), button=1))
    app.handle_events()
    assert app.engine.state is EngineState.CANCELLED
    assert app.grid.cell_type_at(20, 20) == "obstacle"


def test_start_without_endpoints_logs_warning(app, caplog):
    app.grid.place_endpoints = False
    app.grid.resize(12, 12)
    with caplog.at_level(logging.WARNING, logger="pathviz.app"):
        app.start_search()
    assert app.engine.state is EngineState.IDLE
    assert "Cannot start search" in caplog.text


def test_window_resize_reallocates_grid(app, monkeypatch):
    _events(monkeypatch, pygame.event.Event(pygame.VIDEORESIZE, w=400, h=300, size=(400, 300)))
    app.handle_events()
    assert (app.grid.cols, app.grid.rows) == (20, 40)


def test_run_loop_exits_on_quit(app, monkeypatch):
    _events(monkeypatch, pygame.event.Event(pygame.QUIT))
    app.run()
    assert app.running is False
    assert app.renderer.frames == 1
