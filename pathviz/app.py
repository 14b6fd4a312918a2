from __future__ import annotations
import logging
import pygame
from typing import Optional, Tuple

from .config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    FPS,
    WINDOW_TITLE,
    GRID_ROWS,
    GRID_HEIGHT_PX,
    MIN_COLS,
    MAX_ITERATIONS,
)
from .driver import StepDriver
from .errors import PathvizError
from .grid import Grid
from .input_handler import InputHandler
from .pathfinding import AStarEngine
from .renderer import Renderer

logger = logging.getLogger(__name__)


def grid_dimensions(width: int) -> Tuple[int, int, int]:
    """
    Compute (cols, rows, cell_size) for a window of the given width.
    Rows are fixed; the cell size follows from the grid height and the
    number of columns from the width, never fewer than MIN_COLS.
    """
    rows = GRID_ROWS
    cell_size = GRID_HEIGHT_PX // rows
    cols = width // cell_size
    if cols < MIN_COLS:
        cols = MIN_COLS
        cell_size = max(1, width // cols)
    return cols, rows, cell_size


class App:
    """Main application: owns the grid, engine and driver and runs the loop."""

    def __init__(
        self,
        clock: Optional[pygame.time.Clock] = None,
        max_iterations: int = MAX_ITERATIONS,
    ) -> None:
        pygame.init()
        cols, rows, cell_size = grid_dimensions(SCREEN_WIDTH)
        self.cell_size = cell_size
        self.screen = pygame.display.set_mode(
            (cols * cell_size, rows * cell_size), pygame.RESIZABLE
        )
        pygame.display.set_caption(WINDOW_TITLE)
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        self.grid = Grid(cols, rows)
        self.engine = AStarEngine(self.grid, max_iterations=max_iterations)
        self.driver = StepDriver(self.engine)
        self.renderer = Renderer(cell_size)
        self.input = InputHandler()
        self.running = True

    def handle_events(self) -> None:
        """Process input via InputHandler and apply the resulting commands."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False
        size = self.input.resized_to()
        if size is not None:
            self.resize(size[0])
        for px, py in self.input.painted_positions():
            self.apply_paint(px, py)
        if self.input.toggle_delay_pressed():
            self.driver.toggle_delay()
        if self.input.cancel_pressed():
            self.engine.cancel()
        if self.input.start_pressed():
            self.start_search()

    def apply_paint(self, px: int, py: int) -> bool:
        """Apply the current draw/action mode to the cell under (px, py)."""
        cell = self.grid.cell_at_screen(px, py, self.cell_size)
        if cell is None:
            return False
        if self.input.action_mode == "erase":
            if not cell.obstacle:
                return False
            return self.grid.clear_obstacle(cell.x, cell.y)
        mode = self.input.draw_mode
        if mode == "start":
            return self.grid.set_start(cell.x, cell.y)
        if mode == "goal":
            return self.grid.set_goal(cell.x, cell.y)
        if cell.obstacle:
            return False
        return self.grid.set_obstacle(cell.x, cell.y)

    def start_search(self) -> None:
        try:
            self.engine.start()
        except PathvizError as exc:
            logger.warning("Cannot start search: %s", exc)

    def resize(self, width: int) -> None:
        """Reallocate the grid for a new window width."""
        cols, rows, cell_size = grid_dimensions(width)
        self.cell_size = cell_size
        self.renderer = Renderer(cell_size)
        self.screen = pygame.display.set_mode(
            (cols * cell_size, rows * cell_size), pygame.RESIZABLE
        )
        try:
            self.grid.resize(cols, rows)
        except PathvizError as exc:
            logger.warning("Ignoring resize: %s", exc)

    def update(self, dt_ms: float) -> None:
        """Let the driver advance a running search."""
        self.driver.tick(dt_ms)

    def render(self) -> None:
        self.renderer.render(self.screen, self.grid, self.engine)

    def run(self) -> None:
        """Main loop: handle events, update, and render."""
        while self.running:
            dt_ms = self.clock.tick(self.fps)
            self.handle_events()
            self.update(dt_ms)
            self.render()
        self.renderer.shutdown()
        pygame.quit()
