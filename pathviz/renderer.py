"""
Pygame renderer: draws the grid, the search frontier and the final path.
"""

from __future__ import annotations
import logging
import math
import pygame
from typing import TYPE_CHECKING, Dict, Tuple

from .config import (
    BACKGROUND_COLOR,
    GRID_LINE_COLOR,
    START_COLOR,
    GOAL_COLOR,
    PATH_COLOR,
    CLOSED_COLOR,
    OPEN_COLOR,
    OBSTACLE_COLOR,
    FREE_COLOR,
    SCORE_TEXT_COLOR,
    SCORE_TEXT_MIN_CELL,
    SCORE_TEXT_SCALE,
)

if TYPE_CHECKING:
    from .grid import Cell, Grid
    from .pathfinding import AStarEngine

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


def cell_color(grid: Grid, engine: AStarEngine, cell: Cell) -> Color:
    """Pick the fill color for a cell; markers win over search state."""
    if cell is grid.start:
        return START_COLOR
    if cell is grid.goal:
        return GOAL_COLOR
    if engine.is_on_path(cell):
        return PATH_COLOR
    if engine.is_closed(cell):
        return CLOSED_COLOR
    if engine.is_open(cell):
        return OPEN_COLOR
    if cell.obstacle:
        return OBSTACLE_COLOR
    return FREE_COLOR


def show_score(grid: Grid, cell: Cell, cell_size: int) -> bool:
    """Scores are shown on discovered free cells when there is room."""
    return (
        cell_size > SCORE_TEXT_MIN_CELL
        and cell.g != math.inf
        and not grid.is_endpoint(cell)
        and not cell.obstacle
    )


class Renderer:
    """Draws the grid into a pygame surface once per frame."""

    def __init__(self, cell_size: int) -> None:
        self.cell_size = cell_size
        self._fonts: Dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
            logger.debug("Loaded score font at %dpx", size)
        return font

    def render(self, screen, grid: Grid, engine: AStarEngine) -> None:
        """Render the entire grid and flip the display."""
        cs = self.cell_size
        screen.fill(BACKGROUND_COLOR)
        text_size = max(8, int(cs * SCORE_TEXT_SCALE))
        for cell in grid.cells:
            rect = pygame.Rect(cell.x * cs, cell.y * cs, cs, cs)
            pygame.draw.rect(screen, cell_color(grid, engine, cell), rect)
            pygame.draw.rect(screen, GRID_LINE_COLOR, rect, 1)
            if show_score(grid, cell, cs):
                label = self._font(text_size).render(
                    str(round(cell.f)), True, SCORE_TEXT_COLOR
                )
                screen.blit(
                    label, label.get_rect(center=(rect.centerx, rect.y + cs // 3))
                )
        pygame.display.flip()

    def shutdown(self) -> None:
        self._fonts.clear()
