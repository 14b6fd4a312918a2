"""
Input handling abstraction to decouple Pygame input from the grid editor.
"""

from __future__ import annotations
import pygame
from typing import List, Optional, Tuple

DRAW_MODES = ("obstacle", "start", "goal")
ACTION_MODES = ("draw", "erase")


class InputHandler:
    """
    Gathers per-frame input state. Tracks the current draw mode
    (obstacle/start/goal) and action mode (draw/erase) and collects the
    pixel positions painted with the left mouse button.
    """

    def __init__(self) -> None:
        self.draw_mode = "obstacle"
        self.action_mode = "draw"
        self._quit = False
        self._start = False
        self._cancel = False
        self._toggle_delay = False
        self._resize: Optional[Tuple[int, int]] = None
        # Mouse button held since the last press
        self._drawing = False
        # Pixel positions to apply this frame, in event order
        self._paint: List[Tuple[int, int]] = []

    def process_events(self) -> None:
        """
        Poll Pygame events, update mode state and collect this frame's
        commands and painted positions.
        """
        self._quit = False
        self._start = False
        self._cancel = False
        self._toggle_delay = False
        self._resize = None
        self._paint = []
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event) -> None:
        if event.type == pygame.QUIT:
            self._quit = True
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_x:
                self._quit = True
            elif event.key == pygame.K_SPACE:
                self._start = True
            elif event.key == pygame.K_c:
                self._cancel = True
            elif event.key == pygame.K_t:
                self._toggle_delay = True
            elif event.key == pygame.K_1:
                self.draw_mode = "obstacle"
            elif event.key == pygame.K_2:
                self.draw_mode = "start"
            elif event.key == pygame.K_3:
                self.draw_mode = "goal"
            elif event.key == pygame.K_e:
                # Toggle between drawing and erasing
                self.action_mode = "erase" if self.action_mode == "draw" else "draw"
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._drawing = True
            self._paint.append(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._drawing = False
        elif event.type == pygame.MOUSEMOTION and self._drawing:
            self._paint.append(event.pos)
        elif event.type == pygame.VIDEORESIZE:
            self._resize = (event.w, event.h)

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def start_pressed(self) -> bool:
        """Return True if SPACE was pressed this frame to start a search."""
        return self._start

    def cancel_pressed(self) -> bool:
        return self._cancel

    def toggle_delay_pressed(self) -> bool:
        """Return True if T was pressed this frame to toggle the step delay."""
        return self._toggle_delay

    def resized_to(self) -> Optional[Tuple[int, int]]:
        """Return the new window size if the window was resized this frame."""
        return self._resize

    def painted_positions(self) -> List[Tuple[int, int]]:
        return list(self._paint)
