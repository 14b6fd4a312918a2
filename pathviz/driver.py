"""
Cooperative scheduling of engine steps for the animated view.
"""

from __future__ import annotations
import logging
from .config import STEP_DELAY_MS, DELAY_ENABLED, MAX_STEPS_PER_TICK
from .pathfinding import AStarEngine, EngineState

logger = logging.getLogger(__name__)


class StepDriver:
    """
    Calls engine.step() from the host's frame loop. With the delay enabled,
    one step is taken per elapsed delay_ms; with it disabled, every tick
    takes max_steps_per_tick steps. Both modes run the same steps in the
    same order, only the pacing differs.
    """

    def __init__(
        self,
        engine: AStarEngine,
        delay_ms: float = STEP_DELAY_MS,
        delay_enabled: bool = DELAY_ENABLED,
        max_steps_per_tick: int = MAX_STEPS_PER_TICK,
    ) -> None:
        self.engine = engine
        self.delay_ms = float(delay_ms)
        self.delay_enabled = delay_enabled
        self.max_steps_per_tick = max(1, int(max_steps_per_tick))
        # Time accumulated towards the next step (milliseconds)
        self._elapsed = 0.0

    def toggle_delay(self) -> bool:
        """Flip the delay on/off and return the new setting."""
        self.delay_enabled = not self.delay_enabled
        self._elapsed = 0.0
        logger.info("Step delay %s", "on" if self.delay_enabled else "off")
        return self.delay_enabled

    def set_delay(self, delay_ms: float) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay must be non-negative, got {delay_ms}")
        self.delay_ms = float(delay_ms)

    def tick(self, dt_ms: float) -> int:
        """
        Advance the running search for a frame that took dt_ms.
        Returns the number of steps taken.
        """
        if self.engine.state is not EngineState.RUNNING:
            self._elapsed = 0.0
            return 0
        if not self.delay_enabled or self.delay_ms <= 0:
            budget = self.max_steps_per_tick
        else:
            self._elapsed += dt_ms
            budget = min(int(self._elapsed // self.delay_ms), self.max_steps_per_tick)
            self._elapsed -= budget * self.delay_ms
            if budget == self.max_steps_per_tick:
                # Drop backlog instead of catching up over later frames
                self._elapsed = 0.0
        steps = 0
        while steps < budget and self.engine.state is EngineState.RUNNING:
            self.engine.step()
            steps += 1
        return steps
