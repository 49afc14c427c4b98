"""Fixed-period tick scheduling on top of the frame clock."""

from __future__ import annotations

import logging

from .config import GAME_SPEED, MAX_GAME_SPEED, MIN_GAME_SPEED

logger = logging.getLogger(__name__)


class TickScheduler:
    """Accumulate frame time and report how many ticks are due.

    Changing the period drops whatever time was accumulated, so the new
    period starts counting from the next frame instead of firing a burst.
    """

    def __init__(self, period_ms: int = GAME_SPEED) -> None:
        self.period_ms = period_ms
        self.running = False
        self._accumulator = 0.0

    def start(self) -> None:
        self.running = True
        self._accumulator = 0.0

    def stop(self) -> None:
        self.running = False
        self._accumulator = 0.0

    def set_period(self, period_ms: int) -> int:
        period_ms = max(MIN_GAME_SPEED, min(MAX_GAME_SPEED, int(period_ms)))
        if period_ms != self.period_ms:
            logger.debug("Tick period %s ms -> %s ms", self.period_ms, period_ms)
            self.period_ms = period_ms
            self._accumulator = 0.0
        return self.period_ms

    def advance(self, dt_ms: float) -> int:
        """Feed elapsed frame time and return the number of ticks to run."""

        if not self.running or dt_ms <= 0:
            return 0
        self._accumulator += dt_ms
        due = int(self._accumulator // self.period_ms)
        self._accumulator -= due * self.period_ms
        return due
