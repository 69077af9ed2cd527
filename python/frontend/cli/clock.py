"""Turns wall-clock time into whole-second game ticks for CLI frontends."""

from __future__ import annotations

import time
from typing import Callable

from backend.engine.gameplay import GamePlay


class TickClock:
    """Delivers one ``game.tick()`` per elapsed *interval* seconds.

    Terminal loops call ``pump`` whenever they wake up; fractional time
    is carried over to the next call so no second is lost or doubled.
    """

    def __init__(
        self,
        interval: float = 1.0,
        now: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval = interval
        self._now = now
        self._last = now()

    def reset(self) -> None:
        self._last = self._now()

    def pump(self, game: GamePlay) -> int:
        """Tick *game* for every full interval since the last pump."""
        due = int((self._now() - self._last) // self.interval)
        if due <= 0:
            return 0
        self._last += due * self.interval
        for _ in range(due):
            game.tick()
        return due
