"""Countdown timer for a match."""

from __future__ import annotations

import time
from collections.abc import Callable

from coletarun.types import Drawable, Drawer, Point


class Timer(Drawable):
    """Counts down whole seconds from a start value, formatted as MM:SS."""

    def __init__(
        self,
        coordinate: Point,
        width: int,
        height: int,
        initial_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(coordinate, width, height)
        self.initial_seconds = initial_seconds
        self._clock = clock
        self._start = clock()
        self.remaining_seconds = initial_seconds
        self.formatted_time = ""
        self.update()

    def update(self) -> None:
        """Recompute the remaining time from the clock."""
        elapsed = int(self._clock() - self._start)
        self.remaining_seconds = max(self.initial_seconds - elapsed, 0)
        minutes, seconds = divmod(self.remaining_seconds, 60)
        self.formatted_time = f"{minutes:02d}:{seconds:02d}"

    def is_finished(self) -> bool:
        """True once no time is left."""
        return self.remaining_seconds <= 0

    def draw(self, drawer: Drawer) -> None:
        drawer.draw_timer(self)