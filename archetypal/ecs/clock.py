"""Frame time tracking with pausing, time scaling and sleeping."""

from __future__ import annotations

import time as _time
from collections.abc import Callable

MAX_DELTA_TIME = 1 / 30


class Time:
    """Measures the time between updates, in seconds.

    The delta time is capped at MAX_DELTA_TIME, is zero while paused, is
    multiplied by the time scale (at millisecond resolution) and is reduced
    by any remaining sleep time.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or _time.monotonic
        self._time_scale = 1.0
        self._delta_time = 0.0
        self._sleep = 0.0
        self._prev_time = self._clock()
        self._is_paused = False

    @property
    def time_scale(self) -> float:
        """Scale applied to elapsed time."""
        return self._time_scale

    @property
    def delta_time(self) -> float:
        """Seconds between the last two updates, after scaling and sleeping."""
        return self._delta_time

    @property
    def is_paused(self) -> bool:
        """Whether time is paused."""
        return self._is_paused

    def update(self) -> None:
        """Measure the time elapsed since the previous update."""
        now = self._clock()
        if self._is_paused:
            self._prev_time = now

        delta = now - self._prev_time

        if self._time_scale != 1:
            milliseconds = int(delta * 1000) * self._time_scale
            delta = int(milliseconds) / 1000

        delta = min(delta, MAX_DELTA_TIME)

        if self._sleep > 0:
            elapsed = delta
            delta = max(delta - self._sleep, 0.0)
            self._sleep = max(self._sleep - elapsed, 0.0)

        self._delta_time = delta
        self._prev_time = now

    def set_sleep(self, seconds: float) -> None:
        """Consume the given number of seconds before time advances again."""
        self._sleep = seconds

    def set_time_scale(self, scale: float) -> None:
        """Set the scale applied to elapsed time."""
        self._time_scale = scale

    def pause(self) -> None:
        """Pause time."""
        self._is_paused = True

    def resume(self) -> None:
        """Resume time."""
        self._is_paused = False