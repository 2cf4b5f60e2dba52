"""Wall-clock and elapsed-time helpers for driving the simulation."""
from __future__ import annotations

import time
from typing import Callable


def now_ms() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class Ticker:
    """Measures real elapsed seconds between successive calls.

    The nominal tick period is only a scheduling hint; ``elapsed`` always reports
    the time that actually passed, so late or suspended callers still advance the
    simulation by the right amount.
    """

    def __init__(self, period_ms: int = 50, monotonic: Callable[[], float] | None = None) -> None:
        if period_ms <= 0:
            raise ValueError("Tick period must be positive.")
        self._period = period_ms / 1000
        self._monotonic = monotonic or time.monotonic
        self._last = self._monotonic()

    @property
    def period(self) -> float:
        """Nominal tick period in seconds."""
        return self._period

    def elapsed(self) -> float:
        """Return seconds since the previous call (or construction) and reset."""
        current = self._monotonic()
        delta = max(0.0, current - self._last)
        self._last = current
        return delta

    def reset(self) -> None:
        """Forget any time accumulated since the last call."""
        self._last = self._monotonic()
