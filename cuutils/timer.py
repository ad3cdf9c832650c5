"""Named elapsed-time measurement in milliseconds."""

from __future__ import annotations

import logging
import threading
import time

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "TimeTaken"


class MeasureTimer:
    """Keeps start times for several named categories at once."""

    def __init__(self) -> None:
        self._starts: dict[str, float] = {}
        self._lock = threading.Lock()

    def tick(self, category: str = DEFAULT_CATEGORY) -> None:
        """Start (or restart) the timer for ``category``."""
        with self._lock:
            self._starts[category] = time.perf_counter()

    def tock(self, category: str = DEFAULT_CATEGORY, log_result: bool = True) -> float:
        """Stop the timer for ``category`` and return the elapsed milliseconds.

        Returns 0.0 and logs a warning when the category was never started.
        """
        now = time.perf_counter()
        with self._lock:
            start = self._starts.pop(category, None)
        if start is None:
            logger.warning("MeasureTimer.tock error: <%s> no such category ticked.", category)
            return 0.0
        elapsed = (now - start) * 1000.0
        if log_result:
            logger.info("%s %1.3f ms", category, elapsed)
        return elapsed


_default_timer = MeasureTimer()


class ScopeTimer:
    """Context manager that logs the time spent inside its block."""

    def __init__(self, category: str = DEFAULT_CATEGORY, timer: MeasureTimer | None = None) -> None:
        self.category = category
        self.timer = timer if timer is not None else _default_timer
        self.elapsed: float = 0.0

    def __enter__(self) -> ScopeTimer:
        self.timer.tick(self.category)
        return self

    def __exit__(self, *args: object) -> None:
        self.elapsed = self.timer.tock(self.category)


def measure_timer_start(category: str = DEFAULT_CATEGORY) -> None:
    """Start the shared timer for ``category``."""
    _default_timer.tick(category)


def measure_timer_stop(category: str = DEFAULT_CATEGORY, log_result: bool = True) -> float:
    """Stop the shared timer for ``category`` and return milliseconds taken."""
    return _default_timer.tock(category, log_result)