"""
Wall-clock timing for optimizer runs.

An optimizer owns one Timer per solve(). Named sections accumulate, so a
section entered once per iteration reports the summed time of all
iterations. elapsed() reads the running clock for progress lines.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Run timer with accumulating named sections.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('pseudo_inverse'):
            pinv = X.pseudo_inverse()
        timer.stop()
        timer.result()
        # {'total_seconds': 0.004, 'pseudo_inverse': 0.003}
    """

    def __init__(self):
        self._sections: dict[str, float] = {}
        self._started_at: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._started_at = time.perf_counter()
        self._total = None

    def elapsed(self) -> float:
        """Seconds since start(), whether or not the timer was stopped."""
        if self._started_at is None:
            raise RuntimeError("Timer.elapsed() called before start()")
        if self._total is not None:
            return self._total
        return time.perf_counter() - self._started_at

    def stop(self) -> None:
        if self._started_at is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._started_at

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent in the block to section `name`."""
        entered = time.perf_counter()
        try:
            yield
        finally:
            spent = time.perf_counter() - entered
            self._sections[name] = self._sections.get(name, 0.0) + spent

    def result(self) -> dict[str, float]:
        """
        Timing breakdown of a stopped run.

        Returns:
            {'total_seconds': ..., <section>: ...}

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}
