"""
Wall-clock timing of solver phases.

Every iterative solver times its sweep loop under the 'iterations'
section; inverse_power_method also times the LU factorization of the
shifted matrix under 'factorization'. The timings land on the
solution's ``timing`` dict.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Accumulating timer with named sections.

    Example:
        >>> inverse_power_method(A, alpha=2.0).timing
        {'total_seconds': 0.004, 'factorization': 0.001, 'iterations': 0.003}
    """

    def __init__(self):
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        """Start the overall timer."""
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the overall timer."""
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the wall time of the block to section ``name``; repeats accumulate."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> dict[str, float]:
        """'total_seconds' plus every section; only valid after stop()."""
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")

        result = {'total_seconds': self._total}
        result.update(self._sections)
        return result

