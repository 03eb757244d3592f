"""
Execution timing utilities.

Wall-clock timing for matrix kernels, used by the benchmark harness.
Sections accumulate, so a kernel timed repeatedly under the same name
reports its total time and call count.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Accumulating wall-clock timer.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('transpose'):
            Bt = B.transpose()

        with timer.section('multiply'):
            C = A.naive_multiply(B)

        timer.stop()
        result = timer.result()
        # {'total_seconds': 0.05, 'transpose': 0.01, 'multiply': 0.04}
    """

    def __init__(self) -> None:
        self._sections: dict[str, float] = {}
        self._counts: dict[str, int] = {}
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
        """
        Time a named section.

        Args:
            name: Section identifier (used as key in result dict)

        Note:
            Sections can overlap with each other and with the total time.
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed
            self._counts[name] = self._counts.get(name, 0) + 1

    def count(self, name: str) -> int:
        """Number of times section `name` has been entered."""
        return self._counts.get(name, 0)

    def result(self) -> dict[str, float]:
        """
        Get timing results.

        Returns:
            Dictionary with 'total_seconds' and all section timings

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")

        result = {'total_seconds': self._total}
        result.update(self._sections)
        return result


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Context manager for simple timing.

    Usage:
        with timed() as timer:
            C = A.strassen_multiply(B)
        print(f"Took {timer.result()['total_seconds']:.3f}s")
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
