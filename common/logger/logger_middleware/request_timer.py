# common/logger/logger_middleware/request_timer.py
import time
from contextlib import contextmanager
from typing import Iterator

from common.context_vars import request_timer_context_var


class RequestTimer:
    """Per-request accumulator of named durations (ms) and counters."""

    def __init__(self) -> None:
        self.timings: dict[str, float] = {}
        self.counters: dict[str, int] = {}

    @contextmanager
    def capture(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = (time.perf_counter() - start) * 1000
            # Accumulate if the same name is used multiple times
            self.timings[name] = self.timings.get(name, 0) + duration

    def increment(self, name: str, amount: int = 1) -> None:
        self.counters[name] = self.counters.get(name, 0) + amount

    def format_server_timing(self) -> str:
        # Formats into: generator;dur=1.50, app;dur=5.20
        return ", ".join(
            [f"{name};dur={dur:.2f}" for name, dur in self.timings.items()]
        )


@contextmanager
def capture_timing(name: str) -> Iterator[None]:
    """
    Time a block against the current request's timer.

    No-op outside a request handled by RequestLoggingMiddleware.
    """
    timer = request_timer_context_var.get()
    if timer is None:
        yield
        return
    with timer.capture(name):
        yield


def increment_counter(name: str, amount: int = 1) -> None:
    timer = request_timer_context_var.get()
    if timer is not None:
        timer.increment(name, amount)


__all__ = ["RequestTimer", "capture_timing", "increment_counter"]
