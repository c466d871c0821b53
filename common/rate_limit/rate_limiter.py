# common/rate_limit/rate_limiter.py
"""
In-memory per-client rate limiting.

Sliding window: a client may make ``max_requests`` requests in any
``window_seconds`` span. Good for single-process deployments; state is lost
on restart and not shared between workers.
"""

import math
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict

from common.api_error import RateLimitExceededError


@dataclass(frozen=True)
class RateLimitStatus:
    limit: int
    remaining: int
    reset_after: int  # seconds until the oldest request leaves the window

    def as_headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_after),
        }


class RateLimiter:
    """
    Sliding window rate limiter keyed by client identifier.

    Usage:
        limiter = RateLimiter(max_requests=100, window_seconds=900)
        status = limiter.hit("203.0.113.7")  # raises RateLimitExceededError
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _prune(self, key: str, now: float) -> Deque[float]:
        """Drop expired timestamps; keys with an empty window are forgotten."""
        cutoff = now - self.window_seconds
        window = self._requests.get(key)
        if window is None:
            return deque()
        while window and window[0] <= cutoff:
            window.popleft()
        if not window:
            del self._requests[key]
        return window

    def _sweep(self, now: float) -> None:
        # At most once per window; clients that went quiet are evicted here
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        for key in list(self._requests):
            self._prune(key, now)

    def _reset_after(self, window: Deque[float], now: float) -> int:
        if not window:
            return self.window_seconds
        return max(1, math.ceil(self.window_seconds - (now - window[0])))

    def hit(self, key: str) -> RateLimitStatus:
        """
        Record one request for ``key``.

        Raises:
            RateLimitExceededError: If the window is already full; the
                rejected request is not recorded
        """
        with self._lock:
            now = self._clock()
            self._sweep(now)
            window = self._prune(key, now)

            if len(window) >= self.max_requests:
                retry_after = self._reset_after(window, now)
                error = RateLimitExceededError(
                    limit=self.max_requests,
                    window_seconds=self.window_seconds,
                    retry_after=retry_after,
                )
                error.headers.update(
                    RateLimitStatus(self.max_requests, 0, retry_after).as_headers()
                )
                raise error

            window.append(now)
            self._requests[key] = window
            return RateLimitStatus(
                limit=self.max_requests,
                remaining=self.max_requests - len(window),
                reset_after=self._reset_after(window, now),
            )

    def status(self, key: str) -> RateLimitStatus:
        """Current budget for ``key`` without recording a request."""
        with self._lock:
            now = self._clock()
            window = self._prune(key, now)
            return RateLimitStatus(
                limit=self.max_requests,
                remaining=max(0, self.max_requests - len(window)),
                reset_after=self._reset_after(window, now),
            )

    @property
    def tracked_keys(self) -> int:
        """Number of clients with requests still inside their window."""
        with self._lock:
            return len(self._requests)

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()


__all__ = ["RateLimiter", "RateLimitStatus"]
