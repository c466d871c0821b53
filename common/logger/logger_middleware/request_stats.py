# common/logger/logger_middleware/request_stats.py
"""
In-memory rolling request statistics for health reporting.

Keeps the most recent requests only; counts reset on process restart.
"""

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Optional

_ONE_HOUR = 60 * 60
_ONE_DAY = 24 * _ONE_HOUR


@dataclass(frozen=True)
class RequestRecord:
    timestamp: float
    method: str
    path: str
    status_code: int
    duration_ms: float


class RequestStats:
    """Thread-safe ring buffer of recent requests."""

    def __init__(self, max_entries: int = 1000) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._records: Deque[RequestRecord] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def record(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        timestamp: Optional[float] = None,
    ) -> None:
        entry = RequestRecord(
            timestamp=time.time() if timestamp is None else timestamp,
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
        with self._lock:
            self._records.append(entry)

    def recent(self, limit: int = 100) -> list[RequestRecord]:
        """Most recent requests first."""
        with self._lock:
            records = list(self._records)
        return list(reversed(records[-limit:])) if limit > 0 else []

    def summary(self, now: Optional[float] = None) -> Dict[str, Any]:
        """
        Aggregate the buffered requests.

        Error rate is the rounded percentage of responses with status >= 400.
        """
        current = time.time() if now is None else now
        with self._lock:
            records = list(self._records)

        total = len(records)
        if total == 0:
            return {
                "total_requests": 0,
                "requests_last_hour": 0,
                "requests_last_24_hours": 0,
                "average_response_time_ms": 0,
                "error_rate": 0,
            }

        errors = sum(1 for r in records if r.status_code >= 400)
        return {
            "total_requests": total,
            "requests_last_hour": sum(
                1 for r in records if r.timestamp > current - _ONE_HOUR
            ),
            "requests_last_24_hours": sum(
                1 for r in records if r.timestamp > current - _ONE_DAY
            ),
            "average_response_time_ms": round(
                sum(r.duration_ms for r in records) / total
            ),
            "error_rate": round(errors / total * 100),
        }

    def reset(self) -> None:
        with self._lock:
            self._records.clear()


__all__ = ["RequestStats", "RequestRecord"]
