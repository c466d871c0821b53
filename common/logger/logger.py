# common/logger/logger.py
"""
Application logger with explicit initialization and optional timing.

Usage:
    from common.logger import get_app_logger

    logger = get_app_logger(__name__)
    logger.info("Doctor synthesized", doctor_id="doctor-abc")

    # Check logging overhead
    logger = get_app_logger(__name__, track_timing=True)
    print(logger.get_timing_stats())
"""

import threading
import time
from typing import Any, Dict, Optional
import structlog

from common.config.structlog_config import get_logger as _get_structlog_logger


class TimingStats:
    """
    Track how long log calls take.

    Sync route handlers log from threadpool workers, so updates are locked.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.total_calls = 0
        self.total_time = 0.0
        self.max_time = 0.0
        self.min_time = float("inf")

    def record(self, elapsed: float) -> None:
        """Record a timing measurement."""
        with self._lock:
            self.total_calls += 1
            self.total_time += elapsed
            self.max_time = max(self.max_time, elapsed)
            self.min_time = min(self.min_time, elapsed)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            calls, total = self.total_calls, self.total_time
            low, high = self.min_time, self.max_time
        avg = total / calls if calls > 0 else 0
        return {
            "total_calls": calls,
            "avg_time_ms": round(avg * 1000, 4),
            "max_time_ms": round(high * 1000, 4),
            "min_time_ms": round(low * 1000, 4) if calls else 0,
        }


class AppLogger:
    """
    Application logger wrapper around structlog.

    Resolves the structlog logger lazily so module-level loggers can be
    created before configure_structlog() runs.
    """

    def __init__(self, name: str = "app", track_timing: bool = False) -> None:
        self._name = name
        self._track_timing = track_timing
        self._logger_instance: Optional[structlog.BoundLogger] = None
        self._timing_stats: Optional[TimingStats] = (
            TimingStats() if track_timing else None
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def _logger(self) -> structlog.BoundLogger:
        """
        Lazy-load logger instance.
        This ensures structlog is configured before first use.
        """
        if self._logger_instance is None:
            self._logger_instance = _get_structlog_logger(self._name)
        return self._logger_instance

    def _log(self, level: str, msg: str, **kwargs: Any) -> None:
        start_time = time.perf_counter() if self._track_timing else None

        try:
            getattr(self._logger, level)(msg, **kwargs)
        finally:
            if start_time is not None and self._timing_stats is not None:
                self._timing_stats.record(time.perf_counter() - start_time)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log("debug", msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log("info", msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log("warning", msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self._log("error", msg, **kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        """Log critical message."""
        self._log("critical", msg, **kwargs)

    def get_timing_stats(self) -> Dict[str, Any]:
        """
        Get timing statistics for this logger.

        Returns:
            Dictionary with timing metrics or error message if timing disabled.
        """
        if self._timing_stats is None:
            return {"error": "Timing tracking not enabled"}
        return self._timing_stats.get_stats()


def get_app_logger(name: str = "app", track_timing: bool = False) -> AppLogger:
    """
    Get application logger instance.

    Args:
        name: Logger name
        track_timing: Enable performance timing tracking

    Example:
        >>> logger = get_app_logger("doctors", track_timing=True)
        >>> logger.info("Roster generated", count=20)
    """
    return AppLogger(name=name, track_timing=track_timing)


# Convenience instance for simple usage
logger = get_app_logger()

__all__ = ["logger", "AppLogger", "TimingStats", "get_app_logger"]
