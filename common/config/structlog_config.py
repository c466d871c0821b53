# common/config/structlog_config.py
"""
Structlog configuration module.
Must be configured once at application startup via configure_structlog().
"""
import sys
import os
import threading
from typing import Any, Optional
import structlog
from rich.traceback import install as install_rich_traceback
from .config_types import LogRenderer

# Install Rich tracebacks once
install_rich_traceback(show_locals=True, width=None, extra_lines=3)


class _StructlogState:
    """
    Thread-safe, process-safe singleton for structlog configuration state.

    This prevents race conditions during initialization and handles
    multiprocess scenarios (like uvicorn reload).
    """

    _instance: Optional["_StructlogState"] = None
    _lock = threading.Lock()

    _initialized: bool
    _settings: Optional[tuple[int, LogRenderer]]
    _process_id: Optional[int]

    def __new__(cls) -> "_StructlogState":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:  # Double-check locking
                    instance = super().__new__(cls)
                    instance._initialized = False
                    instance._settings = None
                    instance._process_id = None
                    cls._instance = instance
        return cls._instance

    @property
    def is_configured(self) -> bool:
        """Check if configured in the CURRENT process."""
        return self._initialized and self._process_id == os.getpid()

    @property
    def settings(self) -> Optional[tuple[int, LogRenderer]]:
        return self._settings

    def mark_configured(self, log_level: int, renderer: LogRenderer) -> None:
        """Mark structlog as configured with given settings in this process."""
        with self._lock:
            self._settings = (log_level, renderer)
            self._process_id = os.getpid()
            self._initialized = True


_state = _StructlogState()


def _build_renderer(renderer: LogRenderer) -> Any:
    if renderer == LogRenderer.JSON:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(
            show_locals=False,
            width=None,
            suppress=["starlette", "uvicorn", "fastapi"],
        ),
    )


def configure_structlog(
    log_level: int, renderer: LogRenderer = LogRenderer.CONSOLE
) -> None:
    """
    Configure structlog with the specified log level and renderer.

    Safe to call in multiprocess environments (e.g., uvicorn with reload).
    Each process will configure structlog independently.

    Raises:
        RuntimeError: If already configured in the same process with
            different settings
    """
    if _state.is_configured:
        # Idempotent - allow reconfiguration with same settings
        if _state.settings == (log_level, renderer):
            return
        raise RuntimeError(
            f"structlog already configured in this process. "
            f"Current settings: {_state.settings}, attempted: {(log_level, renderer)}"
        )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
    ]
    if renderer == LogRenderer.JSON:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    else:
        processors.append(structlog.dev.set_exc_info)
        processors.append(
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False)
        )
    processors.append(_build_renderer(renderer))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    _state.mark_configured(log_level, renderer)


def get_logger(name: str = "app") -> structlog.BoundLogger:
    """
    Get a structlog logger instance.

    Raises:
        RuntimeError: If structlog hasn't been configured yet in this process
    """
    if not _state.is_configured:
        raise RuntimeError(
            "structlog not configured. "
            "Call configure_structlog() at application startup."
        )
    return structlog.get_logger(name)


def is_configured() -> bool:
    """Check if structlog has been configured in this process."""
    return _state.is_configured


__all__ = [
    "configure_structlog",
    "get_logger",
    "is_configured",
]
