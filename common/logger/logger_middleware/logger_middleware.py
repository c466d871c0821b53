# common/logger/logger_middleware/logger_middleware.py
"""
Request logging middleware for FastAPI.
Provides structured logging of all HTTP requests with configurable detail levels.

Usage Example:
    from fastapi import FastAPI
    from common.logger.logger_middleware import RequestLoggingMiddleware, RequestStats

    app = FastAPI()
    app.add_middleware(
        RequestLoggingMiddleware,
        stats=RequestStats(),
        log_query_params=False,  # Don't log query params (may contain PII)
    )
"""

from typing import Callable, Awaitable, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from .request_timer import RequestTimer
from .request_stats import RequestStats
from common.context_vars import request_timer_context_var
import time
import uuid

from ..logger import get_app_logger
from .middleware_types import (
    RequestMetadata,
    RequestDetails,
    RequestLogEntry,
    PerformanceBreakdown,
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for structured request logging.

    One instance per app; per-request state lives in the RequestTimer bound
    to request_timer_context_var, so the middleware itself stays stateless
    apart from the shared RequestStats it feeds.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        stats: Optional[RequestStats] = None,
        expose_performance_headers: Optional[bool] = False,
        log_details: bool = True,
        log_query_params: bool = True,
        log_client_info: bool = True,
        logger_name: Optional[str] = None,
    ):
        """
        Initialize request logging middleware.

        Args:
            app: ASGI application
            stats: Rolling request statistics to feed (skipped when None)
            expose_performance_headers: Add a Server-Timing header to responses
            log_details: Whether to log extended details (client IP, params, etc.)
            log_query_params: Whether to include query parameters (may contain PII)
            log_client_info: Whether to log client IP and User-Agent
            logger_name: Custom logger name (defaults to module name)
        """
        super().__init__(app)
        self.stats = stats
        self.log_details = log_details
        self.log_query_params = log_query_params
        self.log_client_info = log_client_info
        self.expose_performance_headers = expose_performance_headers

        self.logger = get_app_logger(name=logger_name or __name__, track_timing=True)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        timer = RequestTimer()
        token = request_timer_context_var.set(timer)
        start_time = time.perf_counter()

        # Extract or Generate unique request ID
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            with timer.capture("app"):
                response = await call_next(request)
        finally:
            # Capture timings before resetting the token
            duration_ms = (time.perf_counter() - start_time) * 1000
            perf_data = PerformanceBreakdown(
                total_ms=round(duration_ms, 2),
                app_logic_ms=round(timer.timings.get("app", 0), 2),
                generator_ms=round(timer.timings.get("generator", 0), 2),
                generated_profiles=timer.counters.get("profiles", 0),
                generated_slots=timer.counters.get("slots", 0),
            )
            request_timer_context_var.reset(token)

        response.headers["X-Request-ID"] = request_id

        # Timing Header if toggle is ON or Router enables it
        expose = self.expose_performance_headers or getattr(
            request.state, "expose_perf", False
        )
        if expose:
            timing_header = timer.format_server_timing()
            timing_header += f", total;dur={duration_ms:.2f}"
            response.headers["Server-Timing"] = timing_header

        if self.stats is not None:
            self.stats.record(
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        log_entry = self._build_log_entry(
            request=request,
            response=response,
            duration_ms=duration_ms,
            request_id=request_id,
            perf_data=perf_data,
        )
        self._log_request(log_entry)
        return response

    def _build_log_entry(
        self,
        request: Request,
        response: Response,
        duration_ms: float,
        request_id: str,
        perf_data: Optional[PerformanceBreakdown] = None,
    ) -> RequestLogEntry:
        """Build structured log entry from request/response."""
        metadata = RequestMetadata(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        details = None
        if self.log_details:
            details = RequestDetails(
                request_id=request_id,
                client_host=(
                    request.client.host
                    if self.log_client_info and request.client
                    else None
                ),
                user_agent=(
                    request.headers.get("user-agent") if self.log_client_info else None
                ),
                query_params=(
                    dict(request.query_params)
                    if self.log_query_params and request.query_params
                    else None
                ),
                path_params=request.path_params if request.path_params else None,
                content_length=int(response.headers.get("content-length", 0)) or None,
            )

        return RequestLogEntry(
            metadata=metadata,
            details=details,
            performance=perf_data,
        )

    def _log_request(self, log_entry: RequestLogEntry) -> None:
        """
        Log request with appropriate level based on status and duration.

        Strategy:
        - ERROR: 5xx responses
        - WARNING: Slow requests or 4xx errors
        - INFO: Successful requests
        """
        log_data = log_entry.model_dump(mode="json", exclude_none=True)

        if log_entry.is_error:  # type: ignore[truthy-function]
            self.logger.error("Request failed with server error", **log_data)
        elif log_entry.is_slow:  # type: ignore[truthy-function]
            self.logger.warning(
                f"Slow request detected ({log_entry.metadata.duration_ms}ms)",
                **log_data,
            )
        elif log_entry.metadata.status_code >= 400:
            self.logger.warning("Request failed with client error", **log_data)
        else:
            self.logger.info("Request completed", **log_data)


# Toggle Dependency for on the fly usage
async def enable_perf_headers(request: Request) -> None:
    """
    Dependency to flag that this request should expose performance headers.
    Requires RequestLoggingMiddleware to be active.

    Usage:
        @router.get("/doctors/{doctor_id}", dependencies=[Depends(enable_perf_headers)])
    """
    request.state.expose_perf = True


__all__ = [
    "RequestLoggingMiddleware",
    "enable_perf_headers",
]
