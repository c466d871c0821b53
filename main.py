# main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime, timezone
from pydantic import BaseModel, Field
from dotenv import load_dotenv
from common.config import initialize_config, get_config, is_configured
from common.logger import get_app_logger
from common.logger.logger_middleware import RequestLoggingMiddleware, RequestStats
from common.api_error import ConfigurationError, AppError
from common.rate_limit import RateLimiter
from typing import Any
from app.api.v1 import doctor_router, reference_router
from contextlib import asynccontextmanager
from fastapi.responses import JSONResponse
import time

load_dotenv()
try:
    initialize_config()
except ConfigurationError as e:
    # Can't use logger yet, but that's OK - this is a fatal startup error
    print(f"FATAL: Configuration error:\n{e}")
    import sys

    sys.exit(1)

config = get_config()
logger = get_app_logger(name=__name__, track_timing=True)

app_title = config.app_title
app_version = config.app_version

# Error rate (percent) above which /health reports "degraded"
DEGRADED_ERROR_RATE = 10

request_stats = RequestStats(max_entries=1000)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.started_at = time.time()
    logger.info(
        "Starting up",
        environment=config.environment,
        version=app_version,
        maintenance_mode=config.api.maintenance_mode,
        rate_limit=config.api.rate_limit,
        rate_limit_window=config.api.rate_limit_window,
    )
    yield
    logger.info("shutting down", stats=app.state.request_stats.summary())


app = FastAPI(
    title=app_title,
    version=app_version,
    description=f"Running in {config.environment} environment",
    lifespan=lifespan,
)

# Populated at import so the app works with or without lifespan events
app.state.config = config
app.state.request_stats = request_stats
app.state.rate_limiter = RateLimiter(
    max_requests=config.api.rate_limit,
    window_seconds=config.api.rate_limit_window,
)
app.state.started_at = time.time()

app.add_middleware(
    RequestLoggingMiddleware,
    stats=request_stats,
    expose_performance_headers=not config.is_production,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=[
        "X-Request-ID",
        "X-RateLimit-Limit",
        "X-RateLimit-Remaining",
        "X-RateLimit-Reset",
        "Retry-After",
    ],
)

app.include_router(doctor_router)
app.include_router(reference_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Domain Error: {exc.code}",
        path=request.url.path,
        error_code=exc.code,
        message=exc.message,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.code,
            message=exc.message,
            timestamp=datetime.now(timezone.utc),
        ).model_dump(mode="json"),
        headers=exc.headers or None,
    )


class RequestStatsSummary(BaseModel):
    total_requests: int
    requests_last_hour: int
    requests_last_24_hours: int
    average_response_time_ms: int
    error_rate: int = Field(..., description="Percent of responses with status >= 400")


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="healthy or degraded")
    timestamp: datetime = Field(..., description="Server time in ISO 8601 format")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")
    uptime_seconds: int = Field(..., description="Seconds since startup")
    maintenance_mode: bool = Field(..., description="API traffic is being rejected")
    logging_configured: bool = Field(..., description="Logging configuration status")
    log_level: str = Field(..., description="Application log level")
    requests: RequestStatsSummary


class ErrorResponse(BaseModel):
    """Body of every AppError response."""

    error: str = Field(..., description="Machine readable error code")
    message: str = Field(..., description="Human readable description")
    timestamp: datetime = Field(..., description="Server time when the error occurred")


def _uptime_seconds(request: Request) -> int:
    return int(time.time() - request.app.state.started_at)


@app.get(
    "/health",
    response_model=HealthCheckResponse,
    responses={
        200: {"description": "System is healthy or degraded", "model": HealthCheckResponse},
        503: {"description": "System is unhealthy", "model": ErrorResponse},
        500: {"description": "Unexpected server error", "model": ErrorResponse},
    },
)
def check_health(request: Request) -> HealthCheckResponse:
    try:
        if not app_version:
            logger.error("Version not found", endpoint="/health", app_title=app_title)
            raise AppError(
                message="Application version not found",
                status_code=503,
                code="VERSION_NOT_FOUND",
            )

        summary = request.app.state.request_stats.summary()
        status = (
            "degraded" if summary["error_rate"] > DEGRADED_ERROR_RATE else "healthy"
        )
        if status == "degraded":
            logger.warning("Health degraded", error_rate=summary["error_rate"])

        return HealthCheckResponse(
            status=status,
            timestamp=datetime.now(timezone.utc),
            version=app_version,
            environment=config.environment,
            uptime_seconds=_uptime_seconds(request),
            maintenance_mode=request.app.state.config.api.maintenance_mode,
            logging_configured=is_configured(),
            log_level=config.logging.level_value,
            requests=RequestStatsSummary(**summary),
        )
    except AppError:
        raise
    except Exception as e:
        # exc_info=True will show full traceback with Rich formatting
        logger.critical("Unexpected error in health check", exc_info=True, error=str(e))
        raise AppError(
            message=f"Unexpected error: {str(e)}",
            status_code=500,
            code="HEALTH_CHECK_FAILED",
        ) from e


@app.get("/health/live")
def liveness() -> dict[str, str]:
    """The process is up and serving requests."""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get(
    "/health/ready",
    responses={503: {"description": "Not accepting API traffic"}},
)
def readiness(request: Request) -> JSONResponse:
    maintenance_mode = request.app.state.config.api.maintenance_mode
    ready = not maintenance_mode
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "maintenance_mode": maintenance_mode,
            "uptime_seconds": _uptime_seconds(request),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


@app.get("/metrics")
async def metrics(request: Request) -> dict[str, Any]:
    """Get logging performance metrics and rolling request statistics."""
    return {
        "logger": logger.get_timing_stats(),
        "requests": request.app.state.request_stats.summary(),
    }


__all__ = ["app", "config"]
