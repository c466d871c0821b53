# common/logger/logger_middleware/middleware_types.py
"""
Type definitions for request logging middleware.
"""

from typing import Optional, Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field, computed_field

SLOW_REQUEST_THRESHOLD_MS = 1000.0
LARGE_ROSTER_THRESHOLD = 200


class PerformanceBreakdown(BaseModel):
    """Breakdown of where time was spent during the request."""

    total_ms: float
    app_logic_ms: float
    generator_ms: float = Field(0.0, description="Time spent synthesizing data")
    generated_profiles: int = Field(
        0, description="Number of doctor profiles synthesized"
    )
    generated_slots: int = Field(0, description="Number of slots synthesized")

    @computed_field
    def framework_overhead_ms(self) -> float:
        """Time spent outside the handler (routing, validation, serialization)."""
        return round(self.total_ms - self.app_logic_ms, 2)


class RequestMetadata(BaseModel):
    """
    Core request metadata - always captured.
    """

    method: str = Field(..., description="HTTP method (GET, POST, etc.)")
    path: str = Field(..., description="Request path without query params")
    status_code: int = Field(..., ge=100, le=599, description="HTTP status code")
    duration_ms: float = Field(
        ..., ge=0, description="Request duration in milliseconds"
    )

    model_config = {"frozen": True}

    @computed_field
    def duration_seconds(self) -> float:
        """Duration in seconds for easier reading."""
        return round(self.duration_ms / 1000, 3)


class RequestDetails(BaseModel):
    """
    Extended request details - optional, configurable.
    """

    client_host: Optional[str] = Field(None, description="Client IP address")
    user_agent: Optional[str] = Field(None, description="User-Agent header")

    query_params: Optional[Dict[str, Any]] = Field(None, description="Query parameters")
    path_params: Optional[Dict[str, Any]] = Field(None, description="Path parameters")
    request_id: Optional[str] = Field(None, description="Unique request ID")

    content_length: Optional[int] = Field(
        None, ge=0, description="Response size in bytes"
    )

    model_config = {"frozen": True}


class RequestLogEntry(BaseModel):
    """
    Complete request log entry combining metadata and optional details.

    Use this for structured logging - it serializes cleanly to JSON.
    """

    timestamp: datetime = Field(default_factory=datetime.now)
    metadata: RequestMetadata
    details: Optional[RequestDetails] = None
    performance: Optional[PerformanceBreakdown] = None

    model_config = {"frozen": True}

    @computed_field
    def is_slow(self) -> bool:
        """Flag slow requests (>1 second)."""
        return self.metadata.duration_ms > SLOW_REQUEST_THRESHOLD_MS

    @computed_field
    def is_error(self) -> bool:
        """Flag error responses (5xx)."""
        return self.metadata.status_code >= 500

    @computed_field
    def performance_warnings(self) -> list[str]:
        """
        Warnings worth acting on.

        Synthesis is a handful of arithmetic steps per profile, so only large
        rosters or a generator dominating a slow request are flagged.
        """
        warns: list[str] = []
        if not self.performance:
            return warns

        total_time = float(self.metadata.duration_ms)
        generator_time = float(self.performance.generator_ms)
        profiles = int(self.performance.generated_profiles)

        if profiles > LARGE_ROSTER_THRESHOLD:
            warns.append(
                f"LARGE_ROSTER: {profiles} profiles synthesized in one request "
                f"(lower count or paginate)"
            )

        if total_time > 200 and generator_time > total_time * 0.8:
            warns.append(
                f"GENERATOR_DOMINATED_REQUEST: {generator_time:.0f}ms "
                f"of {total_time:.0f}ms spent synthesizing"
            )

        return warns


__all__ = [
    "RequestMetadata",
    "RequestDetails",
    "RequestLogEntry",
    "PerformanceBreakdown",
]
