# common/api_error/ApiError.py
from typing import Optional


class AppError(Exception):
    """Base error for all application-specific issues."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "INTERNAL_ERROR",
        headers: Optional[dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.headers = headers or {}
        super().__init__(self.message)


class DoctorNotFoundError(AppError):
    """Identifier does not have the synthetic doctor shape."""

    def __init__(self, doctor_id: str):
        super().__init__(
            message=f"Doctor not found: {doctor_id}",
            status_code=404,
            code="DOCTOR_NOT_FOUND",
        )
        self.doctor_id = doctor_id


class InvalidDateError(AppError):
    def __init__(self, value: str):
        super().__init__(
            message=f"Invalid date '{value}'. Expected YYYY-MM-DD",
            status_code=400,
            code="INVALID_DATE",
        )
        self.value = value


class RateLimitExceededError(AppError):
    """Client went over its request budget for the current window."""

    def __init__(self, limit: int, window_seconds: int, retry_after: int):
        super().__init__(
            message=(
                f"Rate limit exceeded: {limit} requests per {window_seconds}s. "
                f"Retry in {retry_after}s"
            ),
            status_code=429,
            code="RATE_LIMIT_EXCEEDED",
            headers={"Retry-After": str(retry_after)},
        )
        self.retry_after = retry_after


class MaintenanceModeError(AppError):
    def __init__(self):
        super().__init__(
            message="Service is under maintenance, please try again later",
            status_code=503,
            code="MAINTENANCE_MODE",
        )


__all__ = [
    "AppError",
    "DoctorNotFoundError",
    "InvalidDateError",
    "RateLimitExceededError",
    "MaintenanceModeError",
]
