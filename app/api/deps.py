# app/api/deps.py
from fastapi import Request, Response
from app.services.v1 import DoctorService
from common.api_error import MaintenanceModeError
from common.config import AppConfig
from common.rate_limit import RateLimiter

# Note: No import from main.py here!


def _app_state_attr(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        # Dependency called on an app that main.py did not set up
        raise RuntimeError(
            f"'{name}' not found in app.state. Ensure main.py populated it at import time."
        )
    return value


def get_app_config(request: Request) -> AppConfig:
    return _app_state_attr(request, "config")


def get_doctor_service(request: Request) -> DoctorService:
    config = get_app_config(request)
    return DoctorService(max_list_size=config.api.max_list_size)


async def ensure_not_in_maintenance(request: Request) -> None:
    if get_app_config(request).api.maintenance_mode:
        raise MaintenanceModeError()


def client_key(request: Request) -> str:
    """
    Identify the caller for rate limiting.

    X-Forwarded-For is only honored when the connecting peer is listed in
    TRUSTED_PROXIES; otherwise the header is ignored.
    """
    peer = request.client.host if request.client else "anonymous"
    trusted = get_app_config(request).api.trusted_proxies
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded and peer in trusted:
        # Rightmost hop not added by one of our own proxies
        for hop in reversed([h.strip() for h in forwarded.split(",")]):
            if hop and hop not in trusted:
                return hop
    return peer


async def enforce_rate_limit(request: Request, response: Response) -> None:
    """Count the request against the client's window and expose the budget."""
    limiter: RateLimiter = _app_state_attr(request, "rate_limiter")
    status = limiter.hit(client_key(request))
    response.headers.update(status.as_headers())


__all__ = [
    "get_app_config",
    "get_doctor_service",
    "ensure_not_in_maintenance",
    "enforce_rate_limit",
    "client_key",
]
