"""
Shared pytest setup.

The environment is populated before anything from the app is imported:
main.py reads it at import time and exits when it is incomplete.
"""

import os

os.environ.setdefault("APP_TITLE", "Synthetic Doctor Directory (tests)")
os.environ.setdefault("APP_VERSION", "1.0.0")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_RENDERER", "console")
os.environ["RATE_LIMIT_MAX_REQUESTS"] = "100000"
os.environ["RATE_LIMIT_WINDOW_SECONDS"] = "900"
os.environ["MAX_LIST_SIZE"] = "100"
os.environ["DEFAULT_LIST_SIZE"] = "20"
os.environ["MAINTENANCE_MODE"] = "false"

import pytest  # noqa: E402

from common.config import initialize_config  # noqa: E402

initialize_config()


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()
