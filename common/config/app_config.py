# common/config/app_config.py
"""
Complete application configuration with validation.
"""

from pydantic import BaseModel, Field, model_validator
from .config_types import EnvBool, EnvLogLevel, Environment
from .env_config import require_env, get_env, get_env_int, get_env_list
from .logging_config import LoggingConfig

_DEFAULT_DEV_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5000"]


class ApiConfig(BaseModel):
    """
    API configuration with validation.
    """

    rate_limit: int = Field(
        ..., gt=0, description="Max requests per client per rate limit window"
    )
    rate_limit_window: int = Field(
        ..., gt=0, le=86400, description="Rate limit window in seconds"
    )
    max_list_size: int = Field(..., ge=1, le=1000)
    default_list_size: int = Field(..., ge=1)
    maintenance_mode: bool = False
    cors_origins: list[str] = Field(default_factory=list)
    trusted_proxies: list[str] = Field(
        default_factory=list,
        description="Peer addresses whose X-Forwarded-For header is honored",
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_list_sizes(self) -> "ApiConfig":
        if self.default_list_size > self.max_list_size:
            raise ValueError(
                f"DEFAULT_LIST_SIZE ({self.default_list_size}) must not exceed "
                f"MAX_LIST_SIZE ({self.max_list_size})"
            )
        return self


class AppConfig(BaseModel):
    """
    Complete application configuration.

    All configuration is loaded from environment variables and validated
    at startup. Invalid configuration will fail fast with clear error messages.
    """

    app_title: str = Field(..., min_length=1)
    app_version: str = Field(..., pattern=r"^\d+\.\d+\.\d+$")  # Semantic versioning
    environment: str = Field(..., pattern="^(development|staging|production)$")

    logging: LoggingConfig
    api: ApiConfig

    model_config = {"frozen": True}

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION.value

    @model_validator(mode="after")
    def validate_production_settings(self) -> "AppConfig":
        """
        Validate production-specific requirements.
        """
        if self.environment == "production":
            if self.logging.log_level == EnvLogLevel.DEBUG:
                raise ValueError("DEBUG log level not allowed in production")
            if not self.api.cors_origins:
                raise ValueError("CORS_ORIGINS required in production")
        return self


def load_api_config(environment: Environment) -> ApiConfig:
    """
    Load API configuration from environment.

    Environment variables (all optional):
    - RATE_LIMIT_MAX_REQUESTS: Requests allowed per window (default 100)
    - RATE_LIMIT_WINDOW_SECONDS: Window length in seconds (default 900)
    - MAX_LIST_SIZE: Largest roster a client may request (default 100)
    - DEFAULT_LIST_SIZE: Roster size when none is requested (default 20)
    - MAINTENANCE_MODE: "true" to reject API traffic with 503 (default false)
    - CORS_ORIGINS: Comma separated allowed origins
      (development/staging default to localhost, production has no default)
    - TRUSTED_PROXIES: Comma separated proxy addresses allowed to set
      X-Forwarded-For (default none, so the header is ignored)
    """
    maintenance_str = (get_env("MAINTENANCE_MODE") or EnvBool.FALSE.value).lower()
    try:
        maintenance_mode = EnvBool(maintenance_str).enabled
    except ValueError:
        valid = [b.value for b in EnvBool]
        raise ValueError(
            f"Invalid MAINTENANCE_MODE: {maintenance_str}. Must be one of: {valid}"
        )

    cors_origins = get_env_list("CORS_ORIGINS")
    if not cors_origins and not environment.is_production:
        cors_origins = list(_DEFAULT_DEV_CORS_ORIGINS)

    return ApiConfig(
        rate_limit=get_env_int("RATE_LIMIT_MAX_REQUESTS", 100),
        rate_limit_window=get_env_int("RATE_LIMIT_WINDOW_SECONDS", 15 * 60),
        max_list_size=get_env_int("MAX_LIST_SIZE", 100),
        default_list_size=get_env_int("DEFAULT_LIST_SIZE", 20),
        maintenance_mode=maintenance_mode,
        cors_origins=cors_origins,
        trusted_proxies=get_env_list("TRUSTED_PROXIES"),
    )


def load_app_config() -> AppConfig:
    """
    Load complete application configuration.

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If configuration is invalid
        ConfigurationError: If required env vars are missing
    """
    from .logging_config import load_logging_config

    env_str = require_env("ENVIRONMENT")

    try:
        environment = Environment(env_str)
    except ValueError:
        valid_envs = [e.value for e in Environment]
        raise ValueError(
            f"Invalid ENVIRONMENT: {env_str}. Must be one of: {valid_envs}"
        )

    return AppConfig(
        app_title=require_env("APP_TITLE"),
        app_version=require_env("APP_VERSION"),
        environment=environment.value,
        logging=load_logging_config(),
        api=load_api_config(environment),
    )


__all__ = [
    "AppConfig",
    "ApiConfig",
    "load_app_config",
    "load_api_config",
]
