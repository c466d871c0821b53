# common/config/logging_config.py
from dataclasses import dataclass
from .env_config import require_env, get_env
from .config_types import EnvLogLevel, LogRenderer
from common.api_error import ConfigurationError

_default_log_level_env_key = "LOG_LEVEL"
_default_log_renderer_env_key = "LOG_RENDERER"


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    log_level: EnvLogLevel
    renderer: LogRenderer = LogRenderer.CONSOLE

    @property
    def level_value(self) -> str:
        """Get string value of log level."""
        return self.log_level.value

    @property
    def level_int(self) -> int:
        """Get numeric log level."""
        return self.log_level.level


def load_logging_config(
    log_level_env_key: str = _default_log_level_env_key,
    log_renderer_env_key: str = _default_log_renderer_env_key,
) -> LoggingConfig:
    """
    Load logging configuration from environment.

    Args:
        log_level_env_key: Environment variable holding the level (required)
        log_renderer_env_key: Environment variable holding the renderer
            (optional, defaults to console)

    Returns:
        LoggingConfig instance

    Raises:
        ConfigurationError: If LOG_LEVEL is missing or either value is invalid
    """
    log_level_val = require_env(log_level_env_key).upper()
    renderer_val = (get_env(log_renderer_env_key) or LogRenderer.CONSOLE.value).lower()

    try:
        return LoggingConfig(
            log_level=EnvLogLevel(log_level_val),
            renderer=LogRenderer(renderer_val),
        )

    except ValueError as exc:
        valid_levels = ", ".join(level.value for level in EnvLogLevel)
        valid_renderers = ", ".join(renderer.value for renderer in LogRenderer)

        raise ConfigurationError(
            f"Invalid logging configuration. "
            f"{log_level_env_key} must be one of [{valid_levels}], "
            f"{log_renderer_env_key} must be one of [{valid_renderers}]"
        ) from exc


__all__ = [
    "LoggingConfig",
    "load_logging_config",
]
