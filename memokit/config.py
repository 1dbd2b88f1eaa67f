"""
Configuration management for memokit.
"""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from memokit.errors import ConfigurationError

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class MemoKitConfig(BaseSettings):
    """Library settings, read from ``MEMOKIT_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MEMOKIT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    log_format: str = Field(default="console", pattern="^(console|json)$")

    # Tracing
    trace_enabled: bool = Field(default=True)
    trace_max_repr: int = Field(default=80, ge=8)

    # Metrics
    metrics_enabled: bool = Field(default=False)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}")
        return value


def get_config(**overrides) -> MemoKitConfig:
    """Load configuration from the environment.

    Keyword arguments override individual settings. Validation failures are
    raised as :class:`ConfigurationError`.
    """
    try:
        return MemoKitConfig(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid memokit configuration",
            details={"errors": [
                {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                for error in exc.errors()
            ]}
        ) from exc
