"""Logging configuration settings."""

from pydantic import BaseModel, Field, field_validator


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("auto", "console", "json")


class LoggingSettings(BaseModel):
    """How the runtime renders its structlog events."""

    level: str = Field(
        default="INFO",
        description="Minimum level emitted by runtime loggers",
    )

    format: str = Field(
        default="auto",
        description="Renderer: 'console', 'json', or 'auto' (console on a TTY, JSON otherwise)",
    )

    quiet_transport: bool = Field(
        default=True,
        description="Raise httpx/httpcore loggers to WARNING",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {list(LOG_LEVELS)}")
        return level

    @field_validator("format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"Invalid log format: {v}. Must be one of {list(LOG_FORMATS)}")
        return fmt
