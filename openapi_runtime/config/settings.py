import sys
from typing import Any, Literal

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from openapi_runtime.core.logging import get_logger, setup_logging
from openapi_runtime.exceptions import ConfigurationError

from .http import HTTPSettings
from .logging import LoggingSettings


__all__ = ["RuntimeSettings", "load_settings"]


logger = get_logger(__name__)


CredentialsMode = Literal["include", "omit", "same-origin"]


class RuntimeSettings(BaseSettings):
    """
    Environment-driven defaults for generated API clients.

    Settings are loaded from ``OPENAPI_RUNTIME_*`` environment variables and
    an optional ``.env`` file. Nested sections use ``__`` as delimiter, for
    example ``OPENAPI_RUNTIME_HTTP__TIMEOUT_READ=120``.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAPI_RUNTIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    base_url: str = Field(
        default="",
        description="Base URL prepended to every operation path",
    )

    version: str = Field(
        default="1.0",
        description="API version substituted for {api-version} in paths",
    )

    with_credentials: bool = Field(
        default=False,
        description="Send credentials (cookies) with requests",
    )

    credentials: CredentialsMode = Field(
        default="include",
        description="Credentials mode used when with_credentials is enabled",
    )

    token: SecretStr | None = Field(
        default=None,
        description="Bearer token sent in the Authorization header",
    )

    username: str | None = Field(
        default=None,
        description="Username for HTTP basic authentication",
    )

    password: SecretStr | None = Field(
        default=None,
        description="Password for HTTP basic authentication",
    )

    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Static default headers sent with every request",
    )

    http: HTTPSettings = Field(
        default_factory=HTTPSettings,
        description="HTTP transport settings",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def configure_logging(self) -> None:
        """Apply the logging section to structlog."""
        fmt = self.logging.format
        json_logs = fmt == "json" or (fmt == "auto" and not sys.stderr.isatty())
        setup_logging(
            json_logs=json_logs,
            log_level_name=self.logging.level,
            quiet_transport=self.logging.quiet_transport,
        )


def load_settings(**overrides: Any) -> RuntimeSettings:
    """Load settings, converting validation failures to ConfigurationError."""
    try:
        settings = RuntimeSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid runtime settings: {e}", details={"errors": e.errors()}
        ) from e
    logger.debug(
        "settings_loaded",
        base_url=settings.base_url,
        has_token=settings.token is not None,
        with_credentials=settings.with_credentials,
    )
    return settings
