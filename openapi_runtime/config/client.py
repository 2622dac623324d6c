"""Shared configuration of one generated API client."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from openapi_runtime.interceptors import Interceptors
from openapi_runtime.models import QueryStyle, StatusRule

from .http import HTTPSettings
from .settings import RuntimeSettings


__all__ = ["ClientConfig"]


# A literal, or a sync/async callable receiving the operation descriptor.
Resolvable = Any


class ClientConfig(BaseModel):
    """Long-lived configuration shared by every operation of a client.

    ``token``, ``username``, ``password`` and ``headers`` accept literals or
    resolvers. ``headers`` may be a mapping whose values are themselves
    resolvers, or a single resolver returning the whole mapping.

    The engine only reads this object. Interceptors are registered through
    ``config.interceptors.request.use(...)`` and
    ``config.interceptors.response.use(...)``.

    ``status_rules`` are consulted after each operation's own rules; pass
    ``STANDARD_ERROR_RULES`` to name the standard HTTP error statuses.

    Without a ``transport``, each call opens and closes its own httpx client
    built from ``http``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    base: str = ""
    version: str = "1.0"
    with_credentials: bool = False
    credentials: Literal["include", "omit", "same-origin"] = "include"
    token: Resolvable = None
    username: Resolvable = None
    password: Resolvable = None
    headers: Resolvable = Field(default_factory=dict)
    encode_path: Callable[[str], str] | None = None
    query_style: QueryStyle = Field(default_factory=QueryStyle)
    status_rules: Sequence[StatusRule] = ()
    timeout: float | None = None
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    transport: Any = None
    interceptors: Interceptors = Field(default_factory=Interceptors)

    @field_validator("base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("headers")
    @classmethod
    def validate_headers(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not (isinstance(v, Mapping) or callable(v)):
            raise ValueError("headers must be a mapping or a resolver")
        return v

    @property
    def request_credentials(self) -> str:
        """Credentials mode applied to outgoing requests"""
        return self.credentials if self.with_credentials else "omit"

    @classmethod
    def from_settings(
        cls, settings: RuntimeSettings | None = None, **overrides: Any
    ) -> "ClientConfig":
        """Build a config from environment-driven settings."""
        settings = settings or RuntimeSettings()
        values: dict[str, Any] = {
            "base": settings.base_url,
            "version": settings.version,
            "with_credentials": settings.with_credentials,
            "credentials": settings.credentials,
            "token": settings.token.get_secret_value() if settings.token else None,
            "username": settings.username,
            "password": (
                settings.password.get_secret_value() if settings.password else None
            ),
            "headers": dict(settings.headers),
            "http": settings.http,
        }
        values.update(overrides)
        return cls(**values)
