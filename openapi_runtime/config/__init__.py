"""Configuration package for the OpenAPI request runtime."""

from .client import ClientConfig
from .http import HTTPSettings
from .logging import LoggingSettings
from .settings import RuntimeSettings, load_settings


__all__ = [
    "ClientConfig",
    "HTTPSettings",
    "LoggingSettings",
    "RuntimeSettings",
    "load_settings",
]
