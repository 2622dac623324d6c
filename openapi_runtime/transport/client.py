"""httpx client construction for the default transport.

This module provides a factory for AsyncClients configured from
``HTTPSettings`` and the standard proxy/CA environment variables.
"""

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx

from openapi_runtime.config.http import HTTPSettings
from openapi_runtime.core.logging import get_logger


logger = get_logger(__name__)


class HTTPClientFactory:
    """Factory for creating HTTP clients.

    Provides centralized configuration for HTTP clients with:
    - Consistent timeout configuration
    - Unified connection limits
    - Proxy and CA bundle discovery from the environment
    """

    @staticmethod
    def create_client(
        settings: HTTPSettings | None = None,
        **kwargs: Any,
    ) -> httpx.AsyncClient:
        """Create an AsyncClient from HTTP settings.

        Args:
            settings: HTTP settings; defaults are used when omitted
            **kwargs: Additional httpx.AsyncClient arguments, overriding the
                computed ones

        Returns:
            Configured httpx.AsyncClient instance
        """
        settings = settings or HTTPSettings()

        verify = settings.verify
        if verify is True:
            verify = _get_ssl_context()

        timeout = httpx.Timeout(
            connect=settings.timeout_connect,
            read=settings.timeout_read,
            write=settings.timeout_write,
            pool=settings.timeout_pool,
        )

        limits = httpx.Limits(
            max_keepalive_connections=settings.max_keepalive_connections,
            max_connections=settings.max_connections,
        )

        proxy = _get_proxy_url()

        default_headers: dict[str, str] = {}
        if not settings.compression_enabled:
            # "identity" means no compression
            default_headers["accept-encoding"] = "identity"
        elif settings.accept_encoding:
            default_headers["accept-encoding"] = settings.accept_encoding

        if "headers" in kwargs:
            default_headers.update(kwargs.pop("headers") or {})

        client_config: dict[str, Any] = {
            "timeout": timeout,
            "limits": limits,
            "http2": settings.http2,
            "verify": verify,
            "proxy": proxy,
            "headers": default_headers,
            **kwargs,
        }
        if "transport" in kwargs:
            # A custom transport owns connection settings.
            for key in ("limits", "http2", "verify", "proxy"):
                client_config.pop(key, None)

        logger.debug(
            "http_client_created",
            timeout_connect=settings.timeout_connect,
            timeout_read=settings.timeout_read,
            max_connections=settings.max_connections,
            http2=settings.http2,
            has_proxy=proxy is not None,
            compression_enabled=settings.compression_enabled,
        )

        return httpx.AsyncClient(**client_config)

    @staticmethod
    @asynccontextmanager
    async def managed_client(
        settings: HTTPSettings | None = None, **kwargs: Any
    ) -> AsyncGenerator[httpx.AsyncClient, None]:
        """Create a client that is closed on exit, including on errors.

        Example:
            async with HTTPClientFactory.managed_client() as client:
                response = await client.get("https://api.example.com")
        """
        client = HTTPClientFactory.create_client(settings, **kwargs)
        try:
            yield client
        finally:
            try:
                await client.aclose()
            except Exception as e:
                logger.warning(
                    "managed_http_client_close_failed",
                    error=str(e),
                    exc_info=e,
                )


_PROXY_VARIABLES = (
    "HTTPS_PROXY",
    "https_proxy",
    "ALL_PROXY",
    "all_proxy",
    "HTTP_PROXY",
    "http_proxy",
)
_CA_BUNDLE_VARIABLES = ("REQUESTS_CA_BUNDLE", "SSL_CERT_FILE")


def _get_proxy_url() -> str | None:
    """First proxy URL set in the environment; HTTPS before ALL before HTTP."""
    for name in _PROXY_VARIABLES:
        proxy_url = os.environ.get(name)
        if proxy_url:
            logger.debug("proxy_configured", proxy_url=proxy_url, variable=name)
            return proxy_url
    return None


def _get_ssl_context() -> str | bool:
    """Verification setting for the client.

    A CA bundle path from the environment takes precedence; ``SSL_VERIFY``
    set to false/0/no disables verification.
    """
    for name in _CA_BUNDLE_VARIABLES:
        ca_bundle = os.environ.get(name)
        if ca_bundle and Path(ca_bundle).exists():
            logger.debug("ssl_ca_bundle_configured", ca_bundle=ca_bundle, variable=name)
            return ca_bundle

    if os.environ.get("SSL_VERIFY", "true").lower() in ("false", "0", "no"):
        logger.warning("ssl_verification_disabled")
        return False
    return True
