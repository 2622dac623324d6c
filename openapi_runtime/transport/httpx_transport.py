"""httpx-backed transport with abortable requests."""

import asyncio
from typing import Any

import httpx

from openapi_runtime.cancelable import OnCancel
from openapi_runtime.config.http import HTTPSettings
from openapi_runtime.core.logging import get_logger
from openapi_runtime.exceptions import (
    TransportAbortedError,
    TransportError,
    TransportTimeoutError,
)
from openapi_runtime.models import CanonicalResponse, PreparedRequest

from .client import HTTPClientFactory


logger = get_logger(__name__)


class HttpxTransport:
    """Transport sending requests through an ``httpx.AsyncClient``.

    When no client is given, one is built lazily from ``settings`` and owned
    by the transport; call :meth:`aclose` (or use ``async with``) to release
    it. A client passed in is never closed by the transport.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        settings: HTTPSettings | None = None,
        **client_kwargs: Any,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._settings = settings
        self._client_kwargs = client_kwargs

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = HTTPClientFactory.create_client(
                self._settings, **self._client_kwargs
            )
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def build_request(self, request: PreparedRequest) -> httpx.Request:
        kwargs: dict[str, Any] = {"headers": request.headers}
        if request.files is not None:
            kwargs["files"] = request.files
        elif request.content is not None:
            kwargs["content"] = request.content
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout

        http_request = self.client.build_request(request.method, request.url, **kwargs)
        if request.credentials == "omit" and "cookie" not in request.headers:
            # Drop cookies merged in from the client's jar.
            http_request.headers.pop("cookie", None)
        return http_request

    async def send(
        self, request: PreparedRequest, on_cancel: OnCancel
    ) -> CanonicalResponse:
        """Send the request, aborting the in-flight call on task cancellation."""
        http_request = self.build_request(request)
        inner = asyncio.ensure_future(self.client.send(http_request))
        on_cancel(inner.cancel)

        try:
            response = await inner
        except asyncio.CancelledError:
            current = asyncio.current_task()
            cancelling = current.cancelling() if current is not None else 0
            if inner.cancelled() and not on_cancel.is_cancelled and not cancelling:
                raise TransportAbortedError(
                    "Request aborted", method=request.method, url=request.url
                ) from None
            raise
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"Request timed out: {e}",
                method=request.method,
                url=request.url,
                details={"error_type": type(e).__name__},
            ) from e
        except httpx.HTTPError as e:
            logger.debug(
                "transport_error",
                method=request.method,
                url=request.url,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise TransportError(
                f"Request failed: {e}",
                method=request.method,
                url=request.url,
                details={"error_type": type(e).__name__},
            ) from e

        return CanonicalResponse(
            url=str(response.url),
            status=response.status_code,
            status_text=response.reason_phrase,
            content=response.content,
            headers=response.headers,
        )
