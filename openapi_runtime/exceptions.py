"""Custom exceptions for the OpenAPI request runtime."""

import json
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from openapi_runtime.models import ApiResult, OperationDescriptor


class OpenAPIRuntimeError(Exception):
    """Base exception for runtime errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(OpenAPIRuntimeError):
    """Raised when client configuration or settings are invalid."""


class CancelError(OpenAPIRuntimeError):
    """Raised when awaiting a task that was cancelled.

    Cancellation is a terminal state of its own, not a rejection: the task's
    resolve/reject paths are never taken once it is cancelled.
    """

    def __init__(self, message: str = "Request aborted") -> None:
        super().__init__(message)

    @property
    def is_cancelled(self) -> bool:
        return True


class TransportError(OpenAPIRuntimeError):
    """Network-level failure raised by a transport backend."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.method = method
        self.url = url


class TransportTimeoutError(TransportError):
    """The transport gave up waiting for the server."""


class TransportAbortedError(TransportError):
    """The in-flight call was aborted outside of task cancellation."""


class ApiError(OpenAPIRuntimeError):
    """Structured failure for a response classified as an error."""

    name = "ApiError"

    def __init__(
        self,
        request: "OperationDescriptor",
        response: "ApiResult",
        message: str,
    ) -> None:
        super().__init__(
            message,
            details={"status": response.status, "url": response.url},
        )
        self.url = response.url
        self.status = response.status
        self.status_text = response.status_text
        self.body = response.body
        self.request = request

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={self.status!r}, url={self.url!r}, "
            f"message={self.message!r})"
        )


def describe_body(body: Any) -> str:
    """Render a response body for inclusion in an error message."""
    try:
        return json.dumps(body, indent=2, default=str)
    except (TypeError, ValueError):
        return repr(body)
