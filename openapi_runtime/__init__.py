"""Runtime for generated OpenAPI clients.

Executes one described HTTP operation per call, with cooperative
cancellation, request/response interceptors and status classification.
"""

from .cancelable import CancelableTask, OnCancel, TaskState
from .classifier import STANDARD_ERROR_RULES, STANDARD_ERRORS
from .config import ClientConfig, HTTPSettings, LoggingSettings, RuntimeSettings
from .exceptions import (
    ApiError,
    CancelError,
    ConfigurationError,
    OpenAPIRuntimeError,
    TransportAbortedError,
    TransportError,
    TransportTimeoutError,
)
from .models import (
    UNSET,
    ApiResult,
    ArrayStyle,
    Blob,
    CanonicalResponse,
    ObjectStyle,
    OperationDescriptor,
    PreparedRequest,
    QueryStyle,
    ResponseMode,
    StatusRule,
)
from .request import execute
from .transport import HttpxTransport, Transport


__version__ = "0.1.0"

__all__ = [
    "UNSET",
    "STANDARD_ERRORS",
    "STANDARD_ERROR_RULES",
    "ApiError",
    "ApiResult",
    "ArrayStyle",
    "Blob",
    "CancelError",
    "CancelableTask",
    "CanonicalResponse",
    "ClientConfig",
    "ConfigurationError",
    "HTTPSettings",
    "HttpxTransport",
    "LoggingSettings",
    "ObjectStyle",
    "OnCancel",
    "OpenAPIRuntimeError",
    "OperationDescriptor",
    "PreparedRequest",
    "QueryStyle",
    "ResponseMode",
    "RuntimeSettings",
    "StatusRule",
    "TaskState",
    "Transport",
    "TransportAbortedError",
    "TransportError",
    "TransportTimeoutError",
    "execute",
]
