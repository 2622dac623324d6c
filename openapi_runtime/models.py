"""Data model shared by the request engine.

The operation descriptor and the client configuration are produced by
generated code; everything else here is built per call by the engine.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


__all__ = [
    "UNSET",
    "ApiResult",
    "ArrayStyle",
    "Blob",
    "CanonicalResponse",
    "HttpMethod",
    "ObjectStyle",
    "OperationDescriptor",
    "PreparedRequest",
    "QueryStyle",
    "ResponseMode",
    "StatusRule",
    "is_defined",
]


class _Unset:
    """Marker for a value that is absent, as opposed to an explicit null."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Unset:
        return self


UNSET: Any = _Unset()


def is_defined(value: Any) -> bool:
    """Return True unless ``value`` is ``UNSET`` or ``None``."""
    return value is not UNSET and value is not None


HttpMethod = Literal["GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH"]


class ResponseMode(str, Enum):
    """What a successful task resolves with."""

    BODY = "body"
    RESPONSE = "response"


class ArrayStyle(str, Enum):
    """Serialization of array query parameters."""

    REPEAT = "repeat"
    COMMA = "comma"
    PIPE = "pipe"
    SPACE = "space"

    @property
    def delimiter(self) -> str | None:
        return {
            ArrayStyle.REPEAT: None,
            ArrayStyle.COMMA: ",",
            ArrayStyle.PIPE: "|",
            ArrayStyle.SPACE: " ",
        }[self]


class ObjectStyle(str, Enum):
    """Serialization of object query parameters."""

    DEEP_OBJECT = "deepObject"
    FORM = "form"


class QueryStyle(BaseModel):
    """Array and object serialization style for one query parameter."""

    model_config = ConfigDict(frozen=True)

    array: ArrayStyle = ArrayStyle.REPEAT
    object: ObjectStyle = ObjectStyle.DEEP_OBJECT


@dataclass(frozen=True)
class Blob:
    """Binary payload, sent as a file part or as a raw request body."""

    content: bytes
    filename: str | None = None
    content_type: str | None = None


class StatusRule(BaseModel):
    """Maps a status pattern to an outcome.

    ``status`` is an exact code (``404``), a range wildcard (``"4XX"``) or
    ``"default"``.
    """

    model_config = ConfigDict(frozen=True)

    status: int | str
    message: str = ""
    success: bool = False

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: int | str) -> int | str:
        if isinstance(v, str) and v.strip().isdigit():
            v = int(v)
        if isinstance(v, int):
            if not 100 <= v <= 599:
                raise ValueError(f"Invalid status code: {v}")
            return v
        normalized = v.strip().upper()
        if normalized == "DEFAULT":
            return "default"
        if len(normalized) == 3 and normalized[0] in "12345" and normalized[1:] == "XX":
            return normalized
        raise ValueError(f"Invalid status pattern: {v!r}")

    @property
    def specificity(self) -> int:
        if isinstance(self.status, int):
            return 2
        return 1 if self.status != "default" else 0

    def matches(self, status: int) -> bool:
        if isinstance(self.status, int):
            return self.status == status
        if self.status == "default":
            return True
        return status // 100 == int(self.status[0])


Resolver = Callable[["OperationDescriptor"], Any | Awaitable[Any]]
ResponseTransformer = Callable[[Any], Any | Awaitable[Any]]


class OperationDescriptor(BaseModel):
    """Immutable description of one API operation call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: HttpMethod
    url: str
    path: Mapping[str, Any] = Field(default_factory=dict)
    cookies: Mapping[str, Any] = Field(default_factory=dict)
    headers: Mapping[str, Any] = Field(default_factory=dict)
    query: Mapping[str, Any] = Field(default_factory=dict)
    query_styles: Mapping[str, QueryStyle] = Field(default_factory=dict)
    form_data: Mapping[str, Any] | None = None
    body: Any = UNSET
    media_type: str | None = None
    response_header: str | None = None
    response_transformer: ResponseTransformer | None = None
    errors: Sequence[StatusRule] = ()
    response_mode: ResponseMode = ResponseMode.BODY

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("errors", mode="before")
    @classmethod
    def coerce_errors(cls, v: Any) -> Any:
        """Accept a ``{status: message}`` mapping as shorthand."""
        if v is None:
            return ()
        if isinstance(v, Mapping):
            return tuple(
                StatusRule(status=status, message=message)
                for status, message in v.items()
            )
        if not isinstance(v, Iterable) or isinstance(v, str | bytes):
            raise ValueError("errors must be a mapping or a sequence of status rules")
        return tuple(v)

    @property
    def has_body(self) -> bool:
        return self.body is not UNSET


@dataclass
class PreparedRequest:
    """Outgoing request, as seen by request interceptors and transports."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | str | None = None
    files: list[tuple[str, tuple[str | None, Any, str | None]]] | None = None
    credentials: str = "include"
    timeout: float | None = None


@dataclass
class CanonicalResponse:
    """Transport-agnostic response with its raw, unparsed body."""

    url: str
    status: int
    status_text: str
    content: bytes = b""
    headers: httpx.Headers = field(default_factory=httpx.Headers)

    @property
    def ok(self) -> bool:
        return 200 <= self.status <= 299

    def header(self, name: str) -> str | None:
        return self.headers.get(name)


@dataclass(frozen=True)
class ApiResult:
    """Final outcome of a round trip, handed to the classifier."""

    url: str
    ok: bool
    status: int
    status_text: str
    body: Any = None
