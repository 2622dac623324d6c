"""Request body encoding: JSON, raw text/binary and multipart form data."""

import json
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from openapi_runtime.models import UNSET, Blob, OperationDescriptor, is_defined


__all__ = [
    "FormPart",
    "drop_unset",
    "get_form_data",
    "get_request_body",
    "infer_content_type",
    "to_json",
]


# (field name, (filename, content, content type)) as accepted by httpx ``files=``.
FormPart = tuple[str, tuple[str | None, Any, str | None]]


def drop_unset(value: Any) -> Any:
    """Recursively remove ``UNSET`` entries from mappings and sequences."""
    if isinstance(value, Mapping):
        return {k: drop_unset(v) for k, v in value.items() if v is not UNSET}
    if isinstance(value, list | tuple):
        return [drop_unset(v) for v in value if v is not UNSET]
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", exclude_unset=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(value: Any) -> str:
    return json.dumps(drop_unset(value), default=_json_default, separators=(",", ":"))


def _form_part(key: str, value: Any) -> FormPart:
    if isinstance(value, Blob):
        return (key, (value.filename or key, value.content, value.content_type))
    if isinstance(value, bytes | bytearray):
        return (key, (key, bytes(value), "application/octet-stream"))
    if isinstance(value, str):
        return (key, (None, value, None))
    return (key, (None, to_json(value), None))


def get_form_data(options: OperationDescriptor) -> list[FormPart] | None:
    """Multipart parts in declaration order, or None when there is no form data.

    Array fields contribute one part per item. Absent fields are skipped.
    """
    if options.form_data is None:
        return None
    parts: list[FormPart] = []
    for key, value in options.form_data.items():
        if not is_defined(value):
            continue
        if isinstance(value, list | tuple):
            parts.extend(_form_part(key, v) for v in value if is_defined(v))
        else:
            parts.append(_form_part(key, value))
    return parts


def get_request_body(options: OperationDescriptor) -> bytes | str | None:
    """Encoded request body, or None when the operation has none."""
    body = options.body
    if body is UNSET:
        return None
    if options.media_type and "/json" in options.media_type:
        return to_json(body)
    if isinstance(body, Blob):
        return body.content
    if isinstance(body, str | bytes):
        return body
    return to_json(body)


def infer_content_type(options: OperationDescriptor) -> str | None:
    """Content-Type implied by the body kind; None for bodiless or multipart requests."""
    if not options.has_body:
        return None
    if options.media_type:
        return options.media_type
    body = options.body
    if isinstance(body, Blob):
        return body.content_type or "application/octet-stream"
    if isinstance(body, bytes):
        return "application/octet-stream"
    if isinstance(body, str):
        return "text/plain"
    return "application/json"
