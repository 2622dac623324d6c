"""Response body extraction and result building."""

import inspect
import json
from typing import Any

from openapi_runtime.core.logging import get_logger
from openapi_runtime.models import ApiResult, CanonicalResponse, OperationDescriptor


__all__ = [
    "build_result",
    "get_response_body",
    "get_response_header",
    "is_binary_type",
    "is_json_type",
]


logger = get_logger(__name__)

_BINARY_TYPES = (
    "application/octet-stream",
    "application/pdf",
    "application/zip",
    "audio/",
    "image/",
    "video/",
)


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def is_json_type(content_type: str) -> bool:
    media_type = _media_type(content_type)
    return media_type == "application/json" or media_type.endswith("+json")


def is_binary_type(content_type: str) -> bool:
    return _media_type(content_type).startswith(_BINARY_TYPES)


def get_response_body(response: CanonicalResponse) -> Any:
    """Decode the raw body according to its content type.

    204 responses and empty bodies yield None. JSON that fails to parse is
    returned as text.
    """
    if response.status == 204 or not response.content:
        return None
    content_type = response.header("content-type") or ""
    if is_json_type(content_type):
        try:
            return json.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(
                "response_json_decode_failed",
                url=response.url,
                status=response.status,
                error=str(e),
            )
            return response.content.decode("utf-8", errors="replace")
    if is_binary_type(content_type):
        return response.content
    return response.content.decode("utf-8", errors="replace")


def get_response_header(
    response: CanonicalResponse, response_header: str | None
) -> str | None:
    """Value of the header configured to short-circuit body parsing."""
    if not response_header:
        return None
    return response.header(response_header)


async def build_result(
    options: OperationDescriptor, response: CanonicalResponse
) -> ApiResult:
    """Extract, optionally transform, and wrap the response body."""
    header_value = get_response_header(response, options.response_header)
    if header_value is not None:
        body: Any = header_value
    else:
        body = get_response_body(response)
        if options.response_transformer is not None and response.ok:
            body = options.response_transformer(body)
            if inspect.isawaitable(body):
                body = await body

    return ApiResult(
        url=response.url,
        ok=response.ok,
        status=response.status,
        status_text=response.status_text,
        body=body,
    )
