"""Header resolution: layered, case-insensitive merge of static and resolved values."""

import asyncio
import base64
import inspect
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from openapi_runtime.core.events import ExecutionPhase
from openapi_runtime.core.logging import get_logger
from openapi_runtime.models import OperationDescriptor, is_defined

from .body import infer_content_type
from .url import stringify


if TYPE_CHECKING:
    from openapi_runtime.config import ClientConfig


__all__ = [
    "get_headers",
    "merge_headers",
    "resolve",
]


logger = get_logger(__name__)


def _accepts_argument(fn: Any) -> bool:
    try:
        parameters = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return True
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in parameters
    )


async def resolve(options: OperationDescriptor, value: Any) -> Any:
    """Resolve a literal, a sync resolver or an async resolver to its value.

    Resolvers are called with the operation descriptor, or without arguments
    when they accept none.
    """
    if callable(value):
        value = value(options) if _accepts_argument(value) else value()
    if inspect.isawaitable(value):
        value = await value
    return value


async def _resolve_mapping(
    options: OperationDescriptor, mapping: Mapping[str, Any] | None
) -> dict[str, Any]:
    if not mapping:
        return {}
    keys = list(mapping)
    values = await asyncio.gather(*(resolve(options, mapping[k]) for k in keys))
    return dict(zip(keys, values, strict=True))


def merge_headers(*layers: Mapping[str, Any]) -> dict[str, str]:
    """Merge header layers, later layers winning; keys are lowercased.

    Values that are UNSET or None are dropped, and they also remove any value
    set by an earlier layer.
    """
    merged: dict[str, str] = {}
    for layer in layers:
        for key, value in layer.items():
            name = str(key).lower()
            if is_defined(value):
                merged[name] = stringify(value)
            else:
                merged.pop(name, None)
    return merged


async def get_headers(config: "ClientConfig", options: OperationDescriptor) -> dict[str, str]:
    """Produce the final header set for one call.

    Layers, in order: ``accept`` default, config headers, authorization,
    per-request headers, cookies, inferred content type.
    """
    token, username, password, config_headers = await asyncio.gather(
        resolve(options, config.token),
        resolve(options, config.username),
        resolve(options, config.password),
        resolve(options, config.headers),
    )
    config_values, request_values, cookie_values = await asyncio.gather(
        _resolve_mapping(options, config_headers),
        _resolve_mapping(options, options.headers),
        _resolve_mapping(options, options.cookies),
    )

    auth: dict[str, str] = {}
    if is_defined(token) and token != "":
        auth["authorization"] = f"Bearer {token}"
    elif is_defined(username) and is_defined(password):
        credentials = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        auth["authorization"] = f"Basic {credentials}"

    headers = merge_headers(
        {"accept": "application/json"},
        config_values,
        auth,
        request_values,
    )

    cookies = {k: v for k, v in cookie_values.items() if is_defined(v)}
    if cookies and "cookie" not in headers:
        headers["cookie"] = "; ".join(f"{k}={stringify(v)}" for k, v in cookies.items())

    if "content-type" not in headers:
        content_type = infer_content_type(options)
        if content_type:
            headers["content-type"] = content_type

    logger.debug(ExecutionPhase.HEADERS_RESOLVED.value, header_names=sorted(headers))
    return headers
