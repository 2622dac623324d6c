"""URL assembly: path template substitution and query string encoding."""

import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from openapi_runtime.models import (
    UNSET,
    ObjectStyle,
    OperationDescriptor,
    QueryStyle,
    is_defined,
)


if TYPE_CHECKING:
    from openapi_runtime.config import ClientConfig


__all__ = [
    "encode_component",
    "get_query_string",
    "get_url",
    "stringify",
]


_PLACEHOLDER = re.compile(r"\{(.*?)\}")

# Characters left unescaped by JavaScript's encodeURIComponent.
_COMPONENT_SAFE = "-_.!~*'()"

# Delimited array styles; commas stay literal, as in form style.
_WIRE_DELIMITERS = {",": ",", "|": "%7C", " ": "%20"}


def encode_component(value: str) -> str:
    """Percent-encode everything except unreserved characters."""
    return quote(value, safe=_COMPONENT_SAFE)


def stringify(value: Any) -> str:
    """Render a scalar the way it appears on the wire."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, Enum):
        return stringify(value.value)
    return str(value)


def _is_empty(value: Any) -> bool:
    if not is_defined(value):
        return True
    if isinstance(value, Mapping):
        return not any(is_defined(v) for v in value.values())
    if isinstance(value, list | tuple):
        return not any(is_defined(v) for v in value)
    return False


def get_query_string(
    params: Mapping[str, Any],
    styles: Mapping[str, QueryStyle] | None = None,
    default_style: QueryStyle | None = None,
) -> str:
    """Encode query parameters in declaration order.

    Returns the string with its leading ``?``, or ``""`` when nothing is left
    after dropping absent and empty values.
    """
    styles = styles or {}
    default_style = default_style or QueryStyle()
    pairs: list[tuple[str, str]] = []

    def process(key: str, value: Any, style: QueryStyle) -> None:
        if _is_empty(value):
            return
        if isinstance(value, list | tuple):
            items = [v for v in value if is_defined(v)]
            delimiter = style.array.delimiter
            if delimiter is None or any(isinstance(v, list | tuple | Mapping) for v in items):
                for item in items:
                    process(key, item, style)
            else:
                joined = _WIRE_DELIMITERS[delimiter].join(
                    encode_component(stringify(v)) for v in items
                )
                pairs.append((encode_component(key), joined))
        elif isinstance(value, Mapping):
            for sub_key, sub_value in value.items():
                if style.object is ObjectStyle.FORM:
                    process(str(sub_key), sub_value, style)
                else:
                    process(f"{key}[{sub_key}]", sub_value, style)
        else:
            pairs.append((encode_component(key), encode_component(stringify(value))))

    for name, value in params.items():
        process(name, value, styles.get(name, default_style))

    if not pairs:
        return ""
    return "?" + "&".join(f"{k}={v}" for k, v in pairs)


def get_url(config: "ClientConfig", options: OperationDescriptor) -> str:
    """Build the absolute request URL for an operation."""
    encoder: Callable[[str], str] = config.encode_path or encode_component

    path = options.url.replace("{api-version}", config.version)

    def substitute(match: re.Match[str]) -> str:
        group = match.group(1)
        value = options.path.get(group, UNSET)
        if not is_defined(value):
            return match.group(0)
        return encoder(stringify(value))

    path = _PLACEHOLDER.sub(substitute, path)
    url = f"{config.base}{path}"

    if options.query:
        url += get_query_string(options.query, options.query_styles, config.query_style)
    return url
