"""Status-driven classification of API results.

Rules are consulted in two tiers: the operation's own rules first, then the
client-wide rules (for example ``STANDARD_ERROR_RULES``, the table of
standard HTTP error statuses). Inside a tier an exact code
beats a range wildcard (``4XX``), which beats ``default``; among rules of the
same specificity the first registered wins. The first matching rule decides
the outcome.
"""

from collections.abc import Iterable, Sequence

from openapi_runtime.core.logging import get_logger
from openapi_runtime.exceptions import ApiError, describe_body
from openapi_runtime.models import ApiResult, OperationDescriptor, StatusRule


__all__ = [
    "STANDARD_ERROR_RULES",
    "STANDARD_ERRORS",
    "catch_error_codes",
    "generic_error_message",
    "match_rule",
]


logger = get_logger(__name__)


STANDARD_ERRORS: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Timeout",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Payload Too Large",
    414: "URI Too Long",
    415: "Unsupported Media Type",
    416: "Range Not Satisfiable",
    417: "Expectation Failed",
    418: "Im a teapot",
    421: "Misdirected Request",
    422: "Unprocessable Content",
    423: "Locked",
    424: "Failed Dependency",
    425: "Too Early",
    426: "Upgrade Required",
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",
    451: "Unavailable For Legal Reasons",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
    505: "HTTP Version Not Supported",
    506: "Variant Also Negotiates",
    507: "Insufficient Storage",
    508: "Loop Detected",
    510: "Not Extended",
    511: "Network Authentication Required",
}

STANDARD_ERROR_RULES: tuple[StatusRule, ...] = tuple(
    StatusRule(status=status, message=message)
    for status, message in STANDARD_ERRORS.items()
)


def _match_in_tier(rules: Iterable[StatusRule], status: int) -> StatusRule | None:
    best: StatusRule | None = None
    for rule in rules:
        if not rule.matches(status):
            continue
        # Strictly greater keeps the earliest rule among equals.
        if best is None or rule.specificity > best.specificity:
            best = rule
    return best


def match_rule(
    status: int,
    rules: Sequence[StatusRule],
    defaults: Sequence[StatusRule] = (),
) -> StatusRule | None:
    """Find the rule deciding ``status``, or None when nothing matches."""
    return _match_in_tier(rules, status) or _match_in_tier(defaults, status)


def generic_error_message(result: ApiResult) -> str:
    status_text = result.status_text or "unknown"
    return (
        f"Generic Error: status: {result.status}; "
        f"status text: {status_text}; body: {describe_body(result.body)}"
    )


def catch_error_codes(
    options: OperationDescriptor,
    result: ApiResult,
    defaults: Sequence[StatusRule] = (),
) -> None:
    """Raise ApiError when ``result`` classifies as a failure.

    Returns normally for success outcomes.
    """
    rule = match_rule(result.status, options.errors, defaults)
    if rule is not None:
        logger.debug(
            "status_rule_matched",
            status=result.status,
            pattern=rule.status,
            success=rule.success,
        )
        if rule.success:
            return
        raise ApiError(options, result, rule.message or generic_error_message(result))

    if not result.ok:
        raise ApiError(options, result, generic_error_message(result))
