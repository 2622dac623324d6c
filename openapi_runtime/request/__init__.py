"""Request assembly, header resolution, response handling and execution."""

from .body import get_form_data, get_request_body, infer_content_type
from .engine import execute, prepare_request
from .headers import get_headers, merge_headers, resolve
from .response import build_result, get_response_body, get_response_header
from .url import get_query_string, get_url


__all__ = [
    "build_result",
    "execute",
    "get_form_data",
    "get_headers",
    "get_query_string",
    "get_request_body",
    "get_response_body",
    "get_response_header",
    "get_url",
    "infer_content_type",
    "merge_headers",
    "prepare_request",
    "resolve",
]
