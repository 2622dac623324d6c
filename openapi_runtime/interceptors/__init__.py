"""Request and response interceptors.

Key components:
- InterceptorRegistry: ordered, copy-on-write list of interceptor functions
- Interceptors: the request/response registry pair owned by a ClientConfig
- run_chain: left fold of a value through a registry snapshot
"""

from .pipeline import run_chain, run_request_interceptors, run_response_interceptors
from .registry import Interceptor, InterceptorRegistry


class Interceptors:
    """Request and response registries of one client configuration."""

    def __init__(self) -> None:
        self.request: InterceptorRegistry = InterceptorRegistry("request")
        self.response: InterceptorRegistry = InterceptorRegistry("response")

    def __repr__(self) -> str:
        return f"Interceptors(request={len(self.request)}, response={len(self.response)})"


__all__ = [
    "Interceptor",
    "InterceptorRegistry",
    "Interceptors",
    "run_chain",
    "run_request_interceptors",
    "run_response_interceptors",
]
