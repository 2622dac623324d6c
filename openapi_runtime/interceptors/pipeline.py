"""Interceptor chain execution.

Chains are left folds: each interceptor receives the output of the previous
one. Unlike observers, interceptor failures are not isolated; the first
exception aborts the chain and propagates to the caller unchanged.
"""

import inspect
from typing import TypeVar

from openapi_runtime.core.logging import get_logger

from openapi_runtime.models import CanonicalResponse, PreparedRequest

from .registry import InterceptorRegistry


T = TypeVar("T")

logger = get_logger(__name__)


async def run_chain(registry: InterceptorRegistry[T], value: T) -> T:
    """Fold ``value`` through a snapshot of ``registry``.

    Interceptors may be sync or async. Returning ``None`` keeps the current
    value, which lets an interceptor mutate in place.
    """
    chain = registry.snapshot()
    for fn in chain:
        result = fn(value)
        if inspect.isawaitable(result):
            result = await result
        if result is not None:
            value = result
    if chain:
        logger.debug("interceptor_chain_completed", kind=registry.kind, length=len(chain))
    return value


async def run_request_interceptors(
    registry: InterceptorRegistry[PreparedRequest], request: PreparedRequest
) -> PreparedRequest:
    return await run_chain(registry, request)


async def run_response_interceptors(
    registry: InterceptorRegistry[CanonicalResponse], response: CanonicalResponse
) -> CanonicalResponse:
    return await run_chain(registry, response)
