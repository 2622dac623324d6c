"""Request execution engine.

``execute`` is the single entry point used by generated service functions.
One call produces one cancelable task that runs, in order: URL and body
assembly, header resolution, a cancellation check, request interceptors,
the abortable transport call, response interceptors, body extraction and
transformation, status classification, and settlement.
"""

from typing import TYPE_CHECKING, Any

from openapi_runtime.cancelable import CancelableTask, OnCancel
from openapi_runtime.classifier import catch_error_codes
from openapi_runtime.core.events import ExecutionPhase
from openapi_runtime.core.logging import get_logger
from openapi_runtime.interceptors import (
    run_request_interceptors,
    run_response_interceptors,
)
from openapi_runtime.models import (
    CanonicalResponse,
    OperationDescriptor,
    PreparedRequest,
    ResponseMode,
)
from openapi_runtime.transport.httpx_transport import HttpxTransport

from .body import get_form_data, get_request_body
from .headers import get_headers
from .response import build_result
from .url import get_url


if TYPE_CHECKING:
    from openapi_runtime.config import ClientConfig
    from openapi_runtime.transport.base import Transport


__all__ = ["execute", "prepare_request"]


logger = get_logger(__name__)


async def _dispatch(
    backend: "Transport | None",
    config: "ClientConfig",
    request: PreparedRequest,
    on_cancel: OnCancel,
) -> CanonicalResponse:
    if backend is not None:
        return await backend.send(request, on_cancel)
    # No configured transport: one client per call, closed on exit.
    async with HttpxTransport(settings=config.http) as scoped:
        return await scoped.send(request, on_cancel)


async def prepare_request(
    config: "ClientConfig", options: OperationDescriptor
) -> PreparedRequest:
    """Assemble URL, body and headers into a request, before interceptors."""
    url = get_url(config, options)
    # A body takes precedence over form data.
    content = get_request_body(options)
    files = None if options.has_body else get_form_data(options)
    headers = await get_headers(config, options)
    return PreparedRequest(
        method=options.method,
        url=url,
        headers=headers,
        content=content,
        files=files,
        credentials=config.request_credentials,
        timeout=config.timeout,
    )


def execute(
    config: "ClientConfig",
    options: OperationDescriptor,
    *,
    transport: "Transport | None" = None,
) -> CancelableTask[Any]:
    """Run one API operation and return its cancelable task.

    Must be called while an event loop is running. The task resolves with the
    response body, or with the full ``ApiResult`` when the operation's
    ``response_mode`` is ``response``.

    Args:
        config: Shared client configuration
        options: Descriptor of the operation to call
        transport: Backend overriding ``config.transport``

    Returns:
        Task rejecting with ``ApiError`` on classified failures,
        ``TransportError`` on network failures, or the exception raised by an
        interceptor; awaiting it after ``cancel()`` raises ``CancelError``.
    """
    log = logger.bind(method=options.method, path=options.url)

    async def run(resolve: Any, reject: Any, on_cancel: OnCancel) -> None:
        try:
            request = await prepare_request(config, options)
            log.debug(
                ExecutionPhase.REQUEST_ASSEMBLED.value,
                url=request.url,
                has_body=request.content is not None or request.files is not None,
            )

            if on_cancel.is_cancelled:
                log.debug(ExecutionPhase.REQUEST_SKIPPED.value)
                return

            request = await run_request_interceptors(config.interceptors.request, request)
            if on_cancel.is_cancelled:
                log.debug(ExecutionPhase.REQUEST_SKIPPED.value)
                return

            log.debug(ExecutionPhase.REQUEST_DISPATCHED.value, url=request.url)
            response = await _dispatch(transport or config.transport, config, request, on_cancel)
            log.debug(ExecutionPhase.RESPONSE_RECEIVED.value, status=response.status)

            response = await run_response_interceptors(config.interceptors.response, response)
            result = await build_result(options, response)
            catch_error_codes(options, result, config.status_rules)
        except Exception as e:
            log.debug(
                ExecutionPhase.REQUEST_FAILED.value,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        log.debug(
            ExecutionPhase.RESPONSE_CLASSIFIED.value,
            status=result.status,
            ok=result.ok,
        )
        if options.response_mode is ResponseMode.RESPONSE:
            resolve(result)
        else:
            resolve(result.body)

    return CancelableTask(run, name=f"{options.method} {options.url}")
