"""Transport interface.

A transport sends one prepared request and returns a canonical response. It
must register an abort capability through ``on_cancel`` before awaiting the
network, so that cancelling the task stops the in-flight call.
"""

from typing import Protocol, runtime_checkable

from openapi_runtime.cancelable import OnCancel
from openapi_runtime.models import CanonicalResponse, PreparedRequest


__all__ = ["Transport"]


@runtime_checkable
class Transport(Protocol):
    """Protocol implemented by every HTTP backend."""

    async def send(
        self, request: PreparedRequest, on_cancel: OnCancel
    ) -> CanonicalResponse:
        """Send ``request`` and return the normalized response.

        Raises:
            TransportError: On network failure, timeout or abort
        """
        ...
