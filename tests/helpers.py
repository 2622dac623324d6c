"""Test helpers: canned responses and an in-memory transport."""

import asyncio
import json
from collections.abc import Callable
from typing import Any

import httpx

from openapi_runtime.cancelable import OnCancel
from openapi_runtime.models import CanonicalResponse, PreparedRequest


def make_response(
    status: int = 200,
    body: Any = None,
    *,
    content_type: str | None = "application/json",
    headers: dict[str, str] | None = None,
    status_text: str | None = None,
    url: str = "https://api.example.com/",
) -> CanonicalResponse:
    """Build a canonical response with a JSON, text or bytes body."""
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str) and content_type != "application/json":
        content = body.encode()
    else:
        content = json.dumps(body).encode()

    all_headers = dict(headers or {})
    if content_type:
        all_headers.setdefault("content-type", content_type)

    return CanonicalResponse(
        url=url,
        status=status,
        status_text=status_text
        if status_text is not None
        else httpx.codes.get_reason_phrase(status),
        content=content,
        headers=httpx.Headers(all_headers),
    )


class FakeTransport:
    """In-memory transport recording every request it receives.

    ``responder`` builds the response from the request; ``gate`` (when set)
    blocks the call until released, so tests can cancel mid-flight.
    """

    def __init__(
        self,
        responder: Callable[[PreparedRequest], CanonicalResponse] | None = None,
        *,
        gate: asyncio.Event | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.responder = responder or (lambda request: make_response(200, {"ok": True}))
        self.gate = gate
        self.error = error
        self.requests: list[PreparedRequest] = []
        self.aborts = 0
        self.started = asyncio.Event()

    def _abort(self) -> None:
        self.aborts += 1

    async def send(
        self, request: PreparedRequest, on_cancel: OnCancel
    ) -> CanonicalResponse:
        self.requests.append(request)
        on_cancel(self._abort)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)


def echo_json(request: PreparedRequest) -> CanonicalResponse:
    """Respond with the request body as JSON."""
    content = request.content
    if isinstance(content, str):
        content = content.encode()
    return CanonicalResponse(
        url=request.url,
        status=200,
        status_text="OK",
        content=content or b"",
        headers=httpx.Headers({"content-type": "application/json"}),
    )
