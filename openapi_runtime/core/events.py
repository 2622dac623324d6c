"""Event names emitted while executing a request."""

from enum import Enum


class ExecutionPhase(str, Enum):
    """Phases of one request, used as structured log event names"""

    # Assembly
    REQUEST_ASSEMBLED = "request_assembled"
    HEADERS_RESOLVED = "headers_resolved"

    # Dispatch
    REQUEST_DISPATCHED = "request_dispatched"
    REQUEST_SKIPPED = "request_skipped_cancelled"
    RESPONSE_RECEIVED = "response_received"

    # Outcome
    RESPONSE_CLASSIFIED = "response_classified"
    REQUEST_FAILED = "request_failed"
