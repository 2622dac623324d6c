"""Transport backends for the request engine."""

from .base import Transport
from .client import HTTPClientFactory
from .httpx_transport import HttpxTransport


__all__ = ["HTTPClientFactory", "HttpxTransport", "Transport"]
