"""Shared test fixtures for openapi_runtime tests.

Fixtures work with real components and replace only the network, through an
in-memory transport or ``httpx.MockTransport``.
"""

import pytest

from openapi_runtime.config import ClientConfig
from openapi_runtime.core.logging import setup_logging
from tests.helpers import FakeTransport


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom settings."""
    # Reuse the runtime logging pipeline so structlog processors run in tests.
    setup_logging(json_logs=False, log_level_name="DEBUG")


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client_config(fake_transport: FakeTransport) -> ClientConfig:
    """Client configuration wired to the in-memory transport."""
    return ClientConfig(base="https://api.example.com", transport=fake_transport)
