"""HTTP transport configuration settings."""

from pydantic import BaseModel, Field


class HTTPSettings(BaseModel):
    """HTTP client configuration settings.

    Controls how the default httpx transport builds its client.
    """

    timeout_connect: float = Field(
        default=5.0, gt=0, description="Connection timeout in seconds"
    )

    timeout_read: float = Field(
        default=60.0, gt=0, description="Read timeout in seconds"
    )

    timeout_write: float = Field(
        default=30.0, gt=0, description="Write timeout in seconds"
    )

    timeout_pool: float = Field(
        default=30.0, gt=0, description="Connection pool acquisition timeout in seconds"
    )

    max_keepalive_connections: int = Field(
        default=20, ge=0, description="Max keep-alive connections kept for reuse"
    )

    max_connections: int = Field(
        default=100, ge=1, description="Max total concurrent connections"
    )

    http2: bool = Field(
        default=False,
        description="Enable HTTP/2 multiplexing (requires httpx[http2])",
    )

    verify: bool | str = Field(
        default=True,
        description="SSL verification: True/False or path to a CA bundle",
    )

    compression_enabled: bool = Field(
        default=True,
        description="Advertise compression support (Accept-Encoding header)"
    )

    accept_encoding: str = Field(
        default="gzip, deflate",
        description="Accept-Encoding header value when compression is enabled"
    )
