"""Core utilities shared across the runtime."""

from .events import ExecutionPhase
from .logging import get_logger, setup_logging


__all__ = ["ExecutionPhase", "get_logger", "setup_logging"]
