"""Ordered registry of interceptor functions."""

from collections.abc import Awaitable, Callable, Iterator
from typing import Any, Generic, TypeVar

from openapi_runtime.core.logging import get_logger


T = TypeVar("T")

Interceptor = Callable[[T], T | None | Awaitable[T | None]]


class InterceptorRegistry(Generic[T]):
    """Append-only, copy-on-write list of interceptors.

    Insertion order is invocation order. Registering the same function twice
    runs it twice. Each mutation swaps in a new tuple, so a snapshot taken by
    an in-flight call is never affected by later registrations.
    """

    def __init__(self, kind: str = "request") -> None:
        self.kind = kind
        self._fns: tuple[Interceptor[T], ...] = ()
        self._logger = get_logger(__name__)

    def use(self, fn: Interceptor[T]) -> None:
        """Register an interceptor at the end of the chain"""
        self._fns = (*self._fns, fn)
        self._logger.debug(
            "interceptor_registered",
            kind=self.kind,
            interceptor=getattr(fn, "__name__", repr(fn)),
            total=len(self._fns),
        )

    def eject(self, fn: Interceptor[T]) -> None:
        """Remove the first registration of ``fn``; unknown functions are ignored"""
        try:
            index = self._fns.index(fn)
        except ValueError:
            return
        self._fns = self._fns[:index] + self._fns[index + 1 :]
        self._logger.debug(
            "interceptor_ejected",
            kind=self.kind,
            interceptor=getattr(fn, "__name__", repr(fn)),
            total=len(self._fns),
        )

    def snapshot(self) -> tuple[Interceptor[T], ...]:
        """Current chain, frozen"""
        return self._fns

    def __iter__(self) -> Iterator[Interceptor[T]]:
        return iter(self._fns)

    def __len__(self) -> int:
        return len(self._fns)

    def __contains__(self, fn: Any) -> bool:
        return fn in self._fns

    def __repr__(self) -> str:
        return f"InterceptorRegistry(kind={self.kind!r}, size={len(self._fns)})"
