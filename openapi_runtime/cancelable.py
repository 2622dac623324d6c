"""Awaitable task handle with cooperative cancellation.

A ``CancelableTask`` runs an executor coroutine on the current event loop and
hands it three capabilities: ``resolve``, ``reject`` and ``on_cancel``. The
executor registers cleanup callbacks through ``on_cancel`` (for example the
abort of an in-flight HTTP call); calling :meth:`CancelableTask.cancel` runs
those callbacks once, stops the executor and leaves the task in a terminal
``cancelled`` state.

Example:
    async def work(resolve, reject, on_cancel):
        on_cancel(lambda: print("cleanup"))
        resolve(await fetch_something())

    task = CancelableTask(work)
    task.cancel()
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Generator
from enum import Enum
from typing import Any, Generic, TypeVar

from openapi_runtime.core.logging import get_logger
from openapi_runtime.exceptions import CancelError


__all__ = ["CancelableTask", "OnCancel", "TaskState"]


T = TypeVar("T")

logger = get_logger(__name__)


class TaskState(str, Enum):
    """Lifecycle states of a cancelable task."""

    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class OnCancel:
    """Registration hook handed to executors.

    Calling the instance registers a cleanup handler; the ``is_*`` flags let
    the executor check the task state between suspension points.
    """

    def __init__(self, task: CancelableTask[Any]) -> None:
        self._task = task

    def __call__(self, handler: Callable[[], Any]) -> None:
        self._task._add_cancel_handler(handler)

    @property
    def is_resolved(self) -> bool:
        return self._task.is_resolved

    @property
    def is_rejected(self) -> bool:
        return self._task.is_rejected

    @property
    def is_cancelled(self) -> bool:
        return self._task.is_cancelled


Executor = Callable[
    [Callable[[T], None], Callable[[BaseException], None], OnCancel],
    Awaitable[Any],
]


class CancelableTask(Generic[T]):
    """State machine {pending, resolved, rejected, cancelled} around a coroutine.

    Must be created while an event loop is running.
    """

    def __init__(self, executor: Executor[T], *, name: str | None = None) -> None:
        loop = asyncio.get_running_loop()
        self._state = TaskState.PENDING
        self._cancel_handlers: list[Callable[[], Any]] = []
        self._future: asyncio.Future[T] = loop.create_future()
        self._on_cancel = OnCancel(self)
        self._runner = loop.create_task(self._run(executor), name=name)

    async def _run(self, executor: Executor[T]) -> None:
        try:
            await executor(self._resolve, self._reject, self._on_cancel)
        except asyncio.CancelledError:
            if self._state is TaskState.PENDING:
                # The runner was cancelled by someone other than cancel().
                self._cancel(cancel_runner=False)
                raise
        except Exception as e:
            self._reject(e)

    def _resolve(self, value: T) -> None:
        if self._state is not TaskState.PENDING:
            return
        self._state = TaskState.RESOLVED
        self._cancel_handlers.clear()
        self._future.set_result(value)

    def _reject(self, error: BaseException) -> None:
        if self._state is not TaskState.PENDING:
            return
        self._state = TaskState.REJECTED
        self._cancel_handlers.clear()
        self._future.set_exception(error)

    def _add_cancel_handler(self, handler: Callable[[], Any]) -> None:
        if self._state is not TaskState.PENDING:
            return
        self._cancel_handlers.append(handler)

    def cancel(self) -> None:
        """Cancel the task if it is still pending; otherwise do nothing."""
        self._cancel(cancel_runner=True)

    def _cancel(self, *, cancel_runner: bool) -> None:
        if self._state is not TaskState.PENDING:
            return
        self._state = TaskState.CANCELLED

        handlers, self._cancel_handlers = self._cancel_handlers, []
        for handler in handlers:
            try:
                handler()
            except Exception as e:
                logger.warning(
                    "cancel_handler_failed",
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                    exc_info=e,
                )

        if cancel_runner and not self._runner.done():
            self._runner.cancel()

        self._future.set_exception(CancelError())
        # Cancellation is requested by the caller; nothing to report if unawaited.
        self._future.exception()
        logger.debug("task_cancelled", handlers=len(handlers))

    @property
    def state(self) -> TaskState:
        return self._state

    @property
    def is_resolved(self) -> bool:
        return self._state is TaskState.RESOLVED

    @property
    def is_rejected(self) -> bool:
        return self._state is TaskState.REJECTED

    @property
    def is_cancelled(self) -> bool:
        return self._state is TaskState.CANCELLED

    def done(self) -> bool:
        return self._state is not TaskState.PENDING

    def result(self) -> T:
        """Return the resolved value, or raise the rejection or ``CancelError``.

        Raises ``asyncio.InvalidStateError`` while the task is pending.
        """
        return self._future.result()

    def add_done_callback(self, fn: Callable[[CancelableTask[T]], Any]) -> None:
        self._future.add_done_callback(lambda _: fn(self))

    def __await__(self) -> Generator[Any, None, T]:
        return self._future.__await__()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} state={self._state.value}>"
