"""Tests for CancelableTask."""

import asyncio
from unittest.mock import Mock

import pytest

from openapi_runtime.cancelable import CancelableTask, TaskState
from openapi_runtime.exceptions import CancelError


class TestSettlement:
    """Resolve and reject transitions."""

    @pytest.mark.asyncio
    async def test_resolves_with_value(self) -> None:
        async def work(resolve, reject, on_cancel):
            resolve(42)

        task = CancelableTask(work)
        assert await task == 42
        assert task.state is TaskState.RESOLVED
        assert task.is_resolved
        assert task.result() == 42

    @pytest.mark.asyncio
    async def test_rejects_with_error(self) -> None:
        async def work(resolve, reject, on_cancel):
            reject(ValueError("boom"))

        task = CancelableTask(work)
        with pytest.raises(ValueError, match="boom"):
            await task
        assert task.is_rejected

    @pytest.mark.asyncio
    async def test_exception_in_executor_rejects(self) -> None:
        async def work(resolve, reject, on_cancel):
            raise KeyError("missing")

        task = CancelableTask(work)
        with pytest.raises(KeyError):
            await task
        assert task.state is TaskState.REJECTED

    @pytest.mark.asyncio
    async def test_only_first_settlement_counts(self) -> None:
        async def work(resolve, reject, on_cancel):
            resolve("first")
            resolve("second")
            reject(RuntimeError("late"))

        task = CancelableTask(work)
        assert await task == "first"
        assert task.is_resolved

    @pytest.mark.asyncio
    async def test_done_callback_receives_task(self) -> None:
        seen: list[CancelableTask] = []

        async def work(resolve, reject, on_cancel):
            resolve(1)

        task = CancelableTask(work)
        task.add_done_callback(seen.append)
        await task
        await asyncio.sleep(0)
        assert seen == [task]


class TestCancellation:
    """Cancel transitions and cleanup handlers."""

    @pytest.mark.asyncio
    async def test_cancel_before_start_never_runs_executor(self) -> None:
        ran = Mock()

        async def work(resolve, reject, on_cancel):
            ran()
            resolve(1)

        task = CancelableTask(work)
        task.cancel()

        with pytest.raises(CancelError):
            await task
        await asyncio.sleep(0)
        ran.assert_not_called()
        assert task.is_cancelled
        assert not task.is_resolved
        assert not task.is_rejected

    @pytest.mark.asyncio
    async def test_cancel_runs_every_handler_once(self) -> None:
        started = asyncio.Event()
        first, second = Mock(), Mock()

        async def work(resolve, reject, on_cancel):
            on_cancel(first)
            on_cancel(second)
            started.set()
            await asyncio.Event().wait()

        task = CancelableTask(work)
        await started.wait()
        task.cancel()
        task.cancel()

        first.assert_called_once_with()
        second.assert_called_once_with()
        assert task.state is TaskState.CANCELLED

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self) -> None:
        started = asyncio.Event()
        after = Mock()

        async def work(resolve, reject, on_cancel):
            on_cancel(Mock(side_effect=RuntimeError("cleanup failed")))
            on_cancel(after)
            started.set()
            await asyncio.Event().wait()

        task = CancelableTask(work)
        await started.wait()
        task.cancel()

        after.assert_called_once()
        with pytest.raises(CancelError):
            await task

    @pytest.mark.asyncio
    async def test_resolve_after_cancel_has_no_effect(self) -> None:
        release = asyncio.Event()
        captured = {}

        async def work(resolve, reject, on_cancel):
            captured["resolve"] = resolve
            await release.wait()

        task = CancelableTask(work)
        await asyncio.sleep(0)
        task.cancel()
        captured["resolve"]("too late")

        assert task.is_cancelled
        with pytest.raises(CancelError):
            task.result()

    @pytest.mark.asyncio
    async def test_cancel_after_resolve_is_noop(self) -> None:
        handler = Mock()

        async def work(resolve, reject, on_cancel):
            on_cancel(handler)
            resolve("done")

        task = CancelableTask(work)
        assert await task == "done"
        task.cancel()

        handler.assert_not_called()
        assert task.is_resolved

    @pytest.mark.asyncio
    async def test_on_cancel_flags_reflect_state(self) -> None:
        flags = {}

        async def work(resolve, reject, on_cancel):
            flags["before"] = on_cancel.is_cancelled
            resolve(None)
            flags["resolved"] = on_cancel.is_resolved

        task = CancelableTask(work)
        await task
        assert flags == {"before": False, "resolved": True}

    @pytest.mark.asyncio
    async def test_handlers_registered_after_settlement_are_ignored(self) -> None:
        late = Mock()
        captured = {}

        async def work(resolve, reject, on_cancel):
            captured["on_cancel"] = on_cancel
            resolve(None)

        task = CancelableTask(work)
        await task
        captured["on_cancel"](late)
        task.cancel()
        late.assert_not_called()

    @pytest.mark.asyncio
    async def test_result_while_pending_raises(self) -> None:
        async def work(resolve, reject, on_cancel):
            await asyncio.Event().wait()

        task = CancelableTask(work)
        with pytest.raises(asyncio.InvalidStateError):
            task.result()
        assert not task.done()
        task.cancel()
        assert task.done()
