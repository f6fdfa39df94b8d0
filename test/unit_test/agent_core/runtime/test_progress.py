from __future__ import annotations

import asyncio
from typing import List, Optional

import pytest

from superai.agent_core.errors import ProgressStreamClosedError
from superai.agent_core.runtime.progress import ProgressEvent, ProgressReporter, iter_queue
from superai.agent_core.schemas.domain import ProgressLevel, TaskStatus


@pytest.mark.asyncio
async def test_events_are_numbered_in_emission_order() -> None:
    reporter = ProgressReporter("t-1")
    await reporter.emit("one")
    await reporter.emit("two", level=ProgressLevel.warning)

    history = reporter.history
    assert [(e.seq, e.message, e.level) for e in history] == [
        (0, "one", ProgressLevel.info),
        (1, "two", ProgressLevel.warning),
    ]
    assert all(e.task_id == "t-1" and not e.is_terminal for e in history)


@pytest.mark.asyncio
async def test_terminal_event_closes_reporter() -> None:
    reporter = ProgressReporter("t-1")
    event = await reporter.emit("done", status=TaskStatus.completed)

    assert event.is_terminal
    assert reporter.closed
    with pytest.raises(ProgressStreamClosedError):
        await reporter.emit("late")


@pytest.mark.asyncio
async def test_sync_and_async_callbacks_receive_messages() -> None:
    sync_seen: List[str] = []
    async_seen: List[str] = []

    async def on_progress(message: str) -> None:
        await asyncio.sleep(0)
        async_seen.append(message)

    sync_reporter = ProgressReporter("t-1", callback=sync_seen.append)
    async_reporter = ProgressReporter("t-2", callback=on_progress)
    for reporter in (sync_reporter, async_reporter):
        await reporter.emit("a")
        await reporter.emit("b", status=TaskStatus.completed)

    assert sync_seen == ["a", "b"]
    assert async_seen == ["a", "b"]


@pytest.mark.asyncio
async def test_queue_stream_ends_after_terminal_event() -> None:
    queue: asyncio.Queue[Optional[ProgressEvent]] = asyncio.Queue()
    reporter = ProgressReporter("t-1", queue=queue)
    await reporter.emit("a")
    await reporter.emit("failed", level=ProgressLevel.error, status=TaskStatus.failed)
    reporter.close()

    events = [e async for e in iter_queue(queue)]

    assert [e.message for e in events] == ["a", "failed"]
    assert events[-1].status == TaskStatus.failed
    assert queue.empty()


@pytest.mark.asyncio
async def test_close_without_terminal_event_ends_stream() -> None:
    queue: asyncio.Queue[Optional[ProgressEvent]] = asyncio.Queue()
    reporter = ProgressReporter("t-1", queue=queue)
    await reporter.emit("a")
    reporter.close()
    reporter.close()

    assert [e.message async for e in iter_queue(queue)] == ["a"]
    assert queue.empty()
