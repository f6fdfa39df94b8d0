from __future__ import annotations

"""Progress reporting for orchestration runs.

Every run reports human-readable progress through a ``ProgressReporter``.
Events are delivered in emission order to:

- an optional callback receiving the message string (plain or async), and
- an optional ``asyncio.Queue`` consumed through ``TaskHandle.events``.

The last event of a run carries a terminal ``status`` (completed or failed).
After it the reporter is closed: further emits raise
``ProgressStreamClosedError`` and queue consumers see the end of the stream.
"""

import asyncio
import inspect
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Union

from pydantic import Field

from ..errors import ProgressStreamClosedError
from ..schemas.base import BaseSchema
from ..schemas.domain import ProgressLevel, TaskStatus

ProgressCallback = Callable[[str], Union[None, Awaitable[None]]]


class ProgressEvent(BaseSchema):
    task_id: str
    seq: int
    message: str
    level: ProgressLevel = ProgressLevel.info
    status: Optional[TaskStatus] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_terminal(self) -> bool:
        return self.status is not None


class ProgressReporter:
    """Ordered, closeable progress sink for one task."""

    def __init__(
        self,
        task_id: str,
        *,
        callback: Optional[ProgressCallback] = None,
        queue: Optional[asyncio.Queue[Optional[ProgressEvent]]] = None,
    ) -> None:
        self._task_id = task_id
        self._callback = callback
        self._queue = queue
        self._seq = 0
        self._closed = False
        self._sentinel_sent = False
        self._history: list[ProgressEvent] = []

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def history(self) -> list[ProgressEvent]:
        """Events emitted so far, in order."""
        return list(self._history)

    async def emit(
        self,
        message: str,
        *,
        level: ProgressLevel = ProgressLevel.info,
        status: Optional[TaskStatus] = None,
    ) -> ProgressEvent:
        """Deliver one event. A non-null ``status`` closes the reporter.

        Raises:
            ProgressStreamClosedError: If the terminal event was already emitted.
        """
        if self._closed:
            raise ProgressStreamClosedError(self._task_id)

        event = ProgressEvent(task_id=self._task_id, seq=self._seq, message=message, level=level, status=status)
        self._seq += 1
        self._history.append(event)
        if status is not None:
            self._closed = True

        if self._queue is not None:
            self._queue.put_nowait(event)
        try:
            if self._callback is not None:
                result: Any = self._callback(message)
                if inspect.isawaitable(result):
                    await result
        finally:
            if self._closed:
                self.close()
        return event

    def close(self) -> None:
        """Close the stream. Idempotent; pushes the end marker once."""
        self._closed = True
        if self._queue is not None and not self._sentinel_sent:
            self._sentinel_sent = True
            self._queue.put_nowait(None)


async def iter_queue(queue: asyncio.Queue[Optional[ProgressEvent]]) -> AsyncIterator[ProgressEvent]:
    """Yield events from ``queue`` until the end marker."""
    while True:
        event = await queue.get()
        if event is None:
            return
        yield event
