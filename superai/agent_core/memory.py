"""Short-term memory keyed by session.

The orchestrator records what each step produced under the task id so later
callers (or agents in follow-up tasks of the same session) can look back at
it. Memory lives in process; persisting it is left to collaborators.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Any, Dict, List, Protocol


class MemoryStore(Protocol):
    """Protocol for session-keyed memory collaborators."""

    async def add(self, session_id: str, entry: Dict[str, Any]) -> None: ...

    async def get(self, session_id: str) -> List[Dict[str, Any]]: ...


class ShortTermMemory:
    """In-process ``MemoryStore`` holding a list of entries per session."""

    def __init__(self) -> None:
        self._entries: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def add(self, session_id: str, entry: Dict[str, Any]) -> None:
        async with self._lock:
            self._entries[session_id].append(dict(entry))

    async def get(self, session_id: str) -> List[Dict[str, Any]]:
        async with self._lock:
            return [dict(e) for e in self._entries.get(session_id, [])]

    async def clear(self, session_id: str) -> None:
        async with self._lock:
            self._entries.pop(session_id, None)
