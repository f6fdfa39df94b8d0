from __future__ import annotations

import pytest

from superai.agent_core.memory import ShortTermMemory


@pytest.mark.asyncio
async def test_entries_are_kept_per_session_in_order() -> None:
    memory = ShortTermMemory()
    await memory.add("s1", {"step": "a"})
    await memory.add("s2", {"step": "x"})
    await memory.add("s1", {"step": "b"})

    assert await memory.get("s1") == [{"step": "a"}, {"step": "b"}]
    assert await memory.get("s2") == [{"step": "x"}]
    assert await memory.get("unknown") == []


@pytest.mark.asyncio
async def test_get_returns_copies_and_clear_drops_session() -> None:
    memory = ShortTermMemory()
    await memory.add("s1", {"step": "a"})

    entries = await memory.get("s1")
    entries[0]["step"] = "mutated"
    assert await memory.get("s1") == [{"step": "a"}]

    await memory.clear("s1")
    assert await memory.get("s1") == []
