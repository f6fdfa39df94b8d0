from __future__ import annotations

import logging
import os
from typing import List

import pytest

from superai.agent_core.completion.pydantic_ai import PydanticAICompletionService
from superai.agent_core.factory import build_completion_service, build_orchestrator
from superai.agent_core.memory import ShortTermMemory
from superai.agent_core.runtime import Orchestrator
from superai.core.config import Settings


def _settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


def test_build_completion_service_uses_configured_model(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "")

    service = build_completion_service(_settings(SUPERAI_COMPLETION_MODEL="test", GEMINI_API_KEY="secret"))

    assert isinstance(service, PydanticAICompletionService)
    assert service._model == "test"
    assert os.environ["GEMINI_API_KEY"] == "secret"


def test_build_orchestrator_applies_settings(stub_service) -> None:
    orchestrator = build_orchestrator(
        config=_settings(SUPERAI_STEP_TIMEOUT_SECONDS=2.5, SUPERAI_GRAPH_RECURSION_LIMIT=64),
        completion=stub_service(lambda call: '{"steps": []}'),
        configure_logging=False,
    )

    assert isinstance(orchestrator, Orchestrator)
    assert orchestrator._step_timeout == 2.5
    assert orchestrator._recursion_limit == 64
    assert orchestrator.roster.kinds() == ["commander", "developer", "automation", "research", "system"]


@pytest.mark.asyncio
async def test_built_orchestrator_runs_a_task_end_to_end(scripted, make_reply, tmp_path) -> None:
    plan = '{"steps": [{"description": "write readme", "assignedAgent": "developer"}]}'
    service = scripted(
        plan,
        results={"write readme": make_reply("Wrote README.md.", ("file_write", {"path": "README.md", "content": "# hi"}))},
    )
    memory = ShortTermMemory()
    orchestrator = build_orchestrator(
        config=_settings(SUPERAI_WORKSPACE_ROOT=str(tmp_path)),
        completion=service,
        memory=memory,
        configure_logging=False,
    )
    messages: List[str] = []

    result = await orchestrator.process_task("task-1", "document the project", messages.append)

    assert messages[2] == "[developer] Result: Wrote README.md."
    assert (tmp_path / "README.md").read_text() == "# hi"
    assert result.outcomes[0].result.data["files_touched"] == ["README.md"]
    assert len(await memory.get("task-1")) == 1


def test_build_orchestrator_logs_into_configured_directory(stub_service, tmp_path) -> None:
    log_dir = tmp_path / "run-logs"
    build_orchestrator(
        config=_settings(SUPERAI_ENABLE_FILE_LOGGING=True, SUPERAI_LOG_FILE_DIR=str(log_dir)),
        completion=stub_service(lambda call: '{"steps": []}'),
    )

    root_logger = logging.getLogger()
    file_handlers = [h for h in root_logger.handlers if isinstance(h, logging.FileHandler)]
    try:
        assert [h.baseFilename for h in file_handlers] == [str(log_dir / "superai.log")]
        assert (log_dir / "superai.log").exists()
    finally:
        for handler in file_handlers:
            root_logger.removeHandler(handler)
            handler.close()
