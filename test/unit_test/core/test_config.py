"""Unit tests for the Settings model and its grouped views."""

from __future__ import annotations

import pytest

from superai.core.config import CapabilityConfig, CompletionConfig, OrchestratorConfig, Settings


class TestSettingsDefaults:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("SUPERAI_LOG_LEVEL", "SUPERAI_COMPLETION_MODEL", "SUPERAI_STEP_TIMEOUT_SECONDS"):
            monkeypatch.delenv(key, raising=False)
        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.completion_model == "google-gla:gemini-2.5-pro"
        assert settings.step_timeout_seconds is None
        assert settings.recursion_limit == 1000


class TestSettingsFromEnvironment:
    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPERAI_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SUPERAI_COMPLETION_MODEL", "test")
        monkeypatch.setenv("SUPERAI_STEP_TIMEOUT_SECONDS", "12.5")
        monkeypatch.setenv("SUPERAI_WORKSPACE_ROOT", "/srv/work")

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.completion_model == "test"
        assert settings.step_timeout_seconds == 12.5
        assert settings.workspace_root == "/srv/work"

    def test_env_file_is_read(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SUPERAI_GRAPH_RECURSION_LIMIT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("SUPERAI_GRAPH_RECURSION_LIMIT=50\nGEMINI_API_KEY=from-file\n")

        settings = Settings(_env_file=str(env_file))

        assert settings.recursion_limit == 50
        assert settings.gemini_api_key == "from-file"


class TestGroupedViews:
    def test_grouped_configs_mirror_flat_fields(self) -> None:
        settings = Settings(
            _env_file=None,
            SUPERAI_COMPLETION_MODEL="test",
            GEMINI_API_KEY="k",
            SUPERAI_TERMINAL_TIMEOUT_SECONDS=3,
            SUPERAI_STEP_TIMEOUT_SECONDS=1.5,
        )

        assert settings.completion == CompletionConfig(model="test", api_key="k")
        assert isinstance(settings.capabilities, CapabilityConfig)
        assert settings.capabilities.terminal_timeout_seconds == 3.0
        assert settings.orchestrator == OrchestratorConfig(step_timeout_seconds=1.5, recursion_limit=1000)
