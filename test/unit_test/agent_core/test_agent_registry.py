from __future__ import annotations

import pytest

from superai.agent_core.agent_registry import AgentRoster
from superai.agent_core.agents import DeveloperAgent, ResearchAgent
from superai.agent_core.capabilities.registry import CapabilityRegistry
from superai.agent_core.errors import MissingPlannerError
from superai.agent_core.factory import build_agent_roster
from superai.agent_core.planning import Planner
from superai.agent_core.schemas.domain import AgentKind


@pytest.fixture
def service(stub_service):
    return stub_service(lambda call: "ok")


def test_roster_without_planner_raises(service) -> None:
    with pytest.raises(MissingPlannerError):
        AgentRoster([DeveloperAgent(completion=service, capabilities=CapabilityRegistry())])


def test_roster_rejects_duplicate_kinds(service) -> None:
    reg = CapabilityRegistry()
    with pytest.raises(ValueError, match="duplicate agent kind: developer"):
        AgentRoster(
            [
                Planner(completion=service),
                DeveloperAgent(completion=service, capabilities=reg),
                DeveloperAgent(completion=service, capabilities=reg),
            ]
        )


def test_resolve_by_kind_or_raw_string(service) -> None:
    dev = DeveloperAgent(completion=service, capabilities=CapabilityRegistry())
    roster = AgentRoster([Planner(completion=service), dev])

    assert roster.resolve(AgentKind.developer) is dev
    assert roster.resolve("developer") is dev
    assert roster.resolve(" developer ") is dev
    assert roster.resolve("designer") is None
    assert roster.has("research") is False


def test_roster_is_read_only(service) -> None:
    roster = AgentRoster([Planner(completion=service)])

    with pytest.raises(TypeError):
        roster._agents["developer"] = DeveloperAgent(completion=service, capabilities=CapabilityRegistry())  # type: ignore[index]


def test_build_agent_roster_contains_commander_and_workers(service) -> None:
    roster = build_agent_roster(completion=service)

    assert roster.kinds() == ["commander", "developer", "automation", "research", "system"]
    assert isinstance(roster.planner, Planner)
    assert len(roster) == 5


def test_build_agent_roster_with_subset_of_workers(service) -> None:
    roster = build_agent_roster(completion=service, workers=[ResearchAgent])

    assert roster.kinds() == ["commander", "research"]
    assert "- developer:" not in roster.planner.planning_instruction()
