from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from .agents.base import BaseAgent
from .errors import MissingPlannerError
from .planning.planner import Planner
from .schemas.domain import AgentKind


class AgentRoster:
    """
    Immutable set of agents keyed by kind.

    The roster is built once at start-up and passed to the orchestrator; it
    cannot be changed afterwards, so concurrent tasks can share it without
    locking. Steps resolve their assignee through ``resolve``, which returns
    ``None`` for kinds nobody registered.

    Raises:
        MissingPlannerError: If no ``Planner`` is among the agents.
        ValueError: If two agents share a kind.
    """

    def __init__(self, agents: Iterable[BaseAgent]) -> None:
        """
        Build the roster.

        Args:
            agents: Constructed agents, at most one per kind.
        """
        by_kind: dict[str, BaseAgent] = {}
        for agent in agents:
            key = agent.kind.value
            if key in by_kind:
                raise ValueError(f"duplicate agent kind: {key}")
            by_kind[key] = agent
        self._agents: Mapping[str, BaseAgent] = MappingProxyType(by_kind)

        planner = self._agents.get(AgentKind.commander.value)
        if not isinstance(planner, Planner):
            raise MissingPlannerError()
        self._planner = planner

    @property
    def planner(self) -> Planner:
        """The commander agent."""
        return self._planner

    def resolve(self, kind: AgentKind | str) -> Optional[BaseAgent]:
        """
        Look up the agent for a kind.

        Args:
            kind: An ``AgentKind`` or the raw kind string from a plan step.

        Returns:
            The agent, or ``None`` if no agent of that kind is registered.
        """
        key = kind.value if isinstance(kind, AgentKind) else str(kind).strip()
        return self._agents.get(key)

    def has(self, kind: AgentKind | str) -> bool:
        return self.resolve(kind) is not None

    def kinds(self) -> list[str]:
        return list(self._agents)

    def __iter__(self) -> Iterator[BaseAgent]:
        return iter(self._agents.values())

    def __len__(self) -> int:
        return len(self._agents)
