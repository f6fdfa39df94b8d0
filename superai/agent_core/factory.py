from __future__ import annotations

"""Convenience factories for wiring the agent core.

This module contains small helpers to build the default capability registry
and executor, the agent roster, and a ready-to-use ``Orchestrator`` from
``Settings``.

The intent is to keep application wiring and tests concise, while still
allowing deployments to provide their own completion service, collaborators
and agent set.
"""

import os
from typing import Iterable, Optional, Type

from superai.core.config import Settings, settings as default_settings
from superai.core.logging_config import setup_logging

from .agent_registry import AgentRoster
from .agents.base import BaseAgent
from .agents.workers import WORKER_AGENTS
from .capabilities.builtin import BUILTIN_CAPABILITIES
from .capabilities.handlers import (
    ApiFetchHandler,
    CapabilityExecutor,
    FileReadHandler,
    FileWriteHandler,
    TerminalRunHandler,
    WebSearcher,
    WebSearchHandler,
    WorkflowRunHandler,
    WorkflowRunner,
)
from .capabilities.registry import CapabilityRegistry
from .completion.base import CompletionService
from .memory import MemoryStore
from .planning.planner import Planner
from .runtime.engine import Orchestrator


def build_default_registry() -> CapabilityRegistry:
    """Build the default ``CapabilityRegistry`` with every built-in capability."""
    reg = CapabilityRegistry()
    for descriptor in BUILTIN_CAPABILITIES:
        reg.register(descriptor)
    return reg


def build_default_executor(
    *,
    config: Optional[Settings] = None,
    workflow_runner: Optional[WorkflowRunner] = None,
    web_search: Optional[WebSearcher] = None,
) -> CapabilityExecutor:
    """Build a ``CapabilityExecutor`` with a handler for every built-in capability.

    Args:
        config: Settings for timeouts and the workspace root.
        workflow_runner: Async callable backing ``workflow_run``.
        web_search: Async callable backing ``web_search``.
    """
    cfg = (config or default_settings).capabilities
    executor = CapabilityExecutor()
    executor.register(FileReadHandler(cfg.workspace_root))
    executor.register(FileWriteHandler(cfg.workspace_root))
    executor.register(TerminalRunHandler(timeout=cfg.terminal_timeout_seconds, workspace_root=cfg.workspace_root))
    executor.register(ApiFetchHandler(timeout=cfg.http_timeout_seconds))
    executor.register(WorkflowRunHandler(workflow_runner))
    executor.register(WebSearchHandler(web_search))
    return executor


def build_agent_roster(
    *,
    completion: CompletionService,
    registry: Optional[CapabilityRegistry] = None,
    executor: Optional[CapabilityExecutor] = None,
    workers: Iterable[Type[BaseAgent]] = WORKER_AGENTS,
) -> AgentRoster:
    """Construct the commander plus one agent per worker class."""
    registry = registry if registry is not None else build_default_registry()
    worker_classes = tuple(workers)
    agents: list[BaseAgent] = [
        Planner(completion=completion, capabilities=registry, executor=executor, assignable=worker_classes)
    ]
    agents.extend(cls(completion=completion, capabilities=registry, executor=executor) for cls in worker_classes)
    return AgentRoster(agents)


def build_completion_service(config: Optional[Settings] = None) -> CompletionService:
    """Build the pydantic-ai backed completion service from settings."""
    from .completion.pydantic_ai import PydanticAICompletionService

    cfg = (config or default_settings).completion
    if cfg.api_key and not os.getenv("GEMINI_API_KEY"):
        os.environ["GEMINI_API_KEY"] = cfg.api_key
    return PydanticAICompletionService(cfg.model)


def build_orchestrator(
    *,
    config: Optional[Settings] = None,
    completion: Optional[CompletionService] = None,
    memory: Optional[MemoryStore] = None,
    workflow_runner: Optional[WorkflowRunner] = None,
    web_search: Optional[WebSearcher] = None,
    configure_logging: bool = True,
) -> Orchestrator:
    """Wire a complete ``Orchestrator`` from settings.

    Args:
        config: Settings to use instead of the module-level ``settings``.
        completion: Completion service; defaults to the pydantic-ai backend.
        memory: Optional session memory for step outcomes.
        workflow_runner: Async callable backing ``workflow_run``.
        web_search: Async callable backing ``web_search``.
        configure_logging: Whether to apply ``setup_logging`` from settings.
    """
    cfg = config or default_settings
    if configure_logging:
        setup_logging(
            log_level=cfg.log_level,
            log_format=cfg.log_format,
            enable_file=cfg.enable_file_logging,
            log_file_dir=cfg.log_file_dir,
        )

    roster = build_agent_roster(
        completion=completion or build_completion_service(cfg),
        registry=build_default_registry(),
        executor=build_default_executor(config=cfg, workflow_runner=workflow_runner, web_search=web_search),
    )
    orch_cfg = cfg.orchestrator
    return Orchestrator(
        roster=roster,
        memory=memory,
        step_timeout=orch_cfg.step_timeout_seconds,
        recursion_limit=orch_cfg.recursion_limit,
    )
