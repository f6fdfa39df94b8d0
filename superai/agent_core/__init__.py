"""Core orchestration: planner, agents, capabilities and the run loop.

This package contains the "engine room" of the SuperAI brain.

Design overview
---------------

A user request flows through a plan-dispatch-evaluate loop:

1. The commander agent (``planning.Planner``) breaks the request into an
   ordered ``Plan`` of steps, each naming the agent kind that should do it.
2. ``runtime.Orchestrator`` dispatches each step, in order, to the agent the
   immutable ``AgentRoster`` resolves for that kind. Unknown kinds are skipped.
3. The agent calls the completion service and performs any capability
   invocations it requested (``capabilities``).
4. The commander evaluates the result; a failed evaluation is reported as a
   warning only.

Progress is streamed as ordered events ending in exactly one terminal event.

Typical usage
-------------

Most applications should use ``agent_core.factory.build_orchestrator`` and
call ``Orchestrator.process_task`` (or ``start_task`` for a streamed run).
"""

from .agent_registry import AgentRoster
from .agents import BaseAgent, StepResult
from .errors import (
    AgentExecutionError,
    CompletionServiceError,
    MissingPlannerError,
    StepTimeoutError,
    SuperAIError,
)
from .factory import build_agent_roster, build_orchestrator
from .planning import EMPTY_PLAN, PARSE_ERROR_EVALUATION, Evaluation, Plan, Planner, PlanStep
from .runtime import Orchestrator, ProgressEvent, TaskHandle, TaskResult
from .schemas.domain import AgentKind, ProgressLevel, TaskStatus

__all__ = [
    "AgentExecutionError",
    "AgentKind",
    "AgentRoster",
    "BaseAgent",
    "CompletionServiceError",
    "EMPTY_PLAN",
    "Evaluation",
    "MissingPlannerError",
    "Orchestrator",
    "PARSE_ERROR_EVALUATION",
    "Plan",
    "PlanStep",
    "Planner",
    "ProgressEvent",
    "ProgressLevel",
    "StepResult",
    "StepTimeoutError",
    "SuperAIError",
    "TaskHandle",
    "TaskResult",
    "TaskStatus",
    "build_agent_roster",
    "build_orchestrator",
]
