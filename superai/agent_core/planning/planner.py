from __future__ import annotations

"""Commander planning and evaluation.

``Planner`` is the commander agent. Besides executing tasks like any other
agent, it:

- breaks a free-form user request into an ordered ``Plan`` whose steps are
  each assigned to one of the worker agent kinds, and
- judges whether a step's result summary satisfies the step.

Both operations ask the completion service for a JSON reply and degrade
instead of failing when the reply cannot be parsed:

- an unparseable plan becomes ``EMPTY_PLAN`` (zero steps), and
- an unparseable evaluation becomes ``PARSE_ERROR_EVALUATION`` (success).

Failures of the completion call itself are not parse errors and are raised as
``AgentExecutionError``.
"""

import re
from typing import Optional, Sequence, Type

from pydantic import ValidationError

from superai.core.logging_config import get_logger

from ..agents.base import BaseAgent
from ..agents.workers import WORKER_AGENTS
from ..capabilities.handlers import CapabilityExecutor
from ..capabilities.registry import CapabilityRegistry
from ..completion.base import CompletionService
from ..schemas.domain import AgentKind
from .steps import EMPTY_PLAN, PARSE_ERROR_EVALUATION, Evaluation, Plan

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text)
    return match.group(1) if match else text.strip()


def parse_plan(text: str) -> Plan:
    """Parse a planner reply, falling back to ``EMPTY_PLAN``."""
    try:
        return Plan.model_validate_json(_strip_code_fence(text))
    except ValidationError as e:
        logger.warning(f"Could not parse plan, using empty plan: {e.error_count()} error(s)")
        return EMPTY_PLAN


def parse_evaluation(text: str) -> Evaluation:
    """Parse an evaluator reply, falling back to ``PARSE_ERROR_EVALUATION``."""
    try:
        return Evaluation.model_validate_json(_strip_code_fence(text))
    except ValidationError as e:
        logger.warning(f"Could not parse evaluation, assuming success: {e.error_count()} error(s)")
        return PARSE_ERROR_EVALUATION


class Planner(BaseAgent):
    """The commander agent: plans requests and evaluates step results."""

    kind = AgentKind.commander
    display_name = "Commander Agent"
    responsibility = "break requests into steps and judge their results."
    default_summary = "Task completed by Commander Agent."

    def __init__(
        self,
        *,
        completion: CompletionService,
        capabilities: Optional[CapabilityRegistry] = None,
        executor: Optional[CapabilityExecutor] = None,
        assignable: Sequence[Type[BaseAgent]] = WORKER_AGENTS,
    ) -> None:
        """
        Initialize the planner.

        Args:
            completion: The completion service used for planning and evaluation.
            capabilities: Capability registry; the planner requests none itself.
            executor: Optional executor, unused unless capabilities are granted.
            assignable: Agent classes advertised as step assignees.
        """
        super().__init__(
            completion=completion,
            capabilities=capabilities if capabilities is not None else CapabilityRegistry(),
            executor=executor,
        )
        self._assignable = tuple(assignable)

    def planning_instruction(self) -> str:
        agent_lines = "\n".join(f"- {a.kind.value}: {a.responsibility}" for a in self._assignable)
        return (
            "You are the Commander Agent of the Super AI System.\n"
            "Your job is to break down a user's prompt into a sequence of actionable steps.\n"
            "Assign each step to one of the following agents:\n"
            f"{agent_lines}\n\n"
            'Return a JSON object with a "steps" array. '
            'Each step must have a non-empty "description" and an "assignedAgent" from the list above.'
        )

    @staticmethod
    def evaluation_instruction(step_description: str, result_summary: str) -> str:
        return (
            "You are the Commander Agent evaluating a task result.\n"
            f"Task: {step_description}\n"
            f"Result: {result_summary}\n\n"
            "Evaluate if the result successfully completed the task. "
            'Return a JSON object with "success" (boolean) and "reason" (string).'
        )

    async def create_plan(self, user_request: str) -> Plan:
        """Break a user request into an ordered plan.

        Parameters
        ----------
        user_request:
            The free-form request to plan.

        Returns
        -------
        Plan
            The parsed plan, or ``EMPTY_PLAN`` when the reply is malformed.
        """
        completion = await self._complete(
            user_request,
            prompt=user_request,
            system_instruction=self.planning_instruction(),
            response_schema=Plan,
        )
        plan = parse_plan(completion.text)
        logger.debug(f"Planned {len(plan.steps)} step(s) for request '{user_request}'")
        return plan

    async def evaluate(self, step_description: str, result_summary: str) -> Evaluation:
        """Judge whether a result summary satisfies a step description.

        Returns ``PARSE_ERROR_EVALUATION`` when the reply is malformed.
        """
        completion = await self._complete(
            step_description,
            prompt="Evaluate the result.",
            system_instruction=self.evaluation_instruction(step_description, result_summary),
            response_schema=Evaluation,
        )
        return parse_evaluation(completion.text)
