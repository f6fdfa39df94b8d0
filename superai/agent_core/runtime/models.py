from __future__ import annotations

"""Run results and LangGraph state types.

- ``StepOutcome`` records what happened to one plan step.
- ``TaskResult`` is what ``Orchestrator.process_task`` returns.
- ``_RunState`` is the mutable state passed between LangGraph nodes.
"""

from typing import List, Optional, TypedDict

from pydantic import Field

from ..agents.base import StepResult
from ..planning.steps import Evaluation, Plan, PlanStep
from ..schemas.base import BaseSchema
from ..schemas.domain import TaskStatus
from .progress import ProgressReporter


class StepOutcome(BaseSchema):
    """Outcome of one plan step.

    ``skipped`` is set when the step named an unregistered agent kind; such
    steps carry neither a result nor an evaluation.
    """

    index: int
    step: PlanStep
    skipped: bool = False
    result: Optional[StepResult] = None
    evaluation: Optional[Evaluation] = None


class TaskResult(BaseSchema):
    """Final result of a completed run."""

    task_id: str
    status: TaskStatus = TaskStatus.completed
    plan: Plan
    outcomes: List[StepOutcome] = Field(default_factory=list)

    @property
    def skipped_steps(self) -> List[StepOutcome]:
        return [o for o in self.outcomes if o.skipped]


class _RunState(TypedDict):
    """Mutable LangGraph state for a single orchestration run.

    Keys:

    - ``task_id`` / ``request``: the task being processed.
    - ``reporter``: progress sink for this run.
    - ``plan``: the plan once created (``EMPTY_PLAN`` before that).
    - ``idx``: index of the next step to execute.
    - ``outcomes``: outcomes of the steps processed so far.
    """

    task_id: str
    request: str
    reporter: ProgressReporter
    plan: Plan
    idx: int
    outcomes: List[StepOutcome]
