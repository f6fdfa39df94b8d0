from __future__ import annotations

from typing import Tuple

from pydantic import ConfigDict, Field

from ..schemas.base import CompletionSchema


class PlanStep(CompletionSchema):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True, str_strip_whitespace=True)

    description: str = Field(..., min_length=1)
    assigned_agent: str = Field(..., min_length=1, alias="assignedAgent")


class Plan(CompletionSchema):
    steps: Tuple[PlanStep, ...]

    def __len__(self) -> int:
        return len(self.steps)


class Evaluation(CompletionSchema):
    success: bool
    reason: str = ""


EMPTY_PLAN = Plan(steps=())
"""Plan returned when the planner's reply cannot be parsed."""

PARSE_ERROR_EVALUATION = Evaluation(success=True, reason="parse error, assuming success")
"""Evaluation returned when the judge's reply cannot be parsed."""
