from __future__ import annotations

import pytest
from pydantic import ValidationError

from superai.agent_core.planning.steps import EMPTY_PLAN, PARSE_ERROR_EVALUATION, Plan, PlanStep


def test_plan_step_accepts_alias_and_field_name() -> None:
    by_alias = PlanStep.model_validate({"description": "scaffold", "assignedAgent": "developer"})
    by_name = PlanStep(description="scaffold", assigned_agent="developer")

    assert by_alias == by_name


def test_plan_step_requires_non_empty_values() -> None:
    with pytest.raises(ValidationError):
        PlanStep(description=" ", assigned_agent="developer")


def test_plan_is_frozen() -> None:
    plan = Plan(steps=(PlanStep(description="a", assigned_agent="developer"),))
    with pytest.raises(ValidationError):
        plan.steps = ()  # type: ignore[misc]


def test_named_fallbacks() -> None:
    assert EMPTY_PLAN.steps == ()
    assert len(EMPTY_PLAN) == 0
    assert PARSE_ERROR_EVALUATION.success is True
    assert PARSE_ERROR_EVALUATION.reason == "parse error, assuming success"
