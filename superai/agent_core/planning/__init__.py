"""Planning components.

 The planning subsystem turns a free-form user request into a ``Plan``: an
 ordered list of ``PlanStep`` items, each naming the agent kind that should
 carry it out. The same commander agent later judges each step's result and
 returns an ``Evaluation``.

 The planner never executes steps; the orchestrator in
 ``superai.agent_core.runtime`` dispatches them.
 """

from .planner import Planner, parse_evaluation, parse_plan
from .steps import EMPTY_PLAN, PARSE_ERROR_EVALUATION, Evaluation, Plan, PlanStep

__all__ = [
    "EMPTY_PLAN",
    "PARSE_ERROR_EVALUATION",
    "Evaluation",
    "Plan",
    "PlanStep",
    "Planner",
    "parse_evaluation",
    "parse_plan",
]
