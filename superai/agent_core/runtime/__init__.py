"""LangGraph-based orchestration runtime.

 The runtime takes a user request through the plan-dispatch-evaluate loop:

 - the commander agent produces a ``Plan``;
 - each step is dispatched, strictly in order, to the agent its kind names;
 - the commander evaluates each result;
 - progress is reported as an ordered stream of ``ProgressEvent`` items ending
   with exactly one terminal event.

 The main entry point is ``Orchestrator``.
 """

from .engine import Orchestrator, TaskHandle
from .models import StepOutcome, TaskResult
from .progress import ProgressCallback, ProgressEvent, ProgressReporter

__all__ = [
    "Orchestrator",
    "ProgressCallback",
    "ProgressEvent",
    "ProgressReporter",
    "StepOutcome",
    "TaskHandle",
    "TaskResult",
]
