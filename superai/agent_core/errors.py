"""Error types for the agent core.

Only failures that must end a run are raised. Malformed planner or evaluator
output and steps naming an unregistered agent are recovered where they occur
and only show up as log lines and progress messages.
"""

from __future__ import annotations


class SuperAIError(Exception):
    """Base error for all agent core exceptions."""


class CompletionServiceError(SuperAIError):
    """Raised by a completion service when the backend call itself fails."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Completion service call failed: {message}")


class AgentExecutionError(SuperAIError):
    """Raised when an agent cannot produce a result for a task.

    Carries the agent kind and the task description so callers can report
    which step broke. The underlying failure is chained as ``__cause__``.
    """

    def __init__(self, agent_kind: str, task: str, message: str) -> None:
        self.agent_kind = agent_kind
        self.task = task
        super().__init__(f"Agent '{agent_kind}' failed on task '{task}': {message}")


class StepTimeoutError(AgentExecutionError):
    """Raised when a step exceeds the configured per-step deadline."""

    def __init__(self, agent_kind: str, task: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(agent_kind, task, f"timed out after {timeout} seconds")


class MissingPlannerError(SuperAIError):
    """Raised when an agent roster is built without a commander agent."""

    def __init__(self) -> None:
        super().__init__("Commander agent not found: orchestration requires a planner")


class ProgressStreamClosedError(SuperAIError):
    """Raised when progress is emitted after the terminal event of a task."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Progress stream for task '{task_id}' is already closed")
