from __future__ import annotations

"""Agent base class.

An agent turns a task description into a ``StepResult``:

1. Build a role-specific instruction embedding the task and the capabilities
   the agent may request.
2. Call the completion service with that instruction, the task text and the
   schemas of the permitted capabilities.
3. Perform every capability invocation the service requested, in order.
   Names outside the agent's permitted set, or with no handler, are skipped.
4. Return the reply text as the summary, falling back to the agent's default
   summary when the reply is empty.

A failing completion call is raised as ``AgentExecutionError``; the agent
never makes up a summary for a call that did not happen. Agents keep no state
between calls.
"""

from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import Field

from superai.core.logging_config import get_logger

from ..capabilities.base import CapabilityDescriptor
from ..capabilities.handlers import CapabilityExecutor
from ..capabilities.registry import CapabilityRegistry
from ..completion.base import CapabilityRequest, CompletionResult, CompletionService
from ..errors import AgentExecutionError
from ..schemas.base import BaseSchema
from ..schemas.domain import AgentKind

logger = get_logger(__name__)


class CapabilityInvocation(BaseSchema):
    """Record of one capability invocation performed by an agent."""

    name: str
    args: Dict[str, Any] = Field(default_factory=dict)
    ok: bool
    output: Dict[str, Any] = Field(default_factory=dict)


class StepResult(BaseSchema):
    """Outcome of ``BaseAgent.execute``."""

    summary: str
    data: Optional[Dict[str, Any]] = None


class BaseAgent:
    """Base class for all agents.

    Concrete agents bind a ``kind`` from the closed ``AgentKind`` set and
    describe themselves through class attributes:

    - ``display_name``: human-readable name.
    - ``responsibility``: one line used both in the agent's own instruction and
      in the planner's list of assignable agents.
    - ``capability_names``: the capabilities the agent may request.
    - ``default_summary``: summary used when the model replies with no text.
    """

    kind: ClassVar[AgentKind]
    display_name: ClassVar[str]
    responsibility: ClassVar[str]
    capability_names: ClassVar[Tuple[str, ...]] = ()
    default_summary: ClassVar[str] = "Task completed."

    def __init__(
        self,
        *,
        completion: CompletionService,
        capabilities: CapabilityRegistry,
        executor: Optional[CapabilityExecutor] = None,
    ) -> None:
        """
        Initialize the agent.

        Args:
            completion: The completion service used for every call.
            capabilities: Registry the agent resolves its capability names against.
            executor: Performs requested invocations. Without one, requests are
                recorded as skipped.
        """
        self._completion = completion
        self._capabilities = capabilities
        self._executor = executor

    def allowed_capabilities(self) -> List[CapabilityDescriptor]:
        """Descriptors for the permitted capability names that are registered."""
        out: List[CapabilityDescriptor] = []
        for name in self.capability_names:
            descriptor = self._capabilities.lookup(name)
            if descriptor is None:
                logger.debug(f"{self.display_name}: capability '{name}' is not registered")
                continue
            out.append(descriptor)
        return out

    def build_instruction(self, task: str, capabilities: List[CapabilityDescriptor]) -> str:
        """Role-specific system instruction for a task."""
        if capabilities:
            tool_lines = "\n".join(f"- {cap.name}: {cap.description}" for cap in capabilities)
            tools = f"You have access to these tools:\n{tool_lines}"
        else:
            tools = "You have no tools; answer from your own knowledge."
        return (
            f"You are the {self.display_name} of the Super AI System.\n"
            f"Your job is to {self.responsibility}\n"
            f"{tools}\n"
            f"Task: {task}\n\n"
            "Execute the task using your tools. Return a summary of what you did."
        )

    async def _complete(self, task: str, **kwargs: Any) -> CompletionResult:
        try:
            return await self._completion.complete(**kwargs)
        except Exception as e:
            logger.error(f"{self.display_name} completion failed for task '{task}': {e}")
            raise AgentExecutionError(self.kind.value, task, str(e)) from e

    async def _invoke(
        self, requests: List[CapabilityRequest], allowed: List[CapabilityDescriptor]
    ) -> List[CapabilityInvocation]:
        allowed_names = {cap.name for cap in allowed}
        invocations: List[CapabilityInvocation] = []
        for req in requests:
            if req.name not in allowed_names:
                logger.warning(f"{self.display_name}: skipping unrecognized capability '{req.name}'")
                continue
            if self._executor is None:
                logger.warning(f"{self.display_name}: no executor configured, skipping '{req.name}'")
                continue
            logger.info(f"[{self.display_name}] Invoking {req.name} with {req.args}")
            result = await self._executor.invoke(req.name, req.args)
            if result is None:
                logger.warning(f"{self.display_name}: no handler for capability '{req.name}', skipping")
                continue
            invocations.append(CapabilityInvocation(name=req.name, args=req.args, ok=result.ok, output=result.output))
        return invocations

    def build_data(self, invocations: List[CapabilityInvocation]) -> Optional[Dict[str, Any]]:
        """Agent-specific structured payload for a ``StepResult``."""
        if not invocations:
            return None
        return {"invocations": [inv.model_dump() for inv in invocations]}

    async def execute(self, task: str) -> StepResult:
        """Execute a task and summarize the outcome.

        Args:
            task: Free-text description of the unit of work.

        Returns:
            StepResult with the model's summary and optional structured data.

        Raises:
            AgentExecutionError: If the completion service call fails.
        """
        allowed = self.allowed_capabilities()
        completion = await self._complete(
            task,
            prompt=task,
            system_instruction=self.build_instruction(task, allowed),
            capabilities=allowed or None,
        )
        invocations = await self._invoke(completion.capability_requests, allowed)
        summary = completion.text.strip() or self.default_summary
        return StepResult(summary=summary, data=self.build_data(invocations))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value}, capabilities={list(self.capability_names)})"
