from __future__ import annotations

"""LangGraph orchestration engine.

``Orchestrator`` runs the plan-dispatch-evaluate loop for one user request at
a time per call; independent calls may run concurrently and share only the
read-only agent roster.

Execution model
--------------

The commander first turns the request into a plan. The plan is then walked by
a LangGraph state machine over ``_RunState``:

- ``execute_step``: executes exactly one step at index ``idx`` and loops
  until every step has been processed.
- ``finish``: emits the terminal progress event.

Each step is one graph transition, so the recursion limit of a run is raised
to fit the plan when the configured limit is smaller.

Per step, the assignee kind is resolved against the roster:

- Unknown kind: an error-tagged progress event is emitted and the step is
  skipped; the run continues.
- Known kind: the agent executes the step and the commander evaluates the
  result. A failed evaluation only produces a warning; the step is not
  re-executed.
- Agent failure: an error-tagged terminal event is emitted and the error is
  re-raised, aborting the run.

Steps of one run are never executed concurrently.
"""

import asyncio
from typing import AsyncIterator, Optional

from langgraph.graph import END, START, StateGraph

from superai.core.logging_config import get_logger

from ..agent_registry import AgentRoster
from ..agents.base import BaseAgent, StepResult
from ..errors import StepTimeoutError
from ..memory import MemoryStore
from ..planning.steps import EMPTY_PLAN, Plan, PlanStep
from ..schemas.domain import ProgressLevel, TaskStatus
from .models import StepOutcome, TaskResult, _RunState
from .progress import ProgressCallback, ProgressEvent, ProgressReporter, iter_queue

logger = get_logger(__name__)


def _plural(n: int) -> str:
    return "step" if n == 1 else "steps"


class TaskHandle:
    """Handle on a run started with ``Orchestrator.start_task``.

    Progress events and the final result are consumed independently: iterate
    ``events()`` for the ordered stream (it ends after the terminal event) and
    await ``result()`` for the ``TaskResult`` or the raised error.
    """

    def __init__(
        self,
        task_id: str,
        task: asyncio.Task[TaskResult],
        queue: asyncio.Queue[Optional[ProgressEvent]],
    ) -> None:
        self.task_id = task_id
        self._task = task
        self._queue = queue

    def events(self) -> AsyncIterator[ProgressEvent]:
        return iter_queue(self._queue)

    async def result(self) -> TaskResult:
        return await self._task

    def done(self) -> bool:
        return self._task.done()


class Orchestrator:
    """Plan a request, dispatch each step to its agent, and evaluate results."""

    def __init__(
        self,
        *,
        roster: AgentRoster,
        memory: Optional[MemoryStore] = None,
        step_timeout: Optional[float] = None,
        recursion_limit: int = 1000,
    ) -> None:
        """
        Initialize the Orchestrator.

        Args:
            roster: The immutable agent roster; must contain a commander.
            memory: Optional session memory that receives every step outcome.
            step_timeout: Optional deadline in seconds for each agent step.
            recursion_limit: Minimum graph transition budget per run.
        """
        self._roster = roster
        self._memory = memory
        self._step_timeout = step_timeout
        self._recursion_limit = recursion_limit
        self._graph = self._build_graph()

    @property
    def roster(self) -> AgentRoster:
        return self._roster

    def _build_graph(self):
        """Build and compile the LangGraph state machine."""
        g: StateGraph = StateGraph(_RunState)
        g.add_node("execute_step", self._node_execute_next)
        g.add_node("finish", self._node_finish)

        g.add_conditional_edges(
            START,
            self._route_next,
            {"finish": "finish", "continue": "execute_step"},
        )
        g.add_conditional_edges(
            "execute_step",
            self._route_next,
            {"finish": "finish", "continue": "execute_step"},
        )
        g.add_edge("finish", END)
        return g.compile()

    async def process_task(
        self,
        task_id: str,
        user_request: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> TaskResult:
        """Run the full loop for one request.

        Args:
            task_id: Identifier of the task, attached to every progress event.
            user_request: Free-form request to plan and execute.
            on_progress: Optional plain or async callable receiving each
                progress message. It is never called after this coroutine
                returns or raises.

        Returns:
            TaskResult with status ``completed`` and the plan that was run.

        Raises:
            AgentExecutionError: If planning, a step, or an evaluation fails
                in the completion service.
        """
        reporter = ProgressReporter(task_id, callback=on_progress)
        return await self._run(task_id, user_request, reporter)

    def start_task(self, task_id: str, user_request: str) -> TaskHandle:
        """Start a run in the background and return a handle on it.

        Must be called from a running event loop.
        """
        queue: asyncio.Queue[Optional[ProgressEvent]] = asyncio.Queue()
        reporter = ProgressReporter(task_id, queue=queue)
        task = asyncio.create_task(self._run(task_id, user_request, reporter))
        return TaskHandle(task_id, task, queue)

    async def _run(self, task_id: str, user_request: str, reporter: ProgressReporter) -> TaskResult:
        logger.info(f"Received task {task_id}: {user_request}")
        state: _RunState = {
            "task_id": task_id,
            "request": user_request,
            "reporter": reporter,
            "plan": EMPTY_PLAN,
            "idx": 0,
            "outcomes": [],
        }
        try:
            state = await self._plan(state)
            final = await self._graph.ainvoke(state, config={"recursion_limit": self._limit_for(state["plan"])})
        finally:
            reporter.close()
        return TaskResult(task_id=task_id, status=TaskStatus.completed, plan=final["plan"], outcomes=final["outcomes"])

    def _limit_for(self, plan: Plan) -> int:
        # One transition per step plus ``finish``.
        return max(self._recursion_limit, len(plan.steps) + 2)

    async def _plan(self, state: _RunState) -> _RunState:
        """Ask the commander for a plan."""
        reporter = state["reporter"]
        try:
            plan = await self._roster.planner.create_plan(state["request"])
        except Exception as e:
            logger.error(f"Planning failed for task {state['task_id']}: {e}")
            await reporter.emit(f"[Error] Planning failed: {e}", level=ProgressLevel.error, status=TaskStatus.failed)
            raise

        n = len(plan.steps)
        await reporter.emit(f"[Orchestrator] Plan created: {n} {_plural(n)}.")
        state["plan"] = plan
        state["idx"] = 0
        state["outcomes"] = []
        return state

    async def _node_execute_next(self, state: _RunState) -> _RunState:
        """Process the step at ``idx`` and advance the index."""
        reporter = state["reporter"]
        plan = state["plan"]
        idx = state["idx"]
        step = plan.steps[idx]
        state["idx"] = idx + 1

        agent = self._roster.resolve(step.assigned_agent)
        if agent is None:
            logger.warning(f"Task {state['task_id']}: no agent for kind '{step.assigned_agent}', skipping step {idx}")
            await reporter.emit(
                f"[Error] Agent {step.assigned_agent} not found. Skipping step.", level=ProgressLevel.error
            )
            state["outcomes"].append(StepOutcome(index=idx, step=step, skipped=True))
            return state

        kind = agent.kind.value
        await reporter.emit(
            f"[Orchestrator] Executing step {idx + 1}/{len(plan.steps)}: {step.description} (Agent: {kind})"
        )
        try:
            result = await self._execute_step(agent, step)
            await reporter.emit(f"[{kind}] Result: {result.summary}")

            evaluation = await self._roster.planner.evaluate(step.description, result.summary)
            if not evaluation.success:
                # Reported only; the step is not re-executed.
                await reporter.emit(
                    f"[Warning] Evaluation failed: {evaluation.reason}. Retrying...", level=ProgressLevel.warning
                )
        except Exception as e:
            logger.error(f"Task {state['task_id']}: step {idx} failed: {e}")
            await reporter.emit(
                f"[Error] Step execution failed: {e}", level=ProgressLevel.error, status=TaskStatus.failed
            )
            raise

        outcome = StepOutcome(index=idx, step=step, result=result, evaluation=evaluation)
        state["outcomes"].append(outcome)
        if self._memory is not None:
            await self._memory.add(
                state["task_id"],
                {"step": step.description, "agent": kind, "summary": result.summary, "success": evaluation.success},
            )
        return state

    async def _node_finish(self, state: _RunState) -> _RunState:
        """Emit the terminal completion event."""
        await state["reporter"].emit("[Orchestrator] Task completed successfully.", status=TaskStatus.completed)
        logger.info(f"Task {state['task_id']} completed with {len(state['plan'].steps)} step(s)")
        return state

    def _route_next(self, state: _RunState) -> str:
        """Route to the next step or to ``finish`` once every step is processed."""
        if state["idx"] >= len(state["plan"].steps):
            return "finish"
        return "continue"

    async def _execute_step(self, agent: BaseAgent, step: PlanStep) -> StepResult:
        if self._step_timeout is None:
            return await agent.execute(step.description)
        try:
            return await asyncio.wait_for(agent.execute(step.description), timeout=self._step_timeout)
        except asyncio.TimeoutError as e:
            raise StepTimeoutError(agent.kind.value, step.description, self._step_timeout) from e
