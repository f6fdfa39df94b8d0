"""Capability handlers.

Handlers perform the real-world side effect behind a capability: reading and
writing files, running terminal commands, calling HTTP APIs and delegating to
workflow or search collaborators.

Every handler validates its arguments against the descriptor's input model and
reports failures as ``CapabilityResult(ok=False, ...)`` instead of raising, so
a broken side effect never aborts the agent that requested it.
"""

import asyncio
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from superai.core.logging_config import get_logger

from .base import CapabilityResult
from .builtin import (
    ApiFetchInput,
    FileReadInput,
    FileWriteInput,
    TerminalRunInput,
    WebSearchInput,
    WorkflowRunInput,
)

logger = get_logger(__name__)

InputType = TypeVar("InputType", bound=BaseModel)

WorkflowRunner = Callable[[str, Dict[str, Any]], Awaitable[Any]]
WebSearcher = Callable[[str, int], Awaitable[Any]]

MAX_BODY_CHARS = 10_000


def _as_output(result: Any, key: str) -> Dict[str, Any]:
    if isinstance(result, dict):
        return result
    if hasattr(result, "model_dump"):
        return result.model_dump()
    return {key: result}


class CapabilityHandler(ABC, Generic[InputType]):
    """Abstract base class for capability handlers.

    Subclasses declare the capability ``name`` and the ``input_model`` used to
    validate raw arguments, and implement ``execute``.
    """

    input_model: Type[InputType]

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the capability name this handler serves."""

    @abstractmethod
    async def execute(self, input_data: InputType) -> CapabilityResult:
        """Perform the side effect.

        Args:
            input_data: Validated arguments.

        Returns:
            CapabilityResult describing the outcome.
        """

    async def __call__(self, args: Dict[str, Any]) -> CapabilityResult:
        """Validate raw arguments and execute.

        Args:
            args: Arguments as requested by the completion service.

        Returns:
            The execution result, or an ``ok=False`` result when the
            arguments do not validate or the side effect raises.
        """
        try:
            input_data = self.input_model.model_validate(args)
        except ValidationError as e:
            logger.warning(f"Invalid arguments for capability '{self.name}': {e.error_count()} error(s)")
            return CapabilityResult(ok=False, output={"error": f"invalid arguments: {e.errors(include_url=False)}"})
        try:
            return await self.execute(input_data)
        except Exception as e:
            logger.error(f"Capability '{self.name}' failed: {e}")
            return CapabilityResult(ok=False, output={"error": f"{type(e).__name__}: {e}"})


class _WorkspaceMixin:
    """Resolve paths, optionally confining them to a workspace root."""

    def __init__(self, workspace_root: Optional[str] = None) -> None:
        self._root = Path(workspace_root).resolve() if workspace_root else None

    def _resolve(self, raw: str) -> Path:
        path = Path(raw)
        if self._root is None:
            return path
        resolved = (self._root / path).resolve()
        if not resolved.is_relative_to(self._root):
            raise PermissionError(f"Path escapes workspace root: {raw}")
        return resolved


class FileReadHandler(_WorkspaceMixin, CapabilityHandler[FileReadInput]):
    """Handler for ``file_read``."""

    input_model = FileReadInput

    @property
    def name(self) -> str:
        return "file_read"

    async def execute(self, input_data: FileReadInput) -> CapabilityResult:
        try:
            file_path = self._resolve(input_data.path)
            if not file_path.exists():
                return CapabilityResult(ok=False, output={"path": input_data.path, "error": f"File not found: {file_path}"})
            if not file_path.is_file():
                return CapabilityResult(ok=False, output={"path": input_data.path, "error": f"Path is not a file: {file_path}"})

            content = file_path.read_text(encoding=input_data.encoding)
            size_bytes = file_path.stat().st_size
            logger.info(f"Successfully read file: {file_path} ({size_bytes} bytes)")
            return CapabilityResult(
                ok=True,
                output={"path": input_data.path, "content": content, "size_bytes": size_bytes},
            )
        except (OSError, UnicodeDecodeError) as e:
            error_msg = f"Error reading file {input_data.path}: {e}"
            logger.error(error_msg)
            return CapabilityResult(ok=False, output={"path": input_data.path, "error": error_msg})


class FileWriteHandler(_WorkspaceMixin, CapabilityHandler[FileWriteInput]):
    """Handler for ``file_write``."""

    input_model = FileWriteInput

    @property
    def name(self) -> str:
        return "file_write"

    async def execute(self, input_data: FileWriteInput) -> CapabilityResult:
        try:
            file_path = self._resolve(input_data.path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            bytes_written = file_path.write_text(input_data.content, encoding=input_data.encoding)
            logger.info(f"Successfully wrote file: {file_path} ({bytes_written} bytes)")
            return CapabilityResult(ok=True, output={"path": input_data.path, "bytes_written": bytes_written})
        except OSError as e:
            error_msg = f"Error writing file {input_data.path}: {e}"
            logger.error(error_msg)
            return CapabilityResult(ok=False, output={"path": input_data.path, "error": error_msg})


class TerminalRunHandler(_WorkspaceMixin, CapabilityHandler[TerminalRunInput]):
    """Handler for ``terminal_run``.

    With a workspace root, commands run inside it and a requested ``cwd`` must
    resolve below it.
    """

    input_model = TerminalRunInput

    def __init__(self, timeout: float = 30.0, workspace_root: Optional[str] = None) -> None:
        super().__init__(workspace_root)
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "terminal_run"

    def _working_directory(self, requested: Optional[str]) -> str:
        if requested:
            return str(self._resolve(requested))
        return str(self._root) if self._root is not None else os.getcwd()

    async def execute(self, input_data: TerminalRunInput) -> CapabilityResult:
        start_time = time.time()
        cmd = input_data.command
        try:
            cwd = self._working_directory(input_data.cwd)
        except PermissionError as e:
            logger.error(str(e))
            return CapabilityResult(ok=False, output={"command": cmd, "error": str(e)})

        if not os.path.isdir(cwd):
            error_msg = f"Working directory not found: {cwd}"
            logger.error(error_msg)
            return CapabilityResult(ok=False, output={"command": cmd, "error": error_msg})

        logger.info(f"Executing command: {cmd} (cwd={cwd})")
        process = await asyncio.create_subprocess_shell(
            cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            error_msg = f"Command execution timeout after {self._timeout} seconds"
            logger.error(error_msg)
            return CapabilityResult(
                ok=False,
                output={"command": cmd, "error": error_msg, "duration_seconds": time.time() - start_time},
            )

        duration = time.time() - start_time
        exit_code = process.returncode
        logger.info(f"Command completed with exit code {exit_code} (duration: {duration:.2f}s)")
        return CapabilityResult(
            ok=exit_code == 0,
            output={
                "command": cmd,
                "exit_code": exit_code,
                "stdout": stdout_bytes.decode("utf-8", errors="replace"),
                "stderr": stderr_bytes.decode("utf-8", errors="replace"),
                "duration_seconds": duration,
            },
        )


class ApiFetchHandler(CapabilityHandler[ApiFetchInput]):
    """Handler for ``api_fetch`` backed by ``httpx.AsyncClient``."""

    input_model = ApiFetchInput

    def __init__(self, timeout: float = 15.0, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "api_fetch"

    async def execute(self, input_data: ApiFetchInput) -> CapabilityResult:
        logger.info(f"Fetching API: {input_data.method} {input_data.url}")
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.request(input_data.method, input_data.url, json=input_data.body)
        except httpx.HTTPError as e:
            error_msg = f"Error fetching {input_data.url}: {e}"
            logger.error(error_msg)
            return CapabilityResult(ok=False, output={"url": input_data.url, "error": error_msg})

        output: Dict[str, Any] = {"url": input_data.url, "status_code": resp.status_code}
        if "application/json" in resp.headers.get("content-type", ""):
            try:
                output["json"] = resp.json()
            except ValueError:
                output["text"] = resp.text[:MAX_BODY_CHARS]
        else:
            output["text"] = resp.text[:MAX_BODY_CHARS]
        return CapabilityResult(ok=resp.is_success, output=output)


class WorkflowRunHandler(CapabilityHandler[WorkflowRunInput]):
    """Handler for ``workflow_run``; delegates to an injected workflow runner."""

    input_model = WorkflowRunInput

    def __init__(self, runner: Optional[WorkflowRunner] = None) -> None:
        self._runner = runner

    @property
    def name(self) -> str:
        return "workflow_run"

    async def execute(self, input_data: WorkflowRunInput) -> CapabilityResult:
        if self._runner is None:
            return CapabilityResult(ok=False, output={"error": "workflow runner not configured"})
        logger.info(f"Running workflow: {input_data.workflow_id}")
        try:
            result = await self._runner(input_data.workflow_id, dict(input_data.inputs))
        except Exception as e:
            logger.error(f"Workflow '{input_data.workflow_id}' failed: {e}")
            return CapabilityResult(ok=False, output={"workflow_id": input_data.workflow_id, "error": str(e)})
        return CapabilityResult(ok=True, output=_as_output(result, "result"))


class WebSearchHandler(CapabilityHandler[WebSearchInput]):
    """Handler for ``web_search``; delegates to an injected search function."""

    input_model = WebSearchInput

    def __init__(self, search: Optional[WebSearcher] = None) -> None:
        self._search = search

    @property
    def name(self) -> str:
        return "web_search"

    async def execute(self, input_data: WebSearchInput) -> CapabilityResult:
        query = input_data.query.strip()
        if not query:
            return CapabilityResult(ok=False, output={"error": "missing query"})
        if self._search is None:
            return CapabilityResult(ok=False, output={"error": "web_search not configured"})
        try:
            result = await self._search(query, input_data.max_results)
        except Exception as e:
            logger.error(f"Web search for '{query}' failed: {e}")
            return CapabilityResult(ok=False, output={"query": query, "error": str(e)})
        return CapabilityResult(ok=True, output=_as_output(result, "results"))


class CapabilityExecutor:
    """Dispatch capability invocations to their handlers by name."""

    def __init__(self) -> None:
        """Initialize an empty executor."""
        self._handlers: Dict[str, CapabilityHandler[Any]] = {}

    def register(self, handler: CapabilityHandler[Any]) -> None:
        """Register a handler under its capability name."""
        self._handlers[handler.name] = handler
        logger.debug(f"Registered capability handler: {handler.name}")

    def has(self, name: str) -> bool:
        return name in self._handlers

    async def invoke(self, name: str, args: Dict[str, Any]) -> Optional[CapabilityResult]:
        """Run the handler registered for ``name``.

        Returns:
            The handler's result, or ``None`` when no handler is registered.
        """
        handler = self._handlers.get(name)
        if handler is None:
            return None
        return await handler(dict(args))
