"""Built-in capability descriptors.

These are the actions the worker agents can request. Each one is described by
an input model; the JSON schema derived from it is what the completion
service sees.
"""

from typing import Literal

from pydantic import BaseModel, Field

from .base import CapabilityDescriptor


class FileReadInput(BaseModel):
    """Arguments for ``file_read``."""

    path: str = Field(..., description="Path to the file")
    encoding: str = Field(default="utf-8", description="File encoding (default: utf-8)")


class FileWriteInput(BaseModel):
    """Arguments for ``file_write``."""

    path: str = Field(..., description="Path to the file")
    content: str = Field(..., description="Content to write")
    encoding: str = Field(default="utf-8", description="File encoding (default: utf-8)")


class TerminalRunInput(BaseModel):
    """Arguments for ``terminal_run``."""

    command: str = Field(..., description="Command to run")
    cwd: str | None = Field(default=None, description="Working directory for the command")


class ApiFetchInput(BaseModel):
    """Arguments for ``api_fetch``."""

    url: str = Field(..., description="URL to fetch")
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = Field(default="GET", description="HTTP method")
    body: dict | None = Field(default=None, description="JSON body for write methods")


class WorkflowRunInput(BaseModel):
    """Arguments for ``workflow_run``."""

    workflow_id: str = Field(..., description="ID of the workflow to run")
    inputs: dict = Field(default_factory=dict, description="Inputs passed to the workflow")


class WebSearchInput(BaseModel):
    """Arguments for ``web_search``."""

    query: str = Field(..., description="Search query")
    max_results: int = Field(default=5, ge=1, le=20, description="Maximum number of results")


FILE_READ = CapabilityDescriptor(
    name="file_read",
    description="Read a file from the file system",
    input_schema=FileReadInput,
)

FILE_WRITE = CapabilityDescriptor(
    name="file_write",
    description="Write content to a file, creating parent directories as needed",
    input_schema=FileWriteInput,
)

TERMINAL_RUN = CapabilityDescriptor(
    name="terminal_run",
    description="Run a terminal command and capture its output",
    input_schema=TerminalRunInput,
)

API_FETCH = CapabilityDescriptor(
    name="api_fetch",
    description="Fetch data from an HTTP API",
    input_schema=ApiFetchInput,
)

WORKFLOW_RUN = CapabilityDescriptor(
    name="workflow_run",
    description="Run a specific automation workflow",
    input_schema=WorkflowRunInput,
)

WEB_SEARCH = CapabilityDescriptor(
    name="web_search",
    description="Search the web and return the top results",
    input_schema=WebSearchInput,
)

BUILTIN_CAPABILITIES = (FILE_READ, FILE_WRITE, TERMINAL_RUN, API_FETCH, WORKFLOW_RUN, WEB_SEARCH)
