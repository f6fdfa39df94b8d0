"""Schemas and DTOs for the agent core."""

from .base import BaseSchema, CompletionSchema
from .domain import AgentKind, ProgressLevel, TaskStatus

__all__ = [
    "AgentKind",
    "BaseSchema",
    "CompletionSchema",
    "ProgressLevel",
    "TaskStatus",
]
