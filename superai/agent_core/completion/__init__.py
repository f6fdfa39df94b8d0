"""Completion service contract and its pydantic-ai backend."""

from .base import CapabilityRequest, CompletionResult, CompletionService

__all__ = [
    "CapabilityRequest",
    "CompletionResult",
    "CompletionService",
]
