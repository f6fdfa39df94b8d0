"""Agents: the units of work the orchestrator dispatches plan steps to."""

from .base import BaseAgent, CapabilityInvocation, StepResult
from .workers import WORKER_AGENTS, AutomationAgent, DeveloperAgent, ResearchAgent, SystemAgent

__all__ = [
    "AutomationAgent",
    "BaseAgent",
    "CapabilityInvocation",
    "DeveloperAgent",
    "ResearchAgent",
    "StepResult",
    "SystemAgent",
    "WORKER_AGENTS",
]
