from __future__ import annotations

from enum import Enum


class AgentKind(str, Enum):
    commander = "commander"
    developer = "developer"
    automation = "automation"
    research = "research"
    system = "system"


class TaskStatus(str, Enum):
    completed = "completed"
    failed = "failed"


class ProgressLevel(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"
