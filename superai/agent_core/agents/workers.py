"""Worker agents.

Each worker binds one ``AgentKind`` to a responsibility and a fixed set of
capabilities. The planner assigns steps to these kinds by name.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..schemas.domain import AgentKind
from .base import BaseAgent, CapabilityInvocation


class DeveloperAgent(BaseAgent):
    kind = AgentKind.developer
    display_name = "Developer Agent"
    responsibility = "write code, fix bugs, build apps, and deploy them."
    capability_names = ("file_read", "file_write", "terminal_run")
    default_summary = "Task completed by Developer Agent."

    def build_data(self, invocations: List[CapabilityInvocation]) -> Optional[Dict[str, Any]]:
        data = super().build_data(invocations)
        if data is not None:
            data["files_touched"] = sorted(
                {str(inv.args["path"]) for inv in invocations if inv.name.startswith("file_") and "path" in inv.args}
            )
        return data


class AutomationAgent(BaseAgent):
    kind = AgentKind.automation
    display_name = "Automation Agent"
    responsibility = "run workflows, connect APIs, and create automations."
    capability_names = ("api_fetch", "workflow_run")
    default_summary = "Task completed by Automation Agent."


class ResearchAgent(BaseAgent):
    kind = AgentKind.research
    display_name = "Research Agent"
    responsibility = "search the web and analyze data."
    capability_names = ("web_search", "api_fetch")
    default_summary = "Task completed by Research Agent."

    def build_data(self, invocations: List[CapabilityInvocation]) -> Optional[Dict[str, Any]]:
        data = super().build_data(invocations)
        if data is not None:
            data["sources"] = [str(inv.args["url"]) for inv in invocations if inv.name == "api_fetch" and inv.ok]
        return data


class SystemAgent(BaseAgent):
    kind = AgentKind.system
    display_name = "System Agent"
    responsibility = "deploy servers and manage infrastructure."
    capability_names = ("terminal_run", "workflow_run")
    default_summary = "Task completed by System Agent."


WORKER_AGENTS = (DeveloperAgent, AutomationAgent, ResearchAgent, SystemAgent)
