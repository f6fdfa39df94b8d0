"""Completion service contract.

The completion service is the language-model backend every agent talks to. It
turns an instruction plus a prompt into either free text or a list of
requests to invoke named capabilities with arguments.

The orchestration core depends only on this protocol; how the backend is
reached is up to the implementation (see ``pydantic_ai`` in this package).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence, Type, runtime_checkable

from pydantic import BaseModel, Field

from ..capabilities.base import CapabilityDescriptor
from ..schemas.base import BaseSchema


class CapabilityRequest(BaseSchema):
    """A request from the model to invoke a capability."""

    name: str
    args: Dict[str, Any] = Field(default_factory=dict)


class CompletionResult(BaseSchema):
    """Outcome of one completion call.

    Attributes:
        text: Free-text reply (empty when the model only requested capabilities).
        capability_requests: Capability invocations in the order the model returned them.
    """

    text: str = ""
    capability_requests: List[CapabilityRequest] = Field(default_factory=list)


@runtime_checkable
class CompletionService(Protocol):
    """Protocol for language-model completion backends.

    Implementations must either return a ``CompletionResult`` or raise; a
    failed backend call is never reported as an empty reply.
    """

    async def complete(
        self,
        *,
        prompt: str,
        system_instruction: str,
        capabilities: Optional[Sequence[CapabilityDescriptor]] = None,
        response_schema: Optional[Type[BaseModel]] = None,
    ) -> CompletionResult:
        """Run one completion.

        Args:
            prompt: The user-facing content (task text, request, ...).
            system_instruction: Role-specific instruction for the model.
            capabilities: Capabilities the model may ask to invoke.
            response_schema: When set, the reply text must be JSON matching this model.

        Returns:
            CompletionResult with the reply text and any capability requests.
        """
        ...
