from __future__ import annotations

"""Capability descriptors and execution data models.

A capability is a named action an agent may ask the completion service to
trigger. The descriptor is what gets advertised to the model: a name, a
human-readable description and a pydantic model describing the typed
arguments. Descriptors are immutable once built.

The side effect itself is performed by a handler (see ``handlers``) which
returns a ``CapabilityResult``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Type

from pydantic import BaseModel, ConfigDict, Field


class CapabilityDescriptor(BaseModel):
    """Advertised description of a capability.

    Attributes:
        name: Unique capability identifier.
        description: What the capability does, shown to the model.
        input_schema: Pydantic model class describing the arguments. Fields
            without a default are the required arguments.
    """

    name: str = Field(..., min_length=1, description="Unique identifier for the capability")
    description: str = Field(..., description="Human-readable description of what the capability does")
    input_schema: Type[BaseModel] = Field(..., description="Pydantic model class for argument validation")

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    def parameters_json_schema(self) -> Dict[str, Any]:
        """Get the argument schema as JSON schema."""
        return self.input_schema.model_json_schema()

    def required_arguments(self) -> List[str]:
        """Names of the arguments the model must supply."""
        return list(self.parameters_json_schema().get("required", []))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the descriptor to a JSON-serializable dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters_json_schema(),
        }


@dataclass(frozen=True)
class CapabilityResult:
    """Structured capability execution result."""

    ok: bool
    output: Dict[str, Any] = field(default_factory=dict)
