"""Capability registry and capability execution.

A *capability* is a named action an agent may ask the completion service to
trigger (read a file, run a command, call an API, ...).

- ``CapabilityRegistry`` maps names to immutable ``CapabilityDescriptor``
  objects; agents resolve their permitted names through it to advertise the
  argument schemas.
- ``CapabilityExecutor`` maps names to handlers that perform the side effect
  and return a ``CapabilityResult``.
"""

from .base import CapabilityDescriptor, CapabilityResult
from .builtin import BUILTIN_CAPABILITIES
from .handlers import CapabilityExecutor, CapabilityHandler
from .registry import CapabilityRegistry

__all__ = [
    "BUILTIN_CAPABILITIES",
    "CapabilityDescriptor",
    "CapabilityExecutor",
    "CapabilityHandler",
    "CapabilityRegistry",
    "CapabilityResult",
]
