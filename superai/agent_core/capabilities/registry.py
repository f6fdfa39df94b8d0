from __future__ import annotations

"""Capability registry.

The registry maps a capability name to its descriptor. Agents use it to
resolve the capability names they are permitted to request into the schemas
advertised to the completion service.

It is populated once at start-up and only read afterwards, so it carries no
locking.
"""

from typing import Dict, List, Optional

from .base import CapabilityDescriptor


class CapabilityRegistry:
    """
    In-memory mapping of capability names to descriptors.

    Notes:
        - ``register`` overwrites any existing mapping for the capability name
          but keeps the position of the first registration.
        - ``lookup`` returns ``None`` for unknown names; a missing capability
          is an ordinary outcome, not an error.
    """

    def __init__(self) -> None:
        """Initialize an empty capability registry."""
        self._caps: Dict[str, CapabilityDescriptor] = {}

    def register(self, descriptor: CapabilityDescriptor) -> None:
        """
        Register a capability descriptor.

        Args:
            descriptor: The descriptor to register, keyed by its ``name``.
        """
        self._caps[descriptor.name] = descriptor

    def lookup(self, name: str) -> Optional[CapabilityDescriptor]:
        """
        Retrieve a registered descriptor by name.

        Args:
            name: The capability name.

        Returns:
            The descriptor, or ``None`` when nothing is registered under ``name``.
        """
        return self._caps.get(name)

    def has(self, name: str) -> bool:
        """
        Check if a capability is registered.

        Args:
            name: The capability name to check.

        Returns:
            True if registered, False otherwise.
        """
        return name in self._caps

    def list_all(self) -> List[CapabilityDescriptor]:
        """Return every registered descriptor in registration order."""
        return list(self._caps.values())

    def __len__(self) -> int:
        return len(self._caps)
