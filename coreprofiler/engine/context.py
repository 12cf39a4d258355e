"""Context store - the single mutable record of a wizard run."""

import copy
from types import MappingProxyType
from typing import Any, Dict, Mapping


class ContextStore:
    """
    Owns the wizard context.

    Only the engine replaces the context (through assignment actions).
    Everyone else gets a read-only deep copy from ``get()``, so no caller
    can alias or patch the live record.
    """

    def __init__(self, initial: Mapping[str, Any]):
        self._data: Dict[str, Any] = copy.deepcopy(dict(initial))

    def get(self) -> Mapping[str, Any]:
        """Return a read-only snapshot of the current context."""
        return MappingProxyType(copy.deepcopy(self._data))

    def replace(self, new: Mapping[str, Any]) -> None:
        """Replace the whole context. Called by the engine only."""
        self._data = copy.deepcopy(dict(new))

    def to_dict(self) -> Dict[str, Any]:
        """Plain (mutable) deep copy, for serialisation."""
        return copy.deepcopy(self._data)
