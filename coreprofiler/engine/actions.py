"""Assignment actions - the only way an action may change the context."""

from typing import Any, Callable, Dict, Mapping, Optional

from .events import Event

Updater = Callable[[Mapping[str, Any], Event], Any]


class Assign:
    """
    Pure context assignment.

    Built either from per-field updaters (``assign(countries=fn)``), each
    receiving the old context and the event, or from a single function
    returning a mapping of replaced fields (``assign(fn)``).
    """

    def __init__(self, fn: Optional[Callable[[Mapping[str, Any], Event], Mapping[str, Any]]] = None,
                 **updaters: Updater):
        if fn is None and not updaters:
            raise ValueError("assign() needs a function or at least one field updater")
        if fn is not None and updaters:
            raise ValueError("assign() takes either a function or field updaters, not both")
        self.fn = fn
        self.updaters: Dict[str, Updater] = updaters

    def apply(self, context: Mapping[str, Any], event: Event) -> Dict[str, Any]:
        """Return the new context; ``context`` itself is left untouched."""
        new = dict(context)
        if self.fn is not None:
            new.update(self.fn(context, event))
        else:
            for field, updater in self.updaters.items():
                new[field] = updater(context, event)
        return new

    def __repr__(self):
        fields = ", ".join(self.updaters) or getattr(self.fn, "__name__", "fn")
        return f"Assign({fields})"


def assign(fn=None, **updaters: Updater) -> Assign:
    """Create an assignment action (``newContext = f(oldContext, event)``)."""
    return Assign(fn, **updaters)


def is_assignment(action: Any) -> bool:
    return isinstance(action, Assign)
