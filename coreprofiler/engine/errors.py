"""Exceptions raised by the profiler engine."""

from typing import Iterable


class ProfilerError(Exception):
    """Base exception for all profiler engine errors."""

    pass


class GraphDefinitionError(ProfilerError):
    """Raised when a state graph is malformed.

    Always raised at construction time, before ``start()``. Not a ValueError,
    so pydantic validators let it propagate unwrapped.
    """

    pass


class AmbiguousTransitionError(GraphDefinitionError):
    """Raised when a handler list contains unreachable candidates."""

    def __init__(self, state: str, source: str):
        self.state = state
        self.source = source
        super().__init__(
            f"State '{state}' has an unguarded transition for {source} "
            f"followed by further candidates that can never be taken"
        )


class UnresolvedBindingError(GraphDefinitionError):
    """Raised when the graph names actions, services or guards that are not bound."""

    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(f"Unresolved bindings: {', '.join(self.missing)}")


class EngineStateError(ProfilerError, RuntimeError):
    """Raised when the engine is used out of order (double start, rebind after start...)."""

    pass
