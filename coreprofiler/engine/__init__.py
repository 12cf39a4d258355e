"""Profiler engine - core infrastructure for data-driven wizard state machines."""

from .actions import Assign, assign
from .bindings import Bindings
from .context import ContextStore
from .engine import ProfilerEngine, StateSnapshot
from .errors import (
    AmbiguousTransitionError,
    EngineStateError,
    GraphDefinitionError,
    ProfilerError,
    UnresolvedBindingError,
)
from .events import Event, InvocationHandle, InvocationOutcome
from .loader import SpecLoader
from .runner import ActionRunner, RealActionRunner, MockActionRunner
from .schema import ExitChoice, Invoke, Machine, StateNode, Transition

__all__ = [
    'ProfilerEngine',
    'StateSnapshot',
    'SpecLoader',
    'Bindings',
    'Assign',
    'assign',
    'ContextStore',
    'ActionRunner',
    'RealActionRunner',
    'MockActionRunner',
    'Event',
    'InvocationHandle',
    'InvocationOutcome',
    'Machine',
    'StateNode',
    'Transition',
    'Invoke',
    'ExitChoice',
    'ProfilerError',
    'GraphDefinitionError',
    'AmbiguousTransitionError',
    'UnresolvedBindingError',
    'EngineStateError',
]
