"""Core profiler - declarative state machine engine for the store onboarding wizard."""

from .engine import Bindings, Event, ProfilerEngine, StateSnapshot, assign
from .profiler import create_core_profiler, register_services

__all__ = [
    'Bindings',
    'Event',
    'ProfilerEngine',
    'StateSnapshot',
    'assign',
    'create_core_profiler',
    'register_services',
]
