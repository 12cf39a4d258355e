"""Events, invocation handles and invocation outcomes."""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DONE_PREFIX = "done.invoke."
ERROR_PREFIX = "error.platform."
ALWAYS_EVENT = "always"
INIT_EVENT = "init"

INTERNAL_EVENTS = (ALWAYS_EVENT, INIT_EVENT)


class Event(BaseModel):
    """
    A tagged message delivered to the engine.

    Host events carry a ``type`` and a ``payload``. Invocation settlements are
    internal events (``done.invoke.<id>`` / ``error.platform.<id>``) stamped with
    the generation of the state that started the invocation.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: str = Field(..., description="Event kind (e.g., 'INTRO_COMPLETED')")
    payload: Dict[str, Any] = Field(default_factory=dict, description="Kind-specific payload")
    data: Any = Field(None, description="Service result for done events")
    error: Optional[str] = Field(None, description="Failure description for error events")
    generation: Optional[int] = Field(None, description="Generation stamp for settlement events")

    @property
    def is_internal(self) -> bool:
        return (
            self.type in INTERNAL_EVENTS
            or self.type.startswith(DONE_PREFIX)
            or self.type.startswith(ERROR_PREFIX)
        )

    @classmethod
    def done(cls, invoke_id: str, data: Any, generation: int) -> "Event":
        return cls(type=f"{DONE_PREFIX}{invoke_id}", data=data, generation=generation)

    @classmethod
    def failed(cls, invoke_id: str, error: BaseException, generation: int) -> "Event":
        return cls(
            type=f"{ERROR_PREFIX}{invoke_id}",
            error=f"{type(error).__name__}: {error}",
            generation=generation,
        )


EventLike = Union[Event, Mapping[str, Any], str]


def to_event(event: EventLike, payload: Optional[Mapping[str, Any]] = None) -> Event:
    """Coerce an event kind string, a mapping or an Event into an Event."""
    if isinstance(event, Event):
        return event
    if isinstance(event, str):
        return Event(type=event, payload=dict(payload or {}))
    return Event(**event)


class InvocationHandle(BaseModel):
    """Identifies one started invocation; stale once the engine leaves its state."""

    model_config = ConfigDict(frozen=True)

    id: str
    src: str
    state: str
    generation: int


class InvocationOutcome(BaseModel):
    """Settlement of an async service: a value or a failure."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    data: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, data: Any = None) -> "InvocationOutcome":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: BaseException) -> "InvocationOutcome":
        return cls(ok=False, error=error)
