"""Pydantic models for state graph validation."""

from typing import Any, Dict, List, Literal, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import AmbiguousTransitionError, GraphDefinitionError


def _as_list(value: Any) -> Any:
    """Accept a single item where a list is expected."""
    if value is None:
        return []
    if isinstance(value, (str, dict, BaseModel)):
        return [value]
    return value


def _check_candidates(state: str, source: str, candidates: List["Transition"]) -> None:
    """Only the last candidate of a handler list may be unguarded."""
    for transition in candidates[:-1]:
        if transition.cond is None:
            raise AmbiguousTransitionError(state, source)


class Transition(BaseModel):
    """
    A single candidate transition.

    A transition without a target is targetless: its actions run but the
    current state is neither exited nor re-entered.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: Optional[str] = Field(None, description="Target state id")
    actions: List[str] = Field(default_factory=list, description="Action names run in order")
    cond: Optional[str] = Field(None, description="Guard name; transition is taken only if it passes")

    @model_validator(mode="before")
    @classmethod
    def target_shorthand(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"target": data}
        return data

    @field_validator("actions", mode="before")
    @classmethod
    def actions_as_list(cls, v):
        return _as_list(v)


class Invoke(BaseModel):
    """Async service started when a state is entered."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    src: str = Field(..., description="Service name")
    id: Optional[str] = Field(None, description="Invocation id (defaults to src)")
    on_done: List[Transition] = Field(default_factory=list, description="Candidates on success")
    on_error: List[Transition] = Field(default_factory=list, description="Candidates on failure")

    @field_validator("on_done", "on_error", mode="before")
    @classmethod
    def transitions_as_list(cls, v):
        return _as_list(v)

    @property
    def invoke_id(self) -> str:
        return self.id or self.src


class ExitChoice(BaseModel):
    """One branch of a first-match exit policy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    event: Optional[str] = Field(None, description="Event kind that must have triggered the exit")
    cond: Optional[str] = Field(None, description="Guard name evaluated against (context, event)")
    actions: List[str] = Field(default_factory=list)

    @field_validator("actions", mode="before")
    @classmethod
    def actions_as_list(cls, v):
        return _as_list(v)


class StateNode(BaseModel):
    """
    Represents a single state of the wizard.

    A state can:
    - Handle host events (``events``)
    - Invoke an async service on entry (``invoke``)
    - Route onward immediately (``always``)
    - Be final, which ends the run
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["normal", "final"] = Field("normal", description="State type: normal or final")
    events: Dict[str, List[Transition]] = Field(default_factory=dict, description="Event kind -> candidates")
    invoke: Optional[Invoke] = Field(None, description="Service invoked on entry")
    always: List[Transition] = Field(default_factory=list, description="Eventless candidates checked on entry")
    entry: List[str] = Field(default_factory=list, description="Entry action names")
    exit: List[str] = Field(default_factory=list, description="Exit action names")
    exit_choose: List[ExitChoice] = Field(default_factory=list, description="First-match exit branches")
    meta: Dict[str, Any] = Field(default_factory=dict, description="Host metadata (progress, component)")

    @field_validator("events", mode="before")
    @classmethod
    def events_as_lists(cls, v):
        if v is None:
            return {}
        if isinstance(v, dict):
            return {kind: _as_list(candidates) for kind, candidates in v.items()}
        return v

    @field_validator("always", "entry", "exit", "exit_choose", mode="before")
    @classmethod
    def as_list(cls, v):
        return _as_list(v)

    @model_validator(mode="after")
    def final_is_terminal(self):
        if self.type == "final" and (self.events or self.always or self.invoke):
            raise GraphDefinitionError("final states cannot declare events, always transitions or an invocation")
        return self

    @property
    def is_final(self) -> bool:
        return self.type == "final"

    def transitions(self) -> List[Transition]:
        """Every candidate transition declared by this state."""
        found = [t for candidates in self.events.values() for t in candidates]
        found.extend(self.always)
        if self.invoke:
            found.extend(self.invoke.on_done)
            found.extend(self.invoke.on_error)
        return found


class Machine(BaseModel):
    """
    Immutable description of a wizard: initial state, state table and default context.

    Actions, services and guards are referenced by name and resolved against
    ``Bindings`` when an engine is built.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., description="Machine identifier (e.g., 'core_profiler')")
    version: str = Field("1.0", description="Graph version")
    description: str = Field("", description="Human-readable description")
    initial: str = Field(..., description="Initial state id")
    context: Dict[str, Any] = Field(default_factory=dict, description="Default context values")
    states: Dict[str, StateNode] = Field(..., description="State table")

    @field_validator("version", mode="before")
    @classmethod
    def version_as_str(cls, v):
        return str(v)

    @model_validator(mode="after")
    def check_graph(self):
        if self.initial not in self.states:
            raise GraphDefinitionError(f"Initial state '{self.initial}' is not declared")

        for name, node in self.states.items():
            for transition in node.transitions():
                if transition.target is not None and transition.target not in self.states:
                    raise GraphDefinitionError(
                        f"State '{name}' targets unknown state '{transition.target}'"
                    )
            for kind, candidates in node.events.items():
                _check_candidates(name, f"event '{kind}'", candidates)
            _check_candidates(name, "always", node.always)
            if node.invoke:
                _check_candidates(name, "on_done", node.invoke.on_done)
                _check_candidates(name, "on_error", node.invoke.on_error)
        return self

    def final_states(self) -> List[str]:
        return [name for name, node in self.states.items() if node.is_final]

    def referenced_actions(self) -> Set[str]:
        names: Set[str] = set()
        for node in self.states.values():
            names.update(node.entry)
            names.update(node.exit)
            for choice in node.exit_choose:
                names.update(choice.actions)
            for transition in node.transitions():
                names.update(transition.actions)
        return names

    def referenced_services(self) -> Set[str]:
        return {node.invoke.src for node in self.states.values() if node.invoke}

    def referenced_guards(self) -> Set[str]:
        names: Set[str] = set()
        for node in self.states.values():
            names.update(t.cond for t in node.transitions() if t.cond)
            names.update(c.cond for c in node.exit_choose if c.cond)
        return names
