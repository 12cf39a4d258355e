"""Core profiler engine - interprets a state graph with injected bindings."""

import asyncio
import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Set

from pydantic import BaseModel, ConfigDict

from .actions import is_assignment
from .bindings import Bindings
from .context import ContextStore
from .errors import EngineStateError
from .events import (
    ALWAYS_EVENT,
    DONE_PREFIX,
    ERROR_PREFIX,
    INIT_EVENT,
    Event,
    EventLike,
    InvocationHandle,
    InvocationOutcome,
    to_event,
)
from .runner import ActionRunner
from .schema import Invoke, Machine, StateNode, Transition

logger = logging.getLogger(__name__)

MAX_ALWAYS_STEPS = 100


class StateSnapshot(BaseModel):
    """What the host sees after a transition settles."""

    model_config = ConfigDict(frozen=True)

    value: str
    context: Dict[str, Any]
    meta: Dict[str, Any]
    done: bool

    @property
    def progress(self) -> Optional[int]:
        return self.meta.get('progress')

    @property
    def component(self) -> Optional[str]:
        return self.meta.get('component')


class ProfilerEngine:
    """
    Executes a state graph.

    Key responsibilities:
    - Track the current state and own the context
    - Run exit, transition and entry actions in order
    - Start invocations and route their settlement back into the graph
    - Follow "always" transitions without waiting for the host
    - Queue events sent while a transition is in progress
    """

    def __init__(
        self,
        machine: Machine,
        runner: ActionRunner,
        bindings: Optional[Bindings] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        """
        Initialize the engine.

        Args:
            machine: Validated state graph
            runner: ActionRunner implementation for side effects
            bindings: Implementations for the actions, services and guards the graph names
            context: Initial context (default: the machine's declared defaults)

        Raises:
            UnresolvedBindingError: If the graph names something ``bindings`` lacks
        """
        self.machine = machine
        self.runner = runner
        self.bindings = bindings or Bindings()
        self.bindings.validate(machine)

        self._store = ContextStore(machine.context if context is None else context)
        self._state: Optional[str] = None
        self._generation = 0
        self._pending: Optional[InvocationHandle] = None
        self._tasks: Set[asyncio.Task] = set()
        self._queue: Deque[Event] = deque()
        self._processing = False
        self._started = False
        self._done = False
        self._listeners: List[Callable[[StateSnapshot], None]] = []

    # Read side

    @property
    def state(self) -> Optional[str]:
        return self._state

    @property
    def context(self) -> Mapping[str, Any]:
        return self._store.get()

    @property
    def node(self) -> StateNode:
        if self._state is None:
            raise EngineStateError("Engine has not been started")
        return self.machine.states[self._state]

    @property
    def meta(self) -> Dict[str, Any]:
        return dict(self.node.meta)

    @property
    def done(self) -> bool:
        return self._done

    @property
    def started(self) -> bool:
        return self._started

    @property
    def pending(self) -> Optional[InvocationHandle]:
        return self._pending

    def snapshot(self) -> StateSnapshot:
        node = self.node
        return StateSnapshot(
            value=self._state,
            context=self._store.to_dict(),
            meta=dict(node.meta),
            done=self._done,
        )

    def subscribe(self, listener: Callable[[StateSnapshot], None]) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every settled transition.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # Host side

    def rebind(self, bindings: Bindings) -> None:
        """Replace bindings. Only allowed before ``start()``."""
        if self._started:
            raise EngineStateError("Bindings cannot change after start()")
        bindings.validate(self.machine)
        self.bindings = bindings

    def start(self) -> StateSnapshot:
        """Enter the initial state (entry actions, invocation, always transitions)."""
        if self._started:
            raise EngineStateError("Engine already started")
        self._started = True
        logger.info(f"Starting machine '{self.machine.id}' in state '{self.machine.initial}'")

        def enter_initial() -> bool:
            self._enter(self.machine.initial, Event(type=INIT_EVENT), 0)
            return True

        self._run(enter_initial)
        return self.snapshot()

    def send(self, event: EventLike, payload: Optional[Mapping[str, Any]] = None) -> bool:
        """
        Deliver a host event.

        Args:
            event: Event, mapping with 'type'/'payload', or event kind string
            payload: Payload when ``event`` is a kind string

        Returns:
            True if the event was handled (or queued behind a running transition)
        """
        if not self._started:
            raise EngineStateError("send() called before start()")

        event = to_event(event, payload)
        if event.is_internal:
            logger.warning(f"Rejected internal event kind '{event.type}' from host")
            return False

        if self._processing:
            self._queue.append(event)
            return True
        return self._run(lambda: self._dispatch(event))

    def resolve_invocation(self, handle: InvocationHandle, outcome: InvocationOutcome) -> bool:
        """
        Route an invocation settlement into the graph.

        Settlements for a handle that is no longer pending (the engine moved
        on) are discarded without touching the context.

        Returns:
            True if the settlement was applied
        """
        if handle != self._pending:
            logger.debug(
                f"Discarding stale settlement of '{handle.id}' from state '{handle.state}' "
                f"(generation {handle.generation}, now {self._generation})"
            )
            return False

        if outcome.ok:
            event = Event.done(handle.id, outcome.data, handle.generation)
        else:
            event = Event.failed(handle.id, outcome.error, handle.generation)
        self._pending = None

        if self._processing:
            self._queue.append(event)
            return True
        return self._run(lambda: self._dispatch(event))

    async def settle(self) -> StateSnapshot:
        """Wait until no invocation is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
        return self.snapshot()

    # Transition protocol

    def _run(self, step: Callable[[], bool]) -> bool:
        self._processing = True
        try:
            handled = step()
            while self._queue:
                if self._dispatch(self._queue.popleft()):
                    handled = True
        finally:
            # Events queued behind a failed step are dropped with it
            self._queue.clear()
            self._processing = False

        if handled:
            snapshot = self.snapshot()
            for listener in list(self._listeners):
                listener(snapshot)
        return handled

    def _dispatch(self, event: Event) -> bool:
        if self._done:
            logger.debug(f"Machine '{self.machine.id}' is done, ignoring '{event.type}'")
            return False

        if event.generation is not None and event.generation != self._generation:
            logger.debug(f"Discarding stale '{event.type}' (generation {event.generation})")
            return False

        transition = self._select(self._candidates(self.node, event), event)
        if transition is None:
            logger.debug(f"No transition for '{event.type}' in state '{self._state}'")
        else:
            self._take(transition, event, 0)
            if transition.target is not None:
                return True

        # Eventless transitions are re-checked after every event, so a state
        # waiting on a guard moves on once the guard passes
        return self._follow_always(0) or transition is not None

    def _candidates(self, node: StateNode, event: Event) -> List[Transition]:
        invoke: Optional[Invoke] = node.invoke
        if invoke is not None:
            if event.type == f"{DONE_PREFIX}{invoke.invoke_id}":
                return invoke.on_done
            if event.type == f"{ERROR_PREFIX}{invoke.invoke_id}":
                if not invoke.on_error:
                    logger.warning(f"Unhandled failure of '{invoke.src}' in state '{self._state}': {event.error}")
                return invoke.on_error
        return node.events.get(event.type, [])

    def _guard(self, name: Optional[str], event: Event) -> bool:
        if name is None:
            return True
        return bool(self.bindings.guards[name](self._store.get(), event))

    def _select(self, candidates: List[Transition], event: Event) -> Optional[Transition]:
        for transition in candidates:
            if self._guard(transition.cond, event):
                return transition
        return None

    def _take(self, transition: Transition, event: Event, depth: int) -> None:
        if transition.target is None:
            self._execute(transition.actions, event)
            return

        source = self._state
        self._exit(self.node, event)
        self._execute(transition.actions, event)
        logger.debug(f"'{source}' --{event.type}--> '{transition.target}'")
        self._enter(transition.target, event, depth)

    def _exit(self, node: StateNode, event: Event) -> None:
        self._execute(node.exit, event)
        for choice in node.exit_choose:
            if choice.event is not None and choice.event != event.type:
                continue
            if self._guard(choice.cond, event):
                self._execute(choice.actions, event)
                break

    def _enter(self, name: str, event: Event, depth: int) -> None:
        self._state = name
        self._generation += 1
        self._pending = None
        node = self.node
        logger.info(f"Entered state '{name}'")

        self._execute(node.entry, event)

        if node.is_final:
            self._done = True
            logger.info(f"Machine '{self.machine.id}' completed in state '{name}'")
            return

        if node.invoke is not None:
            self._invoke(node.invoke, event)

        self._follow_always(depth)

    def _follow_always(self, depth: int) -> bool:
        node = self.node
        if self._done or not node.always:
            return False

        always = Event(type=ALWAYS_EVENT)
        transition = self._select(node.always, always)
        if transition is None:
            return False
        if depth >= MAX_ALWAYS_STEPS:
            raise EngineStateError(f"Always transitions did not settle (last state '{self._state}')")
        self._take(transition, always, depth + 1)
        return True

    def _execute(self, names: List[str], event: Event) -> None:
        for name in names:
            action = self.bindings.actions[name]
            if is_assignment(action):
                self._store.replace(action.apply(self._store.get(), event))
            else:
                action(self._store.get(), event, self.runner)

    # Invocations

    def _invoke(self, invoke: Invoke, event: Event) -> None:
        handle = InvocationHandle(
            id=invoke.invoke_id,
            src=invoke.src,
            state=self._state,
            generation=self._generation,
        )
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise EngineStateError(
                f"State '{self._state}' invokes '{invoke.src}' but no event loop is running"
            ) from e

        self._pending = handle
        service = self.bindings.services[invoke.src]
        task = loop.create_task(self._run_service(handle, service, self._store.get(), event))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_service(self, handle: InvocationHandle, service, context, event: Event) -> None:
        try:
            data = await service(context, event, self.runner)
        except Exception as e:
            logger.warning(f"Service '{handle.src}' failed in state '{handle.state}': {type(e).__name__}: {e}")
            self.resolve_invocation(handle, InvocationOutcome.failure(e))
        else:
            self.resolve_invocation(handle, InvocationOutcome.success(data))
