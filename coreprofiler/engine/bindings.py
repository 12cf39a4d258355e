"""Bindings - name -> implementation maps for actions, services and guards."""

from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from .actions import is_assignment
from .errors import UnresolvedBindingError
from .schema import Machine


class Bindings:
    """
    Resolves the names a state graph refers to.

    - actions: ``Assign`` instances or side-effect hooks ``fn(context, event, runner)``
    - services: ``async fn(context, event, runner)``
    - guards: ``fn(context, event) -> bool``

    Bindings are never mutated in place; ``override`` and ``wrap_actions``
    return new instances so a host can extend behaviour without editing the graph.
    """

    def __init__(
        self,
        actions: Optional[Mapping[str, Any]] = None,
        services: Optional[Mapping[str, Callable]] = None,
        guards: Optional[Mapping[str, Callable]] = None,
    ):
        self.actions: Mapping[str, Any] = MappingProxyType(dict(actions or {}))
        self.services: Mapping[str, Callable] = MappingProxyType(dict(services or {}))
        self.guards: Mapping[str, Callable] = MappingProxyType(dict(guards or {}))

    def override(
        self,
        actions: Optional[Mapping[str, Any]] = None,
        services: Optional[Mapping[str, Callable]] = None,
        guards: Optional[Mapping[str, Callable]] = None,
    ) -> "Bindings":
        """Return new bindings with the given entries replaced or added."""
        return Bindings(
            actions={**self.actions, **(actions or {})},
            services={**self.services, **(services or {})},
            guards={**self.guards, **(guards or {})},
        )

    def wrap_actions(self, wrapper: Callable[[str, Callable], Callable]) -> "Bindings":
        """Return new bindings whose side-effect hooks are ``wrapper(name, fn)``.

        Assignments are left as they are.

        Example:
            >>> def logged(name, fn):
            ...     def hook(ctx, event, runner):
            ...         runner.display(f"running {name}")
            ...         return fn(ctx, event, runner)
            ...     return hook
            >>> bindings = bindings.wrap_actions(logged)
        """
        wrapped: Dict[str, Any] = {}
        for name, action in self.actions.items():
            wrapped[name] = action if is_assignment(action) else wrapper(name, action)
        return Bindings(actions=wrapped, services=self.services, guards=self.guards)

    def missing(self, machine: Machine) -> Dict[str, list]:
        """Names the machine references that are not bound, grouped by kind."""
        return {
            'actions': sorted(machine.referenced_actions() - set(self.actions)),
            'services': sorted(machine.referenced_services() - set(self.services)),
            'guards': sorted(machine.referenced_guards() - set(self.guards)),
        }

    def validate(self, machine: Machine) -> None:
        """Fail fast if any name used by ``machine`` is unresolved.

        Raises:
            UnresolvedBindingError: listing every missing ``kind:name``
        """
        missing = self.missing(machine)
        names = [f"{kind[:-1]}:{name}" for kind, found in missing.items() for name in found]
        if names:
            raise UnresolvedBindingError(names)
