"""Terminal host - renders the current step and turns answers into events."""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from .engine import EngineStateError, Event, ProfilerEngine, StateSnapshot
from .engine.runner import ActionRunner

logger = logging.getLogger(__name__)

# States without a component are loading states
LOADER_COMPONENT = 'Loader'
SKIP_ANSWER = 'skip'
# Sent while a pass-through state waits on its guard; no state handles it
READY_CHECK_EVENT = 'READY_CHECK'


def parse_bool(value: Any) -> bool:
    """Convert y/yes/true/1 (any case) to True, everything else to False."""
    if isinstance(value, bool):
        return value
    return str(value).lower().strip() in ('y', 'yes', 'true', '1')


class TerminalHost:
    """
    Drives a ProfilerEngine from the terminal.

    Interactive mode prompts through the runner. Headless mode (``answers``
    given) reads answers from a mapping keyed by component, then field:

        {'IntroOptIn': {'opt_in': 'yes'}, 'BusinessInfo': {'location': 'US:NY'}}

    Missing answers fall back to the prompt's default.
    """

    def __init__(self, engine: ProfilerEngine, runner: ActionRunner,
                 answers: Optional[Dict[str, Dict[str, Any]]] = None,
                 poll_seconds: float = 0.5, max_polls: int = 120):
        self.engine = engine
        self.runner = runner
        self.headless_mode = answers is not None
        self.answers = answers or {}
        self.poll_seconds = poll_seconds
        self.max_polls = max_polls
        self.views: Dict[str, Callable[[StateSnapshot], Event]] = {
            'IntroOptIn': self.intro_opt_in,
            'UserProfile': self.user_profile,
            'BusinessInfo': self.business_info,
            'BusinessLocation': self.business_location,
            'Extensions': self.extensions,
        }

    async def run(self) -> StateSnapshot:
        """Run the wizard until the engine reaches a final state."""
        self.engine.start()
        polls = 0

        while not self.engine.done:
            snapshot = self.engine.snapshot()
            component = snapshot.component or LOADER_COMPONENT
            view = self.views.get(component)

            if view is None:
                if self.engine.pending is not None:
                    polls = 0
                    self.render_header(snapshot)
                    self.runner.display("Loading...")
                    await self.engine.settle()
                    continue
                polls = await self.wait_until_ready(snapshot, polls)
                continue

            polls = 0
            self.render_header(snapshot)
            event = view(snapshot)
            if not self.engine.send(event):
                logger.warning(f"View '{component}' produced unhandled event '{event.type}'")

        await self.engine.settle()
        return self.engine.snapshot()

    async def wait_until_ready(self, snapshot: StateSnapshot, polls: int) -> int:
        """Re-check a pass-through state whose guard has not passed yet.

        Returns:
            Number of checks made so far in this state

        Raises:
            EngineStateError: If the state is still waiting after ``max_polls`` checks
        """
        if polls >= self.max_polls:
            raise EngineStateError(
                f"State '{snapshot.value}' has no view and did not become ready "
                f"after {polls} checks"
            )
        if polls == 0:
            self.runner.display("Waiting...")
        await asyncio.sleep(self.poll_seconds)
        self.engine.send(READY_CHECK_EVENT)
        return polls + 1

    def render_header(self, snapshot: StateSnapshot) -> None:
        progress = snapshot.progress if snapshot.progress is not None else 0
        self.runner.display(f"[{progress:>3}%] {snapshot.component or LOADER_COMPONENT}")

    def ask(self, component: str, field: str, prompt: str, default: Any = None) -> Any:
        """Get one answer, from the answers mapping or the user."""
        if self.headless_mode:
            self.runner.display(prompt)
            value = self.answers.get(component, {}).get(field)
            if value is None or value == '':
                return default
            return value
        return self.runner.get_input(prompt, default)

    # Views

    def intro_opt_in(self, snapshot: StateSnapshot) -> Event:
        answer = self.ask(
            'IntroOptIn', 'opt_in',
            f"Share usage data to help improve the store? (y/n, or '{SKIP_ANSWER}')",
            snapshot.context.get('opt_in_data_sharing', False),
        )
        if str(answer).lower().strip() == SKIP_ANSWER:
            return Event(type='INTRO_SKIPPED', payload={'opt_in_data_sharing': False})
        return Event(type='INTRO_COMPLETED', payload={'opt_in_data_sharing': parse_bool(answer)})

    def user_profile(self, snapshot: StateSnapshot) -> Event:
        answer = self.ask('UserProfile', 'setup', "What best describes you? (blank to skip)", '')
        if not answer:
            return Event(type='USER_PROFILE_SKIPPED', payload={'user_profile': {'skipped': True}})
        return Event(type='USER_PROFILE_COMPLETED', payload={'user_profile': {'setup': answer}})

    def business_info(self, snapshot: StateSnapshot) -> Event:
        current = snapshot.context.get('business_info', {})
        store_name = self.ask('BusinessInfo', 'store_name', "Store name", current.get('store_name', ''))
        location = self.ask('BusinessInfo', 'location', "Store location", current.get('location'))
        return Event(
            type='BUSINESS_INFO_COMPLETED',
            payload={'business_info': {'store_name': store_name, 'location': location}},
        )

    def business_location(self, snapshot: StateSnapshot) -> Event:
        countries = snapshot.context.get('countries', {})
        default = snapshot.context.get('business_info', {}).get('location')

        while True:
            location = self.ask('BusinessLocation', 'location', "Where is your store based?", default)
            # An empty country list means the lookup failed; accept any answer
            if not countries or location in countries:
                break
            if self.headless_mode:
                raise ValueError(f"Unknown location: {location}")
            self.runner.display(f"Error: Unknown location: {location}")

        return Event(type='BUSINESS_LOCATION_COMPLETED', payload={'business_info': {'location': location}})

    def extensions(self, snapshot: StateSnapshot) -> Event:
        available = snapshot.context.get('extensions_available', [])
        if available:
            self.runner.display("")  # Blank line before options
            for i, extension in enumerate(available, 1):
                key = extension.get('key', '')
                self.runner.display(f"  {i}. {extension.get('name') or key} ({key})")
            self.runner.display("")  # Blank line after options

        answer = self.ask('Extensions', 'extensions', "Extensions to install (comma separated)", '')
        if isinstance(answer, list):
            selected: List[str] = [str(item) for item in answer]
        else:
            selected = [item.strip() for item in str(answer).split(',') if item.strip()]
        return Event(type='EXTENSIONS_COMPLETED', payload={'extensions_selected': selected})
