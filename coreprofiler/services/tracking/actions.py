"""Tracking actions - opt-in assignment and persisting the tracking choice."""

from typing import Any, Dict, Mapping

from coreprofiler.engine.actions import assign
from coreprofiler.engine.events import Event

from .services import ALLOW_TRACKING_OPTION


def _stored_opt_in(ctx: Mapping[str, Any], event: Event) -> bool:
    # Anything but an explicit 'no' counts as opted in, including an unset option
    return event.data != 'no'


def _payload_opt_in(ctx: Mapping[str, Any], event: Event) -> bool:
    return bool(event.payload.get('opt_in_data_sharing', False))


def _opted_out(ctx: Mapping[str, Any], event: Event) -> bool:
    return False


handle_tracking_option = assign(opt_in_data_sharing=_stored_opt_in)
assign_opt_in_data_sharing = assign(opt_in_data_sharing=_payload_opt_in)
# Skipping the intro never opts in, whatever the payload says
assign_opt_out = assign(opt_in_data_sharing=_opted_out)


def update_tracking_option(ctx: Mapping[str, Any], event: Event, runner) -> None:
    """Apply the user's tracking choice and persist it.

    Runs after the opt-in assignment, so the context already holds the choice.

    Args:
        ctx: Read-only context snapshot
        event: INTRO_COMPLETED or INTRO_SKIPPED event
        runner: ActionRunner instance for side effects
    """
    opted_in = bool(ctx.get('opt_in_data_sharing', False))

    runner.set_tracking_enabled(opted_in)

    options: Dict[str, Any] = {ALLOW_TRACKING_OPTION: 'yes' if opted_in else 'no'}
    runner.update_options(options)
