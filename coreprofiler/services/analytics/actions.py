"""Analytics actions - fire-and-forget step view/complete events."""

from typing import Any, Mapping

from coreprofiler.engine.events import Event

STEP_VIEW = 'storeprofiler_step_view'
STEP_COMPLETE = 'storeprofiler_step_complete'
STORE_DETAILS_SKIP = 'storeprofiler_store_details_skip'


def _record_step(runner, name: str, step: str) -> None:
    runner.record_event(name, {
        'step': step,
        'wc_version': runner.get_setting('wc_version', ''),
    })


def record_intro_viewed(ctx: Mapping[str, Any], event: Event, runner) -> None:
    _record_step(runner, STEP_VIEW, 'store_details')


def record_intro_completed(ctx: Mapping[str, Any], event: Event, runner) -> None:
    _record_step(runner, STEP_COMPLETE, 'store_details')


def record_intro_skipped(ctx: Mapping[str, Any], event: Event, runner) -> None:
    runner.record_event(STORE_DETAILS_SKIP)


def record_skip_business_location_viewed(ctx: Mapping[str, Any], event: Event, runner) -> None:
    _record_step(runner, STEP_VIEW, 'skip_business_location')


def record_skip_business_location_completed(ctx: Mapping[str, Any], event: Event, runner) -> None:
    _record_step(runner, STEP_COMPLETE, 'skip_business_location')
