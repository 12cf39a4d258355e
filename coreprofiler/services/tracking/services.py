"""Tracking services - read the stored tracking option."""

import asyncio
from typing import Any, Mapping

ALLOW_TRACKING_OPTION = 'woocommerce_allow_tracking'


async def get_allow_tracking_option(ctx: Mapping[str, Any], event, runner) -> Any:
    """Fetch the stored allow-tracking option ('yes', 'no' or None).

    The option store is read in a worker thread so the event loop is not blocked.

    Args:
        ctx: Read-only context snapshot (unused)
        event: Event that entered the invoking state (unused)
        runner: ActionRunner instance for side effects

    Returns:
        Raw option value
    """
    return await asyncio.to_thread(runner.get_option, ALLOW_TRACKING_OPTION)
