"""Navigation services - timed loader step."""

import asyncio
from typing import Any, Mapping

DEFAULT_LOADER_SECONDS = 3.0


async def show_loader(ctx: Mapping[str, Any], event, runner) -> None:
    """Keep the loader on screen for ``loader_seconds``; settles with no value."""
    seconds = float(runner.get_setting('loader_seconds', DEFAULT_LOADER_SECONDS))
    await asyncio.sleep(seconds)
