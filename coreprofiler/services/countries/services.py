"""Country list service."""

import asyncio
from typing import Any, Dict, List, Mapping


async def get_countries(ctx: Mapping[str, Any], event, runner) -> List[Dict[str, Any]]:
    """Fetch the country list from the runner's country store."""
    return await asyncio.to_thread(runner.get_countries)
