"""Readiness guards for the pass-through states.

Both default to ready. A host that loads geolocation or the extension list in
the background overrides them through ``Bindings.override(guards=...)``.
"""

from typing import Any, Mapping

from coreprofiler.engine.events import Event


def is_geolocation_ready(ctx: Mapping[str, Any], event: Event) -> bool:
    return True


def is_extensions_list_ready(ctx: Mapping[str, Any], event: Event) -> bool:
    return True
