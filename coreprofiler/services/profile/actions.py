"""Profile actions - store step answers in the context."""

from typing import Any, Dict, List, Mapping

from coreprofiler.engine.actions import assign
from coreprofiler.engine.events import Event


def _user_profile(ctx: Mapping[str, Any], event: Event) -> Dict[str, Any]:
    profile = dict(event.payload.get('user_profile') or {})
    profile['skipped'] = False
    return profile


def _skipped_profile(ctx: Mapping[str, Any], event: Event) -> Dict[str, Any]:
    return {'skipped': True}


def _business_info(ctx: Mapping[str, Any], event: Event) -> Dict[str, Any]:
    info = dict(event.payload.get('business_info') or {})
    # Keep the previous location when the step did not send one
    info.setdefault('location', (ctx.get('business_info') or {}).get('location'))
    return info


def _extensions_selected(ctx: Mapping[str, Any], event: Event) -> List[str]:
    return list(event.payload.get('extensions_selected') or [])


def _available_extensions(ctx: Mapping[str, Any], event: Event) -> List[Dict[str, Any]]:
    """Keep every offered extension.

    Hosts that hide some extensions replace
    ``profile.filter_extensions_available`` through ``Bindings.override``.
    """
    return list(ctx.get('extensions_available', []))


assign_user_profile = assign(user_profile=_user_profile)
assign_user_profile_skipped = assign(user_profile=_skipped_profile)
assign_business_info = assign(business_info=_business_info)
assign_extensions_selected = assign(extensions_selected=_extensions_selected)
filter_extensions_available = assign(extensions_available=_available_extensions)
