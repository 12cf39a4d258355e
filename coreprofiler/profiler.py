"""Core profiler factory - wires the default graph, bindings and runner."""

import logging
from pathlib import Path
from typing import Optional

from .engine import Bindings, ProfilerEngine, SpecLoader
from .engine.runner import ActionRunner
from .models import CoreProfilerContext

logger = logging.getLogger(__name__)

MACHINE_NAME = 'core_profiler'


def register_services() -> Bindings:
    """Bindings for every action, service and guard the core profiler graph names."""
    from coreprofiler.services import analytics, countries, navigation, profile, tracking

    actions = {
        # tracking
        'tracking.handle_tracking_option': tracking.handle_tracking_option,
        'tracking.assign_opt_in_data_sharing': tracking.assign_opt_in_data_sharing,
        'tracking.assign_opt_out': tracking.assign_opt_out,
        'tracking.update_tracking_option': tracking.update_tracking_option,
        # analytics
        'analytics.record_intro_viewed': analytics.record_intro_viewed,
        'analytics.record_intro_completed': analytics.record_intro_completed,
        'analytics.record_intro_skipped': analytics.record_intro_skipped,
        'analytics.record_skip_business_location_viewed': analytics.record_skip_business_location_viewed,
        'analytics.record_skip_business_location_completed': analytics.record_skip_business_location_completed,
        # countries
        'countries.handle_countries': countries.handle_countries,
        # profile
        'profile.assign_user_profile': profile.assign_user_profile,
        'profile.assign_user_profile_skipped': profile.assign_user_profile_skipped,
        'profile.assign_business_info': profile.assign_business_info,
        'profile.assign_extensions_selected': profile.assign_extensions_selected,
        'profile.filter_extensions_available': profile.filter_extensions_available,
        # navigation
        'navigation.redirect_to_home': navigation.redirect_to_home,
    }
    services = {
        'tracking.get_allow_tracking_option': tracking.get_allow_tracking_option,
        'countries.get_countries': countries.get_countries,
        'navigation.show_loader': navigation.show_loader,
    }
    guards = {
        'profile.is_geolocation_ready': profile.is_geolocation_ready,
        'profile.is_extensions_list_ready': profile.is_extensions_list_ready,
    }
    return Bindings(actions=actions, services=services, guards=guards)


def create_core_profiler(
    runner: ActionRunner,
    bindings: Optional[Bindings] = None,
    base_path: Optional[Path] = None,
) -> ProfilerEngine:
    """
    Build an engine for the core profiler graph.

    Args:
        runner: ActionRunner implementation for side effects
        bindings: Host overrides merged over the default bindings
        base_path: Directory holding ``flows/`` (default: the coreprofiler package)

    Returns:
        Engine ready for ``start()``

    Raises:
        GraphDefinitionError: If the graph or its bindings are malformed
        pydantic.ValidationError: If the graph's default context is not a valid CoreProfilerContext
    """
    machine = SpecLoader(base_path=base_path).load_machine(MACHINE_NAME)

    # Validate defaults against the typed context before anything runs
    context = CoreProfilerContext(**machine.context).model_dump(exclude_none=True)

    merged = register_services()
    if bindings is not None:
        merged = merged.override(
            actions=bindings.actions,
            services=bindings.services,
            guards=bindings.guards,
        )

    logger.debug(f"Building '{machine.id}' v{machine.version} with {len(merged.actions)} actions")
    return ProfilerEngine(machine, runner, bindings=merged, context=context)
