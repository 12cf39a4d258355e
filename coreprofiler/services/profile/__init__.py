"""Profile answers service module."""

from .actions import (
    assign_user_profile,
    assign_user_profile_skipped,
    assign_business_info,
    assign_extensions_selected,
    filter_extensions_available,
)
from .guards import is_geolocation_ready, is_extensions_list_ready

__all__ = [
    'assign_user_profile',
    'assign_user_profile_skipped',
    'assign_business_info',
    'assign_extensions_selected',
    'filter_extensions_available',
    'is_geolocation_ready',
    'is_extensions_list_ready',
]
