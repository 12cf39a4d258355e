"""Tracking opt-in service module."""

from .actions import (
    handle_tracking_option,
    assign_opt_in_data_sharing,
    assign_opt_out,
    update_tracking_option,
)
from .services import get_allow_tracking_option, ALLOW_TRACKING_OPTION

__all__ = [
    'handle_tracking_option',
    'assign_opt_in_data_sharing',
    'assign_opt_out',
    'update_tracking_option',
    'get_allow_tracking_option',
    'ALLOW_TRACKING_OPTION',
]
