"""Analytics service module."""

from .actions import (
    record_intro_viewed,
    record_intro_completed,
    record_intro_skipped,
    record_skip_business_location_viewed,
    record_skip_business_location_completed,
)

__all__ = [
    'record_intro_viewed',
    'record_intro_completed',
    'record_intro_skipped',
    'record_skip_business_location_viewed',
    'record_skip_business_location_completed',
]
