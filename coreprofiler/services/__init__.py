"""Services module - exports all service modules for engine registration."""

from . import tracking, countries, analytics, navigation, profile

__all__ = ['tracking', 'countries', 'analytics', 'navigation', 'profile']
