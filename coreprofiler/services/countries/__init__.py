"""Country list service module."""

from .actions import handle_countries, get_country_state_options
from .services import get_countries

__all__ = ['handle_countries', 'get_country_state_options', 'get_countries']
