"""Country actions - turn the raw country list into selectable options."""

import html
from typing import Any, Dict, Iterable, Mapping

from coreprofiler.engine.actions import assign
from coreprofiler.engine.events import Event

STATE_SEPARATOR = ' — '


def get_country_state_options(countries: Iterable[Mapping[str, Any]]) -> Dict[str, str]:
    """Build location options from a country list.

    Countries without states map ``code -> name``; countries with states
    contribute one ``code:state -> "name — state"`` entry per state.
    HTML entities in names are decoded.

    Args:
        countries: ``[{code, name, states: [{code, name}]}]``

    Returns:
        Ordered mapping of location key to display label

    Examples:
        >>> get_country_state_options([{'code': 'NZ', 'name': 'New Zealand', 'states': []}])
        {'NZ': 'New Zealand'}
    """
    options: Dict[str, str] = {}

    for country in countries:
        name = html.unescape(country.get('name', ''))
        states = country.get('states') or []

        if not states:
            options[country['code']] = name

        for state in states:
            key = f"{country['code']}:{state['code']}"
            options[key] = f"{name}{STATE_SEPARATOR}{html.unescape(state.get('name', ''))}"

    return options


def _countries_from_result(ctx: Mapping[str, Any], event: Event) -> Dict[str, str]:
    return get_country_state_options(event.data or [])


handle_countries = assign(countries=_countries_from_result)
