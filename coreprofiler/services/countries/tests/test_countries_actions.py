"""Tests for country option building."""

import pytest

from coreprofiler.engine import Event, MockActionRunner
from coreprofiler.services.countries import get_countries, get_country_state_options, handle_countries


def test_country_without_states():
    options = get_country_state_options([{'code': 'NZ', 'name': 'New Zealand', 'states': []}])
    assert options == {'NZ': 'New Zealand'}


def test_country_with_states_lists_each_state():
    options = get_country_state_options([{
        'code': 'US',
        'name': 'United States (US)',
        'states': [{'code': 'CA', 'name': 'California'}, {'code': 'NY', 'name': 'New York'}],
    }])

    # The country itself is not selectable when it has states
    assert options == {
        'US:CA': 'United States (US) — California',
        'US:NY': 'United States (US) — New York',
    }


def test_html_entities_decoded():
    options = get_country_state_options([
        {'code': 'CI', 'name': "C&ocirc;te d'Ivoire", 'states': []},
        {'code': 'XX', 'name': 'Land', 'states': [{'code': 'A', 'name': 'Saint &amp; Sons'}]},
    ])

    assert options['CI'] == "Côte d'Ivoire"
    assert options['XX:A'] == 'Land — Saint & Sons'


def test_missing_states_key():
    assert get_country_state_options([{'code': 'DE', 'name': 'Germany'}]) == {'DE': 'Germany'}


def test_order_follows_input():
    options = get_country_state_options([
        {'code': 'NZ', 'name': 'New Zealand'},
        {'code': 'AU', 'name': 'Australia', 'states': [{'code': 'VIC', 'name': 'Victoria'}]},
        {'code': 'DE', 'name': 'Germany'},
    ])

    assert list(options) == ['NZ', 'AU:VIC', 'DE']


def test_empty_list():
    assert get_country_state_options([]) == {}


def test_handle_countries_assigns_options():
    event = Event.done('countries.get_countries', [{'code': 'FR', 'name': 'France', 'states': []}], 3)

    new = handle_countries.apply({'countries': {}, 'other': 1}, event)

    assert new == {'countries': {'FR': 'France'}, 'other': 1}


def test_handle_countries_with_no_data():
    new = handle_countries.apply({'countries': {'FR': 'France'}}, Event.done('countries.get_countries', None, 3))
    assert new['countries'] == {}


@pytest.mark.asyncio
async def test_get_countries_uses_runner():
    runner = MockActionRunner()
    runner.responses['countries'] = [{'code': 'GB', 'name': 'United Kingdom (UK)', 'states': []}]

    result = await get_countries({}, Event(type='INTRO_SKIPPED'), runner)

    assert result == runner.responses['countries']
    assert runner.calls == [('get_countries',)]
