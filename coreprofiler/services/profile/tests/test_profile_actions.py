"""Tests for profile answer actions and readiness guards."""

from coreprofiler.engine import Event
from coreprofiler.services.profile import (
    assign_business_info,
    assign_extensions_selected,
    assign_user_profile,
    assign_user_profile_skipped,
    filter_extensions_available,
    is_extensions_list_ready,
    is_geolocation_ready,
)


def test_assign_user_profile_marks_not_skipped():
    event = Event(type='USER_PROFILE_COMPLETED', payload={'user_profile': {'setup': 'new', 'skipped': True}})

    new = assign_user_profile.apply({'user_profile': {'skipped': True}}, event)

    assert new['user_profile'] == {'setup': 'new', 'skipped': False}


def test_assign_user_profile_skipped():
    event = Event(type='USER_PROFILE_SKIPPED', payload={'user_profile': {'setup': 'ignored'}})

    new = assign_user_profile_skipped.apply({'user_profile': {'setup': 'old', 'skipped': False}}, event)

    assert new['user_profile'] == {'skipped': True}


def test_assign_business_info():
    event = Event(type='BUSINESS_INFO_COMPLETED',
                  payload={'business_info': {'store_name': 'Shop', 'location': 'NZ'}})

    new = assign_business_info.apply({'business_info': {'location': 'US:CA'}}, event)

    assert new['business_info'] == {'store_name': 'Shop', 'location': 'NZ'}


def test_assign_business_info_keeps_previous_location():
    event = Event(type='BUSINESS_INFO_COMPLETED', payload={'business_info': {'store_name': 'Shop'}})

    new = assign_business_info.apply({'business_info': {'location': 'AU:VIC'}}, event)

    assert new['business_info'] == {'store_name': 'Shop', 'location': 'AU:VIC'}


def test_assign_extensions_selected():
    event = Event(type='EXTENSIONS_COMPLETED', payload={'extensions_selected': ('jetpack', 'payments')})

    new = assign_extensions_selected.apply({'extensions_selected': []}, event)

    assert new['extensions_selected'] == ['jetpack', 'payments']


def test_filter_extensions_available_keeps_every_entry():
    offered = [
        {'key': 'jetpack', 'name': 'Jetpack'},
        {'name': 'No key'},
    ]

    new = filter_extensions_available.apply({'extensions_available': offered}, Event(type='always'))

    assert new['extensions_available'] == offered


def test_guards_default_to_ready():
    assert is_geolocation_ready({}, Event(type='always')) is True
    assert is_extensions_list_ready({}, Event(type='always')) is True
