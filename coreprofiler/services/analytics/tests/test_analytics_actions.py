"""Tests for analytics actions."""

import pytest

from coreprofiler.engine import Event, MockActionRunner
from coreprofiler.services.analytics import (
    record_intro_completed,
    record_intro_skipped,
    record_intro_viewed,
    record_skip_business_location_completed,
    record_skip_business_location_viewed,
)


@pytest.fixture
def mock_runner():
    runner = MockActionRunner()
    runner.settings['wc_version'] = '8.2.0'
    return runner


@pytest.mark.parametrize('action,name,step', [
    (record_intro_viewed, 'storeprofiler_step_view', 'store_details'),
    (record_intro_completed, 'storeprofiler_step_complete', 'store_details'),
    (record_skip_business_location_viewed, 'storeprofiler_step_view', 'skip_business_location'),
    (record_skip_business_location_completed, 'storeprofiler_step_complete', 'skip_business_location'),
])
def test_step_events_carry_step_and_version(mock_runner, action, name, step):
    action({}, Event(type='X'), mock_runner)

    assert mock_runner.calls == [('record_event', name, {'step': step, 'wc_version': '8.2.0'})]


def test_intro_skipped_has_no_properties(mock_runner):
    record_intro_skipped({}, Event(type='INTRO_SKIPPED'), mock_runner)

    assert mock_runner.calls == [('record_event', 'storeprofiler_store_details_skip', None)]


def test_missing_version_reported_empty():
    runner = MockActionRunner()
    runner.settings = {}

    record_intro_viewed({}, Event(type='init'), runner)

    assert runner.calls[0][2] == {'step': 'store_details', 'wc_version': ''}
