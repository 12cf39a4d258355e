"""Tests for ActionRunner interface and implementations."""

import pytest
import yaml

from coreprofiler.config import ProfilerSettings
from coreprofiler.engine.runner import ActionRunner, RealActionRunner, MockActionRunner


def test_action_runner_is_abstract():
    """ActionRunner cannot be instantiated directly."""
    with pytest.raises(TypeError):
        ActionRunner()


def test_mock_runner_records_update_options():
    """MockActionRunner records update_options calls."""
    mock = MockActionRunner()

    mock.update_options({'woocommerce_allow_tracking': 'yes'})

    assert mock.calls == [('update_options', {'woocommerce_allow_tracking': 'yes'})]


def test_mock_runner_get_option_uses_responses():
    mock = MockActionRunner()
    mock.responses['options'] = {'woocommerce_allow_tracking': 'no'}

    assert mock.get_option('woocommerce_allow_tracking') == 'no'
    assert mock.get_option('unset_option') is None
    assert mock.calls_to('get_option') == [
        ('get_option', 'woocommerce_allow_tracking'),
        ('get_option', 'unset_option'),
    ]


def test_mock_runner_raises_scripted_exceptions():
    """Exception instances in responses are raised, simulating failing lookups."""
    mock = MockActionRunner()
    mock.responses['countries'] = ConnectionError("offline")

    with pytest.raises(ConnectionError, match="offline"):
        mock.get_countries()

    assert mock.calls == [('get_countries',)]


def test_mock_runner_records_side_effects():
    mock = MockActionRunner()

    mock.set_tracking_enabled(True)
    mock.record_event('storeprofiler_step_view', {'step': 'store_details'})
    mock.navigate('/home')
    mock.display("Hello")

    assert mock.calls == [
        ('set_tracking_enabled', True),
        ('record_event', 'storeprofiler_step_view', {'step': 'store_details'}),
        ('navigate', '/home'),
        ('display', 'Hello'),
    ]


def test_mock_runner_settings():
    mock = MockActionRunner()

    assert mock.get_setting('wc_version') == '7.9.0'
    assert mock.get_setting('missing', 'fallback') == 'fallback'


def test_mock_runner_get_input_queue():
    """MockActionRunner can simulate user input from a queue."""
    mock = MockActionRunner()
    mock.input_queue = ['yes', '', 'NZ']

    assert mock.get_input("Share usage data?", False) == 'yes'
    # Empty response falls back to the default
    assert mock.get_input("Store name", 'My Store') == 'My Store'
    assert mock.get_input("Location") == 'NZ'
    # Queue exhausted
    assert mock.get_input("Extensions") == ''
    assert len(mock.calls_to('get_input')) == 4


@pytest.fixture
def settings(tmp_path):
    return ProfilerSettings(options_path=str(tmp_path / "options.yaml"))


class TestRealActionRunner:
    """Tests for the file-backed runner."""

    def test_update_options_deep_merges(self, settings):
        runner = RealActionRunner(settings)

        runner.update_options({'woocommerce_allow_tracking': 'yes', 'profile': {'a': 1}})
        runner.update_options({'profile': {'b': 2}})

        with open(settings.options_path) as f:
            stored = yaml.safe_load(f)
        assert stored == {'woocommerce_allow_tracking': 'yes', 'profile': {'a': 1, 'b': 2}}
        assert runner.get_option('woocommerce_allow_tracking') == 'yes'

    def test_get_option_without_file(self, settings):
        runner = RealActionRunner(settings)
        assert runner.get_option('woocommerce_allow_tracking') is None

    def test_tracking_starts_from_stored_option(self, settings):
        with open(settings.options_path, 'w') as f:
            yaml.safe_dump({'woocommerce_allow_tracking': 'yes'}, f)

        assert RealActionRunner(settings).tracking_enabled is True

    def test_record_event_gated_on_tracking(self, settings, caplog):
        runner = RealActionRunner(settings)

        with caplog.at_level('DEBUG', logger='coreprofiler.engine.runner'):
            runner.record_event('storeprofiler_step_view', {'step': 'store_details'})
            runner.set_tracking_enabled(True)
            runner.record_event('storeprofiler_step_complete', {'step': 'store_details'})

        assert "not recording storeprofiler_step_view" in caplog.text
        assert "Recorded event storeprofiler_step_complete" in caplog.text

    def test_bundled_countries(self, settings):
        countries = RealActionRunner(settings).get_countries()

        codes = [c['code'] for c in countries]
        assert 'US' in codes
        assert 'NZ' in codes

    def test_missing_country_file(self, tmp_path):
        settings = ProfilerSettings(
            options_path=str(tmp_path / "options.yaml"),
            countries_path=str(tmp_path / "missing.yaml"),
        )

        with pytest.raises(FileNotFoundError, match="Country list not found"):
            RealActionRunner(settings).get_countries()

    def test_navigate_records_url(self, settings, capsys):
        runner = RealActionRunner(settings)

        runner.navigate('/wp-admin/admin.php?page=wc-admin')

        assert runner.current_url == '/wp-admin/admin.php?page=wc-admin'
        assert "Redirecting to /wp-admin/admin.php?page=wc-admin" in capsys.readouterr().out

    def test_get_setting_reads_settings(self, tmp_path):
        settings = ProfilerSettings(options_path=str(tmp_path / "o.yaml"), wc_version='8.0.1')

        runner = RealActionRunner(settings)

        assert runner.get_setting('wc_version') == '8.0.1'
        assert runner.get_setting('nope', 'x') == 'x'

    def test_verbose_comes_from_settings(self, settings, monkeypatch):
        monkeypatch.setenv('PROFILER_VERBOSE', '1')

        assert RealActionRunner(settings).verbose is False
        assert RealActionRunner(settings.model_copy(update={'verbose': True})).verbose is True

    @pytest.mark.parametrize('value,expected', [('0', False), ('false', False), ('1', True), ('true', True)])
    def test_default_settings_parse_verbose_env(self, tmp_path, monkeypatch, value, expected):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv('PROFILER_VERBOSE', value)

        assert RealActionRunner().verbose is expected

    def test_get_input_uses_default(self, settings, monkeypatch):
        runner = RealActionRunner(settings)
        monkeypatch.setattr('builtins.input', lambda prompt: '')

        assert runner.get_input("Store name", 'My Store') == 'My Store'
        assert runner.get_input("Share usage data?", False) is False
