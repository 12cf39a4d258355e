"""Tests for the command line interface."""

import pytest
import yaml
from typer.testing import CliRunner

from coreprofiler.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.delenv('PROFILER_VERBOSE', raising=False)
    path = tmp_path / "profiler-config.yaml"
    path.write_text(yaml.safe_dump({
        'profiler': {
            'options_path': str(tmp_path / "options.yaml"),
            'loader_seconds': 0,
            'home_url': '/shop/admin',
        },
    }))
    return path


def test_graph_lists_states():
    result = runner.invoke(app, ["graph"])

    assert result.exit_code == 0
    assert "core_profiler v1.0" in result.output
    assert "* initializing [0]" in result.output
    assert "INTRO_SKIPPED -> pre_skip_flow_business_location" in result.output
    assert "always -> business_info" in result.output
    assert "invoke navigation.show_loader" in result.output


def test_graph_missing_flow(tmp_path):
    result = runner.invoke(app, ["graph", "--name", "nothing", "--base-path", str(tmp_path)])

    assert result.exit_code == 1
    assert "Flow not found" in result.output


def test_run_headless_skip_path(tmp_path, config_file):
    answers = tmp_path / "answers.yaml"
    answers.write_text(yaml.safe_dump({
        'IntroOptIn': {'opt_in': 'skip'},
        'BusinessLocation': {'location': 'NZ'},
    }))

    result = runner.invoke(app, ["run", "--config", str(config_file), "--answers", str(answers)])

    assert result.exit_code == 0, result.output
    assert "Redirecting to /shop/admin" in result.output
    assert "Wizard finished in state 'complete'" in result.output

    with open(tmp_path / "options.yaml") as f:
        assert yaml.safe_load(f) == {'woocommerce_allow_tracking': 'no'}


def test_run_headless_main_path(tmp_path, config_file):
    answers = tmp_path / "answers.yaml"
    answers.write_text(yaml.safe_dump({
        'IntroOptIn': {'opt_in': 'yes'},
        'BusinessInfo': {'store_name': 'Kiwi Crafts', 'location': 'NZ'},
        'Extensions': {'extensions': 'jetpack'},
    }))

    result = runner.invoke(app, ["run", "--config", str(config_file), "--answers", str(answers)])

    assert result.exit_code == 0, result.output
    assert "[ 60%] BusinessInfo" in result.output

    with open(tmp_path / "options.yaml") as f:
        assert yaml.safe_load(f) == {'woocommerce_allow_tracking': 'yes'}


def test_run_missing_config(tmp_path):
    result = runner.invoke(app, ["run", "--config", str(tmp_path / "absent.yaml")])

    assert result.exit_code != 0
    assert isinstance(result.exception, FileNotFoundError)
