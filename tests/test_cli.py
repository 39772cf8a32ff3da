import pytest
from click.testing import CliRunner

import weatherdash.cli as cli
from weatherdash.models import Coordinates, Units, WeatherProvider
from weatherdash.service import CycleOutcome
from weatherdash.weather.reconciler import build_view_model

from tests.conftest import provider_data


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.setattr(cli, "configure_logging_from_env", lambda: None)
    monkeypatch.setenv("OWM_API_KEY", "owm-key")
    return CliRunner()


@pytest.fixture
def fetch_calls(monkeypatch):
    calls = []

    async def fake_run_fetch(env, config_path, descriptor, provider, units):
        calls.append((descriptor, provider, units))
        vm = build_view_model(provider_data(), provider or WeatherProvider.STANDARD, units or Units.METRIC)
        return CycleOutcome(cycle_id=1, view_model=vm)

    monkeypatch.setattr(cli, "run_fetch", fake_run_fetch)
    return calls


def test_prints_report(runner, fetch_calls):
    result = runner.invoke(cli.main, ["Paris", "--units", "imperial"])

    assert result.exit_code == 0, result.output
    assert "Weather for Paris, FR" in result.output
    assert fetch_calls == [("Paris", None, Units.IMPERIAL)]


def test_coordinates(runner, fetch_calls):
    result = runner.invoke(cli.main, ["--lat", "48.85", "--lon", "2.35", "-p", "advanced"])

    assert result.exit_code == 0, result.output
    assert fetch_calls == [(Coordinates(lat=48.85, lon=2.35), WeatherProvider.ADVANCED, None)]


def test_requires_location(runner, fetch_calls):
    result = runner.invoke(cli.main, [])

    assert result.exit_code == 2
    assert fetch_calls == []


def test_rejects_query_with_coordinates(runner, fetch_calls):
    result = runner.invoke(cli.main, ["Paris", "--lat", "1", "--lon", "2"])

    assert result.exit_code == 2


def test_missing_api_key(runner, fetch_calls, monkeypatch):
    monkeypatch.delenv("OWM_API_KEY")

    result = runner.invoke(cli.main, ["Paris"])

    assert result.exit_code == 1
    assert "OWM_API_KEY" in result.output
    assert fetch_calls == []


def test_failed_fetch_exits_with_error(runner, monkeypatch):
    async def failing_run_fetch(*args):
        return CycleOutcome(cycle_id=1, error="city not found")

    monkeypatch.setattr(cli, "run_fetch", failing_run_fetch)

    result = runner.invoke(cli.main, ["Nowhere"])

    assert result.exit_code == 1
    assert "Error: city not found" in result.output
