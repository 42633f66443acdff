"""Tests for the owm-client command line interface."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from owm_client import cli
from owm_client.clients.enums import Country


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep run_cli from replacing the root handlers pytest installs."""
    with patch.object(cli, "configure_logging") as mock:
        yield mock


@pytest.fixture
def cli_factory(http_factory):
    with patch("owm_client.clients.client.default_http_client_factory", http_factory):
        yield http_factory


class TestBuildParser:
    def test_parses_city_and_country(self):
        args = cli.build_parser().parse_args(["current", "--city", "London", "--country", "gb"])
        assert args.endpoint == "current"
        assert args.city == "London"
        assert args.country is Country.UNITED_KINGDOM

    def test_parses_coords(self):
        args = cli.build_parser().parse_args(["uvi", "--coords", "37.75,-122.37"])
        assert args.coords == (37.75, -122.37)

    def test_parses_proxy(self):
        args = cli.build_parser().parse_args(["current", "--city-id", "1", "--proxy", "proxy.local:3128"])
        assert args.proxy == ("proxy.local", 3128)

    @pytest.mark.parametrize(
        "argv",
        [
            ["current"],
            ["current", "--city", "London", "--city-id", "1"],
            ["current", "--coords", "nope"],
            ["current", "--city", "London", "--country", "XX"],
            ["current", "--city-id", "1", "--proxy", "proxy.local"],
            ["tomorrow", "--city-id", "1"],
        ],
    )
    def test_invalid_arguments_exit(self, argv):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(argv)


class TestRunCli:
    """Tests for run_cli end to end against the recording HTTP client."""

    def test_current_weather(self, cli_factory, capsys, clean_env):
        cli_factory.queue({"name": "London", "main": {"temp": 280.3}})

        code = cli.run_cli(["current", "--city", "London", "--country", "GB", "--api-key", "cli-key", "--units", "metric"])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {"name": "London", "main": {"temp": 280.3}}
        params = cli_factory.last_call["params"]
        assert params["q"] == "London,GB"
        assert params["appid"] == "cli-key"
        assert params["units"] == "metric"

    def test_daily_with_count(self, cli_factory, clean_env):
        assert cli.run_cli(["daily", "--zip", "94040", "--count", "3", "--api-key", "k"]) == 0
        call = cli_factory.last_call
        assert call["url"].endswith("/forecast/daily")
        assert call["params"]["cnt"] == "3"
        assert call["params"]["zip"] == "94040,US"

    def test_pro_hourly_uses_pro_host(self, cli_factory, clean_env):
        assert cli.run_cli(["hourly", "--city-id", "1", "--api-key", "k", "--pro"]) == 0
        assert cli_factory.last_call["url"] == "https://pro.openweathermap.org/data/2.5/forecast"

    def test_uvi_current_and_forecast(self, cli_factory, clean_env):
        assert cli.run_cli(["uvi", "--coords", "37.75,-122.37", "--api-key", "k"]) == 0
        assert cli_factory.last_call["url"].endswith("/uvi")

        assert cli.run_cli(["uvi", "--coords", "37.75,-122.37", "--count", "2", "--api-key", "k"]) == 0
        assert cli_factory.last_call["url"].endswith("/uvi/forecast")

    def test_pollution(self, cli_factory, clean_env):
        assert cli.run_cli(["pollution", "--coords", "0.0,10.0", "--pollutant", "no2", "--api-key", "k"]) == 0
        assert cli_factory.last_call["url"] == "https://api.openweathermap.org/pollution/v1/no2/0.0,10.0/current.json"

    def test_proxy_applied(self, cli_factory, clean_env):
        assert cli.run_cli(["current", "--city-id", "1", "--proxy", "proxy.local:3128", "--api-key", "k"]) == 0
        assert cli_factory.last_call["client"].proxy.url == "http://proxy.local:3128"

    def test_settings_used_without_api_key(self, monkeypatch, cli_factory, mock_env_minimal):
        monkeypatch.setenv("OWM_LANGUAGE", "fr")

        assert cli.run_cli(["current", "--city-id", "1"]) == 0

        params = cli_factory.last_call["params"]
        assert params["appid"] == "test_api_key_TESTONLY"
        assert params["lang"] == "fr"

    def test_api_error_exit_code(self, cli_factory, capsys, clean_env, caplog):
        cli_factory.queue(None, status_code=401, reason="Unauthorized", error_text="Invalid API key")

        assert cli.run_cli(["current", "--city-id", "1", "--api-key", "bad"]) == 1
        assert capsys.readouterr().out == ""
        assert "HTTP 401: Unauthorized" in caplog.text

    def test_coords_required_for_uvi(self, cli_factory, clean_env):
        assert cli.run_cli(["uvi", "--city-id", "1", "--api-key", "k"]) == 1
        assert cli_factory.calls == []

    def test_missing_configuration_exit_code(self, cli_factory, clean_env):
        assert cli.run_cli(["current", "--city-id", "1"]) == 2

    def test_inconsistent_proxy_settings_exit_code(self, monkeypatch, cli_factory, mock_env_minimal, caplog):
        monkeypatch.setenv("OWM_PROXY_USERNAME", "user")
        monkeypatch.setenv("OWM_PROXY_PASSWORD", "secret")

        assert cli.run_cli(["current", "--city-id", "1"]) == 2
        assert "Configuration validation failed" in caplog.text
        assert cli_factory.calls == []

    def test_malformed_response_exit_code(self, cli_factory, capsys, clean_env, caplog):
        cli_factory.queue({"main": "not-an-object"})

        assert cli.run_cli(["current", "--city-id", "1", "--api-key", "k"]) == 1
        assert capsys.readouterr().out == ""
        assert "Invalid response for 'current'" in caplog.text
        assert "Configuration validation failed" not in caplog.text

    def test_pretty_output(self, cli_factory, capsys, clean_env):
        cli_factory.queue({"name": "London"})
        cli.run_cli(["current", "--city-id", "1", "--api-key", "k", "--pretty"])
        assert capsys.readouterr().out == '{\n  "name": "London"\n}\n'
