"""
Tests for the command line interface, run against the mock client.
"""

import json

import pytest
from typer.testing import CliRunner

from slotbroker import __version__
from slotbroker.cli.app import app

runner = CliRunner()

EVENT_URI = "https://api.calendly.com/event_types/MOCK-30"
NOW = "2024-05-15T10:00:00Z"


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("api_token: ''\ntimezone: UTC\n", encoding="utf-8")
    return str(path)


def test_availability_next_week(config_path):
    result = runner.invoke(
        app,
        ["availability", EVENT_URI, "--week-offset", "1", "--mock", "--now", NOW, "--config", config_path],
    )

    assert result.exit_code == 0, result.output
    assert "Monday, May 20, 2024" in result.output
    assert "Friday" in result.output
    assert "Saturday" not in result.output


def test_times_morning(config_path):
    result = runner.invoke(
        app,
        ["times", EVENT_URI, "2024-05-20", "--period", "morning", "--mock", "--now", NOW, "--config", config_path],
    )

    assert result.exit_code == 0, result.output
    assert "9:00 AM" in result.output
    assert "11:15 AM" in result.output
    assert "2:00 PM" not in result.output


def test_times_rejects_bad_period(config_path):
    result = runner.invoke(
        app,
        ["times", EVENT_URI, "2024-05-20", "--period", "evening", "--mock", "--now", NOW, "--config", config_path],
    )

    assert result.exit_code == 1
    assert "Period must be" in result.output


def test_event_types(config_path):
    result = runner.invoke(app, ["event-types", "--mock", "--config", config_path])

    assert result.exit_code == 0, result.output
    assert "30 Minute Meeting" in result.output


def test_call_outputs_json(config_path):
    params = json.dumps({"date": "2024-05-20", "eventTypeUrl": EVENT_URI, "period": "afternoon"})

    result = runner.invoke(app, ["call", "checkTimes", params, "--mock", "--now", NOW, "--config", config_path])

    assert result.exit_code == 0, result.output
    assert '"success": true' in result.output
    assert "2:00 PM" in result.output


def test_call_unknown_function_fails(config_path):
    result = runner.invoke(app, ["call", "sendBookingSMS", "{}", "--mock", "--config", config_path])

    assert result.exit_code == 1
    assert "invalid_input" in result.output


def test_call_rejects_bad_json(config_path):
    result = runner.invoke(app, ["call", "checkTimes", "{not json", "--mock", "--config", config_path])

    assert result.exit_code == 1
    assert "not valid JSON" in result.output


def test_real_client_needs_token(config_path, monkeypatch):
    monkeypatch.delenv("CALENDLY_API_TOKEN", raising=False)

    result = runner.invoke(app, ["event-types", "--config", config_path])

    assert result.exit_code == 1
    assert "No Calendly API token" in result.output


def test_now(config_path):
    result = runner.invoke(app, ["now", "--now", NOW, "--config", config_path])

    assert result.exit_code == 0, result.output
    assert "Wednesday, May 15, 2024 10:00 AM" in result.output


@pytest.mark.parametrize("value", ["P1D", "not-a-time"])
def test_now_rejects_values_that_are_not_instants(config_path, value):
    result = runner.invoke(app, ["now", "--now", value, "--config", config_path])

    assert result.exit_code == 1
    assert "Could not parse --now value" in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
