"""Tests for the config command group."""

import json

from typer.testing import CliRunner

from todosync_cli.commands.config import app
from todosync_cli.config import get_config_manager

runner = CliRunner()


def test_view_json():
    result = runner.invoke(app, ["view", "-o", "json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["todoist"]["timeout"] == 30.0


def test_set_and_get():
    result = runner.invoke(app, ["set", "todoist.timeout", "10"])
    assert result.exit_code == 0, result.output
    assert get_config_manager().get("todoist.timeout") == 10.0

    result = runner.invoke(app, ["get", "todoist.timeout"])
    assert result.exit_code == 0
    assert "10.0" in result.output


def test_set_unknown_key():
    result = runner.invoke(app, ["set", "todoist.colour", "red"])

    assert result.exit_code == 2
    assert "Unknown configuration key" in result.output


def test_set_invalid_value():
    result = runner.invoke(app, ["set", "logging.level", "LOUD"])

    assert result.exit_code == 2
    assert "Invalid input" in result.output


def test_get_unset_key():
    result = runner.invoke(app, ["get", "database.path"])
    assert result.exit_code == 2


def test_reset_key():
    get_config_manager().set("logging.level", "DEBUG")

    result = runner.invoke(app, ["reset", "logging.level", "--yes"])

    assert result.exit_code == 0, result.output
    assert get_config_manager().get("logging.level") == "INFO"


def test_reset_cancelled():
    get_config_manager().set("logging.level", "DEBUG")

    result = runner.invoke(app, ["reset"], input="n\n")

    assert result.exit_code == 0
    assert get_config_manager().get("logging.level") == "DEBUG"
