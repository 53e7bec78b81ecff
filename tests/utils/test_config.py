"""Tests for ConfigManager and the profile-aware global accessor."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from todosync_cli.config import Config, ConfigManager, get_config_manager


class TestConfigManager:
    def test_defaults(self):
        manager = ConfigManager()

        assert manager.get("todoist.base_url") == "https://api.todoist.com/rest/v2"
        assert manager.get("todoist.timeout") == 30.0
        assert manager.get("logging.level") == "INFO"
        assert manager.get("database.path") is None
        assert manager.get("current_user_id") is None

    def test_profile_file_location(self, tmp_path):
        manager = ConfigManager("work")
        assert manager.config_file == tmp_path / "config" / "work.json"

    def test_set_persists(self):
        manager = ConfigManager()
        manager.set("todoist.timeout", "12.5")

        reloaded = ConfigManager()
        assert reloaded.get("todoist.timeout") == 12.5

    def test_unknown_key(self):
        manager = ConfigManager()

        with pytest.raises(KeyError):
            manager.set("todoist.nope", "x")
        with pytest.raises(KeyError):
            manager.set("current_user_id.deeper", "x")

    def test_invalid_value(self):
        manager = ConfigManager()

        with pytest.raises(PydanticValidationError):
            manager.set("logging.level", "LOUD")
        assert manager.get("logging.level") == "INFO"

    def test_unknown_get_is_none(self):
        assert ConfigManager().get("missing.key") is None

    def test_reset_single_key(self):
        manager = ConfigManager()
        manager.set("logging.level", "DEBUG")
        manager.set("todoist.timeout", 5)

        manager.reset("logging.level")

        assert manager.get("logging.level") == "INFO"
        assert manager.get("todoist.timeout") == 5.0

    def test_reset_everything(self):
        manager = ConfigManager()
        manager.set("current_user_id", "user-1")

        manager.reset()

        assert ConfigManager().config == Config()

    def test_corrupted_file_falls_back_to_defaults(self):
        manager = ConfigManager()
        manager.config_file.write_text("{not json")

        assert manager.load_config() == Config()

    def test_invalid_file_falls_back_to_defaults(self):
        manager = ConfigManager()
        manager.config_file.write_text(json.dumps({"todoist": {"timeout": -1}}))

        assert manager.load_config() == Config()


class TestGetConfigManager:
    def test_default_profile(self):
        assert get_config_manager().profile == "default"

    def test_returns_same_manager(self):
        assert get_config_manager() is get_config_manager()

    def test_selected_profile_sticks(self):
        work = get_config_manager("work")

        assert get_config_manager() is work
        assert get_config_manager("home").profile == "home"
