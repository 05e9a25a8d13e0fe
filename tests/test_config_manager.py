"""Tests for the JSON settings layer."""

import json

from LiveCalc import config_manager, error as E


def test_defaults_without_config_file():
    assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS
    assert config_manager.load_setting_value("decimal_places") == 12
    assert config_manager.load_setting_value("clear_hold_ms") == 550


def test_malformed_config_falls_back_to_defaults(isolated_settings):
    (isolated_settings / "config.json").write_text("{not json", encoding="utf-8")
    assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS


def test_stored_values_override_defaults(isolated_settings):
    (isolated_settings / "config.json").write_text(json.dumps({"darkmode": True}), encoding="utf-8")
    settings = config_manager.load_setting_value("all")
    assert settings["darkmode"] is True
    assert settings["decimal_places"] == 12


def test_unknown_key_returns_zero():
    assert config_manager.load_setting_value("no_such_setting") == 0


def test_save_and_reload():
    settings = config_manager.load_setting_value("all")
    settings["clear_hold_ms"] = 800
    assert config_manager.save_setting(settings) == settings
    assert config_manager.load_setting_value("clear_hold_ms") == 800


def test_save_failure_returns_empty(isolated_settings, monkeypatch):
    monkeypatch.setattr(config_manager, "config_json", isolated_settings / "missing_dir" / "config.json")
    assert config_manager.save_setting({"darkmode": True}) == {}


def test_setting_descriptions(isolated_settings):
    (isolated_settings / "ui_strings.json").write_text(json.dumps({"darkmode": "Darkmode"}), encoding="utf-8")
    assert config_manager.load_setting_description("darkmode") == "Darkmode"
    assert config_manager.load_setting_description("debug") == "debug"
    assert config_manager.load_setting_description("all") == {"darkmode": "Darkmode"}


def test_missing_descriptions():
    assert config_manager.load_setting_description("all") == {}


def test_error_describe():
    error = E.InvalidExpression("3/0", code="3003")
    assert error.describe() == "Error 3003: Division by Zero: 3/0"
