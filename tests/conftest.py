import pytest

from LiveCalc import config_manager


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the config layer at an empty temp dir so tests see the defaults."""
    monkeypatch.setattr(config_manager, "config_json", tmp_path / "config.json")
    monkeypatch.setattr(config_manager, "ui_strings", tmp_path / "ui_strings.json")
    return tmp_path
