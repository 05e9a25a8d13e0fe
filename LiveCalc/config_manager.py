# config_manager.py
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"

# Used for every key missing from config.json (or when the file is unreadable)
DEFAULT_SETTINGS = {
    "darkmode": False,
    "decimal_places": 12,
    "clear_hold_ms": 550,
    "debug": False,
}

# Lower bounds enforced by the settings dialog
MINIMUM_VALUES = {
    "decimal_places": 2,
    "clear_hold_ms": 100,
}

# Upper bounds enforced by the settings dialog
MAXIMUM_VALUES = {
    "decimal_places": 60,
    "clear_hold_ms": 5000,
}


def load_setting_value(key_value):
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            stored = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.debug("Using default settings (%s)", e)
        stored = {}

    settings_dict = dict(DEFAULT_SETTINGS)
    if isinstance(stored, dict):
        settings_dict.update(stored)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    try:
        with open(ui_strings, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, key_value)


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            logger.info("Settings saved to %s", config_json)
            return settings_dict

    except (OSError, TypeError) as e:
        logger.error("Settings could not be saved: %s", e)
        return {}
