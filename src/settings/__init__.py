from src.settings.controller import SETTINGS_PATH, SettingsController, parse_int_prefix
from src.settings.store import SettingsStore
from src.settings.writer import SettingsWriter

__all__ = [
    "SETTINGS_PATH",
    "SettingsController",
    "SettingsStore",
    "SettingsWriter",
    "parse_int_prefix",
]
