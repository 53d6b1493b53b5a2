"""Settings persistence: hydrate the store from settings.json at startup, save the whole record on every change."""
from __future__ import annotations

import json
import logging
import math
import re
from pathlib import Path
from typing import Optional, Union

from PyQt6.QtCore import QObject, pyqtSignal

from src.models import BotSettings
from src.settings.store import SettingsStore
from src.settings.writer import SettingsWriter

logger = logging.getLogger(__name__)

# Relative to the working directory the bot is started from
SETTINGS_PATH = Path("settings.json")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(raw: object) -> Optional[int]:
    """Integer from the leading digits of raw ("12" -> 12, "12abc" -> 12, "abc" -> None)."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    m = _LEADING_INT.match(str(raw or ""))
    return int(m.group(1)) if m else None


class SettingsController(QObject):
    """Single writable owner of settings.json.

    Every store change (including the summon selection) re-serializes the full
    record and hands it to the SettingsWriter.
    """

    saved = pyqtSignal(int)  # write token
    save_failed = pyqtSignal(str)

    def __init__(
        self,
        store: SettingsStore,
        path: Path = SETTINGS_PATH,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._store = store
        self._path = Path(path)
        self._writer = SettingsWriter(
            self._path,
            on_written=self.saved.emit,
            on_failed=lambda _token, e: self.save_failed.emit(str(e)),
        )
        self._store.changed.connect(self._on_store_changed)

    @property
    def store(self) -> SettingsStore:
        return self._store

    @property
    def path(self) -> Path:
        return self._path

    @property
    def group_number_error(self) -> bool:
        return not self._store.settings.group_number_valid

    @property
    def party_number_error(self) -> bool:
        return not self._store.settings.party_number_valid

    def load_on_startup(self) -> BotSettings:
        """Hydrate the store from disk. Any failure keeps the built-in defaults."""
        if not self._path.exists():
            logger.warning(f"Settings not found at {self._path}, using defaults")
            return self._store.settings
        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Encountered read exception for {self._path}: {e}")
            return self._store.settings
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("settings root is not a JSON object")
        except ValueError as e:
            logger.error(f"Could not parse settings from {self._path}, using defaults: {e}")
            return self._store.settings
        settings = BotSettings.from_dict(data)
        self._store.replace(settings)
        self._store.set_ready(settings.debug_mode)
        logger.info(f"Loaded settings from {self._path}")
        return settings

    def save_on_change(self) -> Optional[int]:
        """Serialize the full record and queue it. Returns the write token, or None if encoding failed."""
        try:
            contents = json.dumps(self._store.settings.to_dict(), indent=4)
        except (TypeError, ValueError) as e:
            logger.error(f"Encountered exception while saving settings: {e}")
            return None
        return self._writer.submit(contents)

    def _on_store_changed(self, field_name: str) -> None:
        logger.debug(f"Setting '{field_name}' changed")
        self.save_on_change()

    def load_combat_script(self, path: Union[str, Path, None]) -> bool:
        """Store the picked text file's name and contents. No pick or a failed read resets both to ""."""
        if not path:
            logger.info("No combat script selected, resetting to empty combat script")
            self._store.set_combat_script("", "")
            return False
        path = Path(path)
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read combat script {path}: {e}. Resetting to empty combat script")
            self._store.set_combat_script("", "")
            return False
        self._store.set_combat_script(path.name, contents)
        logger.info(f"Loaded Combat Script: {path.name}")
        return True

    def set_farming_mode(self, mode: str) -> None:
        self._store.set_farming_mode(mode)

    def set_item(self, item: Optional[str]) -> None:
        self._store.set_item(item or None)

    def set_mission(self, mission: str) -> None:
        self._store.set_mission(mission)

    def set_item_amount(self, raw: object) -> int:
        """Empty or non-numeric input stores 0; negatives clamp to 0."""
        value = parse_int_prefix(raw)
        amount = max(0, value) if value is not None else 0
        self._store.set_item_amount(amount)
        return amount

    def set_group_number(self, raw: object) -> int:
        # Out-of-range values are kept; the form flags them via group_number_error.
        value = parse_int_prefix(raw)
        number = value if value is not None else 0
        self._store.set_group_number(number)
        return number

    def set_party_number(self, raw: object) -> int:
        value = parse_int_prefix(raw)
        number = value if value is not None else 0
        self._store.set_party_number(number)
        return number

    def set_debug_mode(self, enabled: bool) -> None:
        self._store.set_debug_mode(enabled)
        # TODO: derive ready status from a loaded combat script and farming target instead of the debug toggle.
        self._store.set_ready(enabled)

    def flush(self, timeout: Optional[float] = 2.0) -> bool:
        return self._writer.flush(timeout)

    def close(self) -> None:
        self._writer.stop()
