"""Shared settings store handed to every component that reads or edits the settings record."""
from __future__ import annotations

import copy
import logging
from dataclasses import fields
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from src.models import BotSettings

logger = logging.getLogger(__name__)

_FIELD_NAMES = frozenset(f.name for f in fields(BotSettings))


class SettingsStore(QObject):
    """Owns the in-memory BotSettings. Emits changed(field_name) after every mutation that alters a value.

    ready is runtime-only bot state and is never persisted.
    """

    changed = pyqtSignal(str)
    replaced = pyqtSignal(object)  # BotSettings after a bulk replace
    ready_changed = pyqtSignal(bool)

    def __init__(self, settings: Optional[BotSettings] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._settings = settings if settings is not None else BotSettings()
        self._ready = False

    @property
    def settings(self) -> BotSettings:
        """A copy of the current record; edit through the setters."""
        return copy.deepcopy(self._settings)

    @property
    def summons(self) -> list[str]:
        return list(self._settings.summons)

    @property
    def ready(self) -> bool:
        return self._ready

    def get(self, name: str):
        if name not in _FIELD_NAMES:
            raise KeyError(name)
        value = getattr(self._settings, name)
        return list(value) if isinstance(value, list) else value

    def set(self, name: str, value) -> bool:
        """Assign one field. Returns False (no signal) if the value is unchanged."""
        if name not in _FIELD_NAMES:
            raise KeyError(name)
        if isinstance(value, list):
            value = list(value)
        if getattr(self._settings, name) == value:
            return False
        setattr(self._settings, name, value)
        self.changed.emit(name)
        return True

    def replace(self, settings: BotSettings, notify: bool = True) -> None:
        """Swap in a whole record (startup hydrate). notify=False keeps the replace silent."""
        self._settings = copy.deepcopy(settings)
        if notify:
            self.replaced.emit(self.settings)

    def set_combat_script(self, name: str, contents: str) -> None:
        # Emits changed once per field that differs
        self.set("combat_script_name", name)
        self.set("combat_script", contents)

    def set_farming_mode(self, mode: str) -> bool:
        return self.set("farming_mode", mode)

    def set_item(self, item: Optional[str]) -> bool:
        return self.set("item", item)

    def set_mission(self, mission: str) -> bool:
        return self.set("mission", mission)

    def set_item_amount(self, amount: int) -> bool:
        return self.set("item_amount", amount)

    def set_group_number(self, number: int) -> bool:
        return self.set("group_number", number)

    def set_party_number(self, number: int) -> bool:
        return self.set("party_number", number)

    def set_debug_mode(self, enabled: bool) -> bool:
        return self.set("debug_mode", bool(enabled))

    def set_summons(self, summons: list[str]) -> bool:
        return self.set("summons", list(summons))

    def set_ready(self, ready: bool) -> None:
        ready = bool(ready)
        if ready == self._ready:
            return
        self._ready = ready
        logger.info(f"Bot ready status: {'ready' if ready else 'not ready'}")
        self.ready_changed.emit(ready)
