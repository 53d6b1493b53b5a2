"""Support summon selection: the available/selected partition behind the transfer list."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional

from src.models import SummonCatalog
from src.settings.store import SettingsStore

logger = logging.getLogger(__name__)


class Side(Enum):
    AVAILABLE = "available"
    SELECTED = "selected"


class SummonSelection:
    """Partition of the catalog into available and selected summons.

    Each name maps to exactly one (side, sequence) entry, so a summon can never
    sit in both lists. Lists are read back sorted by sequence; a move hands out
    a fresh sequence number, which appends the summon to the end of its new list.
    Every move pushes the selected list into the store's summons field.
    """

    def __init__(self, catalog: SummonCatalog, store: SettingsStore):
        self._catalog = catalog
        self._store = store
        self._entries: dict[str, tuple[Side, int]] = {}
        self._seq = 0

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def initialize(self) -> None:
        """available = catalog minus the store's summons (catalog order); selected = store's summons."""
        self._entries.clear()
        self._seq = 0
        already = list(dict.fromkeys(self._store.summons))
        chosen = set(already)
        catalog_names = self._catalog.all_summons()
        for name in catalog_names:
            if name not in chosen:
                self._entries[name] = (Side.AVAILABLE, self._next_seq())
        unknown = []
        for name in already:
            self._entries[name] = (Side.SELECTED, self._next_seq())
            if name not in catalog_names:
                unknown.append(name)
        if unknown:
            logger.warning(f"Selected summons not in catalog: {', '.join(unknown)}")

    def _side_list(self, side: Side) -> list[str]:
        names = [(seq, name) for name, (s, seq) in self._entries.items() if s is side]
        return [name for _, name in sorted(names)]

    @property
    def available(self) -> list[str]:
        return self._side_list(Side.AVAILABLE)

    @property
    def selected(self) -> list[str]:
        return self._side_list(Side.SELECTED)

    def side_of(self, name: str) -> Optional[Side]:
        entry = self._entries.get(name)
        return entry[0] if entry else None

    def _move(self, name: str, src: Side, dst: Side) -> bool:
        entry = self._entries.get(name)
        if entry is None or entry[0] is not src:
            logger.debug(f"Ignoring move of '{name}': not in {src.value} list")
            return False
        self._entries[name] = (dst, self._next_seq())
        self._store.set_summons(self.selected)
        return True

    def move_to_selected(self, name: str) -> bool:
        return self._move(name, Side.AVAILABLE, Side.SELECTED)

    def move_to_available(self, name: str) -> bool:
        return self._move(name, Side.SELECTED, Side.AVAILABLE)

    def toggle(self, name: str) -> bool:
        """Move name to the other list (a click on either pane)."""
        side = self.side_of(name)
        if side is Side.AVAILABLE:
            return self.move_to_selected(name)
        if side is Side.SELECTED:
            return self.move_to_available(name)
        logger.debug(f"Ignoring toggle of unknown summon '{name}'")
        return False

    def filter_available(self, query: str) -> list[str]:
        return _filter(self.available, query)

    def filter_selected(self, query: str) -> list[str]:
        return _filter(self.selected, query)


def _filter(names: Iterable[str], query: str) -> list[str]:
    q = (query or "").strip().lower()
    if not q:
        return list(names)
    return [n for n in names if q in n.lower()]
