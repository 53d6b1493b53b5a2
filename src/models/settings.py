from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

GROUP_NUMBER_RANGE = (1, 7)
PARTY_NUMBER_RANGE = (1, 6)


class FarmingMode(str, Enum):
    QUEST = "Quest"
    SPECIAL = "Special"


FARMING_MODES: tuple[str, ...] = tuple(m.value for m in FarmingMode)

# Options offered by the form's Item / Mission pickers
QUEST_ITEMS: tuple[str, ...] = ("Satin Feather", "Zephyr Feather", "Flying Sprout")
QUEST_MISSIONS: tuple[str, ...] = ("test1",)


def _as_str(value: object, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _as_int(value: object, default: int) -> int:
    # bool is an int subclass; "true" is not a group number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    # JSON allows NaN and 1e400 (inf); neither is a count
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return int(value)


def in_range(value: int, bounds: tuple[int, int]) -> bool:
    lo, hi = bounds
    return lo <= value <= hi


@dataclass
class BotSettings:
    """User-configurable bot parameters persisted as one JSON document."""
    combat_script_name: str = ""
    combat_script: str = ""
    # "Quest", "Special", or "" when nothing has been picked yet
    farming_mode: str = ""
    item: Optional[str] = None
    mission: str = ""
    item_amount: int = 0
    group_number: int = 1
    party_number: int = 1
    debug_mode: bool = False
    # Selected support summons, in the order they were picked
    summons: list[str] = field(default_factory=list)

    @property
    def group_number_valid(self) -> bool:
        return in_range(self.group_number, GROUP_NUMBER_RANGE)

    @property
    def party_number_valid(self) -> bool:
        return in_range(self.party_number, PARTY_NUMBER_RANGE)

    @classmethod
    def from_dict(cls, data: dict) -> BotSettings:
        """Build from the settings.json object; missing or mistyped keys keep their default."""
        defaults = cls()
        item = data.get("item")
        summons = data.get("summons", [])
        if not isinstance(summons, list):
            summons = []
        debug_mode = data.get("debugMode", defaults.debug_mode)
        return cls(
            combat_script_name=_as_str(data.get("currentCombatScriptName")),
            combat_script=_as_str(data.get("currentCombatScript")),
            farming_mode=_as_str(data.get("farmingMode")),
            item=item if isinstance(item, str) else None,
            mission=_as_str(data.get("mission")),
            item_amount=max(0, _as_int(data.get("itemAmount"), defaults.item_amount)),
            group_number=_as_int(data.get("groupNumber"), defaults.group_number),
            party_number=_as_int(data.get("partyNumber"), defaults.party_number),
            debug_mode=debug_mode if isinstance(debug_mode, bool) else defaults.debug_mode,
            summons=[s for s in summons if isinstance(s, str)],
        )

    def to_dict(self) -> dict:
        """Serialize for settings.json (round-trip with from_dict). Key order is the file's key order."""
        return {
            "currentCombatScriptName": self.combat_script_name,
            "currentCombatScript": self.combat_script,
            "farmingMode": self.farming_mode,
            "item": self.item,
            "mission": self.mission,
            "itemAmount": self.item_amount,
            "groupNumber": self.group_number,
            "partyNumber": self.party_number,
            "debugMode": self.debug_mode,
            "summons": list(self.summons),
        }
