from src.models.catalog import SummonCatalog, summon_image_filename, summon_image_path
from src.models.settings import (
    FARMING_MODES,
    GROUP_NUMBER_RANGE,
    PARTY_NUMBER_RANGE,
    QUEST_ITEMS,
    QUEST_MISSIONS,
    BotSettings,
    FarmingMode,
)

__all__ = [
    "BotSettings",
    "FARMING_MODES",
    "FarmingMode",
    "GROUP_NUMBER_RANGE",
    "PARTY_NUMBER_RANGE",
    "QUEST_ITEMS",
    "QUEST_MISSIONS",
    "SummonCatalog",
    "summon_image_filename",
    "summon_image_path",
]
