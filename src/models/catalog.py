"""Static support summon catalog: category -> ordered summon names, plus image lookup."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
CATALOG_PATH = PACKAGE_ROOT / "data" / "summons.json"
IMAGES_DIR = PACKAGE_ROOT / "images" / "summons"

# Missing icons already reported, so each one is logged once per run
_reported_missing: set[Path] = set()


def summon_image_filename(name: str) -> str:
    """'Godsworn Alexiel' -> 'godsworn_alexiel.png'."""
    return name.replace(" ", "_").lower() + ".png"


def summon_image_path(name: str, images_dir: Path = IMAGES_DIR) -> Optional[Path]:
    """Path of the summon's icon, or None (logged) when the asset is missing."""
    path = Path(images_dir) / summon_image_filename(name)
    if not path.is_file():
        if path not in _reported_missing:
            _reported_missing.add(path)
            logger.warning(f"No image for summon '{name}' at {path}")
        return None
    return path


class SummonCatalog:
    """Read-only mapping of category key to summon names, in file order."""

    def __init__(self, data: dict[str, dict]):
        self._categories: dict[str, tuple[str, ...]] = {}
        for category, entry in data.items():
            names = entry.get("summons", []) if isinstance(entry, dict) else []
            self._categories[str(category)] = tuple(str(n) for n in names)

    @classmethod
    def from_file(cls, path: Path) -> SummonCatalog:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return cls(data)

    @classmethod
    def load_default(cls) -> SummonCatalog:
        catalog = cls.from_file(CATALOG_PATH)
        logger.info(f"Loaded {len(catalog.all_summons())} summons from {CATALOG_PATH}")
        return catalog

    def categories(self) -> list[str]:
        return list(self._categories)

    def summons_in(self, category: str) -> list[str]:
        return list(self._categories.get(category, ()))

    def all_summons(self) -> list[str]:
        """Every summon once, in catalog order (first occurrence wins)."""
        return list(dict.fromkeys(n for names in self._categories.values() for n in names))
