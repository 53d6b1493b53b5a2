"""Qt stylesheets shipped with the app, loaded by name (e.g. load_theme("dark") -> dark.qss)."""
from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

THEMES_DIR = Path(__file__).resolve().parent


def load_theme(name: str) -> str:
    path = THEMES_DIR / f"{name}.qss"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not load theme '{name}': {e}")
        return ""
