"""Bot Settings - main entry point.

Wires together: settings store -> persistence controller -> settings window.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication, QMessageBox

from src.models import SummonCatalog
from src.settings import SETTINGS_PATH, SettingsController, SettingsStore
from src.ui import MainWindow

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    try:
        catalog = SummonCatalog.load_default()
    except (OSError, ValueError) as e:
        logger.error(f"Could not load summon catalog: {e}")
        QMessageBox.critical(None, "Bot Settings", f"Could not load summon catalog:\n{e}")
        sys.exit(1)

    # --- Settings ---
    store = SettingsStore()
    controller = SettingsController(store, SETTINGS_PATH)
    controller.load_on_startup()

    # --- Main window ---
    window = MainWindow(controller, catalog)
    window.show()

    # --- Run ---
    exit_code = app.exec()

    # Cleanup
    controller.close()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
