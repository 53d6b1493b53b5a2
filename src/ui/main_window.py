"""Main application window: hosts the settings page and shows the bot's ready status."""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtWidgets import QLabel, QMainWindow, QStatusBar, QWidget

from src.models import SummonCatalog
from src.settings import SettingsController
from src.ui.settings_page import SettingsPage

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Primary window for the bot client."""

    def __init__(
        self,
        controller: SettingsController,
        catalog: SummonCatalog,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._controller = controller
        self.setWindowTitle("Bot Settings")
        self.setMinimumSize(520, 640)

        self._settings_page = SettingsPage(controller, catalog, parent=self)
        self.setCentralWidget(self._settings_page)

        self.setStatusBar(QStatusBar())
        self._ready_label = QLabel()
        self.statusBar().addPermanentWidget(self._ready_label)
        controller.store.ready_changed.connect(self._update_ready_status)
        self._update_ready_status(controller.store.ready)

    @property
    def settings_page(self) -> SettingsPage:
        return self._settings_page

    def _update_ready_status(self, ready: bool) -> None:
        if ready:
            self._ready_label.setText("Status: Ready")
            self._ready_label.setStyleSheet("color: #88ff88;")
        else:
            self._ready_label.setText("Status: Not Ready")
            self._ready_label.setStyleSheet("color: #ff8888;")

    def closeEvent(self, event) -> None:
        if not self._controller.flush(timeout=2.0):
            logger.warning("Settings write still pending at shutdown")
        super().closeEvent(event)
