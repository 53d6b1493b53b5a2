"""Support summon transfer list - click a summon to move it between Available and Selected."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QSize, Qt, QTimer
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import (
    QDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from src.automation.summon_selection import SummonSelection
from src.models.catalog import IMAGES_DIR, summon_image_path
from src.ui.themes import load_theme

logger = logging.getLogger(__name__)

ICON_SIZE = QSize(56, 32)
LIST_HEIGHT = 200


class SummonTransferDialog(QDialog):
    """Modal two-pane picker. Every click goes through SummonSelection, which updates the settings store."""

    def __init__(
        self,
        selection: SummonSelection,
        images_dir: Path = IMAGES_DIR,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._selection = selection
        self._images_dir = Path(images_dir)
        self._icons: dict[str, Optional[QIcon]] = {}
        self.setWindowTitle("Select Support Summon(s)")
        self.setModal(True)
        self.setMinimumWidth(560)
        self.setStyleSheet(load_theme("dark") + "\n" + load_theme("settings-dark"))
        self._selection.initialize()
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        self._edit_filter = QLineEdit()
        self._edit_filter.setPlaceholderText("Search summons")
        self._edit_filter.setClearButtonEnabled(True)
        self._edit_filter.textChanged.connect(self.refresh)
        layout.addWidget(self._edit_filter)

        panes = QHBoxLayout()
        self._list_available = self._make_list()
        self._list_selected = self._make_list()
        panes.addWidget(self._pane("Available Support Summons", self._list_available))
        panes.addWidget(self._pane("Selected Support Summons", self._list_selected))
        layout.addLayout(panes)

    def _make_list(self) -> QListWidget:
        lw = QListWidget()
        lw.setObjectName("summonList")
        lw.setIconSize(ICON_SIZE)
        lw.setMinimumHeight(LIST_HEIGHT)
        lw.itemClicked.connect(self._on_item_clicked)
        return lw

    def _pane(self, title: str, list_widget: QListWidget) -> QFrame:
        f = QFrame()
        f.setObjectName("section")
        v = QVBoxLayout(f)
        header = QLabel(title)
        header.setObjectName("transferHeader")
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        v.addWidget(header)
        v.addWidget(list_widget)
        return f

    @property
    def available_names(self) -> list[str]:
        return self._names(self._list_available)

    @property
    def selected_names(self) -> list[str]:
        return self._names(self._list_selected)

    @staticmethod
    def _names(list_widget: QListWidget) -> list[str]:
        return [
            list_widget.item(i).data(Qt.ItemDataRole.UserRole)
            for i in range(list_widget.count())
        ]

    def _icon_for(self, name: str) -> Optional[QIcon]:
        if name not in self._icons:
            path = summon_image_path(name, self._images_dir)
            self._icons[name] = QIcon(str(path)) if path is not None else None
        return self._icons[name]

    def _fill(self, list_widget: QListWidget, names: list[str]) -> None:
        list_widget.clear()
        for name in names:
            item = QListWidgetItem(name)
            item.setData(Qt.ItemDataRole.UserRole, name)
            item.setToolTip(name)
            icon = self._icon_for(name)
            if icon is not None:
                item.setIcon(icon)
            list_widget.addItem(item)

    def refresh(self) -> None:
        query = self._edit_filter.text()
        self._fill(self._list_available, self._selection.filter_available(query))
        self._fill(self._list_selected, self._selection.filter_selected(query))

    def toggle_summon(self, name: str) -> bool:
        moved = self._selection.toggle(name)
        if moved:
            logger.debug(f"Moved summon '{name}', {len(self._selection.selected)} selected")
            self.refresh()
        return moved

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        name = item.data(Qt.ItemDataRole.UserRole)
        if name:
            # Lists are rebuilt on move; let the click finish first
            QTimer.singleShot(0, lambda: self.toggle_summon(name))
