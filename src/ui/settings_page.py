"""Settings page - combat script, farming target, support summons, group/party and debug mode.

Every edit goes straight to the SettingsController, which saves settings.json; there is no Save button.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QCompleter,
    QFileDialog,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from src.automation.summon_selection import SummonSelection
from src.models import (
    FARMING_MODES,
    GROUP_NUMBER_RANGE,
    PARTY_NUMBER_RANGE,
    QUEST_ITEMS,
    QUEST_MISSIONS,
    SummonCatalog,
)
from src.settings import SettingsController
from src.ui.highlight import HighlightDelegate
from src.ui.themes import load_theme
from src.ui.transfer_list import SummonTransferDialog

logger = logging.getLogger(__name__)

LABEL_MIN_WIDTH = 110
SECTION_GAP = 10


def _row_label(text: str) -> QLabel:
    l = QLabel(text)
    l.setObjectName("formLabel")
    l.setMinimumWidth(LABEL_MIN_WIDTH)
    l.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
    return l


def _hint(text: str) -> QLabel:
    l = QLabel(text)
    l.setObjectName("hint")
    l.setWordWrap(True)
    return l


def _section_frame(title: str, content: QWidget) -> QFrame:
    f = QFrame()
    f.setObjectName("section")
    layout = QVBoxLayout(f)
    layout.setContentsMargins(5, 6, 5, 6)
    layout.setSpacing(6)
    title_l = QLabel(title.upper())
    title_l.setObjectName("sectionTitle")
    layout.addWidget(title_l)
    layout.addWidget(content)
    return f


def _set_error(widget: QWidget, error: bool) -> None:
    widget.setProperty("error", error)
    widget.style().unpolish(widget)
    widget.style().polish(widget)


class SettingsPage(QWidget):
    """The settings form. Reads from and writes to the store only through the controller."""

    def __init__(
        self,
        controller: SettingsController,
        catalog: SummonCatalog,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._controller = controller
        self._store = controller.store
        self._catalog = catalog
        self._last_saved: Optional[datetime] = None
        self._save_error: Optional[str] = None
        self.setObjectName("settingsPage")
        self.setStyleSheet(load_theme("dark") + "\n" + load_theme("settings-dark"))
        self._status_update_timer = QTimer(self)
        self._status_update_timer.setInterval(30_000)
        self._status_update_timer.timeout.connect(self._update_status_bar)
        self._build_ui()
        self._connect_signals()
        self.sync_from_store()
        self._update_status_bar()
        self._status_update_timer.start()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(0)
        layout.setContentsMargins(0, 0, 0, 0)

        content = QWidget()
        content_layout = QVBoxLayout(content)
        content_layout.setSpacing(SECTION_GAP)
        content_layout.addWidget(_section_frame("Combat Script", self._combat_script_section()))
        content_layout.addWidget(_section_frame("Farming", self._farming_section()))
        content_layout.addWidget(_section_frame("Support Summons", self._summons_section()))
        content_layout.addWidget(_section_frame("Group / Party", self._party_section()))
        content_layout.addWidget(_section_frame("Debug", self._debug_section()))
        content_layout.addStretch()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        scroll.setWidget(content)
        layout.addWidget(scroll)

        status_bar = QWidget()
        status_bar.setObjectName("settingsStatusBar")
        status_layout = QHBoxLayout(status_bar)
        status_layout.setContentsMargins(14, 6, 14, 6)
        self._status_dot = QLabel()
        self._status_dot.setObjectName("statusBarDot")
        self._status_dot.setFixedSize(6, 6)
        self._status_text = QLabel("Last saved: -")
        self._status_text.setObjectName("statusBarText")
        status_layout.addWidget(self._status_dot)
        status_layout.addWidget(self._status_text)
        status_layout.addStretch()
        layout.addWidget(status_bar)

    def _combat_script_section(self) -> QWidget:
        w = QWidget()
        fl = QFormLayout(w)
        row = QHBoxLayout()
        self._edit_script_name = QLineEdit()
        self._edit_script_name.setReadOnly(True)
        self._edit_script_name.setPlaceholderText("No combat script loaded")
        self._btn_load_script = QPushButton("Load Combat Script")
        row.addWidget(self._edit_script_name, 1)
        row.addWidget(self._btn_load_script)
        fl.addRow(_row_label("Combat Script:"), row)
        fl.addRow("", _hint("Selected Combat Script"))
        return w

    def _farming_section(self) -> QWidget:
        w = QWidget()
        fl = QFormLayout(w)
        self._combo_farming_mode = QComboBox()
        self._combo_farming_mode.addItems(FARMING_MODES)
        fl.addRow(_row_label("Farming Mode:"), self._combo_farming_mode)
        fl.addRow("", _hint("Please select the Farming Mode"))

        self._combo_item = QComboBox()
        self._combo_item.setEditable(True)
        self._combo_item.setInsertPolicy(QComboBox.InsertPolicy.NoInsert)
        self._combo_item.addItems(QUEST_ITEMS)
        self._combo_item.lineEdit().setPlaceholderText("Search items")
        completer = QCompleter(list(QUEST_ITEMS), self._combo_item)
        completer.setCaseSensitivity(Qt.CaseSensitivity.CaseInsensitive)
        completer.setFilterMode(Qt.MatchFlag.MatchContains)
        self._item_delegate = HighlightDelegate(completer.popup())
        completer.popup().setItemDelegate(self._item_delegate)
        self._combo_item.setCompleter(completer)
        fl.addRow(_row_label("Item:"), self._combo_item)
        fl.addRow("", _hint("Please select/search the Item to farm"))

        self._combo_mission = QComboBox()
        self._combo_mission.addItems(QUEST_MISSIONS)
        fl.addRow(_row_label("Mission:"), self._combo_mission)
        fl.addRow("", _hint("Please select the Mission"))

        self._edit_item_amount = QLineEdit()
        self._edit_item_amount.setMaximumWidth(80)
        fl.addRow(_row_label("# of Items:"), self._edit_item_amount)
        fl.addRow("", _hint("Please select the amount of Items to farm"))
        return w

    def _summons_section(self) -> QWidget:
        w = QWidget()
        row = QHBoxLayout(w)
        self._btn_select_summons = QPushButton("Select Summons")
        self._summons_label = QLabel("")
        self._summons_label.setObjectName("hint")
        self._summons_label.setWordWrap(True)
        row.addWidget(self._btn_select_summons)
        row.addWidget(self._summons_label, 1)
        return w

    def _party_section(self) -> QWidget:
        w = QWidget()
        fl = QFormLayout(w)
        self._edit_group = QLineEdit()
        self._edit_group.setMaximumWidth(60)
        self._group_hint = _hint("From %d to %d" % GROUP_NUMBER_RANGE)
        group_row = QHBoxLayout()
        group_row.addWidget(self._edit_group)
        group_row.addWidget(self._group_hint, 1)
        fl.addRow(_row_label("Group #:"), group_row)

        self._edit_party = QLineEdit()
        self._edit_party.setMaximumWidth(60)
        self._party_hint = _hint("From %d to %d" % PARTY_NUMBER_RANGE)
        party_row = QHBoxLayout()
        party_row.addWidget(self._edit_party)
        party_row.addWidget(self._party_hint, 1)
        fl.addRow(_row_label("Party #:"), party_row)
        return w

    def _debug_section(self) -> QWidget:
        w = QWidget()
        v = QVBoxLayout(w)
        self._check_debug = QCheckBox("Enable Debug Mode")
        v.addWidget(self._check_debug)
        v.addWidget(_hint("Enables debugging messages to show up in the log"))
        return w

    def _connect_signals(self) -> None:
        self._btn_load_script.clicked.connect(self._on_load_script_clicked)
        self._combo_farming_mode.currentTextChanged.connect(self._controller.set_farming_mode)
        self._combo_item.activated.connect(self._on_item_activated)
        self._combo_item.lineEdit().textEdited.connect(self._item_delegate.set_query)
        self._combo_item.lineEdit().editingFinished.connect(self._on_item_editing_finished)
        self._combo_mission.currentTextChanged.connect(self._controller.set_mission)
        self._edit_item_amount.textEdited.connect(self._on_item_amount_edited)
        self._btn_select_summons.clicked.connect(self.open_summon_selection)
        self._edit_group.textEdited.connect(self._on_group_edited)
        self._edit_party.textEdited.connect(self._on_party_edited)
        self._check_debug.toggled.connect(self._controller.set_debug_mode)
        self._store.replaced.connect(lambda _settings: self.sync_from_store())
        self._store.changed.connect(self._on_store_changed)
        self._controller.saved.connect(self._on_saved)
        self._controller.save_failed.connect(self._on_save_failed)

    def sync_from_store(self) -> None:
        """Populate all controls from the current settings record."""
        s = self._store.settings
        self._edit_script_name.setText(s.combat_script_name)
        self._combo_farming_mode.blockSignals(True)
        self._combo_farming_mode.setCurrentIndex(self._combo_farming_mode.findText(s.farming_mode))
        self._combo_farming_mode.blockSignals(False)
        self._combo_item.blockSignals(True)
        self._combo_item.setCurrentIndex(self._combo_item.findText(s.item) if s.item else -1)
        self._combo_item.setEditText(s.item or "")
        self._combo_item.blockSignals(False)
        self._combo_mission.blockSignals(True)
        self._combo_mission.setCurrentIndex(self._combo_mission.findText(s.mission))
        self._combo_mission.blockSignals(False)
        self._edit_item_amount.setText(str(s.item_amount))
        self._edit_group.setText(str(s.group_number))
        self._edit_party.setText(str(s.party_number))
        self._check_debug.blockSignals(True)
        self._check_debug.setChecked(s.debug_mode)
        self._check_debug.blockSignals(False)
        self._update_summons_label()
        self._update_validation()

    def _on_store_changed(self, field_name: str) -> None:
        if field_name in ("combat_script_name", "combat_script"):
            self._edit_script_name.setText(self._store.get("combat_script_name"))
        elif field_name == "summons":
            self._update_summons_label()
        elif field_name in ("group_number", "party_number"):
            self._update_validation()

    def _on_load_script_clicked(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Load Combat Script", "", "Combat Script (*.txt)"
        )
        self._controller.load_combat_script(path or None)
        # TODO: send the loaded combat script to the bot backend once it exposes an endpoint for it.

    def _on_item_activated(self, index: int) -> None:
        self._controller.set_item(self._combo_item.itemText(index))

    def _on_item_editing_finished(self) -> None:
        text = self._combo_item.currentText().strip()
        if not text:
            self._controller.set_item(None)
        elif text in QUEST_ITEMS:
            self._controller.set_item(text)
        else:
            # Only catalog items can be picked; fall back to the stored one
            logger.debug(f"Ignoring unknown item '{text}'")
            self._combo_item.setEditText(self._store.get("item") or "")

    def _on_item_amount_edited(self, text: str) -> None:
        amount = self._controller.set_item_amount(text)
        if text.strip() and str(amount) != text.strip():
            self._edit_item_amount.setText(str(amount))

    def _on_group_edited(self, text: str) -> None:
        self._controller.set_group_number(text)
        self._update_validation()

    def _on_party_edited(self, text: str) -> None:
        self._controller.set_party_number(text)
        self._update_validation()

    def _update_validation(self) -> None:
        group_error = self._controller.group_number_error
        party_error = self._controller.party_number_error
        _set_error(self._edit_group, group_error)
        _set_error(self._group_hint, group_error)
        _set_error(self._edit_party, party_error)
        _set_error(self._party_hint, party_error)

    def _update_summons_label(self) -> None:
        summons = self._store.summons
        if not summons:
            self._summons_label.setText("No support summons selected")
        else:
            self._summons_label.setText(", ".join(summons))

    def open_summon_selection(self) -> None:
        dialog = SummonTransferDialog(SummonSelection(self._catalog, self._store), parent=self)
        dialog.exec()

    def _on_saved(self, _token: int) -> None:
        self._last_saved = datetime.now()
        self._save_error = None
        self._update_status_bar()

    def _on_save_failed(self, message: str) -> None:
        self._save_error = message
        self._update_status_bar()

    def _update_status_bar(self) -> None:
        if self._save_error:
            self._status_dot.setStyleSheet("background: #d9534f; border-radius: 3px;")
            self._status_text.setText("Save failed")
            self._status_text.setToolTip(self._save_error)
            return
        self._status_text.setToolTip("")
        self._status_dot.setStyleSheet("background: #3a7a3a; border-radius: 3px;")
        if self._last_saved is None:
            self._status_text.setText("Last saved: -")
            return
        secs = int((datetime.now() - self._last_saved).total_seconds())
        if secs < 60:
            self._status_text.setText("Last saved: just now")
        elif secs < 3600:
            self._status_text.setText(f"Last saved: {secs // 60}m ago")
        else:
            self._status_text.setText(f"Last saved: {secs // 3600}h ago")
