import json
import tempfile
import unittest
from pathlib import Path

from src.automation.summon_selection import SummonSelection
from src.models import SummonCatalog
from src.settings import SettingsController, SettingsStore
from src.ui.settings_page import SettingsPage
from src.ui.transfer_list import SummonTransferDialog
from tests.qt_app import get_app


class TransferDialogTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = get_app()

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.images = Path(self._tmp.name)
        (self.images / "zeus.png").write_bytes(b"")
        self.catalog = SummonCatalog({"A": {"summons": ["Zeus", "Hades", "Hades"]}})
        self.store = SettingsStore()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _dialog(self) -> SummonTransferDialog:
        with self.assertLogs("src.models.catalog", level="WARNING"):
            return SummonTransferDialog(
                SummonSelection(self.catalog, self.store), images_dir=self.images
            )

    def test_clicking_moves_between_panes_and_updates_store(self) -> None:
        dialog = self._dialog()
        self.assertEqual(dialog.available_names, ["Zeus", "Hades"])
        self.assertEqual(dialog.selected_names, [])

        self.assertTrue(dialog.toggle_summon("Zeus"))
        self.assertEqual(dialog.available_names, ["Hades"])
        self.assertEqual(dialog.selected_names, ["Zeus"])
        self.assertEqual(self.store.summons, ["Zeus"])

        self.assertTrue(dialog.toggle_summon("Zeus"))
        self.assertEqual(dialog.available_names, ["Hades", "Zeus"])
        self.assertEqual(self.store.summons, [])

    def test_reopening_starts_from_store_selection(self) -> None:
        self.store.set_summons(["Hades"])
        dialog = self._dialog()
        self.assertEqual(dialog.available_names, ["Zeus"])
        self.assertEqual(dialog.selected_names, ["Hades"])


class SettingsPageTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = get_app()

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "settings.json"
        self.store = SettingsStore()
        self.controller = SettingsController(self.store, self.path)
        self.page = SettingsPage(
            self.controller, SummonCatalog({"A": {"summons": ["Zeus", "Hades"]}})
        )

    def tearDown(self) -> None:
        self.controller.close()
        self._tmp.cleanup()

    def test_form_edits_reach_settings_file(self) -> None:
        self.page._on_item_amount_edited("12")
        self.page._on_group_edited("8")
        self.page._check_debug.setChecked(True)
        self.assertTrue(self.page._edit_group.property("error"))
        self.assertTrue(self.controller.flush(timeout=5.0))
        data = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(data["itemAmount"], 12)
        self.assertEqual(data["groupNumber"], 8)
        self.assertTrue(data["debugMode"])

    def test_unknown_item_text_reverts_to_stored_item(self) -> None:
        self.controller.set_item("Satin Feather")
        self.page._combo_item.setEditText("Gold Bar")
        self.page._on_item_editing_finished()
        self.assertEqual(self.page._combo_item.currentText(), "Satin Feather")
        self.assertEqual(self.store.get("item"), "Satin Feather")

    def test_replaced_store_resyncs_controls(self) -> None:
        settings = self.store.settings
        settings.farming_mode = "Special"
        settings.party_number = 4
        self.store.replace(settings)
        self.assertEqual(self.page._combo_farming_mode.currentText(), "Special")
        self.assertEqual(self.page._edit_party.text(), "4")


if __name__ == "__main__":
    unittest.main()
