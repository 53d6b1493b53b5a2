import json
import tempfile
import unittest
from pathlib import Path

from src.automation.summon_selection import SummonSelection
from src.models import BotSettings, SummonCatalog
from src.settings import SETTINGS_PATH, SettingsController, SettingsStore, parse_int_prefix
from tests.qt_app import get_app


class SettingsControllerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        get_app()

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "settings.json"
        self.store = SettingsStore()
        self.controller = SettingsController(self.store, self.path)

    def tearDown(self) -> None:
        self.controller.close()
        self._tmp.cleanup()

    def _saved(self) -> dict:
        self.assertTrue(self.controller.flush(timeout=5.0))
        return json.loads(self.path.read_text(encoding="utf-8"))

    def test_load_missing_file_keeps_defaults_and_does_not_write(self) -> None:
        with self.assertLogs("src.settings.controller", level="WARNING"):
            loaded = self.controller.load_on_startup()
        self.assertEqual(loaded, BotSettings())
        self.assertTrue(self.controller.flush(timeout=5.0))
        self.assertFalse(self.path.exists())

    def test_load_malformed_json_keeps_defaults(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("src.settings.controller", level="ERROR"):
            loaded = self.controller.load_on_startup()
        self.assertEqual(loaded, BotSettings())
        self.assertEqual(self.store.settings, BotSettings())

    def test_load_non_object_root_keeps_defaults(self) -> None:
        self.path.write_text("[1, 2, 3]", encoding="utf-8")
        with self.assertLogs("src.settings.controller", level="ERROR"):
            self.controller.load_on_startup()
        self.assertEqual(self.store.settings, BotSettings())

    def test_load_non_utf8_file_keeps_defaults(self) -> None:
        self.path.write_bytes(b"\xff\xfe{}")
        with self.assertLogs("src.settings.controller", level="WARNING"):
            loaded = self.controller.load_on_startup()
        self.assertEqual(loaded, BotSettings())
        self.assertEqual(self.store.settings, BotSettings())

    def test_load_unreadable_path_keeps_defaults(self) -> None:
        self.path.mkdir()
        with self.assertLogs("src.settings.controller", level="WARNING"):
            loaded = self.controller.load_on_startup()
        self.assertEqual(loaded, BotSettings())

    def test_load_non_finite_numbers_fall_back_per_field(self) -> None:
        self.path.write_text(
            '{"groupNumber": 1e400, "itemAmount": NaN, "partyNumber": -Infinity, "mission": "test1"}',
            encoding="utf-8",
        )
        loaded = self.controller.load_on_startup()
        self.assertEqual(loaded.group_number, 1)
        self.assertEqual(loaded.item_amount, 0)
        self.assertEqual(loaded.party_number, 1)
        self.assertEqual(loaded.mission, "test1")
        self.assertEqual(self.store.settings, loaded)

    def test_default_settings_path_is_relative_to_working_directory(self) -> None:
        self.assertEqual(SETTINGS_PATH, Path("settings.json"))
        self.assertFalse(SETTINGS_PATH.is_absolute())

    def test_load_distributes_fields_without_saving(self) -> None:
        saved = BotSettings(
            combat_script_name="a.txt",
            combat_script="Turn 1:\nend",
            farming_mode="Quest",
            item="Satin Feather",
            mission="test1",
            item_amount=5,
            group_number=3,
            party_number=2,
            debug_mode=True,
            summons=["Zeus"],
        )
        self.path.write_text(json.dumps(saved.to_dict(), indent=4), encoding="utf-8")
        mtime = self.path.stat().st_mtime_ns
        loaded = self.controller.load_on_startup()
        self.assertEqual(loaded, saved)
        self.assertEqual(self.store.settings, saved)
        self.assertTrue(self.store.ready)
        self.assertTrue(self.controller.flush(timeout=5.0))
        self.assertEqual(self.path.stat().st_mtime_ns, mtime)

    def test_every_field_change_writes_full_record_with_four_space_indent(self) -> None:
        self.controller.set_farming_mode("Quest")
        self.controller.set_mission("test1")
        self.controller.set_item("Flying Sprout")
        data = self._saved()
        self.assertEqual(data, {**BotSettings().to_dict(), "farmingMode": "Quest",
                                "mission": "test1", "item": "Flying Sprout"})
        text = self.path.read_text(encoding="utf-8")
        self.assertIn('\n    "currentCombatScriptName": ""', text)

    def test_save_then_load_round_trip(self) -> None:
        self.controller.set_farming_mode("Special")
        self.controller.set_item_amount("7")
        self.controller.set_group_number("4")
        self.controller.set_party_number("5")
        self.controller.set_debug_mode(True)
        self.store.set_summons(["Hades", "Zeus"])
        self.assertTrue(self.controller.flush(timeout=5.0))

        other_store = SettingsStore()
        other = SettingsController(other_store, self.path)
        try:
            loaded = other.load_on_startup()
        finally:
            other.close()
        self.assertEqual(loaded, self.store.settings)

    def test_item_amount_coercion(self) -> None:
        self.assertEqual(self.controller.set_item_amount(""), 0)
        self.assertEqual(self.controller.set_item_amount("abc"), 0)
        self.assertEqual(self.controller.set_item_amount("12"), 12)
        self.assertEqual(self.store.get("item_amount"), 12)
        self.assertEqual(self.controller.set_item_amount("-4"), 0)
        self.assertEqual(self._saved()["itemAmount"], 0)

    def test_out_of_range_group_and_party_are_flagged_but_saved(self) -> None:
        self.assertFalse(self.controller.group_number_error)
        self.controller.set_group_number("9")
        self.controller.set_party_number("7")
        self.assertTrue(self.controller.group_number_error)
        self.assertTrue(self.controller.party_number_error)
        data = self._saved()
        self.assertEqual(data["groupNumber"], 9)
        self.assertEqual(data["partyNumber"], 7)

        self.controller.set_group_number("7")
        self.controller.set_party_number("6")
        self.assertFalse(self.controller.group_number_error)
        self.assertFalse(self.controller.party_number_error)

    def test_non_numeric_group_number_is_flagged(self) -> None:
        self.controller.set_group_number("")
        self.assertTrue(self.controller.group_number_error)
        self.assertEqual(self._saved()["groupNumber"], 0)

    def test_load_combat_script_stores_name_and_contents(self) -> None:
        script = Path(self._tmp.name) / "full_auto.txt"
        script.write_text("Turn 1:\n    enableFullAuto\nend\n", encoding="utf-8")
        self.assertTrue(self.controller.load_combat_script(str(script)))
        data = self._saved()
        self.assertEqual(data["currentCombatScriptName"], "full_auto.txt")
        self.assertEqual(data["currentCombatScript"], "Turn 1:\n    enableFullAuto\nend\n")

    def test_cancelled_or_failed_combat_script_resets_fields(self) -> None:
        self.store.set_combat_script("old.txt", "old")
        self.assertFalse(self.controller.load_combat_script(None))
        self.assertEqual(self.store.get("combat_script_name"), "")
        self.assertEqual(self.store.get("combat_script"), "")

        self.store.set_combat_script("old.txt", "old")
        with self.assertLogs("src.settings.controller", level="WARNING"):
            ok = self.controller.load_combat_script(Path(self._tmp.name) / "missing.txt")
        self.assertFalse(ok)
        self.assertEqual(self.store.get("combat_script_name"), "")
        self.assertEqual(self._saved()["currentCombatScript"], "")

    def test_debug_mode_drives_ready_status(self) -> None:
        seen = []
        self.store.ready_changed.connect(seen.append)
        self.controller.set_debug_mode(True)
        self.controller.set_debug_mode(False)
        self.assertEqual(seen, [True, False])
        self.assertFalse(self._saved()["debugMode"])

    def test_summon_moves_are_persisted(self) -> None:
        catalog = SummonCatalog({"A": {"summons": ["Zeus", "Hades"]}})
        sel = SummonSelection(catalog, self.store)
        sel.initialize()
        sel.move_to_selected("Hades")
        sel.move_to_selected("Zeus")
        self.assertEqual(self._saved()["summons"], ["Hades", "Zeus"])

    def test_write_failure_is_logged_and_not_raised(self) -> None:
        self.path.mkdir()
        with self.assertLogs("src.settings.writer", level="ERROR"):
            self.controller.set_mission("test1")
            self.assertTrue(self.controller.flush(timeout=5.0))
        self.assertTrue(self.path.is_dir())


class ParseIntPrefixTests(unittest.TestCase):
    def test_parse_int_prefix(self) -> None:
        self.assertEqual(parse_int_prefix("12"), 12)
        self.assertEqual(parse_int_prefix(" 12abc"), 12)
        self.assertEqual(parse_int_prefix("-3"), -3)
        self.assertEqual(parse_int_prefix(8), 8)
        self.assertIsNone(parse_int_prefix(""))
        self.assertIsNone(parse_int_prefix("abc"))
        self.assertIsNone(parse_int_prefix(None))
        self.assertIsNone(parse_int_prefix(True))
        self.assertIsNone(parse_int_prefix(float("inf")))
        self.assertIsNone(parse_int_prefix(float("nan")))
        self.assertEqual(parse_int_prefix(3.9), 3)


if __name__ == "__main__":
    unittest.main()
