from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gitsi import config
from gitsi.runner import DEFAULT_PAGER


class ConfigBehaviorTests(unittest.TestCase):
    def test_search_term_round_trips_through_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("gitsi.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_search_term(), "")
                config.save_search_term("src/")

                self.assertEqual(config.load_search_term(), "src/")
                self.assertEqual(config.load_config(), {"search_term": "src/"})

    def test_saving_one_key_keeps_others(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text('{"theme": "ocean", "style": "friendly"}', encoding="utf-8")
            with mock.patch("gitsi.config.CONFIG_PATH", config_path):
                config.save_search_term("abc")

                self.assertEqual(config.load_theme_name(), "ocean")
                self.assertEqual(config.load_style(), "friendly")

    def test_malformed_or_wrongly_typed_config_falls_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2", encoding="utf-8")
            with mock.patch("gitsi.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertIsNone(config.load_theme_name())

            config_path.write_text('{"search_term": 5, "pager": "  "}', encoding="utf-8")
            with mock.patch("gitsi.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_search_term(), "")
                self.assertEqual(config.load_pager(), DEFAULT_PAGER)

    def test_custom_pager(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text('{"pager": "more"}', encoding="utf-8")
            with mock.patch("gitsi.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_pager(), "more")

    def test_unwritable_location_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")
            with mock.patch("gitsi.config.CONFIG_PATH", blocker / "config.json"):
                config.save_search_term("abc")
                self.assertEqual(config.load_search_term(), "")


if __name__ == "__main__":
    unittest.main()
