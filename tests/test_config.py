"""Tests for config persistence and input sanitization."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyrecent import config


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch("lazyrecent.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_defaults_when_config_missing(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_context_lines(), 2)
        self.assertFalse(config.load_show_changed())
        self.assertEqual(config.load_style_name(), "monokai")

    def test_show_changed_round_trip(self) -> None:
        config.save_show_changed(True)
        self.assertTrue(config.load_show_changed())
        config.save_show_changed(False)
        self.assertFalse(config.load_show_changed())

    def test_context_lines_round_trip_keeps_other_keys(self) -> None:
        config.save_show_changed(True)
        config.save_context_lines(4)
        self.assertEqual(config.load_context_lines(), 4)
        self.assertTrue(config.load_show_changed())

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        config.save_config({"context_lines": -3, "show_changed": "yes", "style": "  "})
        self.assertEqual(config.load_context_lines(), 2)
        self.assertFalse(config.load_show_changed())
        self.assertEqual(config.load_style_name(), "monokai")

        config.save_config({"context_lines": True})
        self.assertEqual(config.load_context_lines(), 2)

    def test_malformed_json_loads_as_empty(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("{not json", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

    def test_non_object_json_loads_as_empty(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

    def test_style_name_is_stripped(self) -> None:
        config.save_config({"style": " friendly "})
        self.assertEqual(config.load_style_name(), "friendly")


if __name__ == "__main__":
    unittest.main()
