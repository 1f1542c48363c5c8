#!/usr/bin/env python3
"""
Unit tests for configuration loading and the default directory store.
"""

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

# Add the project root to the path so we can import gitglance modules
sys.path.insert(0, str(Path(__file__).parent))

from gitglance.config import Config, DefaultDirectoryStore, load_configuration


class TestConfig(unittest.TestCase):
    """Config validation and environment loading."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_defaults(self):
        config = Config(config_dir=self.temp_dir)

        self.assertEqual(config.log_level, "WARNING")
        self.assertFalse(config.report_clean_divergence)
        self.assertEqual(config.default_directory_file, self.temp_dir.resolve() / "default_directory")

    def test_log_level_is_normalized(self):
        self.assertEqual(Config(config_dir=self.temp_dir, log_level="debug").log_level, "DEBUG")

    def test_invalid_log_level_rejected(self):
        with self.assertRaises(ValueError):
            Config(config_dir=self.temp_dir, log_level="LOUD")

    def test_string_config_dir_is_normalized(self):
        config = Config(config_dir=str(self.temp_dir / "sub" / ".." / "cfg"))
        self.assertEqual(config.config_dir, (self.temp_dir / "cfg").resolve())

    def test_load_from_environment(self):
        env = {
            "GITGLANCE_LOG_LEVEL": "info",
            "GITGLANCE_CONFIG_DIR": str(self.temp_dir),
            "GITGLANCE_REPORT_CLEAN_DIVERGENCE": "yes",
        }
        with patch.dict(os.environ, env):
            config = load_configuration()

        self.assertEqual(config.log_level, "INFO")
        self.assertEqual(config.config_dir, self.temp_dir.resolve())
        self.assertTrue(config.report_clean_divergence)

    def test_load_rejects_bad_log_level(self):
        env = {"GITGLANCE_LOG_LEVEL": "chatty", "GITGLANCE_CONFIG_DIR": str(self.temp_dir)}
        with patch.dict(os.environ, env):
            with self.assertRaises(ValueError) as ctx:
                load_configuration()

        self.assertIn("Configuration error", str(ctx.exception))

    def test_clean_divergence_defaults_off(self):
        with patch.dict(os.environ, {"GITGLANCE_CONFIG_DIR": str(self.temp_dir)}):
            os.environ.pop("GITGLANCE_REPORT_CLEAN_DIVERGENCE", None)
            config = load_configuration()

        self.assertFalse(config.report_clean_divergence)


class TestDefaultDirectoryStore(unittest.TestCase):
    """Reading and writing the stored default directory."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.store = DefaultDirectoryStore(self.temp_dir / "nested" / "default_directory")

    def tearDown(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_missing_file_reads_none(self):
        self.assertIsNone(self.store.read_default())

    def test_write_then_read(self):
        target = self.temp_dir / "projects"
        self.store.write_default(target)

        self.assertEqual(self.store.read_default(), target)
        self.assertEqual(self.store.path.read_text(encoding="utf-8"), f"{target}\n")

    def test_write_overwrites_previous_value(self):
        self.store.write_default(self.temp_dir / "first")
        self.store.write_default(self.temp_dir / "second")

        self.assertEqual(self.store.read_default(), self.temp_dir / "second")

    def test_blank_file_reads_none(self):
        self.store.path.parent.mkdir(parents=True)
        self.store.path.write_text("\n   \n", encoding="utf-8")

        self.assertIsNone(self.store.read_default())


if __name__ == "__main__":
    unittest.main(verbosity=2)
