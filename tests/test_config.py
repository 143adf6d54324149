"""
Tests for config loading and environment overrides.
"""

import os
import unittest
import tempfile
from pathlib import Path
from unittest.mock import patch

from watchmanlite.core.configs import ClientConfig, get_client_config, load_raw_config

_CLEAN_ENV = {"WATCHMAN_SOCK": "", "WATCHMAN_BINARY": "", "WATCHMANLITE_TIMEOUT_S": ""}


class TestConfig(unittest.TestCase):
    """Test cases for configuration helpers."""

    def setUp(self):
        """Set up test environment with temporary directories."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = Path(self.temp_dir) / "config.cfg"
        self.env_file = Path(self.temp_dir) / ".env"

    def tearDown(self):
        """Clean up temporary files."""
        import shutil

        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_config(self, *, defaults: dict[str, str]) -> None:
        import configparser

        cfg = configparser.ConfigParser()
        cfg["DEFAULT"] = defaults
        with open(self.config_file, "w") as handle:
            cfg.write(handle)

    def test_load_raw_config_lowercases_keys(self):
        self._write_config(defaults={"WATCHMAN_SOCK": "/tmp/wm.sock", "TIMEOUT": "5"})

        raw = load_raw_config(self.config_file, self.env_file)
        self.assertEqual(raw["watchman_sock"], "/tmp/wm.sock")
        self.assertEqual(raw["timeout"], "5")

    def test_load_raw_config_falls_back_to_dotenv(self):
        self.env_file.write_text("WATCHMAN_BINARY=/opt/bin/watchman\nWATCHMANLITE_TIMEOUT_S=2.5\n")

        raw = load_raw_config(self.config_file, self.env_file)
        self.assertEqual(raw["watchman_binary"], "/opt/bin/watchman")
        self.assertEqual(raw["watchmanlite_timeout_s"], "2.5")

    def test_config_file_wins_over_dotenv(self):
        self._write_config(defaults={"WATCHMAN_BINARY": "from-cfg"})
        self.env_file.write_text("WATCHMAN_BINARY=from-env-file\n")

        raw = load_raw_config(self.config_file, self.env_file)
        self.assertEqual(raw["watchman_binary"], "from-cfg")

    def test_load_raw_config_missing_files_returns_empty_dict(self):
        self.assertFalse(self.config_file.exists())
        raw = load_raw_config(self.config_file, self.env_file)
        self.assertEqual(raw, {}, "Should return empty dict when config does not exist")

    def test_get_client_config_defaults(self):
        with patch.dict(os.environ, _CLEAN_ENV, clear=False):
            config = get_client_config({})
        self.assertEqual(config, ClientConfig(sockname=None, binary="watchman", timeout=None))

    def test_get_client_config_from_raw(self):
        raw = {"watchman_sock": "/tmp/wm.sock", "binary": "wm", "timeout": "1.5"}
        with patch.dict(os.environ, _CLEAN_ENV, clear=False):
            config = get_client_config(raw)
        self.assertEqual(config.sockname, "/tmp/wm.sock")
        self.assertEqual(config.binary, "wm")
        self.assertEqual(config.timeout, 1.5)

    def test_environment_overrides_file_values(self):
        raw = {"watchman_sock": "/tmp/file.sock", "timeout": "1"}
        env = {
            "WATCHMAN_SOCK": "/tmp/env.sock",
            "WATCHMAN_BINARY": "/usr/bin/watchman",
            "WATCHMANLITE_TIMEOUT_S": "42",
        }
        with patch.dict(os.environ, env, clear=False):
            config = get_client_config(raw)

        self.assertEqual(config.sockname, "/tmp/env.sock")
        self.assertEqual(config.binary, "/usr/bin/watchman")
        self.assertEqual(config.timeout, 42.0)

    def test_zero_timeout_means_none(self):
        with patch.dict(os.environ, _CLEAN_ENV, clear=False):
            self.assertIsNone(get_client_config({"timeout": "0"}).timeout)

    def test_invalid_timeout_raises(self):
        with patch.dict(os.environ, _CLEAN_ENV, clear=False):
            with self.assertRaises(ValueError) as context:
                get_client_config({"timeout": "soon"})
        self.assertIn("Invalid timeout", str(context.exception))


if __name__ == "__main__":
    unittest.main()
