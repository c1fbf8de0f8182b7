import json
import os
import tempfile
import unittest
from unittest.mock import patch

from simple_logger import Slogger

from ..config import DEFAULT_CONFIG, load_config, save_config
from ..errors import ConfigError

_ENV_KEYS = ("PAGEKIT_PAGE_SIZE", "PAGEKIT_LOG_LEVEL", "PAGEKIT_LIST_KEY")


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.config_file = os.path.join(self.tmp.name, "pagekit.json")

        self._log_path = Slogger.log_path
        Slogger.log_path = os.path.join(self.tmp.name, "logs", "test.log")

        self.env = patch.dict(os.environ)
        self.env.start()
        for key in _ENV_KEYS:
            os.environ.pop(key, None)

    def tearDown(self):
        self.env.stop()
        Slogger.log_path = self._log_path
        self.tmp.cleanup()

    def _write(self, data):
        with open(self.config_file, "w", encoding="utf-8") as f:
            f.write(data if isinstance(data, str) else json.dumps(data))

    def test_defaults_without_file(self):
        config = load_config(self.config_file)
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertIsNot(config["pagination"], DEFAULT_CONFIG["pagination"])

    def test_file_values_merge_into_sections(self):
        self._write({"pagination": {"page_size": 50}})
        config = load_config(self.config_file)
        self.assertEqual(config["pagination"]["page_size"], 50)
        # untouched keys of the same section survive
        self.assertFalse(config["pagination"]["debug_events"])
        self.assertEqual(config["logging"]["level"], "INFO")

    def test_environment_overrides_file(self):
        self._write({"pagination": {"page_size": 50}})
        os.environ["PAGEKIT_PAGE_SIZE"] = "7"
        os.environ["PAGEKIT_LOG_LEVEL"] = "debug"
        os.environ["PAGEKIT_LIST_KEY"] = "documents"

        config = load_config(self.config_file)
        self.assertEqual(config["pagination"]["page_size"], 7)
        self.assertEqual(config["logging"]["level"], "DEBUG")
        self.assertEqual(config["ui"]["list_key"], "documents")

    def test_invalid_page_size(self):
        os.environ["PAGEKIT_PAGE_SIZE"] = "many"
        with self.assertRaises(ConfigError):
            load_config(self.config_file)

        os.environ["PAGEKIT_PAGE_SIZE"] = "0"
        with self.assertRaises(ConfigError):
            load_config(self.config_file)

    def test_invalid_log_level(self):
        self._write({"logging": {"level": "LOUD"}})
        with self.assertRaises(ConfigError):
            load_config(self.config_file)

    def test_unreadable_file_falls_back_to_defaults(self):
        self._write("{not json")
        config = load_config(self.config_file)
        self.assertEqual(config["pagination"]["page_size"], 20)
        with open(Slogger.log_path, encoding="utf-8") as f:
            self.assertIn("Error loading config file", f.read())

    def test_non_object_file_is_rejected(self):
        self._write([1, 2, 3])
        with self.assertRaises(ConfigError):
            load_config(self.config_file)

    def test_save_and_reload(self):
        config = load_config(self.config_file)
        config["ui"]["theme"] = "light"
        self.assertTrue(save_config(config, self.config_file))
        self.assertEqual(load_config(self.config_file)["ui"]["theme"], "light")


class TestSlogger(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self._saved = (Slogger.log_path, Slogger.min_level)

    def tearDown(self):
        Slogger.log_path, Slogger.min_level = self._saved
        self.tmp.cleanup()

    def test_level_threshold_and_context(self):
        path = os.path.join(self.tmp.name, "nested", "app.log")
        Slogger.configure(path=path, level="warning")

        Slogger.info("hidden message")
        Slogger.error("visible message", {"key": "documents"})

        with open(path, encoding="utf-8") as f:
            content = f.read()
        self.assertNotIn("hidden message", content)
        self.assertIn("ERROR - visible message | key=documents", content)

    def test_exception_writes_traceback(self):
        path = os.path.join(self.tmp.name, "app.log")
        Slogger.configure(path=path, level="DEBUG")
        try:
            raise ValueError("bad page")
        except ValueError as e:
            Slogger.exception(e, "Fetch blew up")

        with open(path, encoding="utf-8") as f:
            content = f.read()
        self.assertIn("Fetch blew up: ValueError - bad page", content)
        self.assertIn("TRACEBACK", content)

    def test_unknown_level(self):
        with self.assertRaises(ValueError):
            Slogger.configure(level="chatty")


if __name__ == "__main__":
    unittest.main()
