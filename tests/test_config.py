# tests/test_config.py
import logging
import os
import sys
import tempfile
import types
import unittest

from immutableui.config import Config, configure_logging, get_config, reset_config


class ConfigTestCase(unittest.TestCase):

    def setUp(self):
        reset_config()
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        reset_config()
        self.tmp.cleanup()

    def write_yaml(self, text, name="custom.yaml"):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        return path


class TestConfigLoading(ConfigTestCase):

    def test_loads_yaml_file(self):
        path = self.write_yaml("reconciler:\n  trace: true\nlogging:\n  level: INFO\n")
        cfg = Config(config_file=path, prefer_embedded=False)
        self.assertEqual(cfg.source, "file")
        self.assertTrue(cfg.get_nested("reconciler.trace"))
        self.assertEqual(cfg.get_nested("logging.level"), "INFO")
        self.assertEqual(str(cfg.resolved_config_path), os.path.realpath(path))

    def test_missing_keys_return_default(self):
        path = self.write_yaml("reconciler:\n  trace: true\n")
        cfg = Config(config_file=path, prefer_embedded=False)
        self.assertEqual(cfg.get_nested("reconciler.nope", 7), 7)
        self.assertEqual(cfg.get_nested("reconciler.trace.deeper", "x"), "x")
        self.assertEqual(cfg.get_nested("", "d"), "d")
        self.assertIsNone(cfg.get("missing"))

    def test_singleton(self):
        path = self.write_yaml("a: 1\n")
        first = get_config(config_file=path, prefer_embedded=False)
        self.assertIs(get_config(), first)
        self.assertEqual(get_config().get("a"), 1)

    def test_missing_file_leaves_no_source(self):
        cfg = Config(config_file=os.path.join(self.tmp.name, "absent.yaml"), prefer_embedded=False,
                     embedded_module_name="immutableui_no_such_module")
        self.assertIsNone(cfg.source)
        self.assertEqual(cfg.as_dict(), {})

    def test_non_mapping_yaml_kept_under_root(self):
        path = self.write_yaml("- a\n- b\n")
        cfg = Config(config_file=path, prefer_embedded=False)
        self.assertEqual(cfg.as_dict(), {"__root__": ["a", "b"]})

    def test_empty_yaml_is_empty_config(self):
        path = self.write_yaml("")
        cfg = Config(config_file=path, prefer_embedded=False)
        self.assertEqual(cfg.source, "file")
        self.assertEqual(cfg.as_dict(), {})

    def test_invalid_yaml_is_logged_and_skipped(self):
        path = self.write_yaml("a: [unclosed\n")
        with self.assertLogs("immutableui.config", level="WARNING"):
            cfg = Config(config_file=path, prefer_embedded=False,
                         embedded_module_name="immutableui_no_such_module")
        self.assertIsNone(cfg.source)

    def test_embedded_module_wins_when_preferred(self):
        module = types.ModuleType("immutableui_test_embedded")
        module.CONFIG = {"reconciler": {"check_types": False}}
        sys.modules[module.__name__] = module
        self.addCleanup(sys.modules.pop, module.__name__, None)

        path = self.write_yaml("reconciler:\n  check_types: true\n")
        cfg = Config(config_file=path, embedded_module_name=module.__name__)
        self.assertTrue(cfg.is_embedded)
        self.assertFalse(cfg.get_nested("reconciler.check_types"))

        cfg.reload(prefer_embedded=False)
        self.assertEqual(cfg.source, "file")
        self.assertTrue(cfg.get_nested("reconciler.check_types"))

    def test_describe(self):
        path = self.write_yaml("a: 1\n")
        info = Config(config_file=path, prefer_embedded=False).describe()
        self.assertEqual(info["source"], "file")
        self.assertEqual(info["keys"], ["a"])


class TestOverrides(ConfigTestCase):

    def test_set_and_clear(self):
        path = self.write_yaml("reconciler:\n  trace: false\n")
        cfg = Config(config_file=path, prefer_embedded=False)
        cfg.set("reconciler.trace", True)
        self.assertTrue(cfg.get_nested("reconciler.trace"))
        cfg.reload()
        self.assertTrue(cfg.get_nested("reconciler.trace"))
        cfg.clear_overrides()
        self.assertFalse(cfg.get_nested("reconciler.trace"))

    def test_shallow_override(self):
        path = self.write_yaml("a: 1\n")
        cfg = Config(config_file=path, prefer_embedded=False)
        cfg.set("a", 2)
        self.assertEqual(cfg.get("a"), 2)
        self.assertEqual(cfg.as_dict(), {"a": 1})


class TestConfigureLogging(ConfigTestCase):

    def setUp(self):
        super().setUp()
        self.logger = logging.getLogger("immutableui")
        self.saved = (self.logger.level, list(self.logger.handlers))

    def tearDown(self):
        self.logger.setLevel(self.saved[0])
        self.logger.handlers[:] = self.saved[1]
        super().tearDown()

    def test_applies_level(self):
        path = self.write_yaml("logging:\n  level: debug\n")
        configure_logging(Config(config_file=path, prefer_embedded=False))
        self.assertEqual(self.logger.level, logging.DEBUG)
        self.assertTrue(any(isinstance(h, logging.StreamHandler) for h in self.logger.handlers))

    def test_handler_added_once(self):
        path = self.write_yaml("logging:\n  level: INFO\n")
        cfg = Config(config_file=path, prefer_embedded=False)
        configure_logging(cfg)
        count = len(self.logger.handlers)
        configure_logging(cfg)
        self.assertEqual(len(self.logger.handlers), count)

    def test_unknown_level_rejected(self):
        path = self.write_yaml("logging:\n  level: LOUD\n")
        with self.assertRaises(ValueError):
            configure_logging(Config(config_file=path, prefer_embedded=False))


if __name__ == "__main__":
    unittest.main()
