# tests/test_cli.py
import json
import logging
import unittest

from typer.testing import CliRunner

from immutableui.config import reset_config
from immutableui_cli.main import app, counter_init, counter_update

runner = CliRunner()


class TestCli(unittest.TestCase):

    def setUp(self):
        reset_config()
        self.logger = logging.getLogger("immutableui")
        self.saved = (self.logger.level, list(self.logger.handlers))

    def tearDown(self):
        # configure_logging attaches a handler to the runner's captured stream
        self.logger.setLevel(self.saved[0])
        self.logger.handlers[:] = self.saved[1]
        reset_config()

    def test_bindings_lists_plain_widgets(self):
        result = runner.invoke(app, ["bindings"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Label : View", result.output)
        self.assertIn("Layout : View  (not creatable)", result.output)
        self.assertIn("children", result.output)

    def test_bindings_unknown_toolkit(self):
        result = runner.invoke(app, ["bindings", "--toolkit", "tk"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Unknown toolkit", result.output)

    def test_demo_reuses_root(self):
        result = runner.invoke(app, ["demo", "--clicks", "2"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Count: 2", result.output)
        self.assertIn("3 renders, root reused: True", result.output)

    def test_config_command(self):
        result = runner.invoke(app, ["config"])
        self.assertEqual(result.exit_code, 0, result.output)
        info = json.loads(result.output.split("\n}\n")[0] + "\n}")
        self.assertIn("source", info)

    def test_missing_config_file(self):
        result = runner.invoke(app, ["--config", "/nonexistent/immutableui.yaml", "config"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Could not load configuration", result.output)


class TestCounter(unittest.TestCase):

    def test_update(self):
        model = counter_init()
        model = counter_update("increment", model)
        model = counter_update("increment", model)
        self.assertEqual(counter_update("decrement", model)["count"], 1)
        self.assertEqual(counter_update("reset", model), counter_init())
        with self.assertRaises(ValueError):
            counter_update("explode", model)


if __name__ == "__main__":
    unittest.main()
