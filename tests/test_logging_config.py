"""Unit tests for bettersaas.core.logging_config: backend selection and JSON output."""

import io
import json
import logging
import unittest

from bettersaas.core.logging_config import ROOT_LOGGER_NAME, JsonFormatter, configure_logging
from tests.support import make_settings


class _TtyStream(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestConfigureLogging(unittest.TestCase):
    def tearDown(self) -> None:
        root = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root.handlers):
            root.removeHandler(handler)

    def test_auto_uses_json_when_not_a_tty(self) -> None:
        stream = io.StringIO()
        configure_logging(make_settings(LOG_FORMAT="auto"), stream=stream)
        logging.getLogger("bettersaas.tests").info("hello %s", "world")
        record = json.loads(stream.getvalue().strip())
        self.assertEqual(record["level"], "info")
        self.assertEqual(record["name"], "bettersaas.tests")
        self.assertEqual(record["msg"], "hello world")
        self.assertIn("time", record)

    def test_auto_uses_console_on_tty(self) -> None:
        stream = _TtyStream()
        configure_logging(make_settings(LOG_FORMAT="auto"), stream=stream)
        logging.getLogger("bettersaas.tests").warning("careful")
        line = stream.getvalue().strip()
        self.assertIn("WARNING bettersaas.tests careful", line)

    def test_explicit_json_on_tty(self) -> None:
        stream = _TtyStream()
        configure_logging(make_settings(LOG_FORMAT="json"), stream=stream)
        logging.getLogger("bettersaas.tests").error("boom")
        self.assertEqual(json.loads(stream.getvalue())["level"], "error")

    def test_reconfigure_replaces_handler(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        configure_logging(make_settings(LOG_FORMAT="console"), stream=first)
        configure_logging(make_settings(LOG_FORMAT="console"), stream=second)
        self.assertEqual(len(logging.getLogger(ROOT_LOGGER_NAME).handlers), 1)
        logging.getLogger("bettersaas.tests").info("once")
        self.assertEqual(first.getvalue(), "")
        self.assertEqual(second.getvalue().count("once"), 1)

    def test_level_applied(self) -> None:
        stream = io.StringIO()
        configure_logging(make_settings(LOG_FORMAT="console", LOG_LEVEL="WARNING"), stream=stream)
        logging.getLogger("bettersaas.tests").info("hidden")
        self.assertEqual(stream.getvalue(), "")

    def test_child_logger_from_returned_root(self) -> None:
        stream = io.StringIO()
        root = configure_logging(make_settings(LOG_FORMAT="console"), stream=stream)
        root.getChild("scripts.setup_admin").info("child")
        self.assertIn("bettersaas.scripts.setup_admin child", stream.getvalue())


class TestJsonFormatter(unittest.TestCase):
    def test_extra_fields_included(self) -> None:
        record = logging.LogRecord("bettersaas.x", logging.INFO, __file__, 1, "msg", (), None)
        record.user_id = "u1"
        out = json.loads(JsonFormatter().format(record))
        self.assertEqual(out["user_id"], "u1")
        self.assertNotIn("args", out)


if __name__ == "__main__":
    unittest.main()
