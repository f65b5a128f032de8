import json
import logging
import logging.handlers
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "layout"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from indentbars_core.config import AppConfig
from indentbars_core.logging_setup import configure_from_settings, configure_logging, get_logger


class LoggingSetupTests(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("indentbars")
        self.saved = (list(self.logger.handlers), self.logger.level)
        self.logger.handlers = []
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._restore)

    def _restore(self):
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers, level = self.saved
        self.logger.setLevel(level)
        self.tmp.cleanup()

    def _file_handler(self):
        handlers = [h for h in self.logger.handlers if isinstance(h, logging.handlers.TimedRotatingFileHandler)]
        self.assertEqual(len(handlers), 1)
        return handlers[0]

    def test_settings_reach_rotating_handler(self):
        cfg = AppConfig()
        cfg.diagnostics.keep_log_files = 12
        cfg.diagnostics.log_level = "DEBUG"
        configure_from_settings(cfg, console=False, root=Path(self.tmp.name))
        self.assertEqual(self._file_handler().backupCount, 12)
        self.assertEqual(self.logger.level, logging.DEBUG)

    def test_reconfigure_updates_in_place(self):
        root = Path(self.tmp.name)
        configure_logging(keep_files=7, console=False, root=root)
        configure_logging(keep_files=3, level="warning", console=False, root=root)
        self.assertEqual(self._file_handler().backupCount, 3)
        self.assertEqual(self.logger.level, logging.WARNING)

    def test_json_lines_carry_structured_fields(self):
        root = Path(self.tmp.name)
        configure_logging(console=False, root=root)
        get_logger("session").info("cache reset", extra={"event": "cache_invalidated", "cache": "colors", "version": 2})
        handler = self._file_handler()
        handler.flush()
        lines = Path(handler.baseFilename).read_text(encoding="utf-8").splitlines()
        record = json.loads(lines[-1])
        self.assertEqual(record["logger"], "indentbars.session")
        self.assertEqual(record["event"], "cache_invalidated")
        self.assertEqual(record["cache"], "colors")
        self.assertEqual(record["version"], 2)
        self.assertEqual(json.loads(lines[0])["event"], "logging_configured")


if __name__ == "__main__":
    unittest.main()
