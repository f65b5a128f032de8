import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "layout"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from indentbars_core.config import AppConfig, BarOptions, build_options, load_config, save_config
from indentbars_renderer.errors import ConfigurationError
from indentbars_renderer.models import ColorSource


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.bars.spacing, 4)
            self.assertEqual(cfg.pattern.pattern, ".")
            self.assertEqual(cfg.ui.theme, "dark")

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.bars.spacing = 2
            cfg.pattern.zigzag = 0.1
            cfg.highlight.color = "#ff0000"
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.bars.spacing, 2)
            self.assertEqual(reloaded.pattern.zigzag, 0.1)
            self.assertEqual(reloaded.highlight.color, "#ff0000")

    def test_corrupt_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertLogs("indentbars.config", level="WARNING"):
                cfg = load_config(path)
            self.assertEqual(cfg.bars.spacing, 4)

    def test_partial_file_and_normalization(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "bars": {"spacing": 2, "unknown": 1},
                "highlight": {"color": "", "pattern": "  "},
                "ui": {"theme": "neon"},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.bars.spacing, 2)
            self.assertFalse(hasattr(cfg.bars, "unknown"))
            self.assertIsNone(cfg.highlight.color)
            self.assertIsNone(cfg.highlight.pattern)
            self.assertEqual(cfg.ui.theme, "dark")

    def _load_raw(self, raw):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps(raw), encoding="utf-8")
            return load_config(path)

    def test_non_object_file_falls_back_to_defaults(self):
        for raw in ([], "dark", 3):
            with self.assertLogs("indentbars.config", level="WARNING"):
                cfg = self._load_raw(raw)
            self.assertEqual(cfg, AppConfig())

    def test_malformed_values_raise_configuration_error(self):
        bad = [
            {"bars": 5},
            {"pattern": ["."]},
            {"diagnostics": {"keep_log_files": "x"}},
            {"diagnostics": {"keep_log_files": None}},
            {"diagnostics": {"log_level": "chatty"}},
            {"config_version": "one"},
            {"bars": {"display_on_blank_lines": "false"}},
        ]
        for raw in bad:
            with self.subTest(raw=raw), self.assertRaises(ConfigurationError):
                self._load_raw(raw)

    def test_null_section_uses_defaults(self):
        cfg = self._load_raw({"bars": None, "diagnostics": {"keep_log_files": "1", "log_level": "debug"}})
        self.assertEqual(cfg.bars.spacing, 4)
        self.assertEqual(cfg.diagnostics.keep_log_files, 2)
        self.assertEqual(cfg.diagnostics.log_level, "DEBUG")


class BuildOptionsTests(unittest.TestCase):
    def test_option_defaults_match_settings_defaults(self):
        self.assertEqual(BarOptions(), build_options(AppConfig()))

    def test_flags_must_be_booleans(self):
        for mutate in (
            lambda c: setattr(c.bars, "display_on_blank_lines", "false"),
            lambda c: setattr(c.color, "face_bg", 1),
            lambda c: setattr(c.highlight, "face_bg", "yes"),
        ):
            cfg = AppConfig()
            mutate(cfg)
            with self.assertRaises(ConfigurationError):
                build_options(cfg)

    def test_defaults_build(self):
        opts = build_options(AppConfig())
        self.assertEqual(opts.spacing, 4)
        self.assertEqual(opts.color.main, ColorSource.face("highlight"))
        self.assertTrue(opts.color.face_bg)
        self.assertEqual(opts.depth_palette.regexp, r"outline-(\d+)")
        self.assertIsNone(opts.highlight.color)

    def test_color_sources_parsed(self):
        cfg = AppConfig()
        cfg.depth_palette.regexp = None
        cfg.depth_palette.palette = ["#ff0000", {"face": "shadow"}]
        cfg.highlight.color = {"color": "gold"}
        opts = build_options(cfg)
        self.assertEqual(opts.depth_palette.palette, (ColorSource.color("#ff0000"), ColorSource.face("shadow")))
        self.assertEqual(opts.highlight.color, ColorSource.color("gold"))

    def test_invalid_values_raise(self):
        mutations = [
            lambda c: setattr(c.bars, "spacing", 0),
            lambda c: setattr(c.bars, "tab_width", -1),
            lambda c: setattr(c.bars, "no_stipple_char", "||"),
            lambda c: setattr(c.pattern, "pattern", ""),
            lambda c: setattr(c.pattern, "width_frac", 1.5),
            lambda c: setattr(c.color, "blend", 2),
            lambda c: setattr(c.color, "main", 42),
            lambda c: setattr(c.depth_palette, "palette", ["#fff"]),
            lambda c: setattr(c.highlight, "zigzag", -3),
        ]
        for mutate in mutations:
            cfg = AppConfig()
            mutate(cfg)
            with self.assertRaises(ConfigurationError):
                build_options(cfg)


if __name__ == "__main__":
    unittest.main()
