import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "layout"))

from indentbars_layout.lines import display_width, is_blank, leading_whitespace_width, plan_lines, summarize
from indentbars_layout.models import BarMark
from indentbars_layout.overlay import overlay_lines
from indentbars_renderer.errors import ConfigurationError

SOURCE = [
    "def outer():",
    "    def inner():",
    "        return 1",
    "",
    "    ",
    "    return inner",
    "",
]


class MeasureTests(unittest.TestCase):
    def test_leading_whitespace_width_with_tabs(self):
        self.assertEqual(leading_whitespace_width("    x"), 4)
        self.assertEqual(leading_whitespace_width("\tx", tab_width=8), 8)
        self.assertEqual(leading_whitespace_width("  \tx", tab_width=4), 4)
        self.assertEqual(leading_whitespace_width("x  "), 0)

    def test_blank_detection(self):
        self.assertTrue(is_blank(""))
        self.assertTrue(is_blank(" \t \n"))
        self.assertFalse(is_blank("  x"))

    def test_display_width(self):
        self.assertEqual(display_width("  \t", tab_width=4), 4)
        self.assertEqual(display_width("   \n"), 3)


class PlanTests(unittest.TestCase):
    def test_plan_covers_every_line(self):
        plan = plan_lines(SOURCE, spacing=4)
        self.assertEqual([line.index for line in plan], list(range(len(SOURCE))))
        self.assertEqual([line.blank for line in plan], [False, False, False, True, True, False, True])

    def test_text_lines_and_blank_run(self):
        plan = plan_lines(SOURCE, spacing=4)
        self.assertEqual(plan[2].marks, (BarMark(4, 1),))
        # run between depth 2 and depth 1 lines carries one bar
        self.assertEqual(plan[3].padding.marks, (BarMark(4, 1),))
        self.assertEqual(plan[4].marks, ())
        self.assertEqual(plan[4].padding.marks, (BarMark(4, 1),))
        self.assertEqual(plan[4].padding.column, 4)

    def test_trailing_blank_run_is_excluded(self):
        plan = plan_lines(SOURCE, spacing=4)
        self.assertIsNone(plan[6].padding)

    def test_blank_lines_can_be_disabled(self):
        plan = plan_lines(SOURCE, spacing=4, display_on_blank_lines=False)
        self.assertTrue(all(line.padding is None for line in plan))

    def test_rejects_bad_tab_width(self):
        with self.assertRaises(ConfigurationError):
            plan_lines(SOURCE, spacing=4, tab_width=0)

    def test_summary(self):
        stats = summarize(plan_lines(SOURCE, spacing=4))
        self.assertEqual(stats.lines, 7)
        self.assertEqual(stats.blank_runs, 2)
        self.assertEqual(stats.virtual_bars, 2)
        self.assertEqual(stats.bars, 3)
        self.assertEqual(stats.max_depth, 1)


class OverlayTests(unittest.TestCase):
    def test_overlay_marks_whitespace_and_appends_padding(self):
        lines = ["if x:", "    if y:", "        pass", "", "    done"]
        plan = plan_lines(lines, spacing=4, glyph="|")
        self.assertEqual(
            overlay_lines(lines, plan, glyph="|"),
            ["if x:", "    if y:", "    |   pass", "    |", "    done"],
        )


if __name__ == "__main__":
    unittest.main()
