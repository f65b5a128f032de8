"""Layout package deciding where indentation bars are drawn."""

from .bars import bar_column, bar_marks, indentation_depth, positions
from .blank_runs import DEFAULT_GLYPH, context_depth, expand
from .lines import display_width, is_blank, leading_whitespace_width, plan_lines, summarize
from .models import BarMark, BlankLineBars, LineBars, PlanStats, VirtualPadding
from .overlay import overlay_line, overlay_lines

__all__ = [
    "BarMark",
    "BlankLineBars",
    "DEFAULT_GLYPH",
    "LineBars",
    "PlanStats",
    "VirtualPadding",
    "bar_column",
    "bar_marks",
    "context_depth",
    "display_width",
    "expand",
    "indentation_depth",
    "is_blank",
    "leading_whitespace_width",
    "overlay_line",
    "overlay_lines",
    "plan_lines",
    "positions",
    "summarize",
]
