"""Whole-document bar planning over plain text lines."""

from __future__ import annotations

from collections.abc import Sequence

from indentbars_renderer.errors import ConfigurationError

from .bars import bar_marks, check_spacing
from .blank_runs import DEFAULT_GLYPH, expand
from .models import LineBars, PlanStats


def _check_tab_width(tab_width: int) -> None:
    if isinstance(tab_width, bool) or not isinstance(tab_width, int) or tab_width <= 0:
        raise ConfigurationError(f"tab_width must be a positive integer, got {tab_width!r}")


def strip_eol(text: str) -> str:
    return text.rstrip("\r\n")


def is_blank(text: str) -> bool:
    return not strip_eol(text).strip()


def leading_whitespace_width(text: str, tab_width: int = 4) -> int:
    """Display width of the leading whitespace, tabs advancing to tab stops."""
    col = 0
    for ch in strip_eol(text):
        if ch == " ":
            col += 1
        elif ch == "\t":
            col += tab_width - col % tab_width
        else:
            break
    return col


def display_width(text: str, tab_width: int = 4) -> int:
    return len(strip_eol(text).expandtabs(tab_width))


def _blank_runs(lines: Sequence[str]) -> list[tuple[int, int]]:
    runs: list[tuple[int, int]] = []
    start: int | None = None
    for idx, text in enumerate(lines):
        if is_blank(text):
            if start is None:
                start = idx
        elif start is not None:
            runs.append((start, idx))
            start = None
    if start is not None:
        runs.append((start, len(lines)))
    return runs


def plan_lines(
    lines: Sequence[str],
    spacing: int,
    tab_width: int = 4,
    starting_column: int | None = None,
    display_on_blank_lines: bool = True,
    glyph: str = DEFAULT_GLYPH,
) -> list[LineBars]:
    """Plan bars for every line.

    Text lines get bars inside their leading whitespace. Blank runs bounded by
    text on both sides continue the surrounding bars when
    ``display_on_blank_lines`` is set.
    """
    check_spacing(spacing, starting_column)
    _check_tab_width(tab_width)

    plan: list[LineBars | None] = [None] * len(lines)
    for idx, text in enumerate(lines):
        if not is_blank(text):
            marks = bar_marks(leading_whitespace_width(text, tab_width), spacing, starting_column)
            plan[idx] = LineBars(index=idx, blank=False, marks=marks)

    for start, end in _blank_runs(lines):
        widths = [display_width(lines[i], tab_width) for i in range(start, end)]
        before = after = None
        if display_on_blank_lines and start > 0 and end < len(lines):
            before = leading_whitespace_width(lines[start - 1], tab_width)
            after = leading_whitespace_width(lines[end], tab_width)
        for offset, bars in enumerate(expand(widths, before, after, spacing, starting_column, glyph)):
            plan[start + offset] = LineBars(index=start + offset, blank=True, marks=bars.real, padding=bars.padding)

    return [line for line in plan if line is not None]


def summarize(plan: Sequence[LineBars]) -> PlanStats:
    stats = PlanStats(lines=len(plan))
    in_run = False
    for line in plan:
        if line.blank and not in_run:
            stats.blank_runs += 1
        in_run = line.blank
        for mark in line.all_marks:
            stats.bars += 1
            stats.depth_counts[mark.depth] = stats.depth_counts.get(mark.depth, 0) + 1
            stats.max_depth = max(stats.max_depth, mark.depth)
        if line.padding is not None:
            stats.virtual_bars += len(line.padding.marks)
    return stats
