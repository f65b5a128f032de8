"""Bars continued across runs of whitespace-only lines.

A blank line has no text to anchor bars, so bars from the surrounding code
would break at every empty line. For a maximal run of blank lines bounded by
text on both sides, each line keeps the bars its own whitespace can hold and
gets the rest as virtual bars: display-only padding appended at the line's
end, never written into the document.
"""

from __future__ import annotations

from collections.abc import Sequence

from .bars import bar_column, bar_marks, indentation_depth
from .models import BarMark, BlankLineBars, VirtualPadding

DEFAULT_GLYPH = "│"


def context_depth(
    before_indent: int,
    after_indent: int,
    spacing: int,
    starting_column: int | None = None,
) -> int:
    """Bars to carry through a run: the deeper neighbour's depth less one."""
    return (
        max(
            indentation_depth(before_indent, spacing, starting_column),
            indentation_depth(after_indent, spacing, starting_column),
        )
        - 1
    )


def virtual_padding(
    line_width: int,
    first_depth: int,
    last_depth: int,
    spacing: int,
    starting_column: int | None = None,
    glyph: str = DEFAULT_GLYPH,
) -> VirtualPadding:
    marks = tuple(
        BarMark(column=bar_column(depth, spacing, starting_column), depth=depth)
        for depth in range(first_depth, last_depth + 1)
    )
    chars = [" "] * (marks[-1].column + 1 - line_width)
    for mark in marks:
        chars[mark.column - line_width] = glyph
    return VirtualPadding(column=line_width, text="".join(chars), marks=marks)


def expand(
    line_widths: Sequence[int],
    before_indent: int | None,
    after_indent: int | None,
    spacing: int,
    starting_column: int | None = None,
    glyph: str = DEFAULT_GLYPH,
) -> list[BlankLineBars]:
    """Bars for each line of a blank run, given its display widths.

    ``before_indent``/``after_indent`` are the indentation of the text lines
    bounding the run; ``None`` means the run touches the start or end of the
    buffer, in which case only real bars are produced.
    """
    ctx = 0
    if before_indent is not None and after_indent is not None:
        ctx = context_depth(before_indent, after_indent, spacing, starting_column)

    out: list[BlankLineBars] = []
    for width in line_widths:
        real = bar_marks(max(0, width), spacing, starting_column)
        if ctx <= len(real):
            out.append(BlankLineBars(real=real))
            continue
        padding = virtual_padding(width, len(real) + 1, ctx, spacing, starting_column, glyph)
        out.append(BlankLineBars(real=real, virtual=padding.marks, padding=padding))
    return out
