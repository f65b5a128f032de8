"""Plain-text rendition of planned bars, for terminals without stipples."""

from __future__ import annotations

from collections.abc import Sequence

from .blank_runs import DEFAULT_GLYPH
from .lines import strip_eol
from .models import LineBars


def overlay_line(text: str, line: LineBars, glyph: str = DEFAULT_GLYPH, tab_width: int = 4) -> str:
    chars = list(strip_eol(text).expandtabs(tab_width))
    for mark in line.marks:
        if mark.column < len(chars) and chars[mark.column] == " ":
            chars[mark.column] = glyph
    rendered = "".join(chars)
    if line.padding is not None:
        rendered += line.padding.text
    return rendered


def overlay_lines(
    lines: Sequence[str],
    plan: Sequence[LineBars],
    glyph: str = DEFAULT_GLYPH,
    tab_width: int = 4,
) -> list[str]:
    return [overlay_line(lines[line.index], line, glyph, tab_width) for line in plan]
