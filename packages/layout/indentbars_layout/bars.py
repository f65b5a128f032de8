"""Bar columns within a line's leading whitespace."""

from __future__ import annotations

from indentbars_renderer.errors import ConfigurationError

from .models import BarMark


def check_spacing(spacing: int, starting_column: int | None = None) -> None:
    if isinstance(spacing, bool) or not isinstance(spacing, int) or spacing <= 0:
        raise ConfigurationError(f"spacing must be a positive integer, got {spacing!r}")
    if starting_column is not None and (not isinstance(starting_column, int) or starting_column < 0):
        raise ConfigurationError(f"starting_column must be a non-negative integer, got {starting_column!r}")


def _start(spacing: int, starting_column: int | None) -> int:
    return spacing if starting_column is None else starting_column


def bar_column(depth: int, spacing: int, starting_column: int | None = None) -> int:
    """Column of the bar drawn for ``depth``."""
    return _start(spacing, starting_column) + (depth - 1) * spacing


def positions(whitespace_len: int, spacing: int, starting_column: int | None = None) -> list[int]:
    """Bar columns strictly inside a whitespace run of ``whitespace_len`` columns.

    With the default start these are the multiples of ``spacing``; the n-th
    entry is the bar for depth n.
    """
    check_spacing(spacing, starting_column)
    return list(range(_start(spacing, starting_column), whitespace_len, spacing))


def bar_marks(whitespace_len: int, spacing: int, starting_column: int | None = None) -> tuple[BarMark, ...]:
    cols = positions(whitespace_len, spacing, starting_column)
    return tuple(BarMark(column=col, depth=depth) for depth, col in enumerate(cols, start=1))


def indentation_depth(indent: int, spacing: int, starting_column: int | None = None) -> int:
    """Number of bar columns at or before ``indent``."""
    check_spacing(spacing, starting_column)
    start = _start(spacing, starting_column)
    if indent < start:
        return 0
    return (indent - start) // spacing + 1
