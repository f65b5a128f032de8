"""Typed models for per-line bar placement."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BarMark:
    column: int
    depth: int


@dataclass(frozen=True)
class VirtualPadding:
    """Display-only text appended at a blank line's end to carry virtual bars.

    ``column`` is where the padding starts; each mark's column is absolute.
    """

    column: int
    text: str
    marks: tuple[BarMark, ...]


@dataclass(frozen=True)
class BlankLineBars:
    real: tuple[BarMark, ...] = ()
    virtual: tuple[BarMark, ...] = ()
    padding: VirtualPadding | None = None


@dataclass(frozen=True)
class LineBars:
    index: int
    blank: bool
    marks: tuple[BarMark, ...] = ()
    padding: VirtualPadding | None = None

    @property
    def all_marks(self) -> tuple[BarMark, ...]:
        if self.padding is None:
            return self.marks
        return self.marks + self.padding.marks


@dataclass
class PlanStats:
    lines: int = 0
    blank_runs: int = 0
    bars: int = 0
    virtual_bars: int = 0
    max_depth: int = 0
    depth_counts: dict[int, int] = field(default_factory=dict)
