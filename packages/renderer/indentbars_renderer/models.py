"""Typed renderer models."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any

from .colors import Color
from .errors import ConfigurationError, GeometryError

BLANK_CHAR = " "


def _check_fraction(name: str, value: float | None, low: float = 0.0, high: float = 1.0) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not low <= value <= high:
        raise ConfigurationError(f"{name} must be within [{low}, {high}], got {value!r}")


def _check_pattern(name: str, pattern: str | None) -> None:
    if pattern is None:
        return
    if not isinstance(pattern, str) or not pattern:
        raise ConfigurationError(f"{name} must be a non-empty string")
    for ch in pattern:
        if ch != BLANK_CHAR and (ch.isspace() or not ch.isprintable()):
            raise ConfigurationError(f"{name} contains unsupported character {ch!r}")


@dataclass(frozen=True)
class CellGeometry:
    width_px: int
    height_px: int
    rotation_px: int = 0

    def __post_init__(self) -> None:
        if self.width_px <= 0 or self.height_px <= 0:
            raise GeometryError(f"Cell size must be positive, got {self.width_px}x{self.height_px}")
        if not 0 <= self.rotation_px < self.width_px:
            raise GeometryError(f"Rotation {self.rotation_px} outside [0, {self.width_px})")


@dataclass(frozen=True)
class PatternSpec:
    """Shape of one bar tile.

    ``pattern`` is read top to bottom: a space is a blank band, any other
    printable character a filled band. Consecutive bands with different fill
    characters are shifted horizontally by ``zigzag`` (a fraction of the cell
    width) with alternating sign.
    """

    width_frac: float = 0.4
    pad_frac: float = 0.1
    pattern: str = "."
    zigzag: float | None = None

    def __post_init__(self) -> None:
        _check_fraction("width_frac", self.width_frac)
        _check_fraction("pad_frac", self.pad_frac)
        _check_fraction("zigzag", self.zigzag, -1.0, 1.0)
        _check_pattern("pattern", self.pattern)


@dataclass(frozen=True)
class Bitmap:
    width_px: int
    height_px: int
    rows: tuple[bytes, ...]

    @property
    def data(self) -> bytes:
        return b"".join(self.rows)


@dataclass(frozen=True)
class ColorSource:
    """Either an explicit color (hex or color name) or a face reference."""

    kind: str
    value: str

    COLOR = "color"
    FACE = "face"

    @classmethod
    def color(cls, value: str) -> ColorSource:
        return cls(cls.COLOR, value)

    @classmethod
    def face(cls, name: str) -> ColorSource:
        return cls(cls.FACE, name)

    @classmethod
    def parse(cls, raw: Any) -> ColorSource | None:
        """Build from persisted form: ``"#hex"``/``"name"`` or ``{"face": name}``."""
        if raw is None:
            return None
        if isinstance(raw, ColorSource):
            return raw
        if isinstance(raw, str) and raw:
            return cls.color(raw)
        if isinstance(raw, dict) and len(raw) == 1:
            (key, value), = raw.items()
            if key in (cls.COLOR, cls.FACE) and isinstance(value, str) and value:
                return cls(key, value)
        raise ConfigurationError(f"Unrecognized color source: {raw!r}")

    def to_raw(self) -> str | dict[str, str]:
        if self.kind == self.COLOR:
            return self.value
        return {self.kind: self.value}


@dataclass(frozen=True)
class ColorConfig:
    main: ColorSource = ColorSource(ColorSource.FACE, "highlight")
    face_bg: bool = False
    blend: float | None = None

    def __post_init__(self) -> None:
        _check_fraction("color.blend", self.blend)


@dataclass(frozen=True)
class DepthPaletteConfig:
    """Per-depth colors from faces matching ``regexp`` or an explicit ``palette``."""

    regexp: str | None = None
    palette: tuple[ColorSource, ...] | None = None
    face_bg: bool = False
    blend: float | None = None

    def __post_init__(self) -> None:
        if self.regexp is not None and self.palette is not None:
            raise ConfigurationError("depth palette accepts either regexp or palette, not both")
        if self.regexp is not None:
            try:
                re.compile(self.regexp)
            except re.error as exc:
                raise ConfigurationError(f"Invalid depth palette regexp {self.regexp!r}: {exc}") from exc
        _check_fraction("depth_palette.blend", self.blend)

    @property
    def configured(self) -> bool:
        return self.regexp is not None or bool(self.palette)


@dataclass(frozen=True)
class HighlightConfig:
    """Overrides for the bar at the current depth; unset fields inherit."""

    color: ColorSource | None = None
    face_bg: bool = False
    background: ColorSource | None = None
    blend: float | None = None
    width_frac: float | None = None
    pad_frac: float | None = None
    pattern: str | None = None
    zigzag: float | None = None

    def __post_init__(self) -> None:
        _check_fraction("highlight.blend", self.blend)
        _check_fraction("highlight.width_frac", self.width_frac)
        _check_fraction("highlight.pad_frac", self.pad_frac)
        _check_fraction("highlight.zigzag", self.zigzag, -1.0, 1.0)
        _check_pattern("highlight.pattern", self.pattern)

    @property
    def overrides_pattern(self) -> bool:
        return any(v is not None for v in (self.width_frac, self.pad_frac, self.pattern, self.zigzag))

    def pattern_spec(self, base: PatternSpec) -> PatternSpec:
        if not self.overrides_pattern:
            return base
        return replace(
            base,
            width_frac=base.width_frac if self.width_frac is None else self.width_frac,
            pad_frac=base.pad_frac if self.pad_frac is None else self.pad_frac,
            pattern=base.pattern if self.pattern is None else self.pattern,
            zigzag=base.zigzag if self.zigzag is None else self.zigzag,
        )


@dataclass(frozen=True)
class DepthStyle:
    depth: int
    color: Color
    bitmap: Bitmap
    background: Color | None = None
    current: bool = False
