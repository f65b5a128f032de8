"""Per-session rendering context owning the depth caches.

A session is what a host display talks to: it turns the current options,
cell geometry and current depth into colors, stipples and bar positions.
Colors and stipples are memoized per depth; geometry changes drop the
stipples only, option changes drop everything.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from indentbars_layout import BlankLineBars, LineBars, expand, plan_lines, positions
from indentbars_renderer import (
    Bitmap,
    CellGeometry,
    Color,
    ColorResolver,
    DepthStyle,
    GeometryError,
    color_for_depth,
    current_depth_color_or_palette,
    depth_palette,
    generate,
    get_theme,
    main_color,
)

from .config import BarOptions
from .logging_setup import get_logger

T = TypeVar("T")

_LOGGER = get_logger("session")


class DepthCache(Generic[T]):
    """Append-only table of computed values, cleared wholesale.

    ``version`` counts invalidations so holders of older values can tell
    they are stale.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.version = 0
        self._entries: dict[Hashable, T] = {}
        self._lock = threading.RLock()

    def get(self, key: Hashable, factory: Callable[[], T]) -> T:
        with self._lock:
            try:
                return self._entries[key]
            except KeyError:
                value = factory()
                self._entries[key] = value
                return value

    def invalidate(self) -> None:
        with self._lock:
            self._entries.clear()
            self.version += 1
        _LOGGER.debug("%s cache invalidated", self.name, extra={"event": "cache_invalidated", "cache": self.name, "version": self.version})

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class PaletteState:
    main: Color
    palette: tuple[Color, ...]
    current: Color | tuple[Color, ...] | None
    current_background: Color | None


class IndentBarsSession:
    def __init__(
        self,
        options: BarOptions | None = None,
        resolver: ColorResolver | None = None,
        geometry: CellGeometry | None = None,
    ) -> None:
        self.options = options or BarOptions()
        self.resolver = resolver or ColorResolver(get_theme(self.options.theme))
        self.geometry = geometry
        self.current_depth = 0
        self.config_version = 0

        self._palette: DepthCache[PaletteState] = DepthCache("palette")
        self._colors: DepthCache[Color] = DepthCache("colors")
        self._bitmaps: DepthCache[Bitmap] = DepthCache("bitmaps")

    # -- invalidation -------------------------------------------------

    def on_geometry_change(self, geometry: CellGeometry) -> bool:
        if geometry == self.geometry:
            return False
        self.geometry = geometry
        self._bitmaps.invalidate()
        return True

    def on_config_change(self, options: BarOptions, resolver: ColorResolver | None = None) -> None:
        if resolver is None and options.theme != self.options.theme:
            resolver = ColorResolver(get_theme(options.theme))
        self.options = options
        if resolver is not None:
            self.resolver = resolver
        self.config_version += 1
        self._palette.invalidate()
        self._colors.invalidate()
        self._bitmaps.invalidate()
        _LOGGER.info("options reloaded", extra={"event": "config_changed", "version": self.config_version})

    def set_current_depth(self, depth: int) -> bool:
        depth = max(0, depth)
        if depth == self.current_depth:
            return False
        self.current_depth = depth
        return True

    @property
    def bitmap_version(self) -> int:
        return self._bitmaps.version

    @property
    def color_version(self) -> int:
        return self._colors.version

    # -- colors -------------------------------------------------------

    def palette_state(self) -> PaletteState:
        return self._palette.get("state", self._compute_palette)

    def _compute_palette(self) -> PaletteState:
        opts = self.options
        frame_bg = self.resolver.frame_background

        def main_fn(tint: Color | None = None, tint_blend: float | None = None) -> Color:
            return main_color(opts.color, frame_bg, self.resolver, tint, tint_blend)

        main = main_fn()
        palette = depth_palette(opts.depth_palette, main_fn, self.resolver, self.resolver.face_names)
        current = current_depth_color_or_palette(opts.highlight, palette, main, self.resolver)
        background = None
        if opts.highlight.background is not None:
            background = self.resolver(opts.highlight.background, True)
        return PaletteState(
            main=main,
            palette=tuple(palette),
            current=tuple(current) if isinstance(current, list) else current,
            current_background=background,
        )

    def color_for_depth(self, depth: int) -> Color:
        is_current = depth == self.current_depth
        return self._colors.get((depth, is_current), lambda: self._color(depth, is_current))

    def _color(self, depth: int, is_current: bool) -> Color:
        state = self.palette_state()
        if is_current and state.current is not None:
            return color_for_depth(depth, state.current, state.main)
        return color_for_depth(depth, state.palette, state.main)

    # -- stipples -----------------------------------------------------

    def generate_bitmap(self, depth: int) -> Bitmap:
        if self.geometry is None:
            raise GeometryError("no cell geometry set for this session")
        is_current = depth == self.current_depth and self.options.highlight.overrides_pattern
        return self._bitmaps.get((depth, is_current), lambda: self._bitmap(is_current))

    def _bitmap(self, is_current: bool) -> Bitmap:
        pattern_spec = self.options.pattern
        if is_current:
            pattern_spec = self.options.highlight.pattern_spec(pattern_spec)
        return generate(self.geometry, pattern_spec)

    def style_for_depth(self, depth: int) -> DepthStyle:
        is_current = depth == self.current_depth
        return DepthStyle(
            depth=depth,
            color=self.color_for_depth(depth),
            bitmap=self.generate_bitmap(depth),
            background=self.palette_state().current_background if is_current else None,
            current=is_current,
        )

    # -- placement ----------------------------------------------------

    def bar_positions(self, whitespace_len: int) -> list[int]:
        return positions(whitespace_len, self.options.spacing, self.options.starting_column)

    def blank_run_positions(
        self,
        line_widths: Sequence[int],
        before_indent: int | None,
        after_indent: int | None,
    ) -> list[BlankLineBars]:
        if not self.options.display_on_blank_lines:
            before_indent = after_indent = None
        return expand(
            line_widths,
            before_indent,
            after_indent,
            self.options.spacing,
            self.options.starting_column,
            self.options.no_stipple_char,
        )

    def plan(self, lines: Sequence[str]) -> list[LineBars]:
        opts = self.options
        return plan_lines(
            lines,
            opts.spacing,
            tab_width=opts.tab_width,
            starting_column=opts.starting_column,
            display_on_blank_lines=opts.display_on_blank_lines,
            glyph=opts.no_stipple_char,
        )
