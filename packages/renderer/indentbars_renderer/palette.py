"""Bar color derivation: main color, depth palette and current-depth highlight."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence

from .colors import Color, blend
from .models import ColorConfig, ColorSource, DepthPaletteConfig, HighlightConfig

Resolver = Callable[[ColorSource, bool], Color]
Palette = Sequence[Color] | Color | None

_DIGITS_RE = re.compile(r"\d+")


def main_color(
    config: ColorConfig,
    frame_background: Color,
    resolve: Resolver,
    tint: Color | None = None,
    tint_blend: float | None = None,
) -> Color:
    """Resolve the main bar color.

    A ``tint`` is blended into the resolved color first (used when composing
    depth colors), then the result is blended against the frame background
    when ``config.blend`` is set.
    """
    color = resolve(config.main, config.face_bg)
    if tint is not None and tint_blend is not None:
        color = blend(tint, color, tint_blend)
    if config.blend is not None:
        color = blend(color, frame_background, config.blend)
    return color


def _name_number(match: re.Match[str], name: str) -> int | None:
    if match.re.groups and match.group(1) is not None:
        digits = _DIGITS_RE.search(match.group(1))
    else:
        digits = _DIGITS_RE.search(name)
    return int(digits.group(0)) if digits else None


def names_matching(regexp: str, names: Iterable[str]) -> list[str]:
    """Names matching ``regexp``, ordered by their embedded number.

    Names without a number sort last, keeping their original order.
    """
    compiled = re.compile(regexp)
    keyed: list[tuple[bool, int, str]] = []
    for name in names:
        match = compiled.search(name)
        if match is None:
            continue
        number = _name_number(match, name)
        keyed.append((number is None, number or 0, name))
    keyed.sort(key=lambda item: (item[0], item[1]))
    return [name for _, _, name in keyed]


def depth_palette(
    config: DepthPaletteConfig,
    main_color_fn: Callable[..., Color],
    resolve: Resolver,
    face_names: Iterable[str] = (),
) -> list[Color]:
    """Ordered colors used cyclically by depth; empty when unconfigured."""
    if config.regexp is not None:
        sources = [ColorSource.face(name) for name in names_matching(config.regexp, face_names)]
    elif config.palette:
        sources = list(config.palette)
    else:
        return []

    colors = [resolve(source, config.face_bg) for source in sources]
    if config.blend is None:
        return colors
    return [main_color_fn(tint=c, tint_blend=config.blend) for c in colors]


def current_depth_color_or_palette(
    config: HighlightConfig,
    palette: Sequence[Color],
    main: Color,
    resolve: Resolver,
) -> Color | list[Color] | None:
    if config.color is None:
        return None
    color = resolve(config.color, config.face_bg)
    if config.blend is None:
        return color
    if palette:
        return [blend(color, pc, config.blend) for pc in palette]
    return blend(color, main, config.blend)


def color_for_depth(depth: int, palette: Palette, main: Color) -> Color:
    if depth <= 0:
        raise ValueError(f"depth must be positive, got {depth}")
    if isinstance(palette, Color):
        return palette
    if palette:
        return palette[(depth - 1) % len(palette)]
    return main
