"""Built-in face themes and color-source resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from PIL import ImageColor

from .colors import Color
from .models import ColorSource

DEFAULT_THEME_NAME = "dark"
FALLBACK_COLOR = Color.from_hex("#808080")

_LOGGER = logging.getLogger("indentbars.themes")


@dataclass(frozen=True)
class FaceColors:
    foreground: str | None = None
    background: str | None = None


@dataclass(frozen=True)
class ThemeConfig:
    name: str
    foreground: str
    background: str
    faces: dict[str, FaceColors] = field(default_factory=dict)


def _outline(*colors: str) -> dict[str, FaceColors]:
    return {f"outline-{i}": FaceColors(foreground=c) for i, c in enumerate(colors, start=1)}


THEMES: dict[str, ThemeConfig] = {
    "dark": ThemeConfig(
        name="dark",
        foreground="#DCDCCC",
        background="#1E1F22",
        faces={
            "default": FaceColors("#DCDCCC", "#1E1F22"),
            "highlight": FaceColors("#E8E8E8", "#3A4B63"),
            "shadow": FaceColors("#6C7086", None),
            "region": FaceColors(None, "#2F4466"),
            "lazy-highlight": FaceColors("#1E1F22", "#C6A15B"),
            **_outline("#7AA2F7", "#E0AF68", "#9ECE6A", "#BB9AF7", "#F7768E", "#2AC3DE", "#FF9E64", "#73DACA"),
        },
    ),
    "light": ThemeConfig(
        name="light",
        foreground="#1F2328",
        background="#FFFFFF",
        faces={
            "default": FaceColors("#1F2328", "#FFFFFF"),
            "highlight": FaceColors("#1F2328", "#B4EEB4"),
            "shadow": FaceColors("#8C959F", None),
            "region": FaceColors(None, "#D7E3F4"),
            "lazy-highlight": FaceColors(None, "#FFE08A"),
            **_outline("#0550AE", "#953800", "#116329", "#8250DF", "#CF222E", "#1B7C83", "#BC4C00", "#0A3069"),
        },
    ),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> ThemeConfig:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    return THEMES.get(name, THEMES[DEFAULT_THEME_NAME])


def parse_color(value: str) -> Color:
    """Parse a hex string or a color name known to Pillow."""
    if value.startswith("#"):
        return Color.from_hex(value)
    r, g, b = ImageColor.getrgb(value)[:3]
    return Color.from_rgb8(r, g, b)


class ColorResolver:
    """Maps color sources to concrete colors using a theme's face table.

    Unresolvable sources never raise; they fall back to the theme foreground
    so rendering keeps progressing.
    """

    def __init__(self, theme: ThemeConfig | None = None) -> None:
        self.theme = theme or get_theme(None)

    @property
    def frame_background(self) -> Color:
        return self._parse_or_fallback(self.theme.background)

    @property
    def face_names(self) -> list[str]:
        return list(self.theme.faces.keys())

    def default_color(self) -> Color:
        try:
            return parse_color(self.theme.foreground)
        except ValueError:
            return FALLBACK_COLOR

    def __call__(self, source: ColorSource, face_bg: bool = False) -> Color:
        return self.resolve(source, face_bg)

    def resolve(self, source: ColorSource, face_bg: bool = False) -> Color:
        if source.kind == ColorSource.FACE:
            face = self.theme.faces.get(source.value)
            value = None
            if face is not None:
                value = face.background if face_bg else face.foreground
            if value is None:
                _LOGGER.warning(
                    "face %s has no %s color in theme %s",
                    source.value,
                    "background" if face_bg else "foreground",
                    self.theme.name,
                    extra={"event": "color_fallback"},
                )
                return self.default_color()
            return self._parse_or_fallback(value)
        return self._parse_or_fallback(source.value)

    def _parse_or_fallback(self, value: str) -> Color:
        try:
            return parse_color(value)
        except ValueError:
            _LOGGER.warning("unresolvable color %r", value, extra={"event": "color_fallback"})
            return self.default_color()
