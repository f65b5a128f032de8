"""Renderer package for indentation-bar stipples and colors."""

from .colors import Color, blend
from .errors import ConfigurationError, GeometryError, IndentBarsError
from .models import (
    Bitmap,
    CellGeometry,
    ColorConfig,
    ColorSource,
    DepthPaletteConfig,
    DepthStyle,
    HighlightConfig,
    PatternSpec,
)
from .palette import color_for_depth, current_depth_color_or_palette, depth_palette, main_color
from .stipple import ascii_rows, block_mask, generate, rotate, row_bits
from .themes import DEFAULT_THEME_NAME, ColorResolver, get_theme, list_themes
from .preview import PreviewRenderer, bitmap_mask

__all__ = [
    "Bitmap",
    "CellGeometry",
    "Color",
    "ColorConfig",
    "ColorResolver",
    "ColorSource",
    "ConfigurationError",
    "DEFAULT_THEME_NAME",
    "DepthPaletteConfig",
    "DepthStyle",
    "GeometryError",
    "HighlightConfig",
    "IndentBarsError",
    "PatternSpec",
    "PreviewRenderer",
    "ascii_rows",
    "bitmap_mask",
    "blend",
    "block_mask",
    "color_for_depth",
    "current_depth_color_or_palette",
    "depth_palette",
    "generate",
    "get_theme",
    "list_themes",
    "main_color",
    "rotate",
    "row_bits",
]
