"""Persistent settings schema, load/save helpers and validated option building."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from indentbars_layout.bars import check_spacing
from indentbars_layout.blank_runs import DEFAULT_GLYPH
from indentbars_renderer import (
    ColorConfig,
    ColorSource,
    ConfigurationError,
    DepthPaletteConfig,
    HighlightConfig,
    PatternSpec,
)
from indentbars_renderer.themes import DEFAULT_THEME_NAME, THEMES


CONFIG_VERSION = 1

_LOGGER = logging.getLogger("indentbars.config")

DEFAULT_COLOR = ColorConfig(main=ColorSource.face("highlight"), face_bg=True, blend=0.4)
DEFAULT_DEPTH_PALETTE = DepthPaletteConfig(regexp=r"outline-(\d+)", blend=1.0)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class BarsConfig:
    spacing: int = 4
    starting_column: int | None = None
    tab_width: int = 4
    display_on_blank_lines: bool = True
    no_stipple_char: str = DEFAULT_GLYPH


@dataclass
class PatternConfig:
    width_frac: float = 0.4
    pad_frac: float = 0.1
    pattern: str = "."
    zigzag: float | None = None


@dataclass
class MainColorConfig:
    main: Any = field(default_factory=DEFAULT_COLOR.main.to_raw)
    face_bg: bool = DEFAULT_COLOR.face_bg
    blend: float | None = DEFAULT_COLOR.blend


@dataclass
class DepthColorConfig:
    regexp: str | None = DEFAULT_DEPTH_PALETTE.regexp
    palette: list[Any] | None = None
    face_bg: bool = DEFAULT_DEPTH_PALETTE.face_bg
    blend: float | None = DEFAULT_DEPTH_PALETTE.blend


@dataclass
class CurrentDepthConfig:
    color: Any = None
    face_bg: bool = False
    background: Any = None
    blend: float | None = None
    width_frac: float | None = None
    pad_frac: float | None = None
    pattern: str | None = None
    zigzag: float | None = None


@dataclass
class UiConfig:
    theme: str = DEFAULT_THEME_NAME


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    log_level: str = "INFO"


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    bars: BarsConfig = field(default_factory=BarsConfig)
    pattern: PatternConfig = field(default_factory=PatternConfig)
    color: MainColorConfig = field(default_factory=MainColorConfig)
    depth_palette: DepthColorConfig = field(default_factory=DepthColorConfig)
    highlight: CurrentDepthConfig = field(default_factory=CurrentDepthConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


@dataclass(frozen=True)
class BarOptions:
    """Validated, immutable options consumed by a rendering session."""

    spacing: int = 4
    starting_column: int | None = None
    tab_width: int = 4
    display_on_blank_lines: bool = True
    no_stipple_char: str = DEFAULT_GLYPH
    pattern: PatternSpec = PatternSpec()
    color: ColorConfig = DEFAULT_COLOR
    depth_palette: DepthPaletteConfig = DEFAULT_DEPTH_PALETTE
    highlight: HighlightConfig = HighlightConfig()
    theme: str = DEFAULT_THEME_NAME

    def __post_init__(self) -> None:
        check_spacing(self.spacing, self.starting_column)
        if isinstance(self.tab_width, bool) or not isinstance(self.tab_width, int) or self.tab_width <= 0:
            raise ConfigurationError(f"tab_width must be a positive integer, got {self.tab_width!r}")
        _check_bool("display_on_blank_lines", self.display_on_blank_lines)
        if not isinstance(self.no_stipple_char, str) or len(self.no_stipple_char) != 1:
            raise ConfigurationError(f"no_stipple_char must be a single character, got {self.no_stipple_char!r}")
        if self.theme not in THEMES:
            raise ConfigurationError(f"Unknown theme: {self.theme!r}")


DEFAULT_CONFIG = AppConfig()


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "IndentBars"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "IndentBars"
    return Path.home() / ".config" / "indentbars"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any], section: str):
    defaults = dataclass_type()  # type: ignore[misc]
    if raw is None:
        return defaults
    if not isinstance(raw, dict):
        raise ConfigurationError(f"settings section {section!r} must be an object, got {raw!r}")
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _none_if_blank(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _check_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be true or false, got {value!r}")


def _flag(name: str, value: Any) -> bool:
    _check_bool(name, value)
    return value


def _normalize_bars(cfg: AppConfig) -> None:
    cfg.bars.starting_column = _none_if_blank(cfg.bars.starting_column)
    _check_bool("bars.display_on_blank_lines", cfg.bars.display_on_blank_lines)
    if not cfg.bars.no_stipple_char:
        cfg.bars.no_stipple_char = DEFAULT_GLYPH


def _normalize_colors(cfg: AppConfig) -> None:
    cfg.depth_palette.regexp = _none_if_blank(cfg.depth_palette.regexp)
    cfg.highlight.color = _none_if_blank(cfg.highlight.color)
    cfg.highlight.background = _none_if_blank(cfg.highlight.background)
    cfg.highlight.pattern = _none_if_blank(cfg.highlight.pattern)


def _normalize_ui(cfg: AppConfig) -> None:
    if cfg.ui.theme not in THEMES:
        cfg.ui.theme = DEFAULT_THEME_NAME


def _normalize_diagnostics(cfg: AppConfig) -> None:
    diag = cfg.diagnostics
    diag.keep_log_files = max(2, _as_int("diagnostics.keep_log_files", diag.keep_log_files))
    level = str(diag.log_level).upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"diagnostics.log_level must be one of {', '.join(LOG_LEVELS)}, got {diag.log_level!r}")
    diag.log_level = level


def load_config(path: Path | None = None) -> AppConfig:
    """Read settings from ``path``.

    A missing, unparsable or non-object file yields defaults; a readable file
    with bad values raises ConfigurationError.
    """
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        _LOGGER.warning("unreadable settings file %s, using defaults", path, exc_info=True)
        return AppConfig()
    if not isinstance(data, dict):
        _LOGGER.warning("settings file %s is not a JSON object, using defaults", path)
        return AppConfig()

    cfg = AppConfig(
        config_version=_as_int("config_version", data.get("config_version", CONFIG_VERSION)),
        bars=_merge(BarsConfig, data.get("bars"), "bars"),
        pattern=_merge(PatternConfig, data.get("pattern"), "pattern"),
        color=_merge(MainColorConfig, data.get("color"), "color"),
        depth_palette=_merge(DepthColorConfig, data.get("depth_palette"), "depth_palette"),
        highlight=_merge(CurrentDepthConfig, data.get("highlight"), "highlight"),
        ui=_merge(UiConfig, data.get("ui"), "ui"),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics"), "diagnostics"),
    )

    _normalize_bars(cfg)
    _normalize_colors(cfg)
    _normalize_ui(cfg)
    _normalize_diagnostics(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def _palette_sources(raw: list[Any] | None) -> tuple[ColorSource, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ConfigurationError(f"depth_palette.palette must be a list, got {raw!r}")
    return tuple(ColorSource.parse(item) for item in raw)


def build_options(cfg: AppConfig) -> BarOptions:
    """Validate settings into :class:`BarOptions`; raises ConfigurationError."""
    main = ColorSource.parse(cfg.color.main)
    if main is None:
        raise ConfigurationError("color.main is required")
    hl = cfg.highlight
    return BarOptions(
        spacing=cfg.bars.spacing,
        starting_column=cfg.bars.starting_column,
        tab_width=cfg.bars.tab_width,
        display_on_blank_lines=cfg.bars.display_on_blank_lines,
        no_stipple_char=cfg.bars.no_stipple_char,
        pattern=PatternSpec(
            width_frac=cfg.pattern.width_frac,
            pad_frac=cfg.pattern.pad_frac,
            pattern=cfg.pattern.pattern,
            zigzag=cfg.pattern.zigzag,
        ),
        color=ColorConfig(main=main, face_bg=_flag("color.face_bg", cfg.color.face_bg), blend=cfg.color.blend),
        depth_palette=DepthPaletteConfig(
            regexp=cfg.depth_palette.regexp,
            palette=_palette_sources(cfg.depth_palette.palette),
            face_bg=_flag("depth_palette.face_bg", cfg.depth_palette.face_bg),
            blend=cfg.depth_palette.blend,
        ),
        highlight=HighlightConfig(
            color=ColorSource.parse(hl.color),
            face_bg=_flag("highlight.face_bg", hl.face_bg),
            background=ColorSource.parse(hl.background),
            blend=hl.blend,
            width_frac=hl.width_frac,
            pad_frac=hl.pad_frac,
            pattern=hl.pattern,
            zigzag=hl.zigzag,
        ),
        theme=cfg.ui.theme,
    )
