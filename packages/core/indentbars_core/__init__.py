"""Core services: settings, logging and the per-session rendering context."""

from .config import AppConfig, BarOptions, build_options, config_path, load_config, save_config
from .logging_setup import configure_from_settings, configure_logging, get_logger
from .session import DepthCache, IndentBarsSession, PaletteState

__all__ = [
    "AppConfig",
    "BarOptions",
    "DepthCache",
    "IndentBarsSession",
    "PaletteState",
    "build_options",
    "config_path",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "load_config",
    "save_config",
]
