"""JSON-lines logging for the indentbars tools.

Records go to a midnight-rotated ``indentbars.log`` under the settings
directory. Structured context passed through ``extra=`` (``event``, ``cache``,
``version``, ``path``) is copied into the JSON payload.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import AppConfig, config_root


_LOGGER_NAME = "indentbars"
_LOG_FILE = "indentbars.log"
_EXTRA_FIELDS = ("event", "cache", "version", "path")


def log_dir(root: Path | None = None) -> Path:
    path = (root or config_root()) / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value if isinstance(value, (int, float, bool)) else str(value)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def _file_handler(logger: logging.Logger) -> logging.handlers.TimedRotatingFileHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.handlers.TimedRotatingFileHandler):
            return handler
    return None


def configure_logging(
    keep_files: int = 7,
    level: str = "INFO",
    console: bool = True,
    root: Path | None = None,
) -> logging.Logger:
    """Attach the rotating JSON handler to the ``indentbars`` logger.

    Calling again keeps the existing handlers and only applies the new level
    and retention.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level.upper())
    existing = _file_handler(logger)
    if existing is not None:
        existing.backupCount = max(2, keep_files)
        return logger

    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(log_dir(root) / _LOG_FILE),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(stream_handler)

    logger.info("logging configured", extra={"event": "logging_configured", "path": handler.baseFilename})
    return logger


def configure_from_settings(cfg: AppConfig, console: bool = True, root: Path | None = None) -> logging.Logger:
    diag = cfg.diagnostics
    return configure_logging(keep_files=diag.keep_log_files, level=diag.log_level, console=console, root=root)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)
