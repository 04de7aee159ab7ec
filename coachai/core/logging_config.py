"""
Log setup for the Coach.ai backend.

Console lines are human-readable with a colored level column; the rotating
log file carries one JSON object per record so profile commits, badge
unlocks and inference timings can be grepped by field. Context such as the
profile id travels on the record as `extra_fields`.
"""

import copy
import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PLAIN_FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

SENSITIVE_KEYS = ("password", "token", "secret", "authorization", "api_key", "api-key")
MASK = "***FILTERED***"

RESET = "\033[0m"
LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    fields = getattr(record, "extra_fields", None)
    return dict(fields) if isinstance(fields, dict) else {}


class ColoredFormatter(logging.Formatter):
    """Terminal formatter; pads and colors the level, appends context as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        shown = copy.copy(record)
        color = LEVEL_COLORS.get(record.levelname, RESET)
        shown.levelname = f"{color}{record.levelname:<8}{RESET}"
        line = super().format(shown)
        context = _context(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


class JSONFormatter(logging.Formatter):
    """One JSON object per line; context fields never shadow the base keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
            "message": record.getMessage(),
        }
        for key, value in _context(record).items():
            entry.setdefault(key, value)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(path: str, level: int, as_json: bool) -> logging.Handler:
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=log_path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        JSONFormatter() if as_json else logging.Formatter(PLAIN_FILE_FORMAT, datefmt=DATE_FORMAT)
    )
    return handler


def setup_logging(config: Any) -> None:
    """
    Replace the root handlers according to the log settings.

    Args:
        config: Settings with log_level, log_console_enabled, log_file_enabled,
            log_file_path and log_json_format
    """
    level = _resolve_level(config.log_level)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if config.log_console_enabled:
        root.addHandler(_console_handler(level))
    if config.log_file_enabled:
        root.addHandler(_file_handler(config.log_file_path, level, config.log_json_format))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.info(
        "Logging ready",
        extra={"extra_fields": {
            "root_level": logging.getLevelName(level),
            "console": config.log_console_enabled,
            "file": config.log_file_path if config.log_file_enabled else None,
        }},
    )


class ContextAdapter(logging.LoggerAdapter):
    """Adds fixed context (e.g. the profile id) to every record it emits.

    Per-call `extra_fields` win over the adapter's own context on key clashes.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = dict(kwargs.get("extra") or {})
        extra["extra_fields"] = {**self.extra, **extra.get("extra_fields", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def filter_sensitive_data(data: Any, sensitive_keys: Optional[Iterable[str]] = None) -> Any:
    """Return a copy of `data` with values under secret-looking keys masked."""
    keys = tuple(sensitive_keys) if sensitive_keys is not None else SENSITIVE_KEYS

    if isinstance(data, dict):
        masked = {}
        for key, value in data.items():
            lowered = str(key).lower()
            if any(fragment in lowered for fragment in keys):
                masked[key] = MASK
            else:
                masked[key] = filter_sensitive_data(value, keys)
        return masked
    if isinstance(data, (list, tuple)):
        return [filter_sensitive_data(item, keys) for item in data]
    return data


def truncate_large_data(data: str, max_length: int = 5000) -> str:
    """Shorten a payload for the log, noting how long it really was."""
    if len(data) <= max_length:
        return data
    return f"{data[:max_length]}... [{len(data) - max_length} more chars, total length: {len(data)}]"
