"""Logging setup shared by the CLI, scrapers and cache services.

Environment variables:
    LOG_LEVEL=INFO|DEBUG|...   (default: INFO, or Settings.log_level)
    LOG_FORMAT=console|json    (default: console)
    LOG_NO_COLOR=1             disable ANSI colours on console output
    LOG_TIMEZONE=utc|local     (default: local)

Usage:
    from gotsport_mirror.common.logging_utils import configure_logging, get_logger
    configure_logging(service="cli")  # idempotent
    logger = get_logger(__name__)
"""
from __future__ import annotations

import json
import logging
import os
import sys
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_CONFIG_LOCK = threading.Lock()
_ALREADY_CONFIGURED = False
_SERVICE: Optional[str] = None

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def _timestamp(record: logging.LogRecord, tz_local: bool) -> datetime:
    ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
    return ts.astimezone() if tz_local else ts


class ColorFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\x1b[38;5;245m",
        "INFO": "\x1b[38;5;39m",
        "WARNING": "\x1b[38;5;214m",
        "ERROR": "\x1b[38;5;196m",
        "CRITICAL": "\x1b[48;5;196m\x1b[38;5;231m",
    }
    RESET = "\x1b[0m"

    def __init__(self, tz_local: bool):
        super().__init__()
        self.tz_local = tz_local

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        ts_str = _timestamp(record, self.tz_local).strftime("%Y-%m-%d %H:%M:%S")
        line = f"{ts_str} | {record.levelname:<8} | {record.name} | {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        color = self.COLORS.get(record.levelname)
        return f"{color}{line}{self.RESET}" if color else line


class JsonFormatter(logging.Formatter):
    def __init__(self, tz_local: bool):
        super().__init__()
        self.tz_local = tz_local

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "ts": _timestamp(record, self.tz_local).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if _SERVICE:
            payload["service"] = _SERVICE
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # extra={...} attributes end up on the record itself
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in payload or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = repr(value)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    service: str | None = None,
    *,
    level: str | None = None,
    fmt: str | None = None,
    force: bool = False,
) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    service: logical app name, added as a field in JSON mode
    level: overrides LOG_LEVEL when given
    fmt: overrides LOG_FORMAT when given (console | json)
    force: reconfigure even if already configured
    """
    global _ALREADY_CONFIGURED, _SERVICE
    with _CONFIG_LOCK:
        if _ALREADY_CONFIGURED and not force:
            return

        log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
        log_format = (fmt or os.getenv("LOG_FORMAT", "console")).lower()
        tz_local = os.getenv("LOG_TIMEZONE", "local").lower() != "utc"
        no_color = os.getenv("LOG_NO_COLOR") == "1"

        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)

        if log_format == "json":
            formatter: logging.Formatter = JsonFormatter(tz_local=tz_local)
        elif sys.stderr.isatty() and not no_color:
            formatter = ColorFormatter(tz_local=tz_local)
        else:
            formatter = logging.Formatter(
                fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.setLevel(getattr(logging, log_level, logging.INFO))

        _SERVICE = service
        _ALREADY_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = [
    "configure_logging",
    "get_logger",
]
