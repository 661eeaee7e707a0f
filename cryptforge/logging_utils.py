"""Structured key=value logging for the generators and the CLI.

Each call prints one line: ``level`` and ``ts`` first, then the caller's fields
in the order given, then the logger name. The generation phases log at debug,
so at the default info threshold they cost one comparison per call. The HTTP
server sets up stdlib logging on its own (see ``cryptforge.server``).

Usage:
    from cryptforge.logging_utils import get_logger
    log = get_logger("cryptforge.rooms")
    log.debug(event="rooms_placed", requested=15, placed=12)

Environment:
    CRYPTFORGE_LOG_LEVEL  debug|info|warn|error (default info)
    CRYPTFORGE_LOG_JSON   1/true/yes/on for one JSON object per line

Fields set to None are dropped. Text values have spaces turned into
underscores so a line always splits cleanly on whitespace.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("CRYPTFORGE_LOG_LEVEL", "info").lower(), LEVELS["info"])
JSON_MODE = os.getenv("CRYPTFORGE_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _render(value) -> str:
    if isinstance(value, (int, float)):
        return str(value)
    return str(value).replace(" ", "_")


def format_record(level: str, fields: dict) -> str:
    stamp = int(time.time())
    present = {k: v for k, v in fields.items() if v is not None}
    if JSON_MODE:
        try:
            return json.dumps({"level": level, "ts": stamp, **present}, separators=(",", ":"), default=str)
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": stamp, "error": "json_encode_failed"})
    pairs = [("level", level), ("ts", stamp)] + list(present.items())
    return " ".join(f"{k}={_render(v)}" for k, v in pairs)


class StructuredLogger:
    def __init__(self, name: str | None = None):
        self.name = name or "cryptforge"

    def enabled_for(self, level: str) -> bool:
        return LEVELS[level] >= CURRENT_LEVEL

    def emit(self, level: str, **fields):
        if not self.enabled_for(level):
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if level == "error" else sys.stdout
        print(format_record(level, fields), file=stream)

    def debug(self, **fields):
        self.emit("debug", **fields)

    def info(self, **fields):
        self.emit("info", **fields)

    def warn(self, **fields):
        self.emit("warn", **fields)

    def error(self, **fields):
        self.emit("error", **fields)


_loggers: dict = {}


def get_logger(name: str) -> StructuredLogger:
    return _loggers.setdefault(name, StructuredLogger(name))


def set_level(level: str) -> None:
    """Change the threshold at runtime; unknown names leave it unchanged."""
    global CURRENT_LEVEL
    CURRENT_LEVEL = LEVELS.get(level.lower(), CURRENT_LEVEL)


log = get_logger("cryptforge")
