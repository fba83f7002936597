"""Structured event logging for the generator and the web layer.

Each call emits one line to stdout (errors go to stderr), either as
``key=value`` pairs or, with ``CAVERNFORGE_LOG_JSON=1``, as a compact JSON
object. Both the threshold (``CAVERNFORGE_LOG_LEVEL``) and the output mode are
read at call time, so tests and the CLI can flip them through the environment.

Usage:
    from cavernforge.logging_utils import get_logger
    _log = get_logger("world.pipeline")
    _log.debug(event="world_generated", seed=42, floor=3120)

    # fields repeated on every line
    seeded = _log.bind(seed=42)
    seeded.warn(event="connectivity_repair_incomplete", components=2)

Fields set to None are dropped. Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict, Optional

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")


def _threshold() -> int:
    return LEVELS.get(os.getenv("CAVERNFORGE_LOG_LEVEL", "info").lower(), LEVELS["info"])


def _json_enabled() -> bool:
    return os.getenv("CAVERNFORGE_LOG_JSON", "0") in _TRUTHY


def _as_kv(value: Any) -> str:
    if isinstance(value, (int, float)):
        return str(value)
    # keep one token per field so lines split cleanly on whitespace
    return str(value).replace(" ", "_")


def render(level: str, fields: Dict[str, Any]) -> str:
    ts = int(time.time())
    present = {k: v for k, v in fields.items() if v is not None}
    if _json_enabled():
        return json.dumps({**present, "level": level, "ts": ts}, separators=(",", ":"), default=repr)
    head = [f"level={level}", f"ts={ts}"]
    return " ".join(head + [f"{k}={_as_kv(v)}" for k, v in present.items()])


class _Logger:
    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Child logger that adds ``fields`` to every record."""
        return _Logger(self.name, {**self.context, **fields})

    def _emit(self, level: str, fields: Dict[str, Any]) -> None:
        if LEVELS[level] < _threshold():
            return
        record = {"logger": self.name, **self.context, **fields}
        stream = sys.stderr if level == "error" else sys.stdout
        print(render(level, record), file=stream)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_LOGGERS: Dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGERS:
        _LOGGERS[name] = _Logger(name)
    return _LOGGERS[name]


log = get_logger("cavernforge")
