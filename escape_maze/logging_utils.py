"""Minimal structured logging helper.

Emits one line per event with a level, a timestamp and key=value fields so
generator traces (attempt rejections, fallbacks) stay greppable without
configuring stdlib logging handlers.

Usage:
    from escape_maze.logging_utils import get_logger
    log = get_logger("maze.generator")
    log.info(event="maze_generated", attempt=3, doors=8)

    run_log = log.bind(seed=1234, width=41, height=35)
    run_log.debug(event="maze_attempt_rejected", reason="critical_path")

Environment:
    MAZE_LOG_LEVEL  debug|info|warn|error (default info)
    MAZE_LOG_JSON   1/true/yes/on to emit one JSON object per line

Grid coordinates (2-item tuples/lists of ints) render as ``x,y``; other
values are str()'d with spaces replaced by underscores. Reserved keys:
level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("MAZE_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("MAZE_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _is_coord(v) -> bool:
    return isinstance(v, (tuple, list)) and len(v) == 2 and all(type(c) is int for c in v)


def _render(v) -> str:
    if _is_coord(v):
        return f"{v[0]},{v[1]}"
    if isinstance(v, (bool, int, float)):
        return str(v)
    return str(v).replace(" ", "_")


def _format(level: str, fields: dict) -> str:
    fields = {k: v for k, v in fields.items() if v is not None}
    if JSON_MODE:
        rec = {k: (list(v) if _is_coord(v) else v) for k, v in fields.items()}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    parts.extend(f"{k}={_render(v)}" for k, v in fields.items())
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "maze"
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Child logger that adds ``fields`` to every event it emits."""
        return _Logger(self.name, {**self.context, **fields})

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        merged = {"logger": self.name, **self.context, **fields}
        print(_format(lvl, merged), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("maze")
