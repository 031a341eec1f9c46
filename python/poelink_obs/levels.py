# Ordered severity levels; "silent" turns everything off.

from __future__ import annotations
from typing import Any, Dict, Literal

LogLevel = Literal["debug", "info", "warn", "error", "silent"]

_RANKS: Dict[str, int] = {
    "debug": 10,
    "info": 20,
    "warn": 30,
    "error": 40,
    "silent": 100,
}

LEVELS = tuple(_RANKS)


def is_log_level(value: Any) -> bool:
    return isinstance(value, str) and value in _RANKS


def level_rank(level: str) -> int:
    """Integer rank of ``level``; unknown names rank like "info"."""
    if not is_log_level(level):
        return _RANKS["info"]
    return _RANKS[level]


def is_enabled(want: str, configured: str) -> bool:
    return configured != "silent" and level_rank(want) >= level_rank(configured)
