"""Extra log level for completed lookups and scrapes."""
from __future__ import annotations

import logging

SUCCESS = 25


def register_levels() -> None:
    if logging.getLevelName(SUCCESS) != "SUCCESS":
        logging.addLevelName(SUCCESS, "SUCCESS")


def to_level(value: int | str) -> int:
    """``LOG_LEVEL`` may be a name (``debug``, ``success``) or a number (``25``)."""
    if isinstance(value, int):
        return value
    name = (value or "").strip().upper()
    if name.isdigit():
        return int(name)
    if name == "SUCCESS":
        return SUCCESS
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
