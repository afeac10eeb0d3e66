from __future__ import annotations

import logging
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import Optional

from .formatter import ConsoleFormatter, ContextFilter, JSONFormatter
from .levels import register_levels, to_level

_listener: QueueListener | None = None

_NOISY = ("httpx", "httpcore", "asyncio", "uvicorn.access")


def bootstrap_logging(
    *,
    level: str | int = "INFO",
    log_dir: Optional[Path] = None,
    log_file_name: str = "service.jsonl",
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    """Console handler always; rotating JSON-lines file when ``log_dir`` is given.

    The file handler sits behind a queue listener so request handlers never
    block on disk writes.
    """
    global _listener
    shutdown_logging()
    register_levels()
    lvl = to_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(lvl)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(lvl)
    console.setFormatter(ConsoleFormatter(color=sys.stdout.isatty()))
    root.addHandler(console)

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setLevel(lvl)
        file_handler.setFormatter(JSONFormatter())
        q: Queue[logging.LogRecord] = Queue(-1)
        queue_handler = QueueHandler(q)
        queue_handler.addFilter(ContextFilter())
        root.addHandler(queue_handler)
        _listener = QueueListener(q, file_handler, respect_handler_level=True)
        _listener.start()

    for name in _NOISY:
        logging.getLogger(name).setLevel(max(lvl, logging.WARNING))


def shutdown_logging() -> None:
    global _listener
    if _listener:
        _listener.stop()
        _listener = None
