from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from .levels import SUCCESS


class SupportsStr(Protocol):
    def __str__(self) -> str: ...


Message = SupportsStr | Callable[[], SupportsStr]


class StructuredLogger:
    """Thin wrapper over a stdlib logger.

    Messages may be passed as zero-arg callables so that expensive
    formatting only happens when the level is enabled. Keyword fields go
    into ``extra`` and end up as ``key=value`` pairs (console) or under
    ``"extra"`` (JSON lines).
    """

    def __init__(self, logger: logging.Logger, service: Optional[str] = None) -> None:
        self._logger = logger
        self._service = service

    def _log(self, level: int, msg: Message, *, exc_info: Any = None, **fields: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        try:
            message = msg() if callable(msg) else msg
        except Exception as exc:
            message = f"<lazy message failed: {exc}>"
        extra = dict(fields)
        if self._service:
            extra.setdefault("service", self._service)
        self._logger.log(level, str(message), exc_info=exc_info, extra=extra, stacklevel=3)

    def debug(self, msg: Message, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, **fields)

    def info(self, msg: Message, **fields: Any) -> None:
        self._log(logging.INFO, msg, **fields)

    def success(self, msg: Message, **fields: Any) -> None:
        self._log(SUCCESS, msg, **fields)

    def warning(self, msg: Message, **fields: Any) -> None:
        self._log(logging.WARNING, msg, **fields)

    def error(self, msg: Message, **fields: Any) -> None:
        self._log(logging.ERROR, msg, **fields)

    def exception(self, msg: Message, **fields: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=True, **fields)


def get_logger(name: str, *, service: Optional[str] = None) -> StructuredLogger:
    return StructuredLogger(logging.getLogger(name), service=service)
