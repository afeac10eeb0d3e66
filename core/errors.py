"""Error taxonomy shared by every layer."""
from __future__ import annotations

from typing import Any, Optional


class ConfigurationError(RuntimeError):
    """A required setting (the provider credential) is missing."""


class UpstreamError(Exception):
    """The official API answered with a non-success status or could not be reached.

    ``status`` is the HTTP status when the provider answered, ``None`` when the
    request never completed (timeout, connection reset).
    """

    def __init__(self, status: Optional[int], body: Any = None, url: str = "") -> None:
        super().__init__(f"upstream {status if status is not None else 'unreachable'} {url}".strip())
        self.status = status
        self.body = body
        self.url = url

    @property
    def is_transient(self) -> bool:
        if self.status is None:
            return True
        return self.status == 429 or 500 <= self.status < 600

    def to_payload(self) -> Any:
        if self.body:
            return self.body
        return {"error": str(self)}


class ScrapeNavigationError(Exception):
    """The third-party page could not be reached within its timeout."""


class ScrapeExtractionError(Exception):
    """The page loaded but the expected structure was not there."""
