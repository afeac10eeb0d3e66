"""Cross-cutting concerns: logging and the error taxonomy."""
from .errors import (
    ConfigurationError,
    UpstreamError,
    ScrapeNavigationError,
    ScrapeExtractionError,
)

__all__ = [
    'ConfigurationError',
    'UpstreamError',
    'ScrapeNavigationError',
    'ScrapeExtractionError',
]
