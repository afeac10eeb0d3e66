"""Headless browser interfaces used by the scrapers."""
from abc import ABC, abstractmethod
from typing import Any


class IBrowser(ABC):
    """One isolated browser instance. Never shared between scrape calls."""

    @abstractmethod
    async def new_page(self) -> Any:
        """Open a page configured for scraping (English locale, desktop UA)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the browser process. Safe to call more than once."""
        pass


class IBrowserLauncher(ABC):
    """Factory for fresh browser instances."""

    @abstractmethod
    async def launch(self, *, block_assets: bool = False) -> IBrowser:
        """Start a new browser; ``block_assets`` drops images, fonts and styles."""
        pass
