"""Headless-browser scraping support."""
from .browser import PlaywrightBrowser, PlaywrightLauncher, close_browser
from .embedded_json import SSR_MARKER, extract_assigned_object, find_balanced_object
from .timeouts import ScrapeTimeouts

__all__ = [
    'PlaywrightBrowser',
    'PlaywrightLauncher',
    'close_browser',
    'SSR_MARKER',
    'extract_assigned_object',
    'find_balanced_object',
    'ScrapeTimeouts',
]
