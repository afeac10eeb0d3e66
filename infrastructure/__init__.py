"""Infrastructure layer - API clients and browser scraping."""
from .api import RiotAPIClient, DDragonClient, RateLimiter, EndpointRateLimiter
from .scraping import PlaywrightLauncher, ScrapeTimeouts

__all__ = [
    'RiotAPIClient',
    'DDragonClient',
    'RateLimiter',
    'EndpointRateLimiter',
    'PlaywrightLauncher',
    'ScrapeTimeouts',
]
