"""Infrastructure API module."""
from .riot_client import RiotAPIClient
from .ddragon_client import DDragonClient
from .rate_limiter import RateLimiter, EndpointRateLimiter

__all__ = [
    'RiotAPIClient',
    'DDragonClient',
    'RateLimiter',
    'EndpointRateLimiter',
]
