"""Application layer - Services and use cases."""
from .services import BuildScraper, IdentityResolver, MatchHistoryResolver, RankResolver, RankScraper
from .use_cases import ResolvePlayerUseCase

__all__ = [
    'BuildScraper',
    'IdentityResolver',
    'MatchHistoryResolver',
    'RankResolver',
    'RankScraper',
    'ResolvePlayerUseCase',
]
