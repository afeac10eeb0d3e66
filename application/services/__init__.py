"""Application services root exports."""
from .region_router import RegionRouter
from .retry_policy import RetryPolicy
from .identity_resolver import IdentityResolver
from .rank_resolver import RankResolver
from .match_history_resolver import MatchHistoryResolver
from .icon_id_normalizer import IconIdNormalizer
from .rank_scraper import RankScraper
from .build_scraper import BuildScraper

__all__ = [
    "RegionRouter",
    "RetryPolicy",
    "IdentityResolver",
    "RankResolver",
    "MatchHistoryResolver",
    "IconIdNormalizer",
    "RankScraper",
    "BuildScraper",
]
