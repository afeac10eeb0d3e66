"""Domain entities."""
from .region_route import RegionRoute
from .account import AccountIdentity
from .match_summary import MatchSummary, ParticipantStats
from .summoner import SummonerProfile
from .rank_entry import RankEntry
from .build import BuildItems, BuildRecommendation
from .player_stats import PlayerStats

__all__ = [
    'RegionRoute',
    'AccountIdentity',
    'MatchSummary',
    'ParticipantStats',
    'SummonerProfile',
    'RankEntry',
    'BuildItems',
    'BuildRecommendation',
    'PlayerStats',
]
