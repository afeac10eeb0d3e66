"""Domain layer - Business entities, enums, and interfaces."""
from .entities import (
    RegionRoute, AccountIdentity, SummonerProfile, RankEntry,
    MatchSummary, ParticipantStats, BuildItems, BuildRecommendation, PlayerStats,
)
from .enums import Region, QueueType, Tier, Role
from .interfaces import IBrowser, IBrowserLauncher

__all__ = [
    # Entities
    'RegionRoute',
    'AccountIdentity',
    'SummonerProfile',
    'RankEntry',
    'MatchSummary',
    'ParticipantStats',
    'BuildItems',
    'BuildRecommendation',
    'PlayerStats',
    # Enums
    'Region',
    'QueueType',
    'Tier',
    'Role',
    # Interfaces
    'IBrowser',
    'IBrowserLauncher',
]
