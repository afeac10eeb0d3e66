"""Rank tier enumeration."""
from enum import Enum
from typing import Optional


class Tier(Enum):
    """League of Legends rank tiers, lowest first."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"

    @property
    def is_apex(self) -> bool:
        """Apex tiers have a single division."""
        return self in (Tier.MASTER, Tier.GRANDMASTER, Tier.CHALLENGER)

    @classmethod
    def from_string(cls, tier_str: str) -> Optional['Tier']:
        try:
            return cls[(tier_str or "").strip().upper()]
        except KeyError:
            return None


APEX_TIERS = frozenset(t.value for t in Tier if t.is_apex)
