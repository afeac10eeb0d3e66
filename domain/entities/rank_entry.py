"""Ranked standing in one queue."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RankEntry:
    """One ranked-queue entry. An empty list of these means "unranked"."""

    queue_type: str
    tier: str
    division: str
    league_points: int = 0
    wins: int = 0
    losses: int = 0
    scraped_level: Optional[int] = None
    source: str = "api"

    @classmethod
    def from_api(cls, data: dict) -> 'RankEntry':
        return cls(
            queue_type=data.get('queueType') or '',
            tier=(data.get('tier') or '').upper(),
            division=data.get('rank') or '',
            league_points=int(data.get('leaguePoints') or 0),
            wins=int(data.get('wins') or 0),
            losses=int(data.get('losses') or 0),
        )

    def to_dict(self) -> dict:
        out = {
            'queueType': self.queue_type,
            'tier': self.tier,
            'rank': self.division,
            'leaguePoints': self.league_points,
            'wins': self.wins,
            'losses': self.losses,
            'source': self.source,
        }
        if self.scraped_level is not None:
            out['scrapedLevel'] = self.scraped_level
        return out
