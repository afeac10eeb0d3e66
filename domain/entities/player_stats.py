"""Aggregate stats over a player's recent matches."""
from dataclasses import dataclass
from typing import Iterable, Optional

from .match_summary import MatchSummary


@dataclass(frozen=True)
class PlayerStats:
    games: int
    wins: int
    kda_ratio: float
    avg_kills: float
    avg_deaths: float
    avg_assists: float
    winrate: int
    cs_per_min: float
    vision_per_min: float
    damage_per_min: int
    gold_per_min: int
    kill_participation: int

    @classmethod
    def from_matches(cls, matches: Iterable[MatchSummary], puuid: str) -> Optional['PlayerStats']:
        """None when the player appears in none of the matches."""
        rows = [(m, m.participant(puuid)) for m in matches]
        rows = [(m, p) for m, p in rows if p is not None]
        if not rows:
            return None

        games = len(rows)
        wins = sum(1 for _, p in rows if p.win)
        k = sum(p.kills for _, p in rows)
        d = sum(p.deaths for _, p in rows)
        a = sum(p.assists for _, p in rows)
        cs = sum(p.cs for _, p in rows)
        vision = sum(p.vision_score for _, p in rows)
        damage = sum(p.total_damage_dealt_to_champions for _, p in rows)
        gold = sum(p.gold_earned for _, p in rows)
        minutes = sum(m.game_duration_minutes for m, _ in rows) or 1.0

        # Team kills are not tracked, so participation is approximated
        # from the player's own takedowns against deaths.
        takedowns = k + a
        kp_den = takedowns + d * 1.5

        return cls(
            games=games,
            wins=wins,
            kda_ratio=round(takedowns / (d or 1), 2),
            avg_kills=round(k / games, 1),
            avg_deaths=round(d / games, 1),
            avg_assists=round(a / games, 1),
            winrate=round(wins / games * 100),
            cs_per_min=round(cs / minutes, 1),
            vision_per_min=round(vision / minutes, 1),
            damage_per_min=round(damage / minutes),
            gold_per_min=round(gold / minutes),
            kill_participation=round(takedowns / kp_den * 100) if kp_den else 0,
        )

    def to_dict(self) -> dict:
        return {
            'games': self.games,
            'wins': self.wins,
            'kdaRatio': self.kda_ratio,
            'kda': f"{self.avg_kills} / {self.avg_deaths} / {self.avg_assists}",
            'winrate': self.winrate,
            'csPerMin': self.cs_per_min,
            'visionPerMin': self.vision_per_min,
            'damagePerMin': self.damage_per_min,
            'goldPerMin': self.gold_per_min,
            'kp': self.kill_participation,
        }
