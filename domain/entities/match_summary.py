"""Match summary entities built from match-v5 payloads."""
from dataclasses import dataclass, field
from typing import Optional

from ..enums import Role


@dataclass
class ParticipantStats:
    """Per-player slice of a match."""

    # Identity
    puuid: str
    summoner_id: Optional[str] = None
    summoner_level: Optional[int] = None
    profile_icon: Optional[int] = None

    # Champion / position
    champion_id: int = 0
    champion_name: str = ""
    team_position: str = ""

    # Outcome
    win: bool = False
    kills: int = 0
    deaths: int = 0
    assists: int = 0

    # Economy & farm
    total_minions_killed: int = 0
    neutral_minions_killed: int = 0
    gold_earned: int = 0

    # Damage & vision
    total_damage_dealt_to_champions: int = 0
    vision_score: int = 0

    # Items (slots 0-6, slot 6 is the trinket)
    items: list[int] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> 'ParticipantStats':
        return cls(
            puuid=data.get('puuid') or '',
            summoner_id=data.get('summonerId') or None,
            summoner_level=data.get('summonerLevel'),
            profile_icon=data.get('profileIcon'),
            champion_id=int(data.get('championId') or 0),
            champion_name=data.get('championName') or '',
            team_position=data.get('teamPosition') or '',
            win=bool(data.get('win')),
            kills=int(data.get('kills') or 0),
            deaths=int(data.get('deaths') or 0),
            assists=int(data.get('assists') or 0),
            total_minions_killed=int(data.get('totalMinionsKilled') or 0),
            neutral_minions_killed=int(data.get('neutralMinionsKilled') or 0),
            gold_earned=int(data.get('goldEarned') or 0),
            total_damage_dealt_to_champions=int(data.get('totalDamageDealtToChampions') or 0),
            vision_score=int(data.get('visionScore') or 0),
            items=[int(data.get(f'item{i}') or 0) for i in range(7)],
        )

    @property
    def cs(self) -> int:
        return self.total_minions_killed + self.neutral_minions_killed

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'summonerId': self.summoner_id,
            'summonerLevel': self.summoner_level,
            'profileIcon': self.profile_icon,
            'championId': self.champion_id,
            'championName': self.champion_name,
            'teamPosition': self.team_position,
            'win': self.win,
            'kills': self.kills,
            'deaths': self.deaths,
            'assists': self.assists,
            'totalMinionsKilled': self.total_minions_killed,
            'neutralMinionsKilled': self.neutral_minions_killed,
            'goldEarned': self.gold_earned,
            'totalDamageDealtToChampions': self.total_damage_dealt_to_champions,
            'visionScore': self.vision_score,
            'items': list(self.items),
        }


@dataclass
class MatchSummary:
    """A fetched match reduced to what the dashboard needs."""

    match_id: str
    participant_stats: list[ParticipantStats] = field(default_factory=list)
    game_duration: int = 0  # Seconds
    game_end_timestamp: Optional[int] = None  # Unix timestamp milliseconds
    queue_id: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> 'MatchSummary':
        metadata = data.get('metadata') or {}
        info = data.get('info') or {}
        return cls(
            match_id=metadata.get('matchId') or '',
            participant_stats=[ParticipantStats.from_api(p) for p in info.get('participants') or []],
            game_duration=int(info.get('gameDuration') or 0),
            game_end_timestamp=info.get('gameEndTimestamp'),
            queue_id=info.get('queueId'),
        )

    @property
    def game_duration_minutes(self) -> float:
        return self.game_duration / 60.0

    def participant(self, puuid: str) -> Optional[ParticipantStats]:
        return next((p for p in self.participant_stats if p.puuid == puuid), None)

    def for_player(self, puuid: str) -> Optional[dict]:
        """Dashboard row for one player; None when they are not in this match."""
        p = self.participant(puuid)
        if p is None:
            return None
        minutes = self.game_duration_minutes
        return {
            'id': self.match_id,
            'championName': p.champion_name,
            'championId': p.champion_name,
            'role': Role.from_team_position(p.team_position),
            'win': p.win,
            'kda': {'k': p.kills, 'd': p.deaths, 'a': p.assists},
            'cs': p.cs,
            'csPerMin': round(p.cs / minutes, 1) if minutes else 0.0,
            'visionScore': p.vision_score,
            'gameDuration': self.game_duration,
            'timestamp': self.game_end_timestamp,
            'items': list(p.items),
            'damageDealt': p.total_damage_dealt_to_champions,
            'goldEarned': p.gold_earned,
        }

    def to_dict(self) -> dict:
        return {
            'matchId': self.match_id,
            'gameDuration': self.game_duration,
            'gameEndTimestamp': self.game_end_timestamp,
            'queueId': self.queue_id,
            'participants': [p.to_dict() for p in self.participant_stats],
        }
