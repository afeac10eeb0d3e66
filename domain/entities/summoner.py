"""Summoner profile entity."""
from dataclasses import dataclass
from typing import Optional

from .match_summary import ParticipantStats


@dataclass
class SummonerProfile:
    """Platform-side profile of an account.

    ``summoner_id`` is sometimes missing from summoner-v4 responses. The
    resolver then fills it (and level/icon) from a match participant record;
    nothing else mutates a profile.
    """

    puuid: str
    summoner_id: Optional[str] = None
    profile_icon_id: Optional[int] = None
    level: Optional[int] = None
    account_id: Optional[str] = None
    revision_date: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> 'SummonerProfile':
        return cls(
            puuid=data.get('puuid') or '',
            summoner_id=data.get('id') or None,
            profile_icon_id=data.get('profileIconId'),
            level=data.get('summonerLevel'),
            account_id=data.get('accountId') or None,
            revision_date=data.get('revisionDate'),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.summoner_id)

    def recover_from_participant(self, participant: ParticipantStats) -> list[str]:
        """Copy fields still missing locally; return the names of those filled."""
        filled = []
        if not self.summoner_id and participant.summoner_id:
            self.summoner_id = participant.summoner_id
            filled.append('summoner_id')
        if not self.level and participant.summoner_level:
            self.level = participant.summoner_level
            filled.append('level')
        if not self.profile_icon_id and participant.profile_icon:
            self.profile_icon_id = participant.profile_icon
            filled.append('profile_icon_id')
        return filled

    def to_dict(self) -> dict:
        return {
            'id': self.summoner_id,
            'accountId': self.account_id,
            'puuid': self.puuid,
            'profileIconId': self.profile_icon_id,
            'revisionDate': self.revision_date,
            'summonerLevel': self.level,
        }
