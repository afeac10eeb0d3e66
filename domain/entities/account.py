"""Account identity (Riot ID → PUUID)."""
from dataclasses import dataclass


@dataclass(frozen=True)
class AccountIdentity:
    """A Riot account. ``puuid`` is the join key for every downstream call."""

    puuid: str
    game_name: str
    tag_line: str

    @classmethod
    def from_api(cls, data: dict) -> 'AccountIdentity':
        return cls(
            puuid=data['puuid'],
            game_name=data.get('gameName') or '',
            tag_line=data.get('tagLine') or '',
        )

    @property
    def riot_id(self) -> str:
        return f"{self.game_name}#{self.tag_line}"

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'gameName': self.game_name,
            'tagLine': self.tag_line,
        }
