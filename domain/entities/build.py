"""Recommended build entity."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class BuildItems:
    core: list[int] = field(default_factory=list)
    boots: list[int] = field(default_factory=list)
    situational: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'core': list(self.core),
            'boots': list(self.boots),
            'situational': list(self.situational),
        }


@dataclass
class BuildRecommendation:
    """Items and runes for one champion/role.

    Every id is an int by the time a recommendation leaves the scraper; an
    empty recommendation is the "no build found" answer, not an error.
    """

    role: Optional[str] = None
    items: BuildItems = field(default_factory=BuildItems)
    rune_ids: list[int] = field(default_factory=list)
    item_ids: list[int] = field(default_factory=list)
    winrate: Optional[float] = None
    source: Optional[str] = None

    @classmethod
    def empty(cls, role: Optional[str] = None) -> 'BuildRecommendation':
        return cls(role=role)

    @property
    def is_empty(self) -> bool:
        return not self.rune_ids and not self.items.core and not self.items.boots

    def to_dict(self) -> dict:
        return {
            'role': self.role,
            'items': self.items.to_dict(),
            'runeIds': list(self.rune_ids),
            'itemIds': list(self.item_ids),
            'winrate': self.winrate,
            'source': self.source,
        }
