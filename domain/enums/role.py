"""Role/Position enumeration."""
from enum import Enum
from typing import Optional


class Role(Enum):
    """Lane roles, valued by the build site's URL slug."""

    TOP = "top"
    JUNGLE = "jungle"
    MID = "mid"
    ADC = "adc"
    SUPPORT = "support"

    @property
    def display_name(self) -> str:
        return "Adc" if self == Role.ADC else self.value.capitalize()

    @classmethod
    def from_string(cls, role_str: Optional[str]) -> Optional['Role']:
        """Accept slugs, match-v5 positions and the usual shorthands."""
        if not role_str:
            return None
        key = role_str.strip().lower()
        aliases = {
            "middle": cls.MID,
            "bot": cls.ADC,
            "bottom": cls.ADC,
            "supp": cls.SUPPORT,
            "sup": cls.SUPPORT,
            "utility": cls.SUPPORT,
            "jg": cls.JUNGLE,
            "jgl": cls.JUNGLE,
        }
        try:
            return cls(key)
        except ValueError:
            return aliases.get(key)

    @classmethod
    def from_team_position(cls, position: Optional[str]) -> str:
        """Map a match-v5 ``teamPosition`` to the dashboard role label."""
        labels = {
            "TOP": "TOP",
            "JUNGLE": "JUNGLE",
            "MIDDLE": "MID",
            "BOTTOM": "ADC",
            "UTILITY": "SUPPORT",
        }
        return labels.get((position or "").upper(), "MID")
