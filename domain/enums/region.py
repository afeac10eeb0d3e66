"""Platform (server) codes and their routing vocabularies."""
from enum import Enum
from typing import Optional


class Region(Enum):
    """League of Legends platform hosts.

    Provides:
    - routing_cluster: account/match routing host (americas, europe, asia)
    - scrape_slug: the profile site's region segment (e.g. eune), which is a
      different vocabulary from the platform code
    """

    # Europe
    EUW1 = "euw1"  # Europe West
    EUN1 = "eun1"  # Europe Nordic & East
    TR1 = "tr1"    # Turkey
    RU = "ru"      # Russia

    # Americas
    NA1 = "na1"    # North America
    BR1 = "br1"    # Brazil
    LA1 = "la1"    # Latin America North
    LA2 = "la2"    # Latin America South
    OC1 = "oc1"    # Oceania

    # Asia
    KR = "kr"      # Korea
    JP1 = "jp1"    # Japan

    # SEA
    PH2 = "ph2"    # Philippines
    SG2 = "sg2"    # Singapore
    TH2 = "th2"    # Thailand
    TW2 = "tw2"    # Taiwan
    VN2 = "vn2"    # Vietnam

    @property
    def routing_cluster(self) -> str:
        """Routing cluster for account and match APIs.

        Only three clusters are used; every platform outside the europe and
        asia groups routes through americas.
        """
        if self.value in ("euw1", "eun1", "tr1", "ru"):
            return "europe"
        if self.value in ("kr", "jp1"):
            return "asia"
        return "americas"

    @property
    def scrape_slug(self) -> str:
        return SCRAPE_SLUGS[self.value]

    @classmethod
    def from_code(cls, code: str) -> Optional['Region']:
        """Look up a platform code case-insensitively; None when unknown."""
        try:
            return cls((code or "").strip().lower())
        except ValueError:
            return None


SCRAPE_SLUGS = {
    "na1": "na",
    "euw1": "euw",
    "eun1": "eune",
    "kr": "kr",
    "br1": "br",
    "jp1": "jp",
    "ru": "ru",
    "oc1": "oce",
    "tr1": "tr",
    "la1": "lan",
    "la2": "las",
    "ph2": "ph",
    "sg2": "sg",
    "th2": "th",
    "tw2": "tw",
    "vn2": "vn",
}
