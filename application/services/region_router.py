"""Maps Riot tags and platform codes to API routing and scrape-site slugs.

Pure and total: unknown input falls back to a default route instead of
raising. The defaults lean towards the Americas, where most players of the
consuming app are.
"""
from __future__ import annotations

import re

from config import settings
from domain.entities import RegionRoute
from domain.enums import Region

EUROPE_TAGS = ("euw", "eune", "tr", "ru", "eu")
ASIA_TAGS = ("kr", "jp", "tw", "ph", "sg", "th", "vn")

# Checked in order; the first substring hit wins.
TAG_PLATFORMS = (
    ("euw", "euw1"),
    ("kr", "kr"),
    ("na", "na1"),
    ("lan", "la1"),
    ("las", "la2"),
    ("br", "br1"),
    ("eune", "eun1"),
    ("tr", "tr1"),
    ("ru", "ru"),
    ("jp", "jp1"),
    ("oce", "oc1"),
)

DEFAULT_CLUSTER = "americas"


class RegionRouter:
    """Routing decisions for the account, platform and scrape vocabularies."""

    @staticmethod
    def cluster_for_tag(tag_line: str) -> str:
        tag = (tag_line or "").lower()
        if any(t in tag for t in EUROPE_TAGS):
            return "europe"
        if any(t in tag for t in ASIA_TAGS):
            return "asia"
        return DEFAULT_CLUSTER

    @staticmethod
    def cluster_for_platform(platform: str) -> str:
        region = Region.from_code(platform)
        return region.routing_cluster if region else DEFAULT_CLUSTER

    @staticmethod
    def platform_for_tag(tag_line: str) -> str:
        tag = (tag_line or "").lower()
        for needle, platform in TAG_PLATFORMS:
            if needle in tag:
                return platform
        return settings.DEFAULT_PLATFORM

    @staticmethod
    def scrape_slug_for_platform(platform: str) -> str:
        region = Region.from_code(platform)
        if region:
            return region.scrape_slug
        return re.sub(r"\d+$", "", (platform or "").strip().lower())

    @classmethod
    def route_for_platform(cls, platform: str) -> RegionRoute:
        code = (platform or "").strip().lower() or settings.DEFAULT_PLATFORM
        return RegionRoute(
            platform_code=code,
            routing_cluster=cls.cluster_for_platform(code),
            scrape_slug=cls.scrape_slug_for_platform(code),
        )

    @classmethod
    def route_for_tag(cls, tag_line: str) -> RegionRoute:
        """Platform guessed from the tag; the account cluster comes from the tag too."""
        platform = cls.platform_for_tag(tag_line)
        return RegionRoute(
            platform_code=platform,
            routing_cluster=cls.cluster_for_tag(tag_line),
            scrape_slug=cls.scrape_slug_for_platform(platform),
        )
