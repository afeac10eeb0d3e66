"""Routing decision for one request."""
from dataclasses import dataclass


@dataclass(frozen=True)
class RegionRoute:
    """Where a request goes: platform host, routing cluster, profile-site slug."""

    platform_code: str
    routing_cluster: str
    scrape_slug: str

    def to_dict(self) -> dict:
        return {
            'platform': self.platform_code,
            'cluster': self.routing_cluster,
            'scrapeSlug': self.scrape_slug,
        }
