"""Ranked standing from league-v4."""
from __future__ import annotations

from typing import List

from core.errors import UpstreamError
from core.logging import get_logger
from domain.entities import RankEntry
from infrastructure.api import RiotAPIClient


class RankResolver:
    """League entries for a summoner; ``[]`` whenever there is nothing to say.

    An empty list is read as "unranked pending confirmation" by callers, so
    failures are logged here and never raised.
    """

    def __init__(self, api_client: RiotAPIClient):
        self.api_client = api_client
        self.logger = get_logger(__name__, service="rank")

    async def resolve_ranks(self, summoner_id: str, platform: str) -> List[RankEntry]:
        if not summoner_id or not summoner_id.strip():
            self.logger.warning("No summoner id, treating as unranked")
            return []
        try:
            entries = await self.api_client.get_league_entries_by_summoner(platform, summoner_id)
            return [RankEntry.from_api(e) for e in entries if isinstance(e, dict)]
        except UpstreamError as exc:
            self.logger.error(f"Rank fetch failed ({platform}): {exc.status} {exc.body}")
        except Exception as exc:
            self.logger.exception(f"Rank payload malformed ({platform}): {exc}")
        return []
