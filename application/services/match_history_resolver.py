"""Recent match history from match-v5."""
from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

from config import settings
from core.errors import UpstreamError
from core.logging import get_logger
from domain.entities import MatchSummary
from infrastructure.api import RiotAPIClient
from .region_router import RegionRouter


class MatchHistoryResolver:
    """
    Match ids and details for one player.

    Details are fetched one at a time with a pause after each request.
    Restricted keys allow about 20 requests per second; fanning ten detail
    requests out in parallel on top of the account/summoner/league calls
    reliably returns 429s, the paced loop does not. Keep it sequential.
    """

    def __init__(self, api_client: RiotAPIClient, pacing_s: Optional[float] = None):
        self.api_client = api_client
        self.pacing_s = settings.MATCH_FETCH_DELAY_S if pacing_s is None else pacing_s
        self.logger = get_logger(__name__, service="matches")

    async def resolve_match_ids(self, puuid: str, platform: str, count: Optional[int] = None) -> List[str]:
        cluster = RegionRouter.cluster_for_platform(platform)
        count = settings.MATCH_HISTORY_COUNT if count is None else max(0, min(count, 100))
        try:
            return await self.api_client.get_match_ids_by_puuid(cluster, puuid, start=0, count=count)
        except UpstreamError as exc:
            self.logger.error(f"Match id fetch failed: {exc.status}", puuid=puuid)
            return []

    async def resolve_matches(self, ids: Sequence[str], platform: str) -> List[MatchSummary]:
        cluster = RegionRouter.cluster_for_platform(platform)
        matches: List[MatchSummary] = []
        for match_id in ids:
            try:
                data = await self.api_client.get_match(cluster, match_id)
                matches.append(MatchSummary.from_api(data))
            except UpstreamError as exc:
                self.logger.error(f"Failed to fetch match {match_id}: {exc.status}")
            except Exception as exc:
                self.logger.exception(f"Malformed match {match_id}: {exc}")
            await asyncio.sleep(self.pacing_s)
        self.logger.info(f"Fetched {len(matches)}/{len(ids)} matches from {cluster}")
        return matches

    async def resolve_recent_matches(
        self, puuid: str, platform: str, count: Optional[int] = None
    ) -> List[MatchSummary]:
        ids = await self.resolve_match_ids(puuid, platform, count)
        return await self.resolve_matches(ids, platform)
