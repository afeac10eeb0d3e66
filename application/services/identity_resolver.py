"""Account and summoner resolution, with field recovery from match data."""
from __future__ import annotations

from core.errors import UpstreamError
from core.logging import get_logger
from domain.entities import AccountIdentity, MatchSummary, SummonerProfile
from infrastructure.api import RiotAPIClient
from .region_router import RegionRouter


class IdentityResolver:
    """
    Resolves who a player is.

    Identity is the one lookup whose failure callers must see: nothing
    downstream means anything without a PUUID, so ``UpstreamError`` from the
    account and summoner calls propagates. Only the recovery step is
    best-effort.
    """

    def __init__(self, api_client: RiotAPIClient):
        self.api_client = api_client
        self.logger = get_logger(__name__, service="identity")

    async def resolve_account(self, game_name: str, tag_line: str) -> AccountIdentity:
        cluster = RegionRouter.cluster_for_tag(tag_line)
        self.logger.info(lambda: f"Fetching account {game_name}#{tag_line} from {cluster}")
        data = await self.api_client.get_account_by_riot_id(cluster, game_name, tag_line)
        return AccountIdentity.from_api(data)

    async def resolve_summoner(self, puuid: str, platform: str) -> SummonerProfile:
        data = await self.api_client.get_summoner_by_puuid(platform, puuid)
        profile = SummonerProfile.from_api(data)
        if not profile.puuid:
            profile.puuid = puuid

        if not profile.is_complete:
            self.logger.info("Summoner id missing from summoner-v4, recovering from match-v5", puuid=puuid)
            await self._recover_fields(profile, platform)
        return profile

    async def _recover_fields(self, profile: SummonerProfile, platform: str) -> None:
        """Fill missing fields from the player's latest match. Never raises."""
        cluster = RegionRouter.cluster_for_platform(platform)
        try:
            ids = await self.api_client.get_match_ids_by_puuid(cluster, profile.puuid, start=0, count=1)
            if not ids:
                self.logger.warning("No matches to recover summoner fields from", puuid=profile.puuid)
                return
            match = MatchSummary.from_api(await self.api_client.get_match(cluster, ids[0]))
            participant = match.participant(profile.puuid)
            if participant is None:
                self.logger.warning(f"Player not found in match {ids[0]}", puuid=profile.puuid)
                return
            filled = profile.recover_from_participant(participant)
            if filled:
                self.logger.success(f"Recovered {', '.join(filled)} from {ids[0]}", puuid=profile.puuid)
        except UpstreamError as exc:
            self.logger.error(f"Field recovery failed: {exc}", puuid=profile.puuid)
        except Exception as exc:
            self.logger.exception(f"Field recovery got a malformed match: {exc}", puuid=profile.puuid)
