"""Use case for the full player overview - identity, rank, recent matches."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from application.services.identity_resolver import IdentityResolver
from application.services.match_history_resolver import MatchHistoryResolver
from application.services.rank_resolver import RankResolver
from application.services.rank_scraper import RankScraper
from application.services.region_router import RegionRouter
from config import settings
from core.logging import context, get_logger
from domain.entities import AccountIdentity, MatchSummary, PlayerStats, RankEntry, SummonerProfile
from domain.enums import QueueType


@dataclass
class PlayerOverview:
    platform: str
    account: AccountIdentity
    summoner: SummonerProfile
    ranks: List[RankEntry] = field(default_factory=list)
    matches: List[MatchSummary] = field(default_factory=list)
    stats: Optional[PlayerStats] = None

    @property
    def solo_rank(self) -> Optional[RankEntry]:
        return next((r for r in self.ranks if r.queue_type == QueueType.RANKED_SOLO_5x5.value), None)

    def to_dict(self) -> dict:
        puuid = self.account.puuid
        rows = [m.for_player(puuid) for m in self.matches]
        return {
            'platform': self.platform,
            'account': self.account.to_dict(),
            'summoner': self.summoner.to_dict(),
            'ranks': [r.to_dict() for r in self.ranks],
            'matches': [r for r in rows if r is not None],
            'stats': self.stats.to_dict() if self.stats else None,
        }


class ResolvePlayerUseCase:
    """
    Rank-answer chain for one Riot ID.

    Account → Summoner → League entries → (conditional) profile-page scrape
    ─────────────────────────────────────────────────────────────────
    The scrape runs only when league-v4 returned no solo-queue entry and the
    summoner level is above RANK_SCRAPE_MIN_LEVEL. A low-level account with
    no entries is simply unranked.

    Identity failures propagate (UpstreamError); everything after identity
    degrades to empty values.
    ─────────────────────────────────────────────────────────────────
    """

    def __init__(
        self,
        identity: IdentityResolver,
        ranks: RankResolver,
        rank_scraper: Optional[RankScraper],
        matches: MatchHistoryResolver,
    ):
        self.identity     = identity
        self.ranks        = ranks
        self.rank_scraper = rank_scraper
        self.matches      = matches
        self.logger       = get_logger(__name__, service="player")

    async def execute(
        self,
        game_name: str,
        tag_line: str,
        platform: Optional[str] = None,
        match_count: Optional[int] = None,
    ) -> PlayerOverview:
        platform = (platform or RegionRouter.platform_for_tag(tag_line)).lower()

        with context(player=f"{game_name}#{tag_line}", platform=platform):
            account = await self.identity.resolve_account(game_name, tag_line)
            summoner = await self.identity.resolve_summoner(account.puuid, platform)

            ranks = await self.ranks.resolve_ranks(summoner.summoner_id or "", platform)
            overview = PlayerOverview(platform=platform, account=account, summoner=summoner, ranks=ranks)

            if overview.solo_rank is None and self._should_scrape(summoner):
                await self._scrape_rank(overview)

            overview.matches = await self.matches.resolve_recent_matches(account.puuid, platform, match_count)
            overview.stats = PlayerStats.from_matches(overview.matches, account.puuid)

            solo = overview.solo_rank
            self.logger.success(
                f"Resolved {account.riot_id}: "
                f"{f'{solo.tier} {solo.division}' if solo else 'unranked'}, "
                f"{len(overview.matches)} matches"
            )
            return overview

    def _should_scrape(self, summoner: SummonerProfile) -> bool:
        return self.rank_scraper is not None and (summoner.level or 0) > settings.RANK_SCRAPE_MIN_LEVEL

    async def _scrape_rank(self, overview: PlayerOverview) -> None:
        account = overview.account
        self.logger.info(f"No solo entry from league-v4 at level {overview.summoner.level}, scraping profile")
        scraped = await self.rank_scraper.scrape(overview.platform, account.game_name, account.tag_line)
        if not scraped:
            return
        overview.ranks = scraped + [r for r in overview.ranks if r.queue_type != scraped[0].queue_type]
        level = scraped[0].scraped_level
        if level and level > 0:
            overview.summoner.level = level
