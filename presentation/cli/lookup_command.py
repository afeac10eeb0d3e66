from __future__ import annotations

import argparse
import json
from typing import Iterable, List, Optional

from application.services import (
    BuildScraper,
    IconIdNormalizer,
    IdentityResolver,
    MatchHistoryResolver,
    RankResolver,
    RankScraper,
)
from application.use_cases import PlayerOverview, ResolvePlayerUseCase
from config import settings
from core.errors import UpstreamError
from core.logging.logger import StructuredLogger, get_logger
from domain.entities import BuildRecommendation
from infrastructure.api import DDragonClient, RiotAPIClient
from infrastructure.scraping import PlaywrightLauncher, ScrapeTimeouts


def _split_riot_id(value: str) -> List[str]:
    if "#" not in value:
        raise argparse.ArgumentTypeError("expected a Riot ID like Name#TAG")
    name, tag = value.rsplit("#", 1)
    if not name or not tag:
        raise argparse.ArgumentTypeError("expected a Riot ID like Name#TAG")
    return [name, tag]


class LookupCommand:
    """One-shot player lookup from the terminal."""

    def __init__(self) -> None:
        self.logger: StructuredLogger = get_logger(__name__, service="cli")
        self.timeouts = ScrapeTimeouts.from_env()

    async def execute(
        self, name: str, tag: str, region: Optional[str], count: Optional[int], as_json: bool
    ) -> int:
        settings.validate()
        launcher = PlaywrightLauncher(self.timeouts.executable_path)

        async with RiotAPIClient(settings.RIOT_API_KEY) as client:
            ranks = RankResolver(client)
            use_case = ResolvePlayerUseCase(
                IdentityResolver(client),
                ranks,
                RankScraper(launcher, self.timeouts),
                MatchHistoryResolver(client),
            )
            try:
                overview = await use_case.execute(name, tag, region, count)
            except UpstreamError as exc:
                self.logger.error(f"Lookup failed: {exc}")
                print(json.dumps(exc.to_payload(), ensure_ascii=False))
                return 1

        if as_json:
            print(json.dumps(overview.to_dict(), ensure_ascii=False, indent=2))
        else:
            self._print_overview(overview)
        return 0

    @staticmethod
    def _print_overview(overview: PlayerOverview) -> None:
        s = overview.summoner
        print(f"{overview.account.riot_id}  [{overview.platform}]  level {s.level or '?'}")
        if not overview.ranks:
            print("  Unranked")
        for r in overview.ranks:
            print(f"  {r.queue_type:<16} {r.tier} {r.division}  {r.league_points} LP  {r.wins}W {r.losses}L ({r.source})")
        if overview.stats:
            st = overview.stats
            print(f"  Last {st.games}: {st.winrate}% WR  KDA {st.kda_ratio}  {st.cs_per_min} CS/min")
        for row in (m.for_player(overview.account.puuid) for m in overview.matches):
            if row is None:
                continue
            k = row["kda"]
            result = "W" if row["win"] else "L"
            print(f"  {result} {row['championName']:<14} {row['role']:<8} {k['k']}/{k['d']}/{k['a']}  {row['cs']} CS")


class BuildCommand:
    """Scrape one champion build and print it."""

    def __init__(self) -> None:
        self.logger: StructuredLogger = get_logger(__name__, service="cli")
        self.timeouts = ScrapeTimeouts.from_env()

    async def execute(self, champion: str, role: Optional[str], as_json: bool) -> int:
        normalizer = IconIdNormalizer(DDragonClient())
        scraper = BuildScraper(PlaywrightLauncher(self.timeouts.executable_path), normalizer, self.timeouts)
        build = await scraper.scrape(champion, role)

        if as_json:
            print(json.dumps(build.to_dict(), ensure_ascii=False, indent=2))
        else:
            self._print_build(champion, build)
        return 0 if not build.is_empty else 2

    @staticmethod
    def _print_build(champion: str, build: BuildRecommendation) -> None:
        if build.is_empty:
            print(f"No build found for {champion}")
            return
        wr = f"  {build.winrate}% WR" if build.winrate is not None else ""
        print(f"{champion} {build.role or ''}{wr}  (via {build.source})")
        print(f"  Core:        {build.items.core}")
        print(f"  Boots:       {build.items.boots}")
        print(f"  Situational: {build.items.situational}")
        print(f"  Runes:       {build.rune_ids}")


async def run_lookup(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="lookup")
    parser.add_argument("riot_id", type=_split_riot_id, help="Name#TAG")
    parser.add_argument("--region", default=None, help="platform code, e.g. la1 (guessed from the tag otherwise)")
    parser.add_argument("--count", type=int, default=None)
    parser.add_argument("--json", action="store_true")
    args = parser.parse_args(list(argv or []))
    name, tag = args.riot_id
    return await LookupCommand().execute(name, tag, args.region, args.count, args.json)


async def run_build(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="build")
    parser.add_argument("champion")
    parser.add_argument("role", nargs="?", default=None)
    parser.add_argument("--json", action="store_true")
    args = parser.parse_args(list(argv or []))
    return await BuildCommand().execute(args.champion, args.role, args.json)
