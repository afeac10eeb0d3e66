"""Ranked standing scraped from the third-party profile page.

Used only when league-v4 has no solo-queue entry for a player whose level
says they should have one (restricted keys hide many apex players).

Launch → Navigate → WaitForDOM → Evaluate (≤ N attempts) → Close
"""
from __future__ import annotations

import asyncio
import re
from typing import Any, List, Optional
from urllib.parse import quote

from config import settings
from core.errors import ScrapeExtractionError, ScrapeNavigationError
from core.logging import get_logger
from domain.entities import RankEntry
from domain.enums import APEX_TIERS, QueueType, Tier
from domain.interfaces import IBrowserLauncher
from infrastructure.scraping import ScrapeTimeouts, close_browser
from infrastructure.scraping.page_scripts import RANK_PROFILE_SCRIPT
from .region_router import RegionRouter
from .retry_policy import RetryPolicy

_LP = re.compile(r"(\d+)\s*LP", re.IGNORECASE)
_WIN_LOSS = re.compile(r"(\d+)W\s+(\d+)L")
_ROMAN = {"1": "I", "2": "II", "3": "III", "4": "IV"}


def parse_rank_payload(payload: Optional[dict[str, Any]]) -> Optional[RankEntry]:
    """Turn the page script's raw texts into a solo-queue entry.

    ``"Gold 2"`` → GOLD / II, ``"Master"`` → MASTER / I. Returns None when
    the tier label is not a tier (e.g. "Unranked").
    """
    if not payload:
        return None
    parts = (payload.get("tierText") or "").upper().split()
    if not parts or Tier.from_string(parts[0]) is None:
        return None

    tier = parts[0]
    division = parts[1] if len(parts) > 1 else "I"
    if tier in APEX_TIERS:
        division = "I"
    division = _ROMAN.get(division, division)

    lp = 0
    m = _LP.search(payload.get("lpText") or "")
    if m:
        lp = int(m.group(1))

    wins = losses = 0
    m = _WIN_LOSS.search(payload.get("winLossText") or "")
    if m:
        wins, losses = int(m.group(1)), int(m.group(2))

    level = payload.get("scrapedLevel")
    return RankEntry(
        queue_type=QueueType.RANKED_SOLO_5x5.value,
        tier=tier,
        division=division,
        league_points=lp,
        wins=wins,
        losses=losses,
        scraped_level=int(level) if isinstance(level, (int, float)) else None,
        source="scrape",
    )


class RankScraper:
    """Fallback rank source. Any failure is an empty answer ("unranked")."""

    def __init__(
        self,
        launcher: IBrowserLauncher,
        timeouts: Optional[ScrapeTimeouts] = None,
        *,
        site_url: Optional[str] = None,
    ):
        self.launcher = launcher
        self.timeouts = timeouts or ScrapeTimeouts.from_env()
        self.site_url = (site_url or settings.PROFILE_SITE_URL).rstrip("/")
        # Retries absorb hydration races only; a missing section after the
        # last attempt is treated as markup drift or genuinely no data.
        self.retry = RetryPolicy.fixed(self.timeouts.eval_attempts, self.timeouts.eval_backoff_ms)
        self.logger = get_logger(__name__, service="rank-scrape")

    def profile_url(self, platform: str, game_name: str, tag_line: str) -> str:
        slug = RegionRouter.scrape_slug_for_platform(platform)
        # hl=en_US keeps the "Ranked Solo/Duo" label searchable
        return f"{self.site_url}/summoners/{slug}/{quote(game_name)}-{quote(tag_line)}?hl=en_US"

    async def scrape(self, platform: str, game_name: str, tag_line: str) -> List[RankEntry]:
        url = self.profile_url(platform, game_name, tag_line)
        self.logger.info(f"Scraping rank for {game_name}#{tag_line} at {url}")

        try:
            browser = await self.launcher.launch(block_assets=True)
        except Exception as exc:
            self.logger.error(f"Browser launch failed: {exc}")
            return []

        try:
            page = await browser.new_page()
            await self._navigate(page, url)
            payload = await self._evaluate(page)
            entry = parse_rank_payload(payload)
            if entry is None:
                self.logger.info(f"No ranked tier on page ({payload.get('tierText')!r})")
                return []
            self.logger.success(
                f"Scraped {entry.tier} {entry.division} {entry.league_points}LP level={entry.scraped_level}"
            )
            return [entry]
        except ScrapeNavigationError as exc:
            self.logger.error(f"Navigation failed: {exc}")
            return []
        except ScrapeExtractionError as exc:
            self.logger.warning(f"No rank data found: {exc}")
            return []
        except Exception as exc:
            self.logger.exception(f"Rank scrape error: {exc}")
            return []
        finally:
            await close_browser(browser)

    async def _navigate(self, page: Any, url: str) -> None:
        t = self.timeouts
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=t.navigation_ms)
            await page.wait_for_selector("body", timeout=t.body_wait_ms)
        except Exception as exc:
            raise ScrapeNavigationError(str(exc)) from exc
        # client-side hydration
        await asyncio.sleep(t.settle_ms / 1000.0)

    async def _evaluate(self, page: Any) -> dict[str, Any]:
        async def attempt() -> dict[str, Any]:
            data = await page.evaluate(RANK_PROFILE_SCRIPT)
            if not data:
                raise ScrapeExtractionError("ranked section not found")
            return data

        try:
            return await self.retry.run(attempt, logger=self.logger, label="rank evaluate")
        except ScrapeExtractionError:
            raise
        except Exception as exc:
            raise ScrapeExtractionError(f"evaluate failed: {exc}") from exc
