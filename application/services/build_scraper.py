"""Recommended items and runes scraped from the third-party build page.

There is no official source for builds, so this page is the source of truth.
Strategies, first non-empty answer wins:

1. plain HTTP GET of the page and its embedded ``window.__SSR_DATA__`` blob
2. headless browser: navigate, wait for the build signal, scroll to trigger
   lazy content, then the SSR blob from the rendered page
3. the same browser page inspected directly (selected rune icons, item icons)

Rune results are raw tokens (ids or icon filenames) until the
IconIdNormalizer turns them into canonical ids.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional
from urllib.parse import quote

import httpx

from config import settings
from core.errors import ScrapeExtractionError, ScrapeNavigationError
from core.logging import get_logger
from domain.entities import BuildItems, BuildRecommendation
from domain.enums import Role
from domain.interfaces import IBrowserLauncher
from infrastructure.scraping import ScrapeTimeouts, close_browser, extract_assigned_object
from infrastructure.scraping.browser import USER_AGENT
from infrastructure.scraping.page_scripts import (
    BUILD_ITEMS_SCRIPT,
    BUILD_RUNES_SCRIPT,
    BUILD_SIGNAL_SCRIPT,
    SCROLL_STEP_SCRIPT,
)
from .icon_id_normalizer import IconIdNormalizer

BOOT_IDS = frozenset({1001, 3006, 3009, 3020, 3047, 3111, 3117, 3158})

# Starting items, trinkets, consumables and jungle companions.
EXCLUDED_ITEM_IDS = frozenset({
    1054, 1055, 1056, 1082, 1083,          # Doran's, Dark Seal, Cull
    1101, 1102, 1103,                      # jungle companions
    2003, 2010, 2031, 2033, 2055,          # potions, biscuit, control ward
    2138, 2139, 2140,                      # elixirs
    3340, 3363, 3364,                      # trinkets
    3865,                                  # support starter
})

# Ids at or below this are placeholders, not items.
MIN_ITEM_ID = 1000
MAX_CORE_ITEMS = 6
OPTION_BUCKETS = ("item_options_1", "item_options_2", "item_options_3", "situational_items")

HTML_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Cache-Control": "max-age=0",
}


def _unique(values: Iterable[int]) -> List[int]:
    return list(dict.fromkeys(values))


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _section(inner: dict, name: str) -> dict:
    value = inner.get(name)
    return value if isinstance(value, dict) else {}


def _listed(section: dict, name: str) -> list:
    value = section.get(name)
    return value if isinstance(value, list) else []


def _bucket_ids(inner: dict, name: str) -> List[int]:
    ids = (_as_int(v) for v in _listed(_section(inner, name), "ids"))
    return [i for i in ids if i is not None]


def _display_role(role: Optional[str]) -> Optional[str]:
    if not role:
        return None
    parsed = Role.from_string(role)
    return parsed.display_name if parsed else role


@dataclass
class ScrapedBuild:
    """A build before rune normalization."""

    role: Optional[str] = None
    core: List[int] = field(default_factory=list)
    boots: List[int] = field(default_factory=list)
    situational: List[int] = field(default_factory=list)
    item_ids: List[int] = field(default_factory=list)
    raw_runes: List[Any] = field(default_factory=list)
    winrate: Optional[float] = None
    source: Optional[str] = None
    unique_runes: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.raw_runes and not self.core and not self.boots

    def finish(self, normalizer: IconIdNormalizer) -> BuildRecommendation:
        return BuildRecommendation(
            role=self.role,
            items=BuildItems(core=list(self.core), boots=list(self.boots), situational=list(self.situational)),
            rune_ids=normalizer.resolve_many(self.raw_runes, unique=self.unique_runes),
            item_ids=list(self.item_ids),
            winrate=self.winrate,
            source=self.source,
        )


def find_build_entry(parsed: dict) -> Optional[tuple[str, dict]]:
    """The ranked-solo overview entry, skipping the AP/AD damage variants."""
    for key, value in parsed.items():
        k = key.lower()
        if "overview" not in k or "ranked_solo_5x5" not in k:
            continue
        if "ap-overview" in k or "ad-overview" in k:
            continue
        if isinstance(value, dict) and isinstance(value.get("data"), dict) and value["data"]:
            return key, value["data"]
    return None


def select_variant(data: dict, role: Optional[str]) -> Optional[dict]:
    """Prefer a variant naming the role, then a ``world_*`` one, then the first."""
    keys = list(data)
    if not keys:
        return None
    chosen = None
    if role:
        chosen = next((k for k in keys if role.lower() in k.lower()), None)
    if chosen is None:
        chosen = next((k for k in keys if k.lower().startswith("world")), keys[0])
    inner = data[chosen]
    return inner if isinstance(inner, dict) else None


def _winrate(inner: dict) -> Optional[float]:
    for raw in (inner.get("win_rate"), _section(inner, "rec_core_items").get("win_rate")):
        if raw is None or isinstance(raw, bool):
            continue
        try:
            return round(float(raw), 2)
        except (TypeError, ValueError):
            continue
    return None


def _role_from_key(key: str) -> Optional[str]:
    marker = "build/"
    idx = key.lower().find(marker)
    if idx == -1:
        return None
    segment = key[idx + len(marker):]
    slug = ""
    for ch in segment:
        if ch.isalpha() or ch in "_-":
            slug += ch
        else:
            break
    return slug or None


def extract_build_from_ssr(parsed: dict, role: Optional[str] = None) -> Optional[ScrapedBuild]:
    """Build from the SSR blob; None when no usable overview entry exists."""
    found = find_build_entry(parsed)
    if found is None:
        return None
    key, data = found
    inner = select_variant(data, role)
    if inner is None:
        return None

    core_bucket = _bucket_ids(inner, "rec_core_items")
    boots_bucket = _bucket_ids(inner, "rec_boots")
    option_ids = [i for name in OPTION_BUCKETS for i in _bucket_ids(inner, name)]

    core = _unique(i for i in core_bucket if i > MIN_ITEM_ID)
    boots: List[int] = []
    if boots_bucket and boots_bucket[0] not in core:
        boots = [boots_bucket[0]]
    if not boots:
        boots = [i for i in core if i in BOOT_IDS]
        core = [i for i in core if i not in BOOT_IDS]
    core = core[:MAX_CORE_ITEMS]

    situational = [
        i for i in _unique(option_ids)
        if i > MIN_ITEM_ID and i not in core and i not in boots
    ]
    item_ids = _unique(i for i in core_bucket + boots_bucket[:1] + option_ids if i > MIN_ITEM_ID)

    raw_runes: List[Any] = []
    perks = _listed(_section(inner, "rec_runes"), "active_perks")
    shards = _listed(_section(inner, "stat_shards"), "active_shards")
    for value in perks + shards:
        as_id = _as_int(value)
        if as_id is not None:
            raw_runes.append(as_id)

    return ScrapedBuild(
        role=_display_role(role) or _display_role(_role_from_key(key)),
        core=core,
        boots=boots,
        situational=situational,
        item_ids=item_ids,
        raw_runes=raw_runes,
        winrate=_winrate(inner),
    )


def build_from_dom(runes: Optional[dict], items: Optional[list], role: Optional[str]) -> ScrapedBuild:
    """Assemble the page-inspection results; ids are already de-duplicated by the scripts."""
    runes = runes if isinstance(runes, dict) else {}
    rune_names = _listed(runes, "runes") + _listed(runes, "shards")

    ids = [i for i in (_as_int(v) for v in items or []) if i is not None]
    ids = _unique(i for i in ids if i > MIN_ITEM_ID and i not in EXCLUDED_ITEM_IDS)
    boots = [i for i in ids if i in BOOT_IDS][:1]
    rest = [i for i in ids if i not in BOOT_IDS]

    return ScrapedBuild(
        role=_display_role(role),
        core=rest[:MAX_CORE_ITEMS],
        boots=boots,
        situational=rest[MAX_CORE_ITEMS:],
        item_ids=ids,
        raw_runes=rune_names,
        unique_runes=True,
    )


class BuildScraper:
    """Champion/role → BuildRecommendation; an empty recommendation on any failure."""

    def __init__(
        self,
        launcher: IBrowserLauncher,
        normalizer: IconIdNormalizer,
        timeouts: Optional[ScrapeTimeouts] = None,
        *,
        site_url: Optional[str] = None,
        http_first: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.launcher = launcher
        self.normalizer = normalizer
        self.timeouts = timeouts or ScrapeTimeouts.from_env()
        self.site_url = (site_url or settings.BUILD_SITE_URL).rstrip("/")
        self.http_first = http_first
        self._transport = transport
        self.logger = get_logger(__name__, service="build-scrape")

    def build_url(self, champion: str, role: Optional[str] = None) -> str:
        base = f"{self.site_url}/lol/champions/{quote(champion.lower())}/build"
        return f"{base}/{quote(role)}" if role else base

    async def scrape(self, champion: str, role: Optional[str] = None) -> BuildRecommendation:
        role_slug = role.lower() if role else None
        parsed_role = Role.from_string(role_slug)
        if parsed_role:
            role_slug = parsed_role.value
        url = self.build_url(champion, role_slug)
        self.logger.info(f"Scraping build {champion}/{role_slug or 'default'} at {url}")

        await self.normalizer.load()

        scraped: Optional[ScrapedBuild] = None
        if self.http_first:
            scraped = await self._from_http(url, role_slug)
        if scraped is None:
            scraped = await self._from_browser(url, role_slug)
        if scraped is None:
            self.logger.warning(f"No build found for {champion}/{role_slug or 'default'}")
            return BuildRecommendation.empty(_display_role(role_slug))

        build = scraped.finish(self.normalizer)
        self.logger.success(
            f"Build via {build.source}: core={build.items.core} boots={build.items.boots} "
            f"runes={len(build.rune_ids)}"
        )
        return build

    # ── Strategy 1: plain HTTP ─────────────────────────────────────────

    async def _from_http(self, url: str, role: Optional[str]) -> Optional[ScrapedBuild]:
        try:
            async with httpx.AsyncClient(
                headers=HTML_HEADERS,
                timeout=settings.BUILD_HTTP_TIMEOUT,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            self.logger.warning(f"HTTP fetch failed, falling back to browser: {exc}")
            return None

        parsed = extract_assigned_object(resp.text)
        if parsed is None:
            self.logger.info("No embedded build data in HTML, falling back to browser")
            return None
        try:
            scraped = extract_build_from_ssr(parsed, role)
        except Exception as exc:
            self.logger.exception(f"Embedded build data unreadable, falling back to browser: {exc}")
            return None
        if scraped is None or scraped.is_empty:
            self.logger.info("Embedded data had no build, falling back to browser")
            return None
        scraped.source = "http"
        return scraped

    # ── Strategies 2 and 3: headless browser ───────────────────────────

    async def _from_browser(self, url: str, role: Optional[str]) -> Optional[ScrapedBuild]:
        try:
            browser = await self.launcher.launch()
        except Exception as exc:
            self.logger.error(f"Browser launch failed: {exc}")
            return None

        try:
            page = await browser.new_page()
            await self._navigate(page, url)
            await self._auto_scroll(page)

            parsed = extract_assigned_object(await page.content())
            scraped = extract_build_from_ssr(parsed, role) if parsed else None
            if scraped is not None and not scraped.is_empty:
                scraped.source = "browser"
                return scraped

            self.logger.info("Embedded data missing in rendered page, inspecting DOM")
            scraped = await self._extract_from_dom(page, role)
            if scraped.is_empty:
                raise ScrapeExtractionError("no runes or items on page")
            scraped.source = "dom"
            return scraped
        except ScrapeNavigationError as exc:
            self.logger.error(f"Build page navigation failed: {exc}")
            return None
        except ScrapeExtractionError as exc:
            self.logger.warning(f"Build extraction failed: {exc}")
            return None
        except Exception as exc:
            self.logger.exception(f"Build scrape error: {exc}")
            return None
        finally:
            await close_browser(browser)

    async def _navigate(self, page: Any, url: str) -> None:
        t = self.timeouts
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=t.navigation_ms)
        except Exception as exc:
            raise ScrapeNavigationError(str(exc)) from exc
        try:
            await page.wait_for_function(BUILD_SIGNAL_SCRIPT, timeout=t.build_signal_ms)
        except Exception as exc:
            raise ScrapeNavigationError(f"build signal not seen: {exc}") from exc

    async def _auto_scroll(self, page: Any) -> None:
        t = self.timeouts
        for _ in range(t.scroll_steps):
            await page.evaluate(SCROLL_STEP_SCRIPT, t.scroll_step_px)
            await asyncio.sleep(t.scroll_delay_ms / 1000.0)
        await asyncio.sleep(t.settle_ms / 1000.0)

    async def _extract_from_dom(self, page: Any, role: Optional[str]) -> ScrapedBuild:
        runes = await page.evaluate(BUILD_RUNES_SCRIPT)
        items = await page.evaluate(BUILD_ITEMS_SCRIPT, sorted(EXCLUDED_ITEM_IDS))
        return build_from_dom(runes, items, role)
