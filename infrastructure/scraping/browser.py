"""Playwright-backed browser instances, one per scrape call."""
import logging
from typing import Optional

from playwright.async_api import Browser, Playwright, Route, async_playwright

from domain.interfaces import IBrowser, IBrowserLauncher

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]
_BLOCKED_RESOURCES = ("image", "stylesheet", "font")


async def _block_assets(route: Route) -> None:
    if route.request.resource_type in _BLOCKED_RESOURCES:
        await route.abort()
    else:
        await route.continue_()


class PlaywrightBrowser(IBrowser):
    """Owns a Playwright driver and its Chromium process."""

    def __init__(self, playwright: Playwright, browser: Browser, *, block_assets: bool = False):
        self._playwright = playwright
        self._browser = browser
        self._block_assets = block_assets
        self._closed = False

    async def new_page(self):
        context = await self._browser.new_context(
            user_agent=USER_AGENT,
            locale="en-US",
            extra_http_headers={"Accept-Language": "en-US,en;q=0.9"},
            viewport={"width": 1920, "height": 1080},
        )
        page = await context.new_page()
        if self._block_assets:
            await page.route("**/*", _block_assets)
        return page

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()


class PlaywrightLauncher(IBrowserLauncher):
    """Launches an isolated headless Chromium per call."""

    def __init__(self, executable_path: Optional[str] = None):
        self.executable_path = executable_path

    async def launch(self, *, block_assets: bool = False) -> PlaywrightBrowser:
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(
                headless=True,
                executable_path=self.executable_path,
                args=CHROMIUM_ARGS,
            )
        except BaseException:
            await playwright.stop()
            raise
        logger.debug("Chromium launched")
        return PlaywrightBrowser(playwright, browser, block_assets=block_assets)


async def close_browser(browser: IBrowser) -> None:
    """Close on every exit path; a failing close is logged, not raised."""
    try:
        await browser.close()
    except Exception as exc:
        logger.warning(f"Browser close failed: {exc}")
