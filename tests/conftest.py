"""Shared fakes: scripted browser pages and a mock-transport Riot client."""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from config.settings import Settings
from domain.interfaces import IBrowser, IBrowserLauncher
from infrastructure.api import RiotAPIClient
from infrastructure.scraping import ScrapeTimeouts


class FastSettings(Settings):
    RIOT_API_KEY = "test-key"
    MAX_RETRIES = 0
    RETRY_BACKOFF = 0.0
    REQUEST_TIMEOUT = 5
    ALLOWED_ORIGINS = ["http://localhost:5173"]


class FakePage:
    """Answers ``evaluate`` from a queue of results; exceptions in the queue are raised."""

    def __init__(
        self,
        *,
        evaluate_results: Optional[List[Any]] = None,
        html: str = "",
        goto_error: Optional[BaseException] = None,
        signal_error: Optional[BaseException] = None,
    ):
        self.evaluate_results = list(evaluate_results or [])
        self.html = html
        self.goto_error = goto_error
        self.signal_error = signal_error
        self.visited: List[str] = []
        self.evaluate_calls = 0

    async def goto(self, url: str, **_: Any) -> None:
        self.visited.append(url)
        if self.goto_error is not None:
            raise self.goto_error

    async def wait_for_selector(self, selector: str, **_: Any) -> None:
        return None

    async def wait_for_function(self, script: str, **_: Any) -> None:
        if self.signal_error is not None:
            raise self.signal_error

    async def evaluate(self, script: str, *args: Any) -> Any:
        self.evaluate_calls += 1
        if "scrollBy" in script:
            return None
        if not self.evaluate_results:
            return None
        result = self.evaluate_results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    async def content(self) -> str:
        return self.html


class FakeBrowser(IBrowser):
    def __init__(self, page: FakePage):
        self.page = page
        self.close_calls = 0

    async def new_page(self) -> FakePage:
        return self.page

    async def close(self) -> None:
        self.close_calls += 1


class FakeLauncher(IBrowserLauncher):
    def __init__(self, page: Optional[FakePage] = None, *, launch_error: Optional[BaseException] = None):
        self.page = page or FakePage()
        self.launch_error = launch_error
        self.browsers: List[FakeBrowser] = []

    async def launch(self, *, block_assets: bool = False) -> FakeBrowser:
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser(self.page)
        self.browsers.append(browser)
        return browser

    @property
    def total_closes(self) -> int:
        return sum(b.close_calls for b in self.browsers)


def zero_timeouts(eval_attempts: int = 3) -> ScrapeTimeouts:
    return ScrapeTimeouts(
        navigation_ms=0,
        body_wait_ms=0,
        settle_ms=0,
        eval_attempts=eval_attempts,
        eval_backoff_ms=0,
        build_signal_ms=0,
        scroll_steps=2,
        scroll_step_px=400,
        scroll_delay_ms=0,
    )


def json_response(payload: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(payload), headers={"Content-Type": "application/json"})


Handler = Callable[[httpx.Request], httpx.Response]


def make_riot_client(handler: Handler) -> RiotAPIClient:
    return RiotAPIClient("test-key", settings=FastSettings(), transport=httpx.MockTransport(handler))


def match_payload(match_id: str, participants: List[Dict[str, Any]], duration: int = 1800) -> Dict[str, Any]:
    return {
        "metadata": {"matchId": match_id},
        "info": {
            "gameDuration": duration,
            "gameEndTimestamp": 1_700_000_000_000,
            "queueId": 420,
            "participants": participants,
        },
    }


@pytest.fixture
def fast_settings() -> FastSettings:
    return FastSettings()


@pytest.fixture
def timeouts() -> ScrapeTimeouts:
    return zero_timeouts()
