"""Riot Games API client."""
import asyncio
import logging
import time
from typing import Optional, Dict, Any, List
from urllib.parse import quote
import httpx

from config import settings as default_settings
from core.errors import UpstreamError
from .rate_limiter import EndpointRateLimiter, RateLimiter

logger = logging.getLogger(__name__)


class RiotAPIClient:
    """Asynchronous Riot API client with per-endpoint rate limiting.

    Every call either returns decoded JSON or raises ``UpstreamError``.
    429 honours ``Retry-After``; 5xx, timeouts and network errors are
    retried with exponential backoff up to ``MAX_RETRIES``. Deciding whether
    an error is fatal is left to the resolvers.
    """

    def __init__(
        self,
        api_key: str,
        *,
        settings=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key  = api_key
        self.settings = settings or default_settings
        self.session: Optional[httpx.AsyncClient] = None
        self.timeout  = self.settings.REQUEST_TIMEOUT
        self.last_status_code: Optional[int] = None
        self._transport = transport
        self._endpoint_cooldown: dict[str, float] = {}

        self.rate_limiter = EndpointRateLimiter(
            RateLimiter.riot(self.settings.RATE_LIMIT_PER_1_SEC, self.settings.RATE_LIMIT_PER_2_MIN)
        )
        self._setup_endpoint_limiters()

    def _setup_endpoint_limiters(self) -> None:
        s = self.settings
        self.rate_limiter.add_endpoint_limiter(
            "account", RateLimiter.riot(s.ACCOUNT_RATE_LIMIT_PER_1_SEC, s.ACCOUNT_RATE_LIMIT_PER_2_MIN)
        )
        self.rate_limiter.add_endpoint_limiter(
            "match", RateLimiter.riot(s.MATCH_RATE_LIMIT_PER_1_SEC, s.MATCH_RATE_LIMIT_PER_2_MIN)
        )
        self.rate_limiter.add_endpoint_limiter(
            "summoner", RateLimiter.riot(s.SUMMONER_RATE_LIMIT_PER_1_SEC, s.SUMMONER_RATE_LIMIT_PER_2_MIN)
        )
        self.rate_limiter.add_endpoint_limiter(
            "league", RateLimiter.riot(s.LEAGUE_RATE_LIMIT_PER_1_SEC, s.LEAGUE_RATE_LIMIT_PER_2_MIN)
        )

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, *_):
        await self.close()

    async def open(self) -> None:
        if self.session is None:
            self.session = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"X-Riot-Token": self.api_key},
                transport=self._transport,
            )

    async def close(self) -> None:
        if self.session:
            await self.session.aclose()
            self.session = None

    @staticmethod
    def _host(route: str) -> str:
        return f"https://{route.lower()}.api.riotgames.com"

    @staticmethod
    def _body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return {"error": response.text[:500]} if response.text else None

    async def _make_request(
        self,
        url: str,
        endpoint_type: str = "default",
        params: Optional[Dict[str, Any]] = None,
        max_retries: Optional[int] = None,
    ) -> Any:
        if self.session is None:
            await self.open()
        if max_retries is None:
            max_retries = self.settings.MAX_RETRIES
        backoff = self.settings.RETRY_BACKOFF

        last_error: Optional[UpstreamError] = None
        for attempt in range(max_retries + 1):
            # honour per-endpoint cooldown after 429
            cd = self._endpoint_cooldown.get(endpoint_type, 0.0)
            now = time.monotonic()
            if cd > now:
                await asyncio.sleep(cd - now)

            await self.rate_limiter.acquire(endpoint_type)

            try:
                response = await self.session.get(url, params=params)
            except httpx.TimeoutException:
                logger.warning(f"Timeout ({attempt + 1}/{max_retries + 1}) for {url}")
                last_error = UpstreamError(None, {"error": "timeout"}, url)
            except httpx.HTTPError as exc:
                logger.error(f"Network error: {exc}")
                last_error = UpstreamError(None, {"error": str(exc)}, url)
            else:
                self.last_status_code = response.status_code

                if response.status_code == 200:
                    return response.json()

                if response.status_code == 401 or response.status_code == 403:
                    logger.error(f"{response.status_code} from Riot, check RIOT_API_KEY")
                    raise UpstreamError(response.status_code, self._body(response), url)

                if response.status_code == 429:
                    retry_after = float(response.headers.get("Retry-After", "5"))
                    logger.warning(f"429 rate-limited, waiting {retry_after}s")
                    self._endpoint_cooldown[endpoint_type] = time.monotonic() + retry_after
                    await self.rate_limiter.reset_endpoint(endpoint_type)
                    last_error = UpstreamError(429, self._body(response), url)
                    continue

                if response.status_code >= 500:
                    last_error = UpstreamError(response.status_code, self._body(response), url)
                else:
                    # 400/404 and friends: retrying cannot help
                    raise UpstreamError(response.status_code, self._body(response), url)

            if attempt < max_retries:
                await asyncio.sleep(backoff ** attempt)

        raise last_error or UpstreamError(None, None, url)

    # ── Account API (routing cluster) ──────────────────────────────────

    async def get_account_by_riot_id(self, cluster: str, game_name: str, tag_line: str) -> Dict:
        path = f"/riot/account/v1/accounts/by-riot-id/{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        return await self._make_request(self._host(cluster) + path, "account")

    # ── Summoner API (platform host) ───────────────────────────────────

    async def get_summoner_by_puuid(self, platform: str, puuid: str) -> Dict:
        url = f"{self._host(platform)}/lol/summoner/v4/summoners/by-puuid/{puuid}"
        return await self._make_request(url, "summoner")

    # ── League API (platform host) ─────────────────────────────────────

    async def get_league_entries_by_summoner(self, platform: str, summoner_id: str) -> List[Dict]:
        url = f"{self._host(platform)}/lol/league/v4/entries/by-summoner/{summoner_id}"
        result = await self._make_request(url, "league")
        return result if isinstance(result, list) else []

    # ── Match API (routing cluster) ────────────────────────────────────

    async def get_match_ids_by_puuid(
        self,
        cluster: str,
        puuid: str,
        start: int = 0,
        count: int = 20,
    ) -> List[str]:
        url = f"{self._host(cluster)}/lol/match/v5/matches/by-puuid/{puuid}/ids"
        result = await self._make_request(url, "match", params={"start": start, "count": min(count, 100)})
        return result if isinstance(result, list) else []

    async def get_match(self, cluster: str, match_id: str) -> Dict:
        return await self._make_request(f"{self._host(cluster)}/lol/match/v5/matches/{match_id}", "match")
