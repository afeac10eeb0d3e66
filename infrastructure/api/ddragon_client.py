"""Data Dragon (static data CDN) client."""
import logging
from typing import Any, Dict, List, Optional

import httpx

from config import settings as default_settings

logger = logging.getLogger(__name__)


class DDragonClient:
    """Fetches the rune catalogue. No API key; public CDN."""

    def __init__(
        self,
        *,
        settings=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.settings = settings or default_settings
        self.base_url = self.settings.DDRAGON_URL.rstrip("/")
        self.lang = self.settings.DDRAGON_LANG
        self._transport = transport
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def resolve_version(self, client: httpx.AsyncClient) -> str:
        """Configured version, else the newest one published."""
        if self.settings.DDRAGON_VERSION:
            return self.settings.DDRAGON_VERSION
        resp = await client.get(f"{self.base_url}/api/versions.json")
        resp.raise_for_status()
        versions = resp.json()
        return versions[0]

    async def get_runes_reforged(self) -> List[Dict[str, Any]]:
        async with self._client() as client:
            version = await self.resolve_version(client)
            url = f"{self.base_url}/cdn/{version}/data/{self.lang}/runesReforged.json"
            logger.info(f"Loading rune catalogue {version} ({self.lang})")
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.json()
