"""Icon filename → canonical rune/item id."""
from __future__ import annotations

import asyncio
import re
from typing import Any, Dict, Iterable, List, Optional

import httpx

from core.logging import get_logger
from infrastructure.api import DDragonClient

# Stat shards are not in runesReforged.json.
STAT_SHARD_IDS = {
    "StatModsHealthScalingIcon": 5001,
    "StatModsArmorIcon": 5002,
    "StatModsMagicResIcon": 5003,
    "StatModsAttackSpeedIcon": 5005,
    "StatModsCDRScalingIcon": 5007,
    "StatModsAdaptiveForceIcon": 5008,
    "StatModsMovementSpeedIcon": 5010,
    "StatModsHealthPlusIcon": 5011,
    "StatModsTenacityIcon": 5013,
}
SHARD_EXTENSIONS = (".png", ".webp")

# Smallest id accepted from a bare numeric filename.
MIN_NUMERIC_ID = 1000

_LEADING_NUMBER = re.compile(r"^(\d+)")


def icon_filename(value: str) -> str:
    """Terminal path segment without query string: ``a/b/Electrocute.png?x`` → ``Electrocute.png``."""
    clean = (value or "").split("?", 1)[0].split("#", 1)[0].strip()
    return clean.rsplit("/", 1)[-1]


class IconIdNormalizer:
    """
    Process-wide lookup of scraped icon filenames.

    Built once from the Data Dragon rune catalogue plus the stat-shard table
    and read-only afterwards, so concurrent requests read it without
    locking. ``load`` is idempotent; only ``invalidate`` makes the next
    ``load`` fetch again.
    """

    def __init__(self, ddragon: DDragonClient):
        self.ddragon = ddragon
        self._map: Dict[str, int] = {}
        self._loaded = False
        self._lock = asyncio.Lock()
        self.logger = get_logger(__name__, service="icons")

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._map)

    @staticmethod
    def build_map(rune_trees: Iterable[Dict[str, Any]]) -> Dict[str, int]:
        """Filename → id for every rune in the catalogue; malformed entries are skipped."""
        mapping: Dict[str, int] = {}
        for tree in rune_trees or []:
            if not isinstance(tree, dict):
                continue
            for slot in tree.get("slots") or []:
                if not isinstance(slot, dict):
                    continue
                for rune in slot.get("runes") or []:
                    if not isinstance(rune, dict):
                        continue
                    name = icon_filename(str(rune.get("icon") or ""))
                    try:
                        rune_id = int(rune["id"])
                    except (KeyError, TypeError, ValueError):
                        continue
                    if name:
                        mapping[name] = rune_id
        for stem, shard_id in STAT_SHARD_IDS.items():
            for ext in SHARD_EXTENSIONS:
                mapping[f"{stem}{ext}"] = shard_id
        return mapping

    async def load(self) -> None:
        if self._loaded:
            return
        async with self._lock:
            if self._loaded:
                return
            try:
                self._map = self.build_map(await self.ddragon.get_runes_reforged())
            except httpx.HTTPError as exc:
                self.logger.error(f"Failed to load rune catalogue: {exc}")
                self._map = self.build_map([])
            except Exception as exc:
                self.logger.exception(f"Rune catalogue unreadable, keeping stat shards only: {exc}")
                self._map = self.build_map([])
            self._loaded = True
            self.logger.info(f"Loaded {len(self._map)} rune mappings")

    def invalidate(self) -> None:
        self._map = {}
        self._loaded = False

    def resolve(self, value: Any) -> Optional[int]:
        """Exact filename match, then a leading numeric token above ``MIN_NUMERIC_ID``."""
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value if value > MIN_NUMERIC_ID else None
        name = icon_filename(str(value))
        if not name:
            return None
        hit = self._map.get(name)
        if hit is not None:
            return hit
        m = _LEADING_NUMBER.match(name)
        if m:
            number = int(m.group(1))
            if number > MIN_NUMERIC_ID:
                return number
        return None

    def resolve_many(self, values: Iterable[Any], *, unique: bool = False) -> List[int]:
        """Resolved ids in input order with misses dropped.

        Stat shards may legitimately repeat (two adaptive-force picks), so
        de-duplication is opt-in.
        """
        out: List[int] = []
        for value in values:
            resolved = self.resolve(value)
            if resolved is None:
                self.logger.debug(f"Unresolved icon {value!r}")
                continue
            if unique and resolved in out:
                continue
            out.append(resolved)
        return out
