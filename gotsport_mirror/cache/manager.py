"""
Cache Manager
Persistente Key/Value-Ablage für Gruppen-Snapshots, Kader, Team→Gruppe und Wappen

Caching is an optimisation, never a correctness dependency: every read that
fails (store error, malformed JSON, wrong shape) is a miss, and every failed
write is logged and dropped.
"""

import json
import logging
from typing import Any, Optional, Protocol

import redis.asyncio as redis

from ..core.config import Settings, settings as default_settings


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    """Dict-backed store for tests and one-shot CLI runs"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class RedisStore:
    """Redis-backed store (keys never expire)"""

    def __init__(self, url: str, client: Optional[Any] = None):
        self.url = url
        self.client = client or redis.from_url(url, decode_responses=True)

    async def get(self, key: str) -> Optional[str]:
        value = await self.client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self.client.set(key, value)

    async def close(self) -> None:
        await self.client.close()


def create_store(settings: Optional[Settings] = None) -> KeyValueStore:
    cfg = settings or default_settings
    if cfg.cache_backend == "redis":
        return RedisStore(cfg.redis_url)
    return InMemoryStore()


class CacheManager:
    """JSON-Lese/Schreibzugriff mit Schlüssel-Präfix über einem KeyValueStore"""

    GROUP_PREFIX = "group_"
    CLUB_TEAMS_KEY = "club_teams"
    TEAM_GROUP_PREFIX = "team_group_"
    CRESTS_KEY = "crests"

    def __init__(self, store: Optional[KeyValueStore] = None, prefix: Optional[str] = None):
        self.store = store if store is not None else InMemoryStore()
        self.prefix = default_settings.cache_key_prefix if prefix is None else prefix
        self.logger = logging.getLogger(__name__)

    def group_key(self, group_id: str) -> str:
        return f"{self.prefix}{self.GROUP_PREFIX}{group_id}"

    def club_teams_key(self) -> str:
        return f"{self.prefix}{self.CLUB_TEAMS_KEY}"

    def team_group_key(self, team_id: str) -> str:
        return f"{self.prefix}{self.TEAM_GROUP_PREFIX}{team_id}"

    def crests_key(self) -> str:
        return f"{self.prefix}{self.CRESTS_KEY}"

    async def read_json(self, key: str) -> Any:
        """Decoded JSON stored under *key*, or ``None`` on miss or failure."""
        value, _ = await self.read_json_checked(key)
        return value

    async def read_json_checked(self, key: str) -> tuple[Any, bool]:
        """Like ``read_json`` but also reports whether the store was reachable.

        The flag is False only when the backend raised; a missing or malformed
        entry is a successful read of nothing.
        """
        try:
            raw = await self.store.get(key)
        except Exception as e:  # noqa: BLE001 - any backend failure is a miss
            self.logger.warning("Cache read failed for %s: %s", key, e)
            return None, False
        if not raw:
            return None, True
        try:
            return json.loads(raw), True
        except (TypeError, ValueError):
            self.logger.warning("Discarding malformed cache entry %s", key)
            return None, True

    async def write_json(self, key: str, value: Any) -> bool:
        """Store *value* as JSON; returns False when the write was dropped."""
        try:
            payload = json.dumps(value, ensure_ascii=False)
            await self.store.set(key, payload)
            return True
        except Exception as e:  # noqa: BLE001 - best-effort write
            self.logger.warning("Cache write failed for %s: %s", key, e)
            return False

    async def close(self) -> None:
        close = getattr(self.store, "close", None)
        if close is not None:
            await close()
