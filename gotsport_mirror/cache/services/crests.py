"""
Cache services for the crest map (team name → crest URL).
"""

from __future__ import annotations

from typing import Any, Iterable

from ...domain.models import TeamCrest
from ..manager import CacheManager


def _valid_entries(data: Any) -> dict[str, str]:
    if not isinstance(data, dict):
        return {}
    return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}


async def get_cached_crests(cache: CacheManager) -> dict[str, str]:
    return _valid_entries(await cache.read_json(cache.crests_key()))


async def set_cached_crests(cache: CacheManager, crests: dict[str, str]) -> None:
    await cache.write_json(cache.crests_key(), crests)


async def merge_crests_into_cache(cache: CacheManager, crests: Iterable[TeamCrest]) -> dict[str, str]:
    """Merge *crests* over the cached map and return the result.

    New entries overwrite same-name ones; entries with an empty name or URL
    are skipped. When the stored map cannot be read the write is skipped, so
    a store outage never replaces the persisted map with a partial one.
    """
    data, read_ok = await cache.read_json_checked(cache.crests_key())
    merged = _valid_entries(data)
    for crest in crests:
        if crest.name and crest.crest_url:
            merged[crest.name] = crest.crest_url
    if not read_ok:
        cache.logger.warning("Crest map unreadable; skipping merge write")
        return merged
    await set_cached_crests(cache, merged)
    return merged


__all__ = ["get_cached_crests", "set_cached_crests", "merge_crests_into_cache"]
