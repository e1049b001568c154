"""
Cache services for group snapshots (standings + results + fixtures + league name).
"""

from __future__ import annotations

import time
from typing import Optional, Sequence

from pydantic import ValidationError

from ...domain.models import CachedGroupData, Fixture, ResultsData, Standing
from ..manager import CacheManager


def _now_ms() -> float:
    return time.time() * 1000


async def get_cached_group_data(cache: CacheManager, group_id: str) -> Optional[CachedGroupData]:
    """Cached snapshot for *group_id*, or ``None`` when missing or malformed.

    A snapshot is valid only when ``standings`` is a list and both
    ``results`` and ``fixtures`` are present.
    """
    data = await cache.read_json(cache.group_key(group_id))
    if not isinstance(data, dict):
        return None
    standings = data.get("standings")
    if not isinstance(standings, list) or not isinstance(data.get("results"), dict) or data.get("fixtures") is None:
        return None
    updated_at = data.get("updatedAt")
    league_name = data.get("leagueName")
    try:
        return CachedGroupData(
            standings=standings,
            results=data["results"],
            fixtures=data["fixtures"] if isinstance(data["fixtures"], list) else [],
            updated_at=updated_at if isinstance(updated_at, (int, float)) and not isinstance(updated_at, bool) else None,
            league_name=league_name if isinstance(league_name, str) else None,
        )
    except ValidationError as e:
        cache.logger.warning("Discarding invalid group cache %s: %s", group_id, e.error_count())
        return None


async def set_cached_group_data(
    cache: CacheManager,
    group_id: str,
    standings: Sequence[Standing],
    results: ResultsData,
    fixtures: Sequence[Fixture],
    league_name: Optional[str] = None,
) -> None:
    """Write the whole snapshot in one blob with a fresh ``updatedAt``."""
    await cache.write_json(
        cache.group_key(group_id),
        {
            "standings": [s.to_json_dict() for s in standings],
            "results": results.to_json_dict(),
            "fixtures": [f.to_json_dict() for f in fixtures],
            "updatedAt": _now_ms(),
            "leagueName": league_name or "",
        },
    )


async def update_cached_fixtures(cache: CacheManager, group_id: str, fixtures: Sequence[Fixture]) -> bool:
    """Replace the fixtures of an existing snapshot, keeping its other fields.

    Returns False (and writes nothing) when no valid snapshot is cached.
    """
    cached = await get_cached_group_data(cache, group_id)
    if cached is None:
        return False
    await set_cached_group_data(
        cache, group_id, cached.standings, cached.results, fixtures, cached.league_name
    )
    return True


__all__ = ["get_cached_group_data", "set_cached_group_data", "update_cached_fixtures"]
