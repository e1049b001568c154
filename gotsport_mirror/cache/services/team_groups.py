"""
Cache services for resolved team → group ids.

Entries are written once per team and never expire: group assignment is
stable for a season.
"""

from __future__ import annotations

from typing import Optional

from ..manager import CacheManager


async def get_cached_group_id_for_team(cache: CacheManager, team_id: str) -> Optional[str]:
    value = await cache.read_json(cache.team_group_key(team_id))
    if isinstance(value, str) and value.isdigit():
        return value
    return None


async def set_cached_group_id_for_team(cache: CacheManager, team_id: str, group_id: str) -> None:
    await cache.write_json(cache.team_group_key(team_id), group_id)


__all__ = ["get_cached_group_id_for_team", "set_cached_group_id_for_team"]
