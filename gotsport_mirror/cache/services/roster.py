"""
Cache services for the club roster (single key, overwritten wholesale).
"""

from __future__ import annotations

from typing import Sequence

from pydantic import ValidationError

from ...domain.models import ClubTeam
from ..manager import CacheManager


async def get_cached_club_teams(cache: CacheManager) -> list[ClubTeam]:
    data = await cache.read_json(cache.club_teams_key())
    if not isinstance(data, list):
        return []
    try:
        return [ClubTeam.model_validate(item) for item in data]
    except ValidationError:
        cache.logger.warning("Discarding invalid roster cache")
        return []


async def set_cached_club_teams(cache: CacheManager, teams: Sequence[ClubTeam]) -> None:
    await cache.write_json(cache.club_teams_key(), [t.to_json_dict() for t in teams])


__all__ = ["get_cached_club_teams", "set_cached_club_teams"]
