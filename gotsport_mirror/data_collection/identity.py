"""
Team → group id resolution.

A team's schedule page links to its group's results page; the first
``group=<digits>`` link is taken as the team's group and cached for the
season. There is deliberately no default group: falling back to one showed
teams the wrong division's table.
"""

from typing import Optional

from ..cache.manager import CacheManager
from ..cache.services.team_groups import get_cached_group_id_for_team, set_cached_group_id_for_team
from ..common.errors import IdentityUnresolved
from ..common.logging_utils import get_logger
from .scrapers.group_scraper import GroupScraper


class TeamGroupResolver:
    def __init__(self, scraper: GroupScraper, cache: CacheManager):
        self.scraper = scraper
        self.cache = cache
        self.logger = get_logger("gotsport.identity")

    async def resolve_group_id_for_team(self, team_id: str, event_id: Optional[str] = None) -> Optional[str]:
        """Group id for *team_id*, or ``None`` when the schedule page has no group link."""
        cached = await get_cached_group_id_for_team(self.cache, team_id)
        if cached:
            return cached
        group_id = await self.scraper.scrape_group_id_for_team(event_id, team_id)
        if group_id is None:
            self.logger.warning("No group link found for team %s", team_id)
            return None
        await set_cached_group_id_for_team(self.cache, team_id, group_id)
        self.logger.info("Resolved team %s to group %s", team_id, group_id)
        return group_id

    async def require_group_id_for_team(self, team_id: str, event_id: Optional[str] = None) -> str:
        group_id = await self.resolve_group_id_for_team(team_id, event_id)
        if group_id is None:
            raise IdentityUnresolved(team_id)
        return group_id


__all__ = ["TeamGroupResolver"]
