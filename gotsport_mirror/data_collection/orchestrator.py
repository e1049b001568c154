"""
Orchestrator für den GotSport Mirror

Verbindet Scraper, Identitätsauflösung und Cache zu den Operationen, die die
App-Oberfläche aufruft. Transport errors propagate to the caller; parsing
never raises and cache failures are swallowed in the cache layer.
"""

from dataclasses import dataclass
from typing import Optional

from ..cache.manager import CacheManager
from ..cache.services.crests import get_cached_crests, merge_crests_into_cache
from ..cache.services.groups import get_cached_group_data, set_cached_group_data, update_cached_fixtures
from ..cache.services.roster import get_cached_club_teams, set_cached_club_teams
from ..common.logging_utils import get_logger
from ..common.scraper_utils import HomeSummary, build_home_summary
from ..core.config import Settings, settings as default_settings
from ..domain.models import ClubTeam, Fixture, GroupSnapshot, TeamCrest
from .identity import TeamGroupResolver
from .scrapers.group_scraper import GroupScraper


@dataclass
class SnapshotResult:
    snapshot: GroupSnapshot
    updated_at: Optional[float] = None
    from_cache: bool = False


class GotSportOrchestrator:
    """Orchestriert Scraping und Caching für eine Veranstaltung"""

    def __init__(
        self,
        scraper: Optional[GroupScraper] = None,
        cache: Optional[CacheManager] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.scraper = scraper or GroupScraper(settings=self.settings)
        self.cache = cache or CacheManager(prefix=self.settings.cache_key_prefix)
        self.resolver = TeamGroupResolver(self.scraper, self.cache)
        self.logger = get_logger("gotsport.orchestrator")

    @property
    def event_id(self) -> str:
        return self.settings.event_id

    async def cleanup(self) -> None:
        await self.scraper.cleanup()
        await self.cache.close()

    # ------------------------------------------------------------------
    # Scrape operations
    # ------------------------------------------------------------------

    async def scrape_group_snapshot(self, group_id: str, team_id: Optional[str] = None) -> GroupSnapshot:
        return await self.scraper.scrape_group_snapshot(self.event_id, group_id, team_id)

    async def scrape_fixtures_only(self, group_id: str) -> list[Fixture]:
        return await self.scraper.scrape_fixtures_only(self.event_id, group_id)

    async def resolve_group_id_for_team(self, team_id: str) -> Optional[str]:
        return await self.resolver.resolve_group_id_for_team(team_id, self.event_id)

    async def divisions(self) -> dict[str, str]:
        return await self.scraper.scrape_event_divisions(self.event_id)

    # ------------------------------------------------------------------
    # Cached operations
    # ------------------------------------------------------------------

    async def load_group_snapshot(
        self, group_id: str, team_id: Optional[str] = None, *, refresh: bool = False
    ) -> SnapshotResult:
        """Cached snapshot unless *refresh*; otherwise scrape, cache and merge crests."""
        if not refresh:
            cached = await get_cached_group_data(self.cache, group_id)
            if cached is not None:
                crests = await get_cached_crests(self.cache)
                snapshot = GroupSnapshot(
                    standings=cached.standings,
                    results=cached.results,
                    fixtures=cached.fixtures,
                    league_name=cached.league_name or "",
                    crests=[TeamCrest(name=k, crest_url=v) for k, v in crests.items()],
                )
                return SnapshotResult(snapshot=snapshot, updated_at=cached.updated_at, from_cache=True)

        snapshot = await self.scrape_group_snapshot(group_id, team_id)
        await set_cached_group_data(
            self.cache, group_id, snapshot.standings, snapshot.results, snapshot.fixtures, snapshot.league_name
        )
        await merge_crests_into_cache(self.cache, snapshot.crests)
        cached = await get_cached_group_data(self.cache, group_id)
        return SnapshotResult(snapshot=snapshot, updated_at=cached.updated_at if cached else None)

    async def load_team_snapshot(self, team_id: str, *, refresh: bool = False) -> SnapshotResult:
        """Snapshot for the group a team plays in; raises IdentityUnresolved."""
        group_id = await self.resolver.require_group_id_for_team(team_id, self.event_id)
        return await self.load_group_snapshot(group_id, team_id, refresh=refresh)

    async def refresh_group_fixtures(self, group_id: str) -> list[Fixture]:
        """Scrape the all-dates schedule and fold it into the cached snapshot.

        An empty scrape leaves the cache untouched; so does a group with no
        cached snapshot yet.
        """
        fixtures = await self.scrape_fixtures_only(group_id)
        if fixtures:
            merged = await update_cached_fixtures(self.cache, group_id, fixtures)
            if not merged:
                self.logger.debug("No cached snapshot for group %s; fixtures not stored", group_id)
        return fixtures

    async def get_roster(self, *, refresh: bool = False) -> list[ClubTeam]:
        """Club teams from cache, scraping the clubs page on a miss or *refresh*."""
        if not refresh:
            cached = await get_cached_club_teams(self.cache)
            if cached:
                return cached
        teams = await self.scraper.scrape_roster(self.event_id, self.settings.club_id)
        if teams:
            await set_cached_club_teams(self.cache, teams)
        return teams

    async def home_summary(self, group_id: str, division: str, *, refresh: bool = False) -> HomeSummary:
        """Home screen data: the group snapshot plus the all-dates fixture list."""
        result = await self.load_group_snapshot(group_id, refresh=refresh)
        fixtures = result.snapshot.fixtures
        if refresh or not result.from_cache:
            all_dates = await self.refresh_group_fixtures(group_id)
            fixtures = all_dates or fixtures
        return build_home_summary(
            result.snapshot.standings, fixtures, division, club=self.settings.club_name
        )


__all__ = ["GotSportOrchestrator", "SnapshotResult"]
