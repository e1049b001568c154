"""
GotSport group scraper: fetches pages and composes the page parsers.
"""

import asyncio
from time import perf_counter
from typing import Optional

from ...common.http import TextFetcher
from ...core.config import Settings
from ...domain.models import ClubTeam, Fixture, GroupSnapshot
from .base import BaseScraper
from .club_scraper import parse_clubs_page, parse_event_page_group_ids, parse_group_id_link
from .crest_scraper import merge_crest_lists, parse_team_crests
from .results_scraper import parse_league_name, parse_results_matrix, parse_standings
from .schedule_scraper import parse_fixtures


class GroupScraper(BaseScraper):
    """Scraper für Tabellen, Ergebnisse, Spielpläne und Kader einer GotSport-Veranstaltung"""

    def __init__(self, fetcher: Optional[TextFetcher] = None, settings: Optional[Settings] = None):
        super().__init__(fetcher, settings, name="gotsport")

    async def scrape_group_snapshot(
        self, event_id: Optional[str], group_id: str, team_id: Optional[str] = None
    ) -> GroupSnapshot:
        """Standings, matrix, league name, fixtures and crests for one group.

        The results page and the schedule page (team schedule when *team_id*
        is given, group schedule otherwise) are fetched concurrently.
        """
        event_id = self.event_id_or_default(event_id)
        t0 = perf_counter()
        pages = await asyncio.gather(
            self.fetch_page(self.urls.results_page(event_id, group_id)),
            self.fetch_page(self.urls.schedule_page(event_id, group_id, team_id)),
            return_exceptions=True,
        )
        for page in pages:
            if isinstance(page, BaseException):
                raise page
        results_html, schedule_html = pages
        snapshot = GroupSnapshot(
            standings=parse_standings(results_html, event_id, self.urls),
            results=parse_results_matrix(results_html),
            league_name=parse_league_name(results_html),
            fixtures=parse_fixtures(schedule_html),
            # results-page crests win over schedule-page crests
            crests=merge_crest_lists(
                parse_team_crests(results_html, self.urls),
                parse_team_crests(schedule_html, self.urls),
            ),
        )
        self.logger.info(
            "Scraped group %s: %d standings, %d fixtures, %d crests in %.0f ms",
            group_id,
            len(snapshot.standings),
            len(snapshot.fixtures),
            len(snapshot.crests),
            (perf_counter() - t0) * 1000,
        )
        return snapshot

    async def scrape_fixtures_only(self, event_id: Optional[str], group_id: str) -> list[Fixture]:
        """Every fixture of the group across all dates."""
        event_id = self.event_id_or_default(event_id)
        html = await self.fetch_page(self.urls.group_schedule_all_dates(event_id, group_id))
        fixtures = parse_fixtures(html)
        self.logger.info("Scraped %d fixtures for group %s", len(fixtures), group_id)
        return fixtures

    async def scrape_roster(self, event_id: Optional[str] = None, club_id: Optional[str] = None) -> list[ClubTeam]:
        event_id = self.event_id_or_default(event_id)
        club_id = club_id or self.settings.club_id
        html = await self.fetch_page(self.urls.clubs_page(event_id, club_id))
        teams = parse_clubs_page(html)
        self.logger.info("Scraped %d club teams for club %s", len(teams), club_id)
        return teams

    async def scrape_event_divisions(self, event_id: Optional[str] = None) -> dict[str, str]:
        event_id = self.event_id_or_default(event_id)
        html = await self.fetch_page(self.urls.event_page(event_id))
        return parse_event_page_group_ids(html)

    async def scrape_group_id_for_team(self, event_id: Optional[str], team_id: str) -> Optional[str]:
        event_id = self.event_id_or_default(event_id)
        html = await self.fetch_page(self.urls.team_schedule(event_id, team_id))
        return parse_group_id_link(html)
