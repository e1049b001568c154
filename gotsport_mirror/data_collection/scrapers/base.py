"""
Base classes and URL builders for GotSport scraping.
"""

from typing import Optional

from ...common.http import PageFetcher, TextFetcher
from ...common.logging_utils import get_logger
from ...core.config import Settings, settings as default_settings

# =============================================================================
# 1. URL BUILDERS
# =============================================================================


class GotSportUrls:
    """Builds page URLs for one GotSport host"""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def event_page(self, event_id: str) -> str:
        return f"{self.base_url}/org_event/events/{event_id}"

    def clubs_page(self, event_id: str, club_id: str) -> str:
        return f"{self.event_page(event_id)}/clubs/{club_id}"

    def results_page(self, event_id: str, group_id: str) -> str:
        return f"{self.event_page(event_id)}/results?group={group_id}"

    def team_schedule(self, event_id: str, team_id: str) -> str:
        return f"{self.event_page(event_id)}/schedules?team={team_id}"

    def schedule_page(self, event_id: str, group_id: str, team_id: Optional[str] = None) -> str:
        if team_id:
            return self.team_schedule(event_id, team_id)
        return f"{self.event_page(event_id)}/schedules?group={group_id}"

    def group_schedule_all_dates(self, event_id: str, group_id: str) -> str:
        return f"{self.event_page(event_id)}/schedules?date=All&group={group_id}"

    def absolute(self, src: str) -> str:
        """Absolute URL for a page-relative asset path, query string dropped."""
        path = src.split("?")[0]
        if path.startswith("http"):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"


# =============================================================================
# 2. BASE SCRAPER
# =============================================================================


class BaseScraper:
    """Basisklasse: hält Settings, URL-Builder und den Page Fetcher"""

    def __init__(self, fetcher: Optional[TextFetcher] = None, settings: Optional[Settings] = None, name: str = "base"):
        self.settings = settings or default_settings
        self.fetcher = fetcher or PageFetcher(self.settings)
        self.urls = GotSportUrls(self.settings.base_url)
        self.name = name
        self.logger = get_logger(f"scraper.{name}")

    def event_id_or_default(self, event_id: Optional[str]) -> str:
        return event_id or self.settings.event_id

    async def fetch_page(self, url: str) -> str:
        return await self.fetcher.fetch_text(url)

    async def cleanup(self) -> None:
        cleanup = getattr(self.fetcher, "cleanup", None)
        if cleanup is not None:
            await cleanup()
