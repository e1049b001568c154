"""
Crest (team badge) extraction from results and schedule pages.
"""

from typing import Iterable, Optional

from ...common.parsing import find_id_link, soup_from_html, text_of
from ...core.config import settings
from ...domain.models import TeamCrest
from .base import GotSportUrls

CREST_PATH_FRAGMENTS = ("/system/teams/logos/", "/system/organizations/logos/")
CREST_SELECTOR = ", ".join(f'img[src*="{frag}"]' for frag in CREST_PATH_FRAGMENTS)


def parse_team_crests(html: str, urls: Optional[GotSportUrls] = None) -> list[TeamCrest]:
    """Crest URL per team name; the first crest seen for a name wins.

    The team name comes from the ``team=`` link in the table cell that
    encloses the image. Images outside a cell or without such a link are
    ignored.
    """
    urls = urls or GotSportUrls(settings.base_url)
    soup = soup_from_html(html)
    by_name: dict[str, str] = {}
    for img in soup.select(CREST_SELECTOR):
        src = img.get("src")
        if not src:
            continue
        cell = img.find_parent("td")
        if cell is None:
            continue
        link, _ = find_id_link(cell, "team")
        name = text_of(link)
        if not name or name in by_name:
            continue
        by_name[name] = urls.absolute(src)
    return [TeamCrest(name=name, crest_url=url) for name, url in by_name.items()]


def merge_crest_lists(*sources: Iterable[TeamCrest]) -> list[TeamCrest]:
    """Combine crest lists; earlier sources take priority on name collisions."""
    by_name: dict[str, str] = {}
    for source in sources:
        for crest in source:
            by_name.setdefault(crest.name, crest.crest_url)
    return [TeamCrest(name=name, crest_url=url) for name, url in by_name.items()]


__all__ = ["parse_team_crests", "merge_crest_lists", "CREST_PATH_FRAGMENTS"]
