"""
Parsers for the club roster page, the event page and team schedule links.
"""

import re
from typing import Optional

from ...common.logging_utils import get_logger
from ...common.parsing import (
    cell_at,
    extract_query_id,
    find_header_index,
    find_id_link,
    header_texts,
    iter_tables,
    row_cells,
    soup_from_html,
    table_rows,
    text_of,
)
from ...domain.models import ClubTeam

logger = get_logger(__name__)

_AGE_GROUP_RE = (
    re.compile(r"\b(U\d+)\s*Girls?\b", re.IGNORECASE),
    re.compile(r"\b(U\d+)\b", re.IGNORECASE),
)


def parse_clubs_page(html: str) -> list[ClubTeam]:
    """Parse the teams table (Name, Gender, Age, Division, Bracket) of a club page.

    Only rows whose name cell links to ``?team=<id>`` are returned; teams
    listed without a detail link are dropped.
    """
    soup = soup_from_html(html)
    teams: list[ClubTeam] = []

    for table in iter_tables(soup):
        rows = table_rows(table)
        if len(rows) < 2:
            continue
        headers = header_texts(rows[0])
        name_col = find_header_index(headers, "name")
        division_col = find_header_index(headers, "division")
        age_col = headers.index("age") if "age" in headers else -1
        if name_col == -1 or division_col == -1:
            continue

        for row in rows[1:]:
            cells = row_cells(row)
            if len(cells) <= max(name_col, division_col):
                continue
            name_cell = cells[name_col]
            link, team_id = find_id_link(name_cell, "team")
            if not team_id:
                continue
            teams.append(
                ClubTeam(
                    name=text_of(link) or text_of(name_cell),
                    team_id=team_id,
                    division=text_of(cells[division_col]),
                    age=text_of(cell_at(cells, age_col)) or None,
                )
            )
        break

    if not teams:
        logger.debug("No club teams with team links found")
    return teams


def parse_event_page_group_ids(html: str) -> dict[str, str]:
    """Map division label → group id from the ``group=`` links of an event page.

    ``"Female U14 - Orange"`` yields the division ``"Orange"``; labels without
    a ``" - "`` separator are used whole. Later links win on duplicate labels.
    """
    soup = soup_from_html(html)
    divisions: dict[str, str] = {}
    for a in soup.select('a[href*="group="]'):
        group_id = extract_query_id(a.get("href"), "group")
        label = text_of(a)
        if not group_id or not label:
            continue
        division = label.rsplit(" - ", 1)[-1].strip() if " - " in label else label
        divisions[division] = group_id
    return divisions


def parse_group_id_link(html: str) -> Optional[str]:
    """First ``group=<digits>`` id linked from a page (team schedule pages)."""
    soup = soup_from_html(html)
    for a in soup.select('a[href*="group="]'):
        group_id = extract_query_id(a.get("href"), "group")
        if group_id:
            return group_id
    return None


def get_age_group_display_name(team: ClubTeam) -> str:
    """Short picker label, e.g. ``"U14 Girls"``."""
    if team.age:
        return f"{team.age} Girls"
    for pattern in _AGE_GROUP_RE:
        m = pattern.search(team.name)
        if m:
            return f"{m.group(1)} Girls"
    return team.name


__all__ = [
    "parse_clubs_page",
    "parse_event_page_group_ids",
    "parse_group_id_link",
    "get_age_group_display_name",
]
