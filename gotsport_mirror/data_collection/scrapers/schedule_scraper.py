"""
Parser for GotSport schedule pages (team schedule, group schedule, all dates).

A schedule page may hold several fixture tables (one per match day). A table
is used when one of its rows looks like a header with home, away and either a
time or a match column; everything below that row is a fixture candidate.
"""

import re
from typing import Optional

from bs4 import Tag

from ...common.logging_utils import get_logger
from ...common.parsing import (
    cell_at,
    cell_text,
    clean_text,
    find_header_index,
    header_texts,
    iter_tables,
    row_cells,
    soup_from_html,
    table_rows,
    text_of,
)
from ...domain.models import Fixture

logger = get_logger(__name__)

DATE_RE = re.compile(r"([A-Za-z]+\s+\d{1,2},?\s*\d{4})")
TIME_RE = re.compile(
    r"(\d{1,2}:\d{2}(?:\s*[AaPp][Mm])?(?:\s+(?:GMT|BST|UTC|CEST|CET|[ECMP][SD]T))?)"
)
SCORE_RE = re.compile(r"(\d+)\s*[-–—]\s*(\d+)")

# Tested in order, first match wins
STATUS_VOCABULARY: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"rained\s*out"), "Rained out"),
    (re.compile(r"discipline"), "Discipline"),
    (re.compile(r"cancelled|canceled"), "Cancelled"),
    (re.compile(r"postponed"), "Postponed"),
    (re.compile(r"abandoned"), "Abandoned"),
)


def _find_header_row(rows: list[Tag]) -> int:
    for i, row in enumerate(rows):
        headers = header_texts(row)
        has_home = find_header_index(headers, "home") >= 0
        has_away = find_header_index(headers, "away") >= 0
        has_time_or_match = find_header_index(headers, "time") >= 0 or find_header_index(headers, "match") >= 0
        if has_home and has_away and has_time_or_match:
            return i
    return -1


def extract_date(time_cell: Tag | None) -> str:
    """Month-name date from the time cell, else its first line, else ``"TBD"``."""
    if time_cell is None:
        return "TBD"
    m = DATE_RE.search(text_of(time_cell))
    if m:
        return m.group(1).strip()
    for line in time_cell.get_text("\n").splitlines():
        line = clean_text(line)
        if line:
            return line
    return "TBD"


def extract_time(time_cell_text: str) -> Optional[str]:
    m = TIME_RE.search(time_cell_text)
    return m.group(1).strip() if m else None


def extract_status(time_cell: Tag | None) -> Optional[str]:
    """Inline ``.label`` text if present, else a keyword from STATUS_VOCABULARY."""
    if time_cell is None:
        return None
    label = text_of(time_cell.select_one(".label"))
    if label:
        return label
    lowered = text_of(time_cell).lower()
    for pattern, status in STATUS_VOCABULARY:
        if pattern.search(lowered):
            return status
    return None


def normalize_score(raw: str | None) -> Optional[str]:
    """``"2-1"``, ``"2 – 1"`` → ``"2 - 1"``; ``None`` when no score is present."""
    m = SCORE_RE.search(raw or "")
    if not m:
        return None
    return f"{m.group(1)} - {m.group(2)}"


def _location(cell: Tag | None) -> Optional[str]:
    if cell is None:
        return None
    link = cell.find("a")
    return (text_of(link) if link is not None else text_of(cell)) or None


def parse_fixtures(html: str) -> list[Fixture]:
    """Parse every fixture table on a schedule page.

    Rows missing a home or away team are dropped, and rows repeating an
    earlier ``(home, away, time cell)`` triple are skipped.
    """
    soup = soup_from_html(html)
    fixtures: list[Fixture] = []
    seen: set[tuple[str, str, str]] = set()

    for table in iter_tables(soup):
        rows = table_rows(table)
        if len(rows) < 2:
            continue
        header_idx = _find_header_row(rows)
        if header_idx == -1:
            continue

        headers = header_texts(rows[header_idx])
        match_col = find_header_index(headers, "match")
        time_col = find_header_index(headers, "time")
        home_col = find_header_index(headers, "home")
        results_col = find_header_index(headers, "result")
        away_col = find_header_index(headers, "away")
        location_col = find_header_index(headers, "location")

        for row in rows[header_idx + 1:]:
            cells = row_cells(row)
            if len(cells) <= max(home_col, away_col):
                continue
            home = cell_text(cells[home_col])
            away = cell_text(cells[away_col])
            if not home or not away:
                continue
            time_cell = cell_at(cells, time_col)
            key = (home, away, cell_text(time_cell))
            if key in seen:
                continue
            seen.add(key)

            score = None
            results_cell = cell_at(cells, results_col)
            if results_cell is not None:
                score = normalize_score(cell_text(results_cell))

            fixtures.append(
                Fixture(
                    date=extract_date(time_cell),
                    time=extract_time(text_of(time_cell)),
                    home=home,
                    away=away,
                    score=score,
                    played=True if score else None,
                    match_number=text_of(cell_at(cells, match_col)) or None,
                    location=_location(cell_at(cells, location_col)),
                    status=extract_status(time_cell),
                )
            )

    if not fixtures:
        logger.debug("No fixture rows found")
    return fixtures


__all__ = [
    "parse_fixtures",
    "extract_date",
    "extract_time",
    "extract_status",
    "normalize_score",
    "STATUS_VOCABULARY",
]
