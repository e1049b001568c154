"""
Parsers for the group results page (``/results?group=<id>``).

The page carries the standings table, the head-to-head matrix, the league
name and the team crests. All parsers degrade to empty results when the
expected markup is missing.
"""

from typing import Optional

from ...common.logging_utils import get_logger
from ...common.parsing import (
    cell_at,
    find_id_link,
    iter_tables,
    parse_int,
    row_cells,
    soup_from_html,
    table_rows,
    text_of,
)
from ...core.config import settings
from ...domain.models import ResultsData, ResultsRow, Standing
from .base import GotSportUrls

logger = get_logger(__name__)

STANDINGS_COLUMNS = ("mp", "w", "l", "d", "gf", "ga", "gd", "pts")
# Columns 2..9 hold the counters, in STANDINGS_COLUMNS order
_FIRST_COUNTER_COL = 2
# Trailing matrix columns are totals, not opponents
_MATRIX_TRAILING_COLS = 2


def _is_standings_header(text: str) -> bool:
    return "MP" in text and "PTS" in text


def parse_standings(html: str, event_id: str, urls: Optional[GotSportUrls] = None) -> list[Standing]:
    """Parse the first table whose header row mentions both MP and PTS.

    Rows without an integer rank (repeated headers, spacers) are skipped. The
    row order of the page is kept; ranks are not re-sorted.
    """
    urls = urls or GotSportUrls(settings.base_url)
    soup = soup_from_html(html)
    standings: list[Standing] = []

    for table in iter_tables(soup):
        rows = table_rows(table)
        if len(rows) < 2 or not _is_standings_header(text_of(rows[0])):
            continue

        for row in rows[1:]:
            cells = row_cells(row)
            if len(cells) < _FIRST_COUNTER_COL + len(STANDINGS_COLUMNS):
                continue
            rank = parse_int(text_of(cells[0]))
            if rank is None:
                continue
            team_cell = cells[1]
            _, team_id = find_id_link(team_cell, "team")
            counters = {
                col: parse_int(text_of(cell_at(cells, _FIRST_COUNTER_COL + i))) or 0
                for i, col in enumerate(STANDINGS_COLUMNS)
            }
            standings.append(
                Standing(
                    rank=rank,
                    name=text_of(team_cell),
                    team_id=team_id,
                    schedule_link=urls.team_schedule(event_id, team_id) if team_id else None,
                    **counters,
                )
            )
        # Only one standings table per page
        break

    if not standings:
        logger.debug("No standings rows found")
    return standings


def parse_results_matrix(html: str) -> ResultsData:
    """Parse the head-to-head grid into a ResultsData.

    Each cell is split on whitespace, ``-`` placeholders dropped, and the
    remaining scores joined with ``", "``; an empty cell becomes ``"-"``.
    """
    soup = soup_from_html(html)

    for table in iter_tables(soup):
        rows = table_rows(table)
        if len(rows) < 2:
            continue
        header_cells = row_cells(rows[0], include_headers=True)
        first_header = text_of(cell_at(header_cells, 0))
        if first_header != "Team Name" and "Team" not in first_header:
            continue

        team_names = [text_of(c) for c in header_cells[1:-_MATRIX_TRAILING_COLS]]
        result_rows: list[ResultsRow] = []
        for row in rows[1:]:
            cells = row_cells(row)
            if len(cells) < 2:
                continue
            values = []
            for i in range(1, len(team_names) + 1):
                tokens = [t for t in text_of(cell_at(cells, i)).split() if t != "-"]
                values.append(", ".join(tokens) or "-")
            result_rows.append(ResultsRow(team_name=text_of(cells[0]), cells=values))
        return ResultsData(team_names=team_names, rows=result_rows)

    logger.debug("No results matrix found")
    return ResultsData()


def parse_league_name(html: str) -> str:
    """League/group label from the page lead, e.g. ``"Female U14 - Orange"``."""
    soup = soup_from_html(html)
    return text_of(soup.select_one(".lead"))


__all__ = ["parse_standings", "parse_results_matrix", "parse_league_name", "STANDINGS_COLUMNS"]
