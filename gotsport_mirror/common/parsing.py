"""Table extraction helpers shared by the GotSport page parsers.

GotSport pages carry no schema contract: columns move between pages and some
are missing entirely. Parsers therefore resolve columns by header substring
(``find_header_index``) and treat ``-1`` as "column not present".
"""
import re
from datetime import datetime
from typing import Iterator, Optional, Sequence

from bs4 import BeautifulSoup, Tag

# Date formats seen on GotSport schedule pages
DATE_FORMATS = [
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%Y-%m-%d",
    "%d/%m/%Y",
]

_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_COMMA_RE = re.compile(r"\s*,\s*")
_SEPT_RE = re.compile(r"\bSept\b", re.IGNORECASE)


def clean_text(s: str | None) -> str:
    """Collapse runs of whitespace and trim; ``None`` becomes ``""``."""
    if not s:
        return ""
    return _WHITESPACE_RE.sub(" ", s).strip()


def text_of(el: Tag | None) -> str:
    if el is None:
        return ""
    return clean_text(el.get_text(" "))


def cell_text(cell: Tag | None) -> str:
    """Text of a cell, falling back to the text of a nested link when empty."""
    if cell is None:
        return ""
    raw = text_of(cell)
    if raw:
        return raw
    return text_of(cell.find("a"))


def parse_int(s: str | None) -> int | None:
    """Parse the leading integer of *s* (``"12"``, ``"3rd"``); ``None`` otherwise."""
    if not s:
        return None
    m = _LEADING_INT_RE.match(s)
    return int(m.group(1)) if m else None


def parse_date(s: str | None) -> Optional[datetime]:
    """Parse a calendar date in one of DATE_FORMATS as a naive local datetime."""
    s = clean_text(s)
    if not s:
        return None
    # "Jan 10,2026" and "Sept 5, 2026" appear on schedule pages
    s = _SEPT_RE.sub("Sep", _COMMA_RE.sub(", ", s))
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    return None


def soup_from_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def iter_tables(soup: BeautifulSoup) -> Iterator[Tag]:
    """Yield every ``<table>`` in document order."""
    yield from soup.find_all("table")


def table_rows(table: Tag) -> list[Tag]:
    return table.find_all("tr")


def row_cells(row: Tag, *, include_headers: bool = False) -> list[Tag]:
    return row.find_all(["th", "td"] if include_headers else "td")


def header_texts(row: Tag) -> list[str]:
    """Lower-cased texts of every ``th``/``td`` in *row*."""
    return [text_of(c).lower() for c in row_cells(row, include_headers=True)]


def find_header_index(headers: Sequence[str], target: str) -> int:
    """Index of the first header containing *target*, or -1 when absent."""
    for i, h in enumerate(headers):
        if target in h:
            return i
    return -1


def cell_at(cells: Sequence[Tag], index: int) -> Tag | None:
    if 0 <= index < len(cells):
        return cells[index]
    return None


def extract_query_id(href: str | None, param: str) -> str | None:
    """Numeric value of ``param=<digits>`` in *href* (``team``, ``group``...)."""
    if not href:
        return None
    m = re.search(rf"{re.escape(param)}=(\d+)", href)
    return m.group(1) if m else None


def find_id_link(el: Tag | None, param: str) -> tuple[Tag | None, str | None]:
    """First anchor inside *el* whose href carries ``param=<digits>``."""
    if el is None:
        return None, None
    for a in el.select(f'a[href*="{param}="]'):
        found = extract_query_id(a.get("href"), param)
        if found:
            return a, found
    return None, None


__all__ = [
    "DATE_FORMATS",
    "clean_text",
    "text_of",
    "cell_text",
    "parse_int",
    "parse_date",
    "soup_from_html",
    "iter_tables",
    "table_rows",
    "row_cells",
    "header_texts",
    "find_header_index",
    "cell_at",
    "extract_query_id",
    "find_id_link",
]
