"""Display formatting for team names, table positions and timestamps."""
from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

_STRIP_WORDS_RE = re.compile(r"\b(U14|U14s|U16|U16s|Girls)\b", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_NAME_SEPARATOR = " - "

# Exact overrides, returned as-is
DISPLAY_NAME_MAP: dict[str, str] = {
    "Milton Keynes Dons SET - Girls Milton Keynes Dons Girls Performance U14s": "MK Dons - Performance",
}
DISPLAY_NAME_PATTERNS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"Milton Keynes Dons", re.IGNORECASE), "MK Dons - Performance"),
    (re.compile(r"Capital\s*Girls", re.IGNORECASE), "Capital Girls"),
    (re.compile(r"Luton Town Ladies", re.IGNORECASE), "Luton Town Ladies FC - Wanderers"),
    (re.compile(r"Atletico London", re.IGNORECASE), "Athletico London - Dragons"),
    (re.compile(r"Prestbury Phantoms", re.IGNORECASE), "Prestbury Phantoms AFC - Trojans"),
)


def _strip_words(s: str) -> str:
    return _WHITESPACE_RE.sub(" ", _STRIP_WORDS_RE.sub(" ", s)).strip()


def shorten_team_name(name: str) -> str:
    """Remove age/gender words, keeping a ``"Club - Team"`` shape when present."""
    trimmed = (name or "").strip()
    if not trimmed:
        return ""
    if _NAME_SEPARATOR in trimmed:
        club_part, team_part = trimmed.split(_NAME_SEPARATOR, 1)
        club = _strip_words(club_part)
        team = _strip_words(team_part)
        if team:
            return f"{club}{_NAME_SEPARATOR}{team}"
        return club or trimmed
    return _strip_words(trimmed) or trimmed


def get_display_team_name(team_name: Optional[str]) -> str:
    if not isinstance(team_name, str):
        return ""
    name = team_name.strip()
    if not name:
        return ""
    if name in DISPLAY_NAME_MAP:
        return DISPLAY_NAME_MAP[name]
    for pattern, display in DISPLAY_NAME_PATTERNS:
        if pattern.search(name):
            return display
    return shorten_team_name(name)


def get_team_initials(team_name: Optional[str]) -> str:
    if not isinstance(team_name, str) or not team_name.strip():
        return "?"
    words = team_name.split()
    if len(words) >= 2:
        return (words[0][0] + words[1][0]).upper()
    return words[0][:2].upper()


def format_position(rank: int) -> str:
    if rank == 1:
        return "1st"
    if rank == 2:
        return "2nd"
    if rank == 3:
        return "3rd"
    return f"{rank}th"


def _day_suffix(day: int) -> str:
    if day in (1, 21, 31):
        return "st"
    if day in (2, 22):
        return "nd"
    if day in (3, 23):
        return "rd"
    return "th"


def format_last_updated(ms: float) -> str:
    """``"31st January 2026 at 14:30"`` for an epoch-millisecond timestamp (local time)."""
    d = datetime.fromtimestamp(ms / 1000)
    return f"{d.day}{_day_suffix(d.day)} {d.strftime('%B')} {d.year} at {d.strftime('%H:%M')}"


__all__ = [
    "shorten_team_name",
    "get_display_team_name",
    "get_team_initials",
    "format_position",
    "format_last_updated",
]
