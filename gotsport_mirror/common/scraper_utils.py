"""Shared pure helpers for classifying and selecting fixtures.

These functions turn a parsed fixture list into the answers the home screen
needs: which fixtures belong to the club's team, which are in the past, the
next fixture and the last result. The fallback chains here were shaped by
quirks of the live data (undated fixtures, teams listed under several display
names) and are kept in their observed priority order.

All functions are side-effect free. Dates are compared as epoch milliseconds
in local time; ``nan`` stands for "no usable date".
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..domain.models import Fixture, Standing
from .parsing import parse_date

CLUB_NAME = "St Albans"
UPCOMING_LIMIT = 5

_CLUB_RE = re.compile(r"st\s*albans", re.IGNORECASE)
_RAINED_OUT_RE = re.compile(r"rained\s*out", re.IGNORECASE)
_DISCIPLINE_RE = re.compile(r"discipline", re.IGNORECASE)
_CALLED_OFF_RE = re.compile(r"cancell?ed|postponed|abandoned", re.IGNORECASE)
_TRAILING_TZ_RE = re.compile(r"\s*\b(?!(?:AM|PM)\b)[A-Z]{2,4}$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Dates and times
# ---------------------------------------------------------------------------

def parse_fixture_date(fixture: Fixture | dict) -> float:
    """Local-midnight timestamp (ms) of the fixture date, ``nan`` if unusable."""
    raw = fixture.get("date") if isinstance(fixture, dict) else fixture.date
    if not raw or raw == "TBD":
        return math.nan
    parsed = parse_date(raw)
    return parsed.timestamp() * 1000 if parsed else math.nan


def format_time_for_display(time: Optional[str]) -> str:
    """Drop a trailing timezone token: ``"2:00 PM GMT"`` → ``"2:00 PM"``; empty → ``"–"``."""
    if not time or not time.strip():
        return "–"
    return _TRAILING_TZ_RE.sub("", time.strip()).strip() or "–"


def today_start_ms(now: Optional[datetime] = None) -> float:
    now = now or datetime.now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0).timestamp() * 1000


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def is_rained_out(fixture: Fixture) -> bool:
    text = " ".join(s for s in (fixture.status, fixture.time) if s)
    return bool(_RAINED_OUT_RE.search(text))


def is_discipline(fixture: Fixture) -> bool:
    return bool(fixture.status and _DISCIPLINE_RE.search(fixture.status))


def is_called_off(fixture: Fixture) -> bool:
    """Cancelled, postponed or abandoned."""
    return bool(fixture.status and _CALLED_OFF_RE.search(fixture.status))


def has_outcome(fixture: Fixture) -> bool:
    return bool(
        fixture.score
        or fixture.played
        or is_rained_out(fixture)
        or is_discipline(fixture)
        or is_called_off(fixture)
    )


def is_past_fixture(fixture: Fixture, today_start: Optional[float] = None) -> bool:
    if today_start is None:
        today_start = today_start_ms()
    if fixture.played is True or fixture.score:
        return True
    if is_rained_out(fixture) or is_discipline(fixture) or is_called_off(fixture):
        return True
    ts = parse_fixture_date(fixture)
    return not math.isnan(ts) and ts < today_start


# ---------------------------------------------------------------------------
# Team matching
# ---------------------------------------------------------------------------

def is_team_in_fixture(
    fixture: Fixture, team_name: str, division: Optional[str] = None
) -> bool:
    """Loose match of *team_name* against either side of *fixture*.

    Names differ between pages (legal name, short name, division-qualified
    name), so equality and substring containment in both directions count.
    With a *division* hint, a side naming the club and the division matches
    too.
    """
    if not team_name:
        return False
    home = fixture.home.strip()
    away = fixture.away.strip()
    for side in (home, away):
        if side == team_name or team_name in side or (side and side in team_name):
            return True
    if not division:
        return False
    return any(_CLUB_RE.search(side) and division in side for side in (home, away))


def fixtures_for_team(
    fixtures: Sequence[Fixture], team_name: str, division: Optional[str] = None
) -> list[Fixture]:
    """Fixtures matching the team; falls back to a plain division substring match."""
    matched = [f for f in fixtures if is_team_in_fixture(f, team_name, division)]
    if matched or not division:
        return matched
    return [f for f in fixtures if division in f.home or division in f.away]


def filter_fixtures_by_team(fixtures: Sequence[Fixture], team_filter: Optional[str]) -> list[Fixture]:
    """Exact home/away filter; empty or ``"ALL"`` keeps everything."""
    if not team_filter or team_filter == "ALL":
        return list(fixtures)
    return [f for f in fixtures if f.home == team_filter or f.away == team_filter]


def get_club_team_in_division(
    standings: Sequence[Standing], division: Optional[str], club: str = CLUB_NAME
) -> Optional[str]:
    """Name of the club's standing in *division*, if listed."""
    if not division or not standings:
        return None
    for s in standings:
        if club in s.name and division in s.name:
            return s.name
    return None


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def sort_by_date(fixtures: Iterable[Fixture]) -> list[Fixture]:
    """Ascending by date; undated fixtures keep their order at the end."""
    def key(f: Fixture) -> tuple[int, float]:
        ts = parse_fixture_date(f)
        return (1, 0.0) if math.isnan(ts) else (0, ts)

    return sorted(fixtures, key=key)


def select_next_fixture(
    team_fixtures: Sequence[Fixture], today_start: Optional[float] = None
) -> Optional[Fixture]:
    if today_start is None:
        today_start = today_start_ms()
    ordered = sort_by_date(team_fixtures)
    for f in ordered:
        if is_rained_out(f) or is_discipline(f):
            continue
        ts = parse_fixture_date(f)
        if not math.isnan(ts) and ts >= today_start:
            return f
    for f in ordered:
        if not is_rained_out(f) and not f.score and not f.played:
            return f
    return None


def most_recent(fixtures: Sequence[Fixture]) -> Optional[Fixture]:
    """Latest-dated fixture; with no dates at all, the last one in list order."""
    if not fixtures:
        return None
    best: Optional[Fixture] = None
    best_ts = -math.inf
    for f in fixtures:
        ts = parse_fixture_date(f)
        if not math.isnan(ts) and ts > best_ts:
            best, best_ts = f, ts
    return best if best is not None else fixtures[-1]


def select_last_result(
    team_fixtures: Sequence[Fixture], today_start: Optional[float] = None
) -> Optional[Fixture]:
    if today_start is None:
        today_start = today_start_ms()
    past = [f for f in team_fixtures if is_past_fixture(f, today_start)]
    candidates = (
        [f for f in past if has_outcome(f)],
        [f for f in team_fixtures if has_outcome(f)],
        past,
    )
    for group in candidates:
        found = most_recent(group)
        if found is not None:
            return found
    return None


def fixtures_today_or_upcoming(
    fixtures: Sequence[Fixture], now: Optional[datetime] = None, limit: int = UPCOMING_LIMIT
) -> list[Fixture]:
    """Today's fixtures, or the next *limit* future fixtures when none are today."""
    start = today_start_ms(now)
    end = start + timedelta(days=1).total_seconds() * 1000
    dated = [f for f in sort_by_date(fixtures) if not math.isnan(parse_fixture_date(f))]
    today = [f for f in dated if start <= parse_fixture_date(f) < end]
    if today:
        return today
    return [f for f in dated if parse_fixture_date(f) >= start][:limit]


@dataclass
class HomeSummary:
    team_name: str
    standing: Optional[Standing] = None
    next_fixture: Optional[Fixture] = None
    last_result: Optional[Fixture] = None
    upcoming: list[Fixture] = field(default_factory=list)


def build_home_summary(
    standings: Sequence[Standing],
    fixtures: Sequence[Fixture],
    division: str,
    *,
    club: str = CLUB_NAME,
    now: Optional[datetime] = None,
) -> HomeSummary:
    """Club standing, next fixture, last result and upcoming list for one division."""
    team_name = get_club_team_in_division(standings, division, club) or division
    standing = next((s for s in standings if club in s.name and division in s.name), None)
    start = today_start_ms(now)
    team_fixtures = fixtures_for_team(fixtures, team_name, division)
    return HomeSummary(
        team_name=team_name,
        standing=standing,
        next_fixture=select_next_fixture(team_fixtures, start),
        last_result=select_last_result(team_fixtures, start),
        upcoming=fixtures_today_or_upcoming(fixtures, now),
    )


# ---------------------------------------------------------------------------
# Head to head
# ---------------------------------------------------------------------------

def _involves_us(name: str, our: str) -> bool:
    return "st albans" in name or bool(our and our in name)


def get_played_fixtures_vs(
    fixtures: Sequence[Fixture], our_team_name: str, opponent_name: str
) -> list[Fixture]:
    """Played fixtures between us and *opponent_name*, oldest first."""
    our = our_team_name.lower()
    opp = opponent_name.lower()
    played = []
    for f in fixtures:
        if not f.score and not f.played:
            continue
        h, a = (f.home or "").lower(), (f.away or "").lower()
        if (_involves_us(h, our) or _involves_us(a, our)) and (opp in h or opp in a):
            played.append(f)

    def key(f: Fixture) -> float:
        ts = parse_fixture_date(f)
        return 0.0 if math.isnan(ts) else ts

    return sorted(played, key=key)


def is_our_team_home(fixture: Fixture, our_team_name: str) -> bool:
    home = (fixture.home or "").strip().lower()
    if not home:
        return False
    return _involves_us(home, our_team_name.strip().lower())


def get_home_away_scores_from_fixtures(
    fixtures: Sequence[Fixture], our_team_name: str, opponent_name: str
) -> tuple[str, str]:
    """``(home_scores, away_scores)`` from our perspective, ``"–"`` when none."""
    home_scores: list[str] = []
    away_scores: list[str] = []
    for f in get_played_fixtures_vs(fixtures, our_team_name, opponent_name):
        score = (f.score or "").strip()
        if not score:
            continue
        (home_scores if is_our_team_home(f, our_team_name) else away_scores).append(score)
    return (", ".join(home_scores) or "–", ", ".join(away_scores) or "–")


__all__ = [
    "CLUB_NAME",
    "parse_fixture_date",
    "format_time_for_display",
    "today_start_ms",
    "is_rained_out",
    "is_discipline",
    "is_called_off",
    "has_outcome",
    "is_past_fixture",
    "is_team_in_fixture",
    "fixtures_for_team",
    "filter_fixtures_by_team",
    "get_club_team_in_division",
    "sort_by_date",
    "select_next_fixture",
    "most_recent",
    "select_last_result",
    "fixtures_today_or_upcoming",
    "HomeSummary",
    "build_home_summary",
    "get_played_fixtures_vs",
    "is_our_team_home",
    "get_home_away_scores_from_fixtures",
]
