"""Global pytest fixtures for the GotSport mirror test suite.

Centralizes:
 - Project root path insertion (so individual tests don't repeat sys.path hacks)
 - Reusable HTML sample snippets for results, schedule, club and event pages
 - A stub page fetcher and an in-memory cache
"""

import sys
from pathlib import Path

import pytest

# Ensure project root (containing gotsport_mirror/) is on sys.path once
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gotsport_mirror.cache.manager import CacheManager, InMemoryStore  # noqa: E402
from gotsport_mirror.core.config import Settings  # noqa: E402
from gotsport_mirror.data_collection.scrapers.base import GotSportUrls  # noqa: E402

EVENT_ID = "46915"
GROUP_ID = "431414"
TEAM_ID = "111"


# -------------------- Stubs -------------------- #

class StubFetcher:
    """Serves canned HTML per URL; a mapped exception is raised instead."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.calls = []
        self.closed = False

    async def fetch_text(self, url):
        self.calls.append(url)
        page = self.pages.get(url, "")
        if isinstance(page, Exception):
            raise page
        return page

    async def cleanup(self):
        self.closed = True


@pytest.fixture
def settings():
    return Settings(event_id=EVENT_ID, club_id="28533", cache_backend="memory")


@pytest.fixture
def urls(settings):
    return GotSportUrls(settings.base_url)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def cache(store):
    return CacheManager(store, prefix="gotsport_")


# -------------------- HTML Fixtures -------------------- #

@pytest.fixture
def results_html():
    return (
        """
        <html>
        <body>
            <div class="lead">Female U14 - Orange</div>
            <table class="table">
                <tr><th>Rank</th><th>Team</th><th>MP</th><th>W</th><th>L</th><th>D</th>
                    <th>GF</th><th>GA</th><th>GD</th><th>PTS</th></tr>
                <tr>
                    <td>1</td>
                    <td>
                        <img src="/system/teams/logos/9/thumb/crest.png?1700000000" />
                        <a href="/org_event/events/46915/schedules?team=111">St Albans City U14</a>
                    </td>
                    <td>5</td><td>4</td><td>0</td><td>1</td><td>10</td><td>2</td><td>8</td><td>12</td>
                </tr>
                <tr>
                    <td>2</td>
                    <td>
                        <img src="https://cdn.example.org/system/organizations/logos/4/luton.png?v=2" />
                        <a href="/org_event/events/46915/schedules?team=222">Luton Town Ladies</a>
                    </td>
                    <td>5</td><td>3</td><td>1</td><td>1</td><td>9</td><td>5</td><td>4</td><td>10</td>
                </tr>
                <tr><td colspan="10">Tie-breakers apply</td></tr>
            </table>
            <table class="table">
                <tr><th>Team Name</th><th>St Albans City U14</th><th>Luton Town Ladies</th>
                    <th>Points</th><th>Rank</th></tr>
                <tr><td>St Albans City U14</td><td>-</td><td>2-1 - 3-0</td><td>12</td><td>1</td></tr>
                <tr><td>Luton Town Ladies</td><td>1-2</td><td>-</td><td>10</td><td>2</td></tr>
            </table>
        </body>
        </html>
        """
    )


@pytest.fixture
def schedule_html():
    return (
        """
        <html>
        <body>
            <a href="/org_event/events/46915/results?group=431414">Female U14 - Orange</a>
            <table>
                <tr><th>Match #</th><th>Time</th><th>Home Team</th><th>Results</th>
                    <th>Away Team</th><th>Location</th><th>Division</th></tr>
                <tr>
                    <td>101</td>
                    <td>Jan 31, 2026<br/>10:00 AM GMT</td>
                    <td><a href="/org_event/events/46915/schedules?team=111">St Albans City U14</a></td>
                    <td>2 - 1</td>
                    <td><a href="/org_event/events/46915/schedules?team=222">Luton Town Ladies</a></td>
                    <td><a href="/fields/1">Clarence Park 3G</a></td>
                    <td>Orange</td>
                </tr>
                <tr>
                    <td>102</td>
                    <td>Feb 7, 2026<br/>11:30 AM GMT</td>
                    <td>Luton Town Ladies</td>
                    <td></td>
                    <td>St Albans City U14</td>
                    <td>Stockwood Park</td>
                    <td>Orange</td>
                </tr>
            </table>
        </body>
        </html>
        """
    )


@pytest.fixture
def clubs_html():
    return (
        """
        <html>
        <body>
            <table>
                <tr><th>Name</th><th>Gender</th><th>Age</th><th>Division</th><th>Bracket</th></tr>
                <tr>
                    <td><a href="/org_event/events/46915/schedules?team=111">St Albans City U14 Orange</a></td>
                    <td>Female</td><td>U14</td><td>Orange</td><td>A</td>
                </tr>
                <tr>
                    <td><a href="/org_event/events/46915/schedules?team=333">St Albans City U16 Blue</a></td>
                    <td>Female</td><td>U16</td><td>Blue</td><td>B</td>
                </tr>
                <tr>
                    <td>St Albans City U12 (pending)</td>
                    <td>Female</td><td>U12</td><td>Red</td><td></td>
                </tr>
            </table>
        </body>
        </html>
        """
    )


@pytest.fixture
def event_html():
    return (
        """
        <html>
        <body>
            <ul>
                <li><a href="/org_event/events/46915/results?group=431414">Female U14 - Orange</a></li>
                <li><a href="/org_event/events/46915/results?group=431415">Female U16 - Blue</a></li>
                <li><a href="/org_event/events/46915/results?group=431416">Open Cup</a></li>
                <li><a href="/org_event/events/46915/results?group=">Broken</a></li>
            </ul>
        </body>
        </html>
        """
    )


@pytest.fixture
def make_fetcher():
    return StubFetcher
