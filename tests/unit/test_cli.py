import json

import pytest
from click.testing import CliRunner

from gotsport_mirror.apps import cli as cli_module
from gotsport_mirror.common.errors import PageNotFound
from gotsport_mirror.data_collection.orchestrator import GotSportOrchestrator
from gotsport_mirror.data_collection.scrapers.group_scraper import GroupScraper

BASE = "https://system.gotsport.com/org_event/events/46915"


@pytest.fixture
def fetcher(make_fetcher, results_html, schedule_html, clubs_html, event_html):
    return make_fetcher(
        {
            f"{BASE}/results?group=431414": results_html,
            f"{BASE}/schedules?group=431414": schedule_html,
            f"{BASE}/schedules?team=111": schedule_html,
            f"{BASE}/schedules?date=All&group=431414": schedule_html,
            f"{BASE}/clubs/28533": clubs_html,
            BASE: event_html,
        }
    )


@pytest.fixture
def runner(monkeypatch, fetcher, settings, cache):
    def build(cfg):
        return GotSportOrchestrator(GroupScraper(fetcher, settings), cache, settings)

    monkeypatch.setattr(cli_module, "_build_orchestrator", build)
    monkeypatch.setattr(cli_module, "configure_logging", lambda *a, **kw: None)
    return CliRunner()


def test_snapshot_command(runner):
    result = runner.invoke(cli_module.cli, ["snapshot", "--group", "431414"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["leagueName"] == "Female U14 - Orange"
    assert data["standings"][0]["PTS"] == 12


def test_fixtures_command(runner):
    result = runner.invoke(cli_module.cli, ["fixtures", "--group", "431414"])
    assert result.exit_code == 0, result.output
    assert [f["home"] for f in json.loads(result.stdout)] == ["St Albans City U14", "Luton Town Ladies"]


def test_roster_resolve_and_divisions(runner):
    roster = runner.invoke(cli_module.cli, ["roster"])
    assert [t["teamId"] for t in json.loads(roster.stdout)] == ["111", "333"]

    resolved = runner.invoke(cli_module.cli, ["resolve", "111"])
    assert json.loads(resolved.stdout) == {"teamId": "111", "groupId": "431414"}

    divisions = runner.invoke(cli_module.cli, ["divisions"])
    assert json.loads(divisions.stdout)["Blue"] == "431415"


def test_scraper_error_exits_non_zero(runner, fetcher):
    fetcher.pages[f"{BASE}/clubs/28533"] = PageNotFound(f"{BASE}/clubs/28533")
    result = runner.invoke(cli_module.cli, ["roster", "--refresh"])
    assert result.exit_code == 1


def test_snapshot_second_run_comes_from_cache(runner):
    first = json.loads(runner.invoke(cli_module.cli, ["snapshot", "--group", "431414"]).stdout)
    second = json.loads(runner.invoke(cli_module.cli, ["snapshot", "--group", "431414"]).stdout)
    assert first["fromCache"] is False
    assert second["fromCache"] is True
    assert second["updatedAt"] == first["updatedAt"]


def test_home_command(runner):
    result = runner.invoke(cli_module.cli, ["home", "--group", "431414", "--division", "U14"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["teamName"] == "St Albans City U14"
    assert data["standing"]["PTS"] == 12


def test_resolve_unresolved_team_exits_non_zero(runner, fetcher, caplog):
    fetcher.pages[f"{BASE}/schedules?team=999"] = "<html><body>No group link</body></html>"
    with caplog.at_level("ERROR"):
        result = runner.invoke(cli_module.cli, ["resolve", "999"])
    assert result.exit_code == 1
    assert result.stdout == ""
    assert "choose your team again" in caplog.text
