from gotsport_mirror.data_collection.scrapers.club_scraper import (
    get_age_group_display_name,
    parse_clubs_page,
    parse_event_page_group_ids,
    parse_group_id_link,
)
from gotsport_mirror.domain.models import ClubTeam


def test_parse_clubs_page_keeps_linked_teams(clubs_html):
    teams = parse_clubs_page(clubs_html)
    assert [t.team_id for t in teams] == ["111", "333"]
    first = teams[0]
    assert first.name == "St Albans City U14 Orange"
    assert first.division == "Orange"
    assert first.age == "U14"


def test_parse_clubs_page_without_age_column():
    html = (
        "<table><tr><th>Team Name</th><th>Division</th></tr>"
        '<tr><td><a href="?team=5">Reds</a></td><td>Gold</td></tr></table>'
    )
    teams = parse_clubs_page(html)
    assert teams == [ClubTeam(name="Reds", team_id="5", division="Gold")]


def test_parse_clubs_page_no_table():
    assert parse_clubs_page("<div>Maintenance</div>") == []


def test_parse_event_page_group_ids(event_html):
    assert parse_event_page_group_ids(event_html) == {
        "Orange": "431414",
        "Blue": "431415",
        "Open Cup": "431416",
    }


def test_parse_group_id_link(schedule_html):
    assert parse_group_id_link(schedule_html) == "431414"
    assert parse_group_id_link('<a href="/results?group=">x</a>') is None
    assert parse_group_id_link("") is None


def test_get_age_group_display_name():
    assert get_age_group_display_name(ClubTeam(name="X", team_id="1", division="A", age="U14")) == "U14 Girls"
    assert get_age_group_display_name(ClubTeam(name="St Albans U16 Girls Blue", team_id="1", division="A")) == "U16 Girls"
    assert get_age_group_display_name(ClubTeam(name="St Albans u12", team_id="1", division="A")) == "u12 Girls"
    assert get_age_group_display_name(ClubTeam(name="First Team", team_id="1", division="A")) == "First Team"
