import json

import pytest

from gotsport_mirror.cache.manager import CacheManager, InMemoryStore, RedisStore, create_store
from gotsport_mirror.cache.services.crests import get_cached_crests, merge_crests_into_cache
from gotsport_mirror.cache.services.groups import (
    get_cached_group_data,
    set_cached_group_data,
    update_cached_fixtures,
)
from gotsport_mirror.cache.services.roster import get_cached_club_teams, set_cached_club_teams
from gotsport_mirror.cache.services.team_groups import (
    get_cached_group_id_for_team,
    set_cached_group_id_for_team,
)
from gotsport_mirror.core.config import Settings
from gotsport_mirror.domain.models import ClubTeam, Fixture, ResultsData, ResultsRow, Standing, TeamCrest


class FailingStore:
    async def get(self, key):
        raise ConnectionError("store down")

    async def set(self, key, value):
        raise ConnectionError("store down")


def _snapshot():
    standings = [Standing(rank=1, name="St Albans City U14", team_id="111", mp=5, pts=12)]
    results = ResultsData(team_names=["A"], rows=[ResultsRow(team_name="A", cells=["-"])])
    fixtures = [Fixture(date="Jan 31, 2026", home="A", away="B", score="2 - 1", played=True)]
    return standings, results, fixtures


def test_cache_keys(cache):
    assert cache.group_key("431414") == "gotsport_group_431414"
    assert cache.club_teams_key() == "gotsport_club_teams"
    assert cache.team_group_key("111") == "gotsport_team_group_111"
    assert cache.crests_key() == "gotsport_crests"


def test_create_store_backends():
    assert isinstance(create_store(Settings(cache_backend="memory")), InMemoryStore)
    assert isinstance(create_store(Settings(cache_backend="redis", redis_url="redis://localhost:6379/0")), RedisStore)


@pytest.mark.asyncio
async def test_group_snapshot_round_trip(cache, store):
    standings, results, fixtures = _snapshot()
    await set_cached_group_data(cache, "431414", standings, results, fixtures, "Female U14 - Orange")

    raw = json.loads(store.data["gotsport_group_431414"])
    assert set(raw) == {"standings", "results", "fixtures", "updatedAt", "leagueName"}
    assert raw["standings"][0]["PTS"] == 12
    assert raw["results"]["teamNames"] == ["A"]

    cached = await get_cached_group_data(cache, "431414")
    assert cached.standings == standings
    assert cached.results == results
    assert cached.fixtures == fixtures
    assert cached.league_name == "Female U14 - Orange"
    assert cached.updated_at > 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        "[]",
        json.dumps({"results": {}, "fixtures": []}),
        json.dumps({"standings": {}, "results": {}, "fixtures": []}),
        json.dumps({"standings": [], "results": [], "fixtures": []}),
        json.dumps({"standings": [], "results": {}}),
        json.dumps({"standings": [{"rank": "first"}], "results": {}, "fixtures": []}),
    ],
)
async def test_malformed_group_cache_is_a_miss(cache, store, payload):
    store.data["gotsport_group_1"] = payload
    assert await get_cached_group_data(cache, "1") is None


@pytest.mark.asyncio
async def test_group_cache_tolerates_missing_metadata(cache, store):
    store.data["gotsport_group_1"] = json.dumps({"standings": [], "results": {}, "fixtures": "?"})
    cached = await get_cached_group_data(cache, "1")
    assert cached.fixtures == []
    assert cached.updated_at is None
    assert cached.league_name is None


@pytest.mark.asyncio
async def test_update_cached_fixtures_keeps_other_fields(cache):
    standings, results, fixtures = _snapshot()
    await set_cached_group_data(cache, "9", standings, results, fixtures, "League")
    new_fixtures = [Fixture(date="Feb 7, 2026", home="B", away="A")]

    assert await update_cached_fixtures(cache, "9", new_fixtures) is True
    cached = await get_cached_group_data(cache, "9")
    assert cached.fixtures == new_fixtures
    assert cached.standings == standings
    assert cached.league_name == "League"


@pytest.mark.asyncio
async def test_update_cached_fixtures_without_snapshot(cache, store):
    assert await update_cached_fixtures(cache, "9", [Fixture(home="A", away="B")]) is False
    assert store.data == {}


@pytest.mark.asyncio
async def test_store_failures_are_swallowed():
    cache = CacheManager(FailingStore(), prefix="gotsport_")
    standings, results, fixtures = _snapshot()
    await set_cached_group_data(cache, "1", standings, results, fixtures)
    assert await get_cached_group_data(cache, "1") is None
    assert await get_cached_crests(cache) == {}
    assert await cache.write_json("k", 1) is False


@pytest.mark.asyncio
async def test_crest_merge_overwrites_and_skips_empty(cache):
    await merge_crests_into_cache(cache, [TeamCrest(name="Reds", crest_url="u1"), TeamCrest(name="Blues", crest_url="u2")])
    merged = await merge_crests_into_cache(
        cache,
        [TeamCrest(name="Reds", crest_url="u3"), TeamCrest(name="", crest_url="u4"), TeamCrest(name="Greens", crest_url="")],
    )
    assert merged == {"Reds": "u3", "Blues": "u2"}
    assert await get_cached_crests(cache) == merged


@pytest.mark.asyncio
async def test_crest_merge_sequence_equals_single_merge():
    a = [TeamCrest(name="Reds", crest_url="a1"), TeamCrest(name="Blues", crest_url="a2")]
    b = [TeamCrest(name="Blues", crest_url="b2"), TeamCrest(name="Greens", crest_url="b3")]
    stepwise = CacheManager(InMemoryStore(), prefix="gotsport_")
    await merge_crests_into_cache(stepwise, a)
    await merge_crests_into_cache(stepwise, b)
    combined = CacheManager(InMemoryStore(), prefix="gotsport_")
    await merge_crests_into_cache(combined, a + b)
    assert await get_cached_crests(stepwise) == await get_cached_crests(combined)


@pytest.mark.asyncio
async def test_crest_cache_wrong_shape(cache, store):
    store.data["gotsport_crests"] = json.dumps({"Reds": "u1", "Bad": 3})
    assert await get_cached_crests(cache) == {"Reds": "u1"}
    store.data["gotsport_crests"] = json.dumps(["Reds"])
    assert await get_cached_crests(cache) == {}


@pytest.mark.asyncio
async def test_roster_round_trip(cache, store):
    teams = [ClubTeam(name="St Albans City U14", team_id="111", division="Orange", age="U14")]
    await set_cached_club_teams(cache, teams)
    assert json.loads(store.data["gotsport_club_teams"])[0]["teamId"] == "111"
    assert await get_cached_club_teams(cache) == teams
    store.data["gotsport_club_teams"] = json.dumps([{"name": "x"}])
    assert await get_cached_club_teams(cache) == []


@pytest.mark.asyncio
async def test_team_group_cache(cache, store):
    assert await get_cached_group_id_for_team(cache, "111") is None
    await set_cached_group_id_for_team(cache, "111", "431414")
    assert await get_cached_group_id_for_team(cache, "111") == "431414"
    store.data["gotsport_team_group_222"] = json.dumps("abc")
    assert await get_cached_group_id_for_team(cache, "222") is None


class ReadFailingStore(InMemoryStore):
    async def get(self, key):
        raise ConnectionError("store down")


@pytest.mark.asyncio
async def test_crest_merge_skips_write_when_store_unreadable():
    store = ReadFailingStore({"gotsport_crests": json.dumps({"Reds": "u1", "Blues": "u2"})})
    cache = CacheManager(store, prefix="gotsport_")
    merged = await merge_crests_into_cache(cache, [TeamCrest(name="Greens", crest_url="u3")])
    assert merged == {"Greens": "u3"}
    assert json.loads(store.data["gotsport_crests"]) == {"Reds": "u1", "Blues": "u2"}


@pytest.mark.asyncio
async def test_read_json_checked_distinguishes_miss_from_failure(cache):
    assert await cache.read_json_checked("gotsport_missing") == (None, True)
    failing = CacheManager(ReadFailingStore(), prefix="gotsport_")
    assert await failing.read_json_checked("gotsport_missing") == (None, False)
