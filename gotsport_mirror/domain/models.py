"""
Domain models for scraped GotSport data using Pydantic.

Field names are snake_case in Python; the JSON form (cache payloads, CLI
output) uses the camelCase keys the mobile app has always stored.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GotSportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Standing(GotSportModel):
    """One league-table row. GD is taken verbatim from the page, never recomputed."""

    rank: int
    name: str
    team_id: Optional[str] = None
    schedule_link: Optional[str] = None
    mp: int = Field(0, alias="MP")
    w: int = Field(0, alias="W")
    l: int = Field(0, alias="L")  # noqa: E741
    d: int = Field(0, alias="D")
    gf: int = Field(0, alias="GF")
    ga: int = Field(0, alias="GA")
    gd: int = Field(0, alias="GD")
    pts: int = Field(0, alias="PTS")


class ResultsRow(GotSportModel):
    team_name: str
    cells: list[str] = Field(default_factory=list)


class ResultsData(GotSportModel):
    """Head-to-head matrix; ``rows[i].cells[j]`` belongs to ``team_names[j]``."""

    team_names: list[str] = Field(default_factory=list)
    rows: list[ResultsRow] = Field(default_factory=list)


class Fixture(GotSportModel):
    date: str = "TBD"
    time: Optional[str] = None
    home: str
    away: str
    score: Optional[str] = None
    # None means "unknown", not "not played"
    played: Optional[bool] = None
    match_number: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None


class ClubTeam(GotSportModel):
    name: str
    team_id: str
    division: str
    age: Optional[str] = None


class TeamCrest(GotSportModel):
    name: str
    crest_url: str


class GroupSnapshot(GotSportModel):
    """Everything scraped for one group in a single pass."""

    standings: list[Standing] = Field(default_factory=list)
    results: ResultsData = Field(default_factory=ResultsData)
    fixtures: list[Fixture] = Field(default_factory=list)
    league_name: str = ""
    crests: list[TeamCrest] = Field(default_factory=list)


class CachedGroupData(GotSportModel):
    """Group snapshot as persisted by the cache layer."""

    standings: list[Standing]
    results: ResultsData
    fixtures: list[Fixture] = Field(default_factory=list)
    league_name: Optional[str] = None
    # epoch milliseconds at write time; reported as staleness, never used to evict
    updated_at: Optional[float] = None


__all__ = [
    "GotSportModel",
    "Standing",
    "ResultsRow",
    "ResultsData",
    "Fixture",
    "ClubTeam",
    "TeamCrest",
    "GroupSnapshot",
    "CachedGroupData",
]
