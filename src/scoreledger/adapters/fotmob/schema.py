"""Pydantic models describing the FotMob ``/api/data/matches`` payload."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _optional_team_id(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        return int(stripped) if stripped.isdigit() else None
    return None


class FotMobBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TeamPayload(FotMobBaseModel):
    id: int
    score: int = 0
    name: str = ""
    long_name: str = Field(default="", alias="longName")

    @field_validator("score", mode="before")
    @classmethod
    def _missing_score(cls, value: object) -> object:
        return 0 if value is None else value


class LiveTimePayload(FotMobBaseModel):
    long: str = ""
    max_time: int = Field(default=0, alias="maxTime")
    added_time: int = Field(default=0, alias="addedTime")


class StatusPayload(FotMobBaseModel):
    utc_time: datetime | None = Field(default=None, alias="utcTime")
    period_length: int = Field(default=0, alias="periodLength")
    started: bool = False
    cancelled: bool = False
    finished: bool = False
    ongoing: bool = False
    live_time: LiveTimePayload | None = Field(default=None, alias="liveTime")


class MatchPayload(FotMobBaseModel):
    id: int
    league_id: int = Field(alias="leagueId")
    time: str = ""
    home: TeamPayload
    away: TeamPayload
    eliminated_team_id: int | None = Field(default=None, alias="eliminatedTeamId")
    status_id: int = Field(default=0, alias="statusId")
    tournament_stage: str = Field(default="", alias="tournamentStage")
    status: StatusPayload = Field(default_factory=StatusPayload)
    time_ts: int = Field(default=0, alias="timeTS")

    _normalize_eliminated = field_validator("eliminated_team_id", mode="before")(
        _optional_team_id
    )

    @field_validator("tournament_stage", mode="before")
    @classmethod
    def _stage_to_str(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, int):
            return str(value)
        return value


class LeaguePayload(FotMobBaseModel):
    id: int
    name: str = ""
    is_group: bool = Field(default=False, alias="isGroup")
    group_name: str = Field(default="", alias="groupName")
    ccode: str = ""
    primary_id: int = Field(default=0, alias="primaryId")
    matches: list[MatchPayload] = Field(default_factory=list)


class MatchesResponse(FotMobBaseModel):
    leagues: list[LeaguePayload] = Field(default_factory=list)
