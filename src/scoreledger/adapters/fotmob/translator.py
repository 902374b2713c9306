"""Translate FotMob payloads into ledger entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoreledger.domain.model import League, LiveTime, Match, Status, Team

from .schema import LeaguePayload, MatchesResponse

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .schema import MatchPayload, StatusPayload, TeamPayload


def parse_team(payload: TeamPayload) -> Team:
    return Team(
        id=payload.id,
        score=payload.score,
        name=payload.name,
        long_name=payload.long_name,
    )


def parse_status(payload: StatusPayload) -> Status:
    live = payload.live_time
    return Status(
        utc_time=payload.utc_time,
        period_length=payload.period_length,
        started=payload.started,
        cancelled=payload.cancelled,
        finished=payload.finished,
        ongoing=payload.ongoing,
        live_time=(
            LiveTime(long=live.long, max_time=live.max_time, added_time=live.added_time)
            if live is not None
            else LiveTime()
        ),
    )


def parse_match(payload: MatchPayload) -> Match:
    return Match(
        id=payload.id,
        league_id=payload.league_id,
        time=payload.time,
        home=parse_team(payload.home),
        away=parse_team(payload.away),
        eliminated_team_id=payload.eliminated_team_id,
        status_id=payload.status_id,
        tournament_stage=payload.tournament_stage,
        status=parse_status(payload.status),
        timestamp=payload.time_ts,
    )


def parse_league(payload: LeaguePayload | Mapping[str, object]) -> League:
    validated = (
        payload if isinstance(payload, LeaguePayload) else LeaguePayload.model_validate(payload)
    )
    return League(
        id=validated.id,
        name=validated.name,
        is_group=validated.is_group,
        group_name=validated.group_name,
        ccode=validated.ccode,
        primary_id=validated.primary_id,
        matches=[parse_match(match) for match in validated.matches],
    )


def parse_snapshot(payload: MatchesResponse | Mapping[str, object]) -> list[League]:
    """Return the leagues of a matches response in feed order."""

    validated = (
        payload if isinstance(payload, MatchesResponse) else MatchesResponse.model_validate(payload)
    )
    return [parse_league(league) for league in validated.leagues]
