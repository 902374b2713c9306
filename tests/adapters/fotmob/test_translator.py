from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from scoreledger.adapters.fotmob import MatchPayload, parse_match, parse_snapshot


@pytest.fixture
def match_payload() -> dict[str, object]:
    return {
        "id": 4_506_123,
        "leagueId": 47,
        "time": "17.10.2026 17:00",
        "home": {"id": 9825, "score": 2, "name": "Arsenal", "longName": "Arsenal"},
        "away": {"id": 8455, "score": 1, "name": "Chelsea", "longName": "Chelsea"},
        "eliminatedTeamId": None,
        "statusId": 3,
        "tournamentStage": "8",
        "status": {
            "utcTime": "2026-10-17T14:00:00.000Z",
            "periodLength": 45,
            "started": True,
            "cancelled": False,
            "finished": False,
            "ongoing": True,
            "liveTime": {"short": "67'", "long": "66:31", "maxTime": 90, "addedTime": 0},
        },
        "timeTS": 1_792_245_600_000,
        "extra": "ignored",
    }


def test_parse_match_maps_fields(match_payload: dict[str, object]) -> None:
    match = parse_match(MatchPayload.model_validate(match_payload))

    assert match.id == 4_506_123
    assert match.league_id == 47
    assert (match.home.name, match.home.score) == ("Arsenal", 2)
    assert (match.away.id, match.away.score) == (8455, 1)
    assert match.eliminated_team_id is None
    assert match.tournament_stage == "8"
    assert match.status.utc_time == datetime(2026, 10, 17, 14, 0, tzinfo=UTC)
    assert match.status.ongoing
    assert match.status.live_time.long == "66:31"
    assert match.status.live_time.max_time == 90
    assert match.timestamp == 1_792_245_600_000
    assert match.display_name == "Arsenal/Chelsea"


def test_not_started_match_has_defaults(match_payload: dict[str, object]) -> None:
    match_payload["home"] = {"id": 9825, "name": "Arsenal"}
    match_payload["status"] = {"utcTime": "2026-10-17T19:00:00Z", "started": False}
    match_payload["tournamentStage"] = 3

    match = parse_match(MatchPayload.model_validate(match_payload))

    assert match.home.score == 0
    assert match.tournament_stage == "3"
    assert match.status.live_time.long == ""
    assert not match.status.started


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(8455, 8455), ("8455", 8455), ("", None), (None, None), (False, None), ("n/a", None)],
)
def test_eliminated_team_id_is_optional(
    match_payload: dict[str, object], raw: object, expected: int | None
) -> None:
    match_payload["eliminatedTeamId"] = raw

    assert parse_match(MatchPayload.model_validate(match_payload)).eliminated_team_id == expected


def test_parse_snapshot_keeps_feed_order(match_payload: dict[str, object]) -> None:
    payload = {
        "leagues": [
            {
                "id": 47,
                "name": "Premier League",
                "ccode": "ENG",
                "primaryId": 47,
                "matches": [match_payload],
            },
            {
                "id": 42,
                "name": "Champions League",
                "isGroup": True,
                "groupName": "Group A",
                "ccode": "INT",
                "primaryId": 42,
                "matches": [],
            },
        ]
    }

    leagues = parse_snapshot(payload)

    assert [league.id for league in leagues] == [47, 42]
    assert leagues[0].matches[0].id == 4_506_123
    assert leagues[1].is_group
    assert leagues[1].group_name == "Group A"


def test_match_without_id_is_rejected(match_payload: dict[str, object]) -> None:
    del match_payload["id"]

    with pytest.raises(ValidationError):
        MatchPayload.model_validate(match_payload)
