"""Football entities tracked by the ledger.

Teams, matches and leagues are identified by the integer ids handed out by the
upstream feed. Records are plain dataclasses; persistence concerns (keys,
encoding) live in the entity store and the codec adapter.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime  # noqa: TC003
from typing import ClassVar

from .enums import EntityKind


@dataclass(slots=True)
class Team:
    KIND: ClassVar[EntityKind] = EntityKind.TEAM

    id: int
    score: int = 0
    name: str = ""
    long_name: str = ""


@dataclass(slots=True)
class LiveTime:
    long: str = ""
    max_time: int = 0
    added_time: int = 0


@dataclass(slots=True)
class Status:
    """Live progress of a match."""

    utc_time: datetime | None = None
    period_length: int = 0
    started: bool = False
    cancelled: bool = False
    finished: bool = False
    ongoing: bool = False
    live_time: LiveTime = field(default_factory=LiveTime)


@dataclass(slots=True)
class Match:
    KIND: ClassVar[EntityKind] = EntityKind.MATCH

    id: int
    league_id: int
    home: Team
    away: Team
    time: str = ""
    # None means the feed did not name an eliminated team
    eliminated_team_id: int | None = None
    status_id: int = 0
    tournament_stage: str = ""
    status: Status = field(default_factory=Status)
    timestamp: int = 0

    @property
    def display_name(self) -> str:
        return f"{self.home.name}/{self.away.name}"

    @property
    def is_finished(self) -> bool:
        return self.status.finished


@dataclass(slots=True)
class League:
    KIND: ClassVar[EntityKind] = EntityKind.LEAGUE

    id: int
    name: str = ""
    is_group: bool = False
    group_name: str = ""
    ccode: str = ""
    primary_id: int = 0
    # only populated on fetched snapshots; persisted leagues never keep matches
    matches: list[Match] = field(default_factory=list)

    def without_matches(self) -> League:
        """Return the record shape that is written to the store."""

        return replace(self, matches=[])


type Entity = Team | Match | League
