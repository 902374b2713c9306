"""Notifications emitted by a reconciliation cycle.

Attribute keys are a stable contract for downstream consumers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from scoreledger.domain.model import ChangePriority, League, Match


@dataclass(frozen=True, slots=True)
class NewLeague:
    NAME: ClassVar[str] = "new_league"

    id: int
    name: str
    group_name: str

    @classmethod
    def from_league(cls, league: League) -> NewLeague:
        return cls(id=league.id, name=league.name, group_name=league.group_name)

    @property
    def event_name(self) -> str:
        return self.NAME

    def attributes(self) -> dict[str, str]:
        return {
            "event": self.event_name,
            "id": str(self.id),
            "league": self.name,
            "group_name": self.group_name,
        }


@dataclass(frozen=True, slots=True)
class _MatchEvent(ABC):
    id: int
    league_id: int
    home_id: int
    away_id: int
    home_name: str
    away_name: str

    @property
    @abstractmethod
    def event_name(self) -> str: ...

    def attributes(self) -> dict[str, str]:
        return {
            "event": self.event_name,
            "id": str(self.id),
            "league_id": str(self.league_id),
            "home_id": str(self.home_id),
            "away_id": str(self.away_id),
            "home_name": self.home_name,
            "away_name": self.away_name,
            "match": f"{self.home_name}/{self.away_name}",
        }


@dataclass(frozen=True, slots=True)
class NewMatch(_MatchEvent):
    NAME: ClassVar[str] = "new_match"

    @classmethod
    def from_match(cls, match: Match) -> NewMatch:
        return cls(**_match_fields(match))

    @property
    def event_name(self) -> str:
        return self.NAME


@dataclass(frozen=True, slots=True)
class MatchChanged(_MatchEvent):
    priority: ChangePriority

    @classmethod
    def from_match(cls, match: Match, priority: ChangePriority) -> MatchChanged:
        return cls(**_match_fields(match), priority=priority)

    @property
    def event_name(self) -> str:
        return self.priority.event_name


type LedgerEvent = NewLeague | NewMatch | MatchChanged


def _match_fields(match: Match) -> dict[str, int | str]:
    return {
        "id": match.id,
        "league_id": match.league_id,
        "home_id": match.home.id,
        "away_id": match.away.id,
        "home_name": match.home.name,
        "away_name": match.away.name,
    }
