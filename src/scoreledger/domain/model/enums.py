"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class EntityKind(StrEnum):
    """Kinds of records held by the entity store.

    The value doubles as the default key prefix of the kind.
    """

    TEAM = "team"
    MATCH = "match"
    LEAGUE = "league"
    MATCH_UNFINISHED = "match_unfinished"


class ChangePriority(IntEnum):
    """Outcome of comparing two snapshots of the same match.

    Members are totally ordered: a higher value dominates a lower one.
    """

    NO_CHANGE = 0
    LIVE_TIME = 1
    PERIOD_LENGTH = 2
    ONGOING = 3
    STARTED = 4
    FINISHED = 5
    CANCELLED = 6
    SCORE = 7

    @property
    def event_name(self) -> str:
        if self is ChangePriority.NO_CHANGE:
            return "match_no_changes"
        return f"match_{self.name.lower()}"

    @classmethod
    def from_name(cls, value: str) -> ChangePriority:
        """Parse ``score``, ``SCORE`` or ``match_score`` into a priority."""

        normalized = value.strip().lower().removeprefix("match_")
        if normalized == "no_changes":
            normalized = "no_change"
        try:
            return cls[normalized.upper()]
        except KeyError:
            raise ValueError(f"Unknown change priority: {value}") from None
