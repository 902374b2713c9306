"""Domain model for the score ledger."""

from __future__ import annotations

from .entities import Entity, League, LiveTime, Match, Status, Team
from .enums import ChangePriority, EntityKind

__all__ = [
    "ChangePriority",
    "Entity",
    "EntityKind",
    "League",
    "LiveTime",
    "Match",
    "Status",
    "Team",
]
