"""Read-only access to stored entities.

Requests are validated before they reach the store. Missing entities surface
as ``NotFoundError``; any other store or codec failure is wrapped in
``QueryInternalError`` so callers can tell the two apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from scoreledger.domain.errors import (
    CodecError,
    QueryInternalError,
    QueryValidationError,
    StoreError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreledger.domain.model import League, Match, Team
    from scoreledger.domain.store import EntityStore


def _require_positive_id(entity_id: int) -> int:
    if isinstance(entity_id, bool) or not isinstance(entity_id, int):
        raise QueryValidationError(f"invalid id: {entity_id!r}")
    if entity_id <= 0:
        raise QueryValidationError(f"invalid id: {entity_id}")
    return entity_id


def _internal[T](read: Callable[[], T]) -> T:
    try:
        return read()
    except (CodecError, StoreError) as exc:
        raise QueryInternalError(str(exc)) from exc


@dataclass(slots=True)
class QueryService:
    store: EntityStore

    def get_team(self, team_id: int) -> Team:
        team_id = _require_positive_id(team_id)
        return _internal(lambda: self.store.get_team(team_id))

    def get_match(self, match_id: int) -> Match:
        """Return a match whose teams reflect the latest stored team records."""

        match_id = _require_positive_id(match_id)
        return _internal(lambda: self.store.get_match(match_id))

    def get_league(self, league_id: int) -> League:
        league_id = _require_positive_id(league_id)
        return _internal(lambda: self.store.get_league(league_id))

    def list_unfinished_match_ids(self) -> list[int]:
        return _internal(self.store.list_unfinished_match_ids)
