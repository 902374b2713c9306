"""Reconciliation of one fetched snapshot into the entity store.

A cycle walks leagues and their matches in fetch order. New entities are
created once; existing matches are compared with their stored snapshot and
overwritten when anything changed. Failures are isolated per entity: a codec
or store error skips that entity and the cycle carries on. Writes are durable
as soon as they are issued; there is no cycle-wide transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from scoreledger.domain.errors import EntityError
from scoreledger.domain.model import ChangePriority, EntityKind

from .classify import DEFAULT_EVENT_THRESHOLD, classify_change, is_event_worthy
from .events import MatchChanged, NewLeague, NewMatch

if TYPE_CHECKING:
    from collections.abc import Iterable

    from scoreledger.domain.model import League, Match, Team
    from scoreledger.domain.ports import FetchRequest, SnapshotFetcher
    from scoreledger.domain.store import EntityStore

    from .events import LedgerEvent

log = getLogger(__name__)


@dataclass(slots=True)
class CycleResult:
    """Outcome of one reconciliation cycle."""

    events: list[LedgerEvent] = field(default_factory=list)
    leagues_seen: int = 0
    leagues_created: int = 0
    matches_seen: int = 0
    matches_created: int = 0
    matches_updated: int = 0
    failures: int = 0


@dataclass(slots=True)
class Reconciler:
    store: EntityStore
    event_threshold: ChangePriority = DEFAULT_EVENT_THRESHOLD

    def reconcile(self, leagues: Iterable[League]) -> CycleResult:
        """Apply ``leagues`` to the store and return the emitted events in order."""

        result = CycleResult()
        for league in leagues:
            result.leagues_seen += 1
            self._reconcile_league(league, result)
            for match in league.matches:
                result.matches_seen += 1
                self._reconcile_match(match, result)

        log.info(
            "Reconciliation finished: leagues=%s (new=%s), matches=%s (new=%s, updated=%s), "
            "events=%s, failures=%s",
            result.leagues_seen,
            result.leagues_created,
            result.matches_seen,
            result.matches_created,
            result.matches_updated,
            len(result.events),
            result.failures,
        )
        return result

    def _reconcile_league(self, league: League, result: CycleResult) -> None:
        try:
            created = self.store.create_if_absent(league)
        except EntityError:
            # matches are still reconciled; the league is retried next cycle
            log.exception("Failed to save league %s (%s)", league.id, league.name)
            result.failures += 1
            return
        if created:
            log.info(
                "Detected new league %s (%s, group=%s)",
                league.id,
                league.name,
                league.group_name,
            )
            result.leagues_created += 1
            result.events.append(NewLeague.from_league(league))

    def _save_team(self, team: Team, *, side: str, match: Match, result: CycleResult) -> None:
        try:
            self.store.create_if_absent(team)
        except EntityError:
            log.exception(
                "Failed to save %s team %s (%s) of match %s", side, team.id, team.name, match.id
            )
            result.failures += 1

    def _reconcile_match(self, match: Match, result: CycleResult) -> None:
        self._save_team(match.home, side="home", match=match, result=result)
        self._save_team(match.away, side="away", match=match, result=result)

        context = _match_context(match)
        try:
            created = self.store.create_if_absent(match)
        except EntityError:
            log.exception("Failed to save match %s", context)
            result.failures += 1
            return

        if created:
            log.info("Detected new match %s", context)
            result.matches_created += 1
            result.events.append(NewMatch.from_match(match))
            # a team record may predate this match
            self._refresh_scores(match, context, result)
            self._sync_index(match, context, result)
            return

        try:
            stored = self.store.get(EntityKind.MATCH, match.id)
        except EntityError:
            log.exception("Failed to read stored match %s for comparison", context)
            result.failures += 1
            return

        priority = classify_change(match, stored)
        if priority is ChangePriority.NO_CHANGE:
            log.debug("Match %s has no changes", context)
            # repairs an index write that failed in an earlier cycle
            self._sync_index(stored, context, result)
            return

        try:
            self.store.put(match)
        except EntityError:
            log.exception("Failed to update match %s (%s)", context, priority.event_name)
            result.failures += 1
            return
        result.matches_updated += 1

        self._refresh_scores(match, context, result)
        self._sync_index(match, context, result)

        if is_event_worthy(priority, self.event_threshold):
            log.info("Match %s changed: %s", context, priority.event_name)
            result.events.append(MatchChanged.from_match(match, priority))
        else:
            log.debug("Match %s updated silently: %s", context, priority.event_name)

    def _sync_index(self, match: Match, context: str, result: CycleResult) -> None:
        try:
            self.store.sync_unfinished(match)
        except EntityError:
            log.exception("Failed to update unfinished index for match %s", context)
            result.failures += 1

    def _refresh_scores(self, match: Match, context: str, result: CycleResult) -> None:
        for team in (match.home, match.away):
            try:
                self.store.refresh_team_score(team)
            except EntityError:
                log.exception("Failed to refresh score of team %s for match %s", team.id, context)
                result.failures += 1


def run_cycle(
    fetcher: SnapshotFetcher,
    request: FetchRequest,
    reconciler: Reconciler,
) -> CycleResult:
    """Fetch one snapshot and reconcile it.

    A ``FetchError`` propagates before any store mutation happens.
    """

    log.info(
        "Fetching snapshot: timezone=%s, country=%s", request.timezone, request.country_code
    )
    leagues = fetcher(request)
    return reconciler.reconcile(leagues)


def _match_context(match: Match) -> str:
    return (
        f"{match.id} (league_id={match.league_id}, home_id={match.home.id}, "
        f"away_id={match.away.id}, {match.display_name})"
    )
