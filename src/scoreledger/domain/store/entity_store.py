"""Durable, idempotent persistence of teams, matches and leagues.

The store owns key derivation and the unfinished-match side index. It assumes
serialized access during a reconciliation cycle but never holds a lock: the
existence check in :meth:`EntityStore.create_if_absent` and the following
write are not atomic against an external writer, which resolves to
last-write-wins at the substrate.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING, overload

from scoreledger.domain.errors import NotFoundError
from scoreledger.domain.model import EntityKind, League, Match, Team

from .keys import StoreConfig, decode_id, encode_id

if TYPE_CHECKING:
    from typing import Literal

    from scoreledger.domain.model import Entity
    from scoreledger.domain.ports import EntityCodec, KeyValueStore

log = getLogger(__name__)


@dataclass(slots=True)
class EntityStore:
    kv: KeyValueStore
    codec: EntityCodec
    config: StoreConfig = field(default_factory=StoreConfig)

    def key(self, kind: EntityKind, entity_id: int) -> bytes:
        return self.config.key(kind, entity_id)

    def create_if_absent(self, entity: Entity) -> bool:
        """Write ``entity`` unless a record with its key already exists.

        Returns ``True`` when a write happened. An existing record is not an
        error and is left untouched.
        """

        key = self.key(entity.KIND, entity.id)
        if self.kv.has(key):
            return False
        self.kv.set(key, self.codec.encode(self._storable(entity)))
        return True

    def put(self, entity: Entity) -> None:
        """Overwrite the record of ``entity`` unconditionally."""

        key = self.key(entity.KIND, entity.id)
        self.kv.set(key, self.codec.encode(self._storable(entity)))

    @overload
    def get(self, kind: Literal[EntityKind.TEAM], entity_id: int) -> Team: ...

    @overload
    def get(self, kind: Literal[EntityKind.MATCH], entity_id: int) -> Match: ...

    @overload
    def get(self, kind: Literal[EntityKind.LEAGUE], entity_id: int) -> League: ...

    def get(self, kind: EntityKind, entity_id: int) -> Entity:
        """Return the stored record as written, without team hydration."""

        if kind is EntityKind.MATCH_UNFINISHED:
            raise ValueError("The unfinished index holds ids, not entities")
        data = self.kv.get(self.key(kind, entity_id))
        if data is None:
            raise NotFoundError(kind, entity_id)
        return self.codec.decode(kind, data)

    def get_team(self, team_id: int) -> Team:
        return self.get(EntityKind.TEAM, team_id)

    def get_league(self, league_id: int) -> League:
        return self.get(EntityKind.LEAGUE, league_id)

    def get_match(self, match_id: int) -> Match:
        """Return a match with ``home``/``away`` re-read from the team records.

        The match record keeps the team snapshot of its last write; team
        records carry the latest known identity and score. When a team record
        is missing the embedded snapshot is returned for that side.
        """

        match = self.get(EntityKind.MATCH, match_id)
        match.home = self._hydrate_team(match.home)
        match.away = self._hydrate_team(match.away)
        return match

    def refresh_team_score(self, team: Team) -> bool:
        """Bring the stored score of ``team`` up to date.

        Names keep the value they had when the team was first observed.
        Returns whether a write happened.
        """

        try:
            stored = self.get_team(team.id)
        except NotFoundError:
            return self.create_if_absent(team)
        if stored.score == team.score:
            return False
        self.put(replace(stored, score=team.score))
        return True

    def mark_unfinished(self, match_id: int) -> None:
        # the value repeats the key suffix so a scan needs no key parsing
        self.kv.set(self.key(EntityKind.MATCH_UNFINISHED, match_id), encode_id(match_id))

    def clear_unfinished(self, match_id: int) -> None:
        self.kv.delete(self.key(EntityKind.MATCH_UNFINISHED, match_id))

    def sync_unfinished(self, match: Match) -> None:
        """Make index membership of ``match`` follow its ``finished`` flag."""

        key = self.key(EntityKind.MATCH_UNFINISHED, match.id)
        current = self.kv.get(key)
        if match.status.finished:
            if current is not None:
                self.kv.delete(key)
        elif current != encode_id(match.id):
            self.kv.set(key, encode_id(match.id))

    def list_unfinished_match_ids(self) -> list[int]:
        """Return ids of unfinished matches in ascending order.

        Malformed index entries are skipped rather than failing the scan.
        """

        ids: list[int] = []
        for key, value in self.kv.iterate(self.config.prefix(EntityKind.MATCH_UNFINISHED)):
            try:
                ids.append(decode_id(value))
            except ValueError:
                log.warning("Skipping malformed unfinished index entry %r", key)
        return ids

    def _hydrate_team(self, embedded: Team) -> Team:
        try:
            return self.get_team(embedded.id)
        except NotFoundError:
            log.debug("Team %s has no record; using embedded snapshot", embedded.id)
            return embedded

    @staticmethod
    def _storable(entity: Entity) -> Entity:
        if isinstance(entity, League):
            return entity.without_matches()
        return entity
