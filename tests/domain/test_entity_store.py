from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from scoreledger.adapters.codec import JsonEntityCodec
from scoreledger.domain.errors import CodecError, NotFoundError
from scoreledger.domain.model import EntityKind, Team
from scoreledger.domain.store import EntityStore, StoreConfig, encode_id
from tests.support.builders import make_league, make_match

if TYPE_CHECKING:
    from scoreledger.adapters.memory import InMemoryKeyValueStore


def test_create_if_absent_is_idempotent(entity_store: EntityStore) -> None:
    team = Team(id=1, score=0, name="Arsenal")

    assert entity_store.create_if_absent(team) is True
    assert entity_store.create_if_absent(Team(id=1, score=3, name="Renamed")) is False

    stored = entity_store.get_team(1)
    assert stored.name == "Arsenal"
    assert stored.score == 0


def test_get_missing_entity_raises_not_found(entity_store: EntityStore) -> None:
    with pytest.raises(NotFoundError) as exc:
        entity_store.get_match(404)

    assert exc.value.kind is EntityKind.MATCH
    assert exc.value.entity_id == 404


def test_get_rejects_unfinished_index_kind(entity_store: EntityStore) -> None:
    with pytest.raises(ValueError, match="ids"):
        entity_store.get(EntityKind.MATCH_UNFINISHED, 1)  # type: ignore[call-overload]


def test_league_is_stored_without_matches(entity_store: EntityStore) -> None:
    league = make_league(10, make_match(1001))

    entity_store.create_if_absent(league)

    stored = entity_store.get_league(10)
    assert stored.name == "EPL"
    assert stored.matches == []
    assert len(league.matches) == 1


def test_put_overwrites_existing_record(entity_store: EntityStore) -> None:
    entity_store.create_if_absent(make_match(1001))
    entity_store.put(make_match(1001, home_score=2))

    assert entity_store.get(EntityKind.MATCH, 1001).home.score == 2


def test_decode_failure_surfaces_as_codec_error(
    entity_store: EntityStore,
    memory_kv: InMemoryKeyValueStore,
) -> None:
    memory_kv.set(entity_store.key(EntityKind.TEAM, 7), b"{not json")

    with pytest.raises(CodecError):
        entity_store.get_team(7)


def test_get_match_returns_latest_team_scores(entity_store: EntityStore) -> None:
    match = make_match(1001)
    entity_store.create_if_absent(match.home)
    entity_store.create_if_absent(match.away)
    entity_store.create_if_absent(match)

    entity_store.refresh_team_score(Team(id=1, score=2, name="Arsenal"))

    hydrated = entity_store.get_match(1001)
    raw = entity_store.get(EntityKind.MATCH, 1001)
    assert hydrated.home.score == 2
    assert hydrated.away.score == 0
    assert raw.home.score == 0


def test_get_match_falls_back_to_embedded_team(entity_store: EntityStore) -> None:
    entity_store.create_if_absent(make_match(1001, home_score=1))

    hydrated = entity_store.get_match(1001)

    assert hydrated.home.score == 1
    assert hydrated.home.name == "Arsenal"


def test_refresh_team_score_keeps_first_observed_name(entity_store: EntityStore) -> None:
    entity_store.create_if_absent(Team(id=1, score=0, name="Arsenal", long_name="Arsenal FC"))

    assert entity_store.refresh_team_score(Team(id=1, score=1, name="ARS")) is True
    assert entity_store.refresh_team_score(Team(id=1, score=1, name="ARS")) is False

    stored = entity_store.get_team(1)
    assert stored.score == 1
    assert stored.name == "Arsenal"
    assert stored.long_name == "Arsenal FC"


def test_refresh_team_score_creates_missing_team(entity_store: EntityStore) -> None:
    assert entity_store.refresh_team_score(Team(id=5, score=4, name="Spurs")) is True
    assert entity_store.get_team(5).score == 4


def test_unfinished_index_follows_finished_flag(entity_store: EntityStore) -> None:
    entity_store.mark_unfinished(30)
    entity_store.mark_unfinished(2)
    entity_store.sync_unfinished(make_match(7))

    assert entity_store.list_unfinished_match_ids() == [2, 7, 30]

    entity_store.sync_unfinished(make_match(7, finished=True))
    entity_store.clear_unfinished(30)
    entity_store.clear_unfinished(999)

    assert entity_store.list_unfinished_match_ids() == [2]


def test_malformed_unfinished_entries_are_skipped(
    entity_store: EntityStore,
    memory_kv: InMemoryKeyValueStore,
) -> None:
    entity_store.mark_unfinished(3)
    memory_kv.set(entity_store.key(EntityKind.MATCH_UNFINISHED, 4), b"bad")

    assert entity_store.list_unfinished_match_ids() == [3]


def test_unfinished_scan_ignores_match_records(entity_store: EntityStore) -> None:
    entity_store.create_if_absent(make_match(1001))

    assert entity_store.list_unfinished_match_ids() == []


def test_custom_prefixes_are_used_for_keys(memory_kv: InMemoryKeyValueStore) -> None:
    config = StoreConfig(
        prefixes={
            EntityKind.TEAM: b"t/",
            EntityKind.MATCH: b"m/",
            EntityKind.LEAGUE: b"l/",
            EntityKind.MATCH_UNFINISHED: b"u/",
        }
    )
    store = EntityStore(kv=memory_kv, codec=JsonEntityCodec(), config=config)

    store.create_if_absent(Team(id=1, name="Arsenal"))
    store.mark_unfinished(9)

    assert memory_kv.has(b"t/" + encode_id(1))
    assert memory_kv.get(b"u/" + encode_id(9)) == encode_id(9)
