from __future__ import annotations

from scoreledger.adapters.memory import InMemoryKeyValueStore
from scoreledger.app import build_entity_store, open_query_service, run_reconciliation_cycle
from scoreledger.config import ReconciliationConfig
from scoreledger.domain.model import ChangePriority
from tests.support.builders import FakeSnapshotFetcher, make_league, make_match


def test_run_reconciliation_cycle_builds_request_from_config() -> None:
    store = build_entity_store(kv=InMemoryKeyValueStore())
    fetcher = FakeSnapshotFetcher(snapshots=[[make_league(10, make_match(1001))]])
    config = ReconciliationConfig(
        timezone="Europe/London",
        country_code="ENG",
        fetch_timeout_seconds=1.5,
        event_threshold=ChangePriority.SCORE,
    )

    result = run_reconciliation_cycle(config=config, fetcher=fetcher, store=store)

    (request,) = fetcher.requests
    assert request.timezone == "Europe/London"
    assert request.country_code == "ENG"
    assert request.timeout_seconds == 1.5
    assert request.on_date is None
    assert [event.event_name for event in result.events] == ["new_league", "new_match"]


def test_default_store_uses_configured_database() -> None:
    store = build_entity_store(database_uri="sqlite+pysqlite:///:memory:")
    fetcher = FakeSnapshotFetcher(snapshots=[[make_league(10, make_match(1001))]])

    run_reconciliation_cycle(config=ReconciliationConfig(), fetcher=fetcher, store=store)

    service = open_query_service(store=store)
    assert service.get_match(1001).display_name == "Arsenal/Chelsea"
    assert service.list_unfinished_match_ids() == [1001]
