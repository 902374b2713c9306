"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from scoreledger.adapters.codec import JsonEntityCodec
from scoreledger.adapters.fotmob import FotMobFetcher
from scoreledger.adapters.sqlalchemy import is_started, open_kv_store, startup
from scoreledger.config import get_reconciliation_config
from scoreledger.domain.ports import FetchRequest
from scoreledger.domain.queries import QueryService
from scoreledger.domain.reconciliation import CycleResult, Reconciler, run_cycle
from scoreledger.domain.store import EntityStore, StoreConfig

if TYPE_CHECKING:
    from datetime import date

    from scoreledger.config import ReconciliationConfig
    from scoreledger.domain.ports import KeyValueStore, SnapshotFetcher


log = getLogger(__name__)


def build_entity_store(
    *,
    kv: KeyValueStore | None = None,
    database_uri: str | None = None,
    store_config: StoreConfig | None = None,
) -> EntityStore:
    """Return an entity store over ``kv`` or over the configured database."""

    if kv is None:
        if not is_started():
            startup(database_uri=database_uri)
        kv = open_kv_store()
    return EntityStore(kv=kv, codec=JsonEntityCodec(), config=store_config or StoreConfig())


def run_reconciliation_cycle(
    *,
    config: ReconciliationConfig | None = None,
    fetcher: SnapshotFetcher | None = None,
    store: EntityStore | None = None,
    on_date: date | None = None,
) -> CycleResult:
    """Fetch today's snapshot and reconcile it into the store."""

    effective_config = config or get_reconciliation_config()
    effective_store = store or build_entity_store()
    effective_fetcher = fetcher or FotMobFetcher()
    request = FetchRequest(
        timezone=effective_config.timezone,
        country_code=effective_config.country_code,
        on_date=on_date,
        timeout_seconds=effective_config.fetch_timeout_seconds,
    )
    log.info(
        "Starting reconciliation cycle: timezone=%s, country=%s, date=%s, threshold=%s",
        request.timezone,
        request.country_code,
        on_date or "today",
        effective_config.event_threshold.event_name,
    )

    reconciler = Reconciler(effective_store, event_threshold=effective_config.event_threshold)
    result = run_cycle(effective_fetcher, request, reconciler)

    for event in result.events:
        log.info("Event %s: %s", event.event_name, event.attributes())
    return result


def open_query_service(*, store: EntityStore | None = None) -> QueryService:
    """Return the read-only query boundary over the configured store."""

    return QueryService(store or build_entity_store())
