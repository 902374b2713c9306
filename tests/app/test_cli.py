from __future__ import annotations

import json
from datetime import date
from typing import TYPE_CHECKING

import pytest

from scoreledger.adapters.codec import JsonEntityCodec
from scoreledger.adapters.memory import InMemoryKeyValueStore
from scoreledger.domain.model import ChangePriority
from scoreledger.domain.reconciliation import CycleResult, NewLeague, Reconciler
from scoreledger.domain.store import EntityStore
from scoreledger.ui import cli as cli_module
from tests.support.builders import make_league, make_match

if TYPE_CHECKING:
    from scoreledger.config import ReconciliationConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SCORELEDGER_TIMEZONE", "SCORELEDGER_EVENT_THRESHOLD"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def populated_store(monkeypatch: pytest.MonkeyPatch) -> EntityStore:
    store = EntityStore(kv=InMemoryKeyValueStore(), codec=JsonEntityCodec())
    Reconciler(store).reconcile([make_league(10, make_match(1001))])

    def fake_build(**_: object) -> EntityStore:
        return store

    monkeypatch.setattr(cli_module, "build_entity_store", fake_build)
    return store


def test_sync_passes_config_and_date(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    captured: dict[str, object] = {}

    def fake_cycle(
        *,
        config: ReconciliationConfig,
        store: EntityStore,
        on_date: date | None,
    ) -> CycleResult:
        captured.update(config=config, store=store, on_date=on_date)
        return CycleResult(events=[NewLeague(id=10, name="EPL", group_name="")])

    monkeypatch.setattr(cli_module, "run_reconciliation_cycle", fake_cycle)

    cli_module.main(
        [
            "sync",
            "--dry-run",
            "--timezone",
            "Europe/London",
            "--country-code",
            "eng",
            "--date",
            "2026-10-17",
            "--threshold",
            "score",
        ]
    )

    config = captured["config"]
    assert config.timezone == "Europe/London"  # type: ignore[attr-defined]
    assert config.country_code == "ENG"  # type: ignore[attr-defined]
    assert config.event_threshold is ChangePriority.SCORE  # type: ignore[attr-defined]
    assert captured["on_date"] == date(2026, 10, 17)
    assert isinstance(captured["store"], EntityStore)
    printed = json.loads(capsys.readouterr().out)
    assert printed == {"event": "new_league", "group_name": "", "id": "10", "league": "EPL"}


@pytest.mark.parametrize(
    "argv",
    [
        ["sync", "--date", "17/10/2026"],
        ["sync", "--threshold", "kickoff"],
        ["sync", "--timezone", "Atlantis/Capital"],
    ],
)
def test_sync_validation_errors_exit_with_2(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        cli_module.main(argv)

    assert exc.value.code == 2


def test_match_query_prints_json(
    populated_store: EntityStore,
    capsys: pytest.CaptureFixture[str],
) -> None:
    cli_module.main(["match", "1001"])

    printed = json.loads(capsys.readouterr().out)
    assert printed["id"] == 1001
    assert printed["home"]["name"] == "Arsenal"
    assert printed["eliminated_team_id"] is None


def test_unfinished_query(
    populated_store: EntityStore,
    capsys: pytest.CaptureFixture[str],
) -> None:
    cli_module.main(["unfinished"])

    assert json.loads(capsys.readouterr().out) == [1001]


def test_missing_entity_exits_with_3(populated_store: EntityStore) -> None:
    with pytest.raises(SystemExit) as exc:
        cli_module.main(["team", "77"])

    assert exc.value.code == 3


def test_non_positive_id_exits_with_2(populated_store: EntityStore) -> None:
    with pytest.raises(SystemExit) as exc:
        cli_module.main(["league", "0"])

    assert exc.value.code == 2


def test_unexpected_failure_exits_with_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_cycle(**_: object) -> CycleResult:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "run_reconciliation_cycle", failing_cycle)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(["sync", "--dry-run"])

    assert exc.value.code == 1
