# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from scoreledger.adapters.codec import JsonEntityCodec
from scoreledger.adapters.memory import InMemoryKeyValueStore
from scoreledger.app import build_entity_store, open_query_service, run_reconciliation_cycle
from scoreledger.config import (
    ConfigurationError,
    ReconciliationConfig,
    configure_logging,
    get_reconciliation_config,
)
from scoreledger.domain.errors import NotFoundError, QueryValidationError
from scoreledger.domain.model import ChangePriority

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from scoreledger.domain.model import Entity

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile football match snapshots")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the data directory)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Run one reconciliation cycle")
    sync.add_argument("--timezone", type=str, help="IANA timezone used for the fetch")
    sync.add_argument("--country-code", type=str, help="Three letter country code")
    sync.add_argument("--date", type=str, help="Day to fetch as YYYY-MM-DD (default: today)")
    sync.add_argument(
        "--threshold",
        type=str,
        help="Lowest change priority that emits an event, e.g. period_length",
    )
    sync.add_argument(
        "--timeout",
        type=float,
        help="Deadline for the whole fetch in seconds",
    )
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Reconcile into a throwaway in-memory store",
    )

    for name in ("team", "match", "league"):
        query = subparsers.add_parser(name, help=f"Show a stored {name}")
        query.add_argument("id", type=int, help=f"{name.capitalize()} id")

    subparsers.add_parser("unfinished", help="List ids of matches not yet finished")

    return parser.parse_args(list(argv))


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid date: {value}") from exc


def _build_config(args: argparse.Namespace) -> ReconciliationConfig:
    base = get_reconciliation_config()
    try:
        threshold = (
            ChangePriority.from_name(args.threshold) if args.threshold else base.event_threshold
        )
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    return ReconciliationConfig(
        timezone=args.timezone or base.timezone,
        country_code=(args.country_code or base.country_code).upper(),
        fetch_timeout_seconds=(
            args.timeout if args.timeout is not None else base.fetch_timeout_seconds
        ),
        event_threshold=threshold,
    )


def _print_entity(entity: Entity) -> None:
    print(JsonEntityCodec().encode(entity).decode())


def _run_sync(args: argparse.Namespace, config: ReconciliationConfig, on_date: date | None) -> None:
    store = (
        build_entity_store(kv=InMemoryKeyValueStore())
        if args.dry_run
        else build_entity_store(database_uri=args.database_uri)
    )
    result = run_reconciliation_cycle(config=config, store=store, on_date=on_date)
    for event in result.events:
        print(json.dumps(event.attributes(), sort_keys=True))
    log.info(
        "Cycle finished: events=%s, created=%s, updated=%s, failures=%s",
        len(result.events),
        result.matches_created,
        result.matches_updated,
        result.failures,
    )


def _run_query(args: argparse.Namespace) -> None:
    service = open_query_service(store=build_entity_store(database_uri=args.database_uri))
    if args.command == "team":
        _print_entity(service.get_team(args.id))
    elif args.command == "match":
        _print_entity(service.get_match(args.id))
    elif args.command == "league":
        _print_entity(service.get_league(args.id))
    elif args.command == "unfinished":
        print(json.dumps(service.list_unfinished_match_ids()))
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    config: ReconciliationConfig | None = None
    on_date: date | None = None
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(verbose=parsed_args.verbose)
        if parsed_args.command == "sync":
            config = _build_config(parsed_args)
            on_date = _parse_date(parsed_args.date) if parsed_args.date else None
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "sync":
            _run_sync(parsed_args, config or get_reconciliation_config(), on_date)
        else:
            _run_query(parsed_args)
    except QueryValidationError:
        log.exception("Invalid query")
        sys.exit(2)
    except NotFoundError:
        log.exception("Entity not found")
        sys.exit(3)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
