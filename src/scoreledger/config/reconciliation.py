"""Reconciliation cycle defaults."""

from __future__ import annotations

from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from scoreledger.domain.model import ChangePriority
from scoreledger.domain.ports.fetching import DEFAULT_COUNTRY_CODE, DEFAULT_FETCH_TIMEOUT_SECONDS
from scoreledger.domain.reconciliation.classify import DEFAULT_EVENT_THRESHOLD

from .env import env_float, optional_env_var
from .errors import ConfigurationError

DEFAULT_TIMEZONE = "Europe/Istanbul"


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    timezone: str = DEFAULT_TIMEZONE
    country_code: str = DEFAULT_COUNTRY_CODE
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    event_threshold: ChangePriority = DEFAULT_EVENT_THRESHOLD

    def __post_init__(self) -> None:
        validate_timezone(self.timezone)
        if self.fetch_timeout_seconds <= 0:
            raise ConfigurationError("Fetch timeout must be positive")
        if self.event_threshold is ChangePriority.NO_CHANGE:
            raise ConfigurationError("Event threshold must name an actual change")


def validate_timezone(name: str) -> str:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone: {name}") from exc
    return name


def get_reconciliation_config() -> ReconciliationConfig:
    raw_threshold = optional_env_var(
        "SCORELEDGER_EVENT_THRESHOLD", DEFAULT_EVENT_THRESHOLD.name.lower()
    )
    try:
        threshold = ChangePriority.from_name(raw_threshold)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    return ReconciliationConfig(
        timezone=optional_env_var("SCORELEDGER_TIMEZONE", DEFAULT_TIMEZONE),
        country_code=optional_env_var("SCORELEDGER_COUNTRY_CODE", DEFAULT_COUNTRY_CODE).upper(),
        fetch_timeout_seconds=env_float(
            "SCORELEDGER_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT_SECONDS
        ),
        event_threshold=threshold,
    )
