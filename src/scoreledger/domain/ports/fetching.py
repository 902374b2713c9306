"""Ports for fetching snapshots from the upstream feed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from scoreledger.domain.model import League

DEFAULT_COUNTRY_CODE = "GBR"
DEFAULT_FETCH_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True, slots=True)
class FetchRequest:
    """Parameters of a single snapshot fetch."""

    timezone: str
    country_code: str = DEFAULT_COUNTRY_CODE
    # defaults to "today" as seen from ``timezone``
    on_date: date | None = None
    # deadline for the whole fetch, retries included
    timeout_seconds: float | None = DEFAULT_FETCH_TIMEOUT_SECONDS


@runtime_checkable
class SnapshotFetcher(Protocol):
    """Callable port returning the leagues (with nested matches) of one snapshot.

    Raises ``FetchError`` when no usable snapshot could be retrieved.
    """

    def __call__(self, request: FetchRequest) -> Sequence[League]: ...


__all__ = ["FetchRequest", "SnapshotFetcher"]
