"""HTTP client for the FotMob matches feed."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx
from pydantic import ValidationError

from scoreledger.adapters.http_resilience import ResilientClient
from scoreledger.config.feed import FeedConfig, get_feed_config
from scoreledger.domain.errors import FetchError

from .schema import MatchesResponse
from .translator import parse_snapshot

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreledger.config.http_resilience import ResilienceConfig
    from scoreledger.domain.model import League
    from scoreledger.domain.ports import FetchRequest, SnapshotFetcher

log = getLogger(__name__)

MATCHES_PATH = "/api/data/matches"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _should_cache_payload(payload: object) -> bool:
    """Only cache snapshots in which no match is being played."""

    try:
        response = MatchesResponse.model_validate(payload)
    except ValidationError:
        return False
    return not any(
        match.status.ongoing or (match.status.started and not match.status.finished)
        for league in response.leagues
        for match in league.matches
    )


def _default_feed_config() -> FeedConfig:
    return get_feed_config(cache_predicate=_should_cache_payload)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    # every fetch builds a fresh client; the sqlite cache is what carries over
    return ResilientClient(config)


@dataclass(slots=True)
class FotMobFetcher:
    config: FeedConfig = field(default_factory=_default_feed_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    clock: Callable[[], datetime] = field(default=_utcnow)

    def __call__(self, request: FetchRequest) -> list[League]:
        return asyncio.run(self._fetch_async(request))

    def build_params(self, request: FetchRequest) -> httpx.QueryParams:
        try:
            zone = ZoneInfo(request.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise FetchError(f"Unknown timezone: {request.timezone}") from exc

        day = request.on_date or self.clock().astimezone(zone).date()
        return httpx.QueryParams(
            {
                "date": day.strftime("%Y%m%d"),
                "timezone": request.timezone,
                "ccode3": request.country_code,
            }
        )

    async def _fetch_async(self, request: FetchRequest) -> list[League]:
        params = self.build_params(request)
        try:
            async with asyncio.timeout(request.timeout_seconds):
                payload = await self._request_matches(params)
        except TimeoutError as exc:
            log.error("FotMob fetch exceeded deadline of %ss", request.timeout_seconds)
            raise FetchError("Fetching the matches snapshot timed out") from exc

        leagues = parse_snapshot(payload)
        log.info(
            "Fetched %s leagues with %s matches for %s",
            len(leagues),
            sum(len(league.matches) for league in leagues),
            params["date"],
        )
        return leagues

    async def _request_matches(self, params: httpx.QueryParams) -> MatchesResponse:
        url = f"{self.config.base_url}{MATCHES_PATH}"
        async with self.client_factory(self.config.resilience) as client:
            try:
                response = await client.get(url, params=params, headers=self.config.headers)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                log.error("Error fetching data: status=%s", exc.response.status_code)
                raise FetchError(f"Error fetching data: {exc.response.status_code}") from exc
            except httpx.HTTPError as exc:
                raise FetchError(f"Error fetching data: {exc}") from exc

            try:
                return MatchesResponse.model_validate_json(response.content)
            except ValidationError as exc:
                log.error("Unexpected FotMob response payload")
                raise FetchError("Malformed matches payload") from exc


if TYPE_CHECKING:
    _fetcher_check: SnapshotFetcher = FotMobFetcher()
