"""FotMob feed configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_float, env_json_object, optional_env_var
from .http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    ShouldCacheHook,
)

DEFAULT_FOTMOB_BASE_URL = "https://www.fotmob.com"
FOTMOB_TIMEOUT_SECONDS = 10.0
FOTMOB_CACHE_TTL_SECONDS = 60.0

DEFAULT_FOTMOB_HEADERS = {
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.7",
    "cache-control": "no-cache",
    "referer": "https://www.fotmob.com/",
}


@dataclass(frozen=True, slots=True)
class FeedConfig:
    """Holds upstream feed configuration values."""

    base_url: str = DEFAULT_FOTMOB_BASE_URL
    headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FOTMOB_HEADERS))
    resilience: ResilienceConfig = field(
        default_factory=lambda: default_feed_resilience(DEFAULT_FOTMOB_BASE_URL)
    )


def default_feed_resilience(
    base_url: str,
    *,
    timeout_seconds: float = FOTMOB_TIMEOUT_SECONDS,
    cache_ttl_seconds: float = FOTMOB_CACHE_TTL_SECONDS,
    cache_predicate: ShouldCacheHook | None = None,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="fotmob",
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        retry=RetryPolicy(total=3),
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        cache=CacheConfig(
            backend="sqlite",
            default_ttl_seconds=cache_ttl_seconds,
            should_cache=cache_predicate,
        ),
    )


def get_feed_config(
    *,
    resilience: ResilienceConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> FeedConfig:
    base_url = optional_env_var("FOTMOB_BASE_URL", DEFAULT_FOTMOB_BASE_URL).rstrip("/")
    headers = {**DEFAULT_FOTMOB_HEADERS, **env_json_object("FOTMOB_HEADERS")}
    timeout = env_float("FOTMOB_TIMEOUT_SECONDS", FOTMOB_TIMEOUT_SECONDS)
    cache_ttl = env_float("FOTMOB_CACHE_TTL_SECONDS", FOTMOB_CACHE_TTL_SECONDS)
    return FeedConfig(
        base_url=base_url,
        headers=headers,
        resilience=resilience
        or default_feed_resilience(
            base_url,
            timeout_seconds=timeout,
            cache_ttl_seconds=cache_ttl,
            cache_predicate=cache_predicate,
        ),
    )
