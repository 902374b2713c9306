"""Public interface for the FotMob adapter."""

from __future__ import annotations

from .client import FotMobFetcher
from .schema import LeaguePayload, MatchesResponse, MatchPayload, TeamPayload
from .translator import parse_league, parse_match, parse_snapshot

__all__ = [
    "FotMobFetcher",
    "LeaguePayload",
    "MatchPayload",
    "MatchesResponse",
    "TeamPayload",
    "parse_league",
    "parse_match",
    "parse_snapshot",
]
