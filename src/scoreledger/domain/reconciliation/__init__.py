"""Reconciliation core: change classification, events and the per-cycle driver.

Flow of one cycle:
1) fetch a snapshot (leagues with nested matches and teams)
2) create leagues, teams and matches seen for the first time
3) compare known matches with their stored snapshot
4) persist changed matches and keep the unfinished index in step
5) emit events for creations and event-worthy changes
"""

from __future__ import annotations

from .classify import DEFAULT_EVENT_THRESHOLD, classify_change, is_event_worthy
from .engine import CycleResult, Reconciler, run_cycle
from .events import LedgerEvent, MatchChanged, NewLeague, NewMatch

__all__ = [
    "DEFAULT_EVENT_THRESHOLD",
    "CycleResult",
    "LedgerEvent",
    "MatchChanged",
    "NewLeague",
    "NewMatch",
    "Reconciler",
    "classify_change",
    "is_event_worthy",
    "run_cycle",
]
