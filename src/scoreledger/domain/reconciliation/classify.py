"""Change classification between two snapshots of one match.

Checks run from the most to the least significant fact; the first difference
found decides the outcome, so a score change that coincides with a clock tick
is reported as a score change only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from scoreledger.domain.model import ChangePriority

if TYPE_CHECKING:
    from collections.abc import Callable

    from scoreledger.domain.model import Match

# Changes ranked below this are stored without emitting an event.
DEFAULT_EVENT_THRESHOLD: Final[ChangePriority] = ChangePriority.PERIOD_LENGTH


def _score_differs(new: Match, old: Match) -> bool:
    return new.home.score != old.home.score or new.away.score != old.away.score


def _live_time_differs(new: Match, old: Match) -> bool:
    a, b = new.status.live_time, old.status.live_time
    return a.long != b.long or a.max_time != b.max_time or a.added_time != b.added_time


_CHECKS: Final[tuple[tuple[ChangePriority, Callable[[Match, Match], bool]], ...]] = (
    (ChangePriority.SCORE, _score_differs),
    (ChangePriority.CANCELLED, lambda new, old: new.status.cancelled != old.status.cancelled),
    (ChangePriority.FINISHED, lambda new, old: new.status.finished != old.status.finished),
    (ChangePriority.STARTED, lambda new, old: new.status.started != old.status.started),
    (ChangePriority.ONGOING, lambda new, old: new.status.ongoing != old.status.ongoing),
    (
        ChangePriority.PERIOD_LENGTH,
        lambda new, old: new.status.period_length != old.status.period_length,
    ),
    (ChangePriority.LIVE_TIME, _live_time_differs),
)


def classify_change(incoming: Match, stored: Match) -> ChangePriority:
    """Return the dominant difference between ``incoming`` and ``stored``."""

    for priority, differs in _CHECKS:
        if differs(incoming, stored):
            return priority
    return ChangePriority.NO_CHANGE


def is_event_worthy(
    priority: ChangePriority,
    threshold: ChangePriority = DEFAULT_EVENT_THRESHOLD,
) -> bool:
    return priority is not ChangePriority.NO_CHANGE and priority >= threshold
