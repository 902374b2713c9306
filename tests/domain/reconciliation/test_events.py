from __future__ import annotations

import pytest

from scoreledger.domain.model import ChangePriority
from scoreledger.domain.reconciliation import MatchChanged, NewMatch
from scoreledger.domain.reconciliation.events import _MatchEvent  # type: ignore[reportPrivateUsage]
from tests.support.builders import make_match


def test_match_event_names() -> None:
    match = make_match(1001)

    assert NewMatch.from_match(match).event_name == "new_match"
    assert MatchChanged.from_match(match, ChangePriority.STARTED).event_name == "match_started"


def test_match_event_base_requires_a_name() -> None:
    with pytest.raises(TypeError):
        _MatchEvent(  # type: ignore[abstract]
            id=1,
            league_id=10,
            home_id=1,
            away_id=2,
            home_name="Arsenal",
            away_name="Chelsea",
        )
