from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from scoreledger.config import configure_logging
from scoreledger.config.logging import QUIET_LOGGERS

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _restore_levels() -> Iterator[None]:
    names = ("scoreledger", *QUIET_LOGGERS)
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def test_default_keeps_http_libraries_quiet() -> None:
    configure_logging()

    assert logging.getLogger("scoreledger").level == logging.INFO
    assert all(logging.getLogger(name).level == logging.WARNING for name in QUIET_LOGGERS)


def test_verbose_enables_debug_everywhere() -> None:
    configure_logging(verbose=True)

    assert logging.getLogger("scoreledger").getEffectiveLevel() == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG
