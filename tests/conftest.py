"""Mini README: Shared fixtures for the Budget Buddy test-suite.

Structure:
    * TickingClock - deterministic clock advancing a fixed step per call.
    * clock / frozen_clock - fixtures for ordered and identical timestamps.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest


class TickingClock:
    """Return a new timestamp ``step`` after the previous one on each call."""

    def __init__(self, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture()
def frozen_clock() -> TickingClock:
    """Every call returns the same instant, exercising tie-breaking."""

    return TickingClock(step=timedelta(0))
