"""Shared fixtures: a hand-cranked clock for the polling scheduler."""

import pytest

from engine.scheduler import PollingScheduler


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return PollingScheduler(clock=clock)
