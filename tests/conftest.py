"""Shared test fixtures."""

from __future__ import annotations

import time

import pytest


class FakeClock:
    """Stands in for time.monotonic so expiry can be stepped manually."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    fake = FakeClock(1000.0)
    monkeypatch.setattr(time, "monotonic", fake)
    return fake


@pytest.fixture
def fetch_calls() -> list[list]:
    """Records the missing keys passed to each fetch call."""
    return []


@pytest.fixture
def position_fetch(fetch_calls):
    """Mock of a bus read returning id * 10.0 for every requested motor id."""

    def fetch(ids):
        fetch_calls.append(list(ids))
        return [float(i) * 10.0 for i in ids]

    return fetch
