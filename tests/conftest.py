"""Shared pytest fixtures."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from rate_bucket.bucket.sleep import SleepStrategy
from tests.helpers import MockClock, MockRefillStrategy


@pytest.fixture()
def clock() -> MockClock:
    return MockClock()


@pytest.fixture()
def refill_strategy() -> MockRefillStrategy:
    return MockRefillStrategy()


@pytest.fixture()
def sleep_strategy() -> MagicMock:
    """Sleep strategy mock that records calls without sleeping."""
    return MagicMock(spec=SleepStrategy)
