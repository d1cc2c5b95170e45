"""Strategies for relinquishing the CPU while a consumer waits for tokens."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from rate_bucket.core.constants import (
    SLEEP_STRATEGY_BUSY_WAIT,
    SLEEP_STRATEGY_YIELDING,
    YIELD_SLEEP_SEC,
)
from rate_bucket.core.exceptions import ConfigurationError


class SleepStrategy(ABC):
    """How a blocked consumer spends the time between attempts."""

    @abstractmethod
    def sleep(self) -> None:
        """Pause briefly so other threads and processes can run."""


class YieldingSleepStrategy(SleepStrategy):
    """Sleep for the smallest amount of time possible, just to yield control."""

    def sleep(self) -> None:
        time.sleep(YIELD_SLEEP_SEC)

    def __repr__(self) -> str:
        return "YieldingSleepStrategy()"


class BusyWaitSleepStrategy(SleepStrategy):
    """Never yield; spin until tokens become available.

    Burns a CPU core but notices refills as early as possible.
    """

    def sleep(self) -> None:
        pass

    def __repr__(self) -> str:
        return "BusyWaitSleepStrategy()"


# Stateless, safe to share between buckets.
YIELDING_SLEEP_STRATEGY = YieldingSleepStrategy()
BUSY_WAIT_SLEEP_STRATEGY = BusyWaitSleepStrategy()

_BY_NAME = {
    SLEEP_STRATEGY_YIELDING: YIELDING_SLEEP_STRATEGY,
    SLEEP_STRATEGY_BUSY_WAIT: BUSY_WAIT_SLEEP_STRATEGY,
}


def sleep_strategy_from_name(name: str) -> SleepStrategy:
    """Resolve a configured strategy name to its shared instance."""
    try:
        return _BY_NAME[name.strip().lower()]
    except KeyError:
        expected = ", ".join(sorted(_BY_NAME))
        raise ConfigurationError(f"Unknown sleep strategy {name!r}, expected one of: {expected}") from None
