"""Refill strategies deciding how many tokens a bucket gains over time."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import timedelta

from rate_bucket.bucket.clock import (
    Clock,
    TimeUnit,
    nanos_to_timedelta,
    timedelta_to_nanos,
)
from rate_bucket.core.exceptions import InvalidArgumentError, UnsupportedOperationError


class RefillStrategy(ABC):
    """Policy that tells a bucket how many tokens accrued since it last asked."""

    @abstractmethod
    def refill(self) -> int:
        """Return the number of tokens to add to the bucket."""

    def get_duration_until_next_refill(self, unit: TimeUnit = TimeUnit.NANOSECONDS) -> int:
        """Return the time until the next group of tokens is added, in ``unit``.

        Raises:
            UnsupportedOperationError: the strategy cannot predict its next refill.
        """
        raise UnsupportedOperationError(
            f"{type(self).__name__} cannot predict its next refill"
        )

    def time_until_next_refill(self) -> timedelta:
        return nanos_to_timedelta(self.get_duration_until_next_refill(TimeUnit.NANOSECONDS))


def _period_to_nanos(period: timedelta | int, unit: TimeUnit | None) -> int:
    if isinstance(period, timedelta):
        if unit is not None:
            raise InvalidArgumentError("unit must not be given when period is a timedelta")
        return timedelta_to_nanos(period)
    if unit is None:
        raise InvalidArgumentError("unit is required when period is a number")
    if isinstance(period, bool) or not isinstance(period, int):
        raise InvalidArgumentError("A numeric period must be a whole number of units; use a timedelta for fractions")
    return unit.to_nanos(period)


class FixedIntervalRefillStrategy(RefillStrategy):
    """Provide N tokens every T units of time.

    Tokens arrive in bursts rather than at a smooth rate, so no more than N
    tokens become available during any window of length T. Missed periods
    are all paid out by the next ``refill()`` call, and period boundaries
    stay aligned to the moment the strategy was created.
    """

    def __init__(
        self,
        clock: Clock,
        tokens_per_period: int,
        period: timedelta | int,
        unit: TimeUnit | None = None,
    ) -> None:
        """Create a fixed interval strategy.

        Args:
            clock: Source of the current instant.
            tokens_per_period: Tokens added to the bucket every period.
            period: How often to refill, either a timedelta or an amount of ``unit``.
            unit: Unit for a numeric ``period``.
        """
        if tokens_per_period <= 0:
            raise InvalidArgumentError("Number of tokens per period must be positive")

        period_nanos = _period_to_nanos(period, unit)
        if period_nanos <= 0:
            raise InvalidArgumentError("Refill period must be positive")

        self._clock = clock
        self._tokens_per_period = tokens_per_period
        self._period_nanos = period_nanos
        self._lock = threading.Lock()

        # Start one period in the past so the first refill fires immediately.
        start = clock.read() - period_nanos
        self._last_refill_time = start
        self._next_refill_time = start

    @property
    def tokens_per_period(self) -> int:
        return self._tokens_per_period

    @property
    def period(self) -> timedelta:
        return nanos_to_timedelta(self._period_nanos)

    def refill(self) -> int:
        with self._lock:
            now = self._clock.read()
            if now < self._next_refill_time:
                return 0

            # Count every period missed since the last refill, not just one.
            num_periods = max(0, (now - self._last_refill_time) // self._period_nanos)

            self._last_refill_time += num_periods * self._period_nanos
            self._next_refill_time = self._last_refill_time + self._period_nanos

            return num_periods * self._tokens_per_period

    def get_duration_until_next_refill(self, unit: TimeUnit = TimeUnit.NANOSECONDS) -> int:
        with self._lock:
            now = self._clock.read()
            return unit.convert(max(0, self._next_refill_time - now))

    def __repr__(self) -> str:
        return (
            f"FixedIntervalRefillStrategy(tokens_per_period={self._tokens_per_period}, "
            f"period={self.period!r})"
        )
