"""Monotonic time sources and unit conversion."""

from __future__ import annotations

import time
from datetime import timedelta
from enum import Enum
from typing import Protocol


class TimeUnit(Enum):
    """Time units expressed as their length in nanoseconds."""

    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60 * 1_000_000_000
    HOURS = 60 * 60 * 1_000_000_000
    DAYS = 24 * 60 * 60 * 1_000_000_000

    def to_nanos(self, amount: int) -> int:
        return amount * self.value

    def convert(self, nanos: int) -> int:
        """Express ``nanos`` in this unit, truncating toward zero."""
        quotient = abs(nanos) // self.value
        return quotient if nanos >= 0 else -quotient


def timedelta_to_nanos(delta: timedelta) -> int:
    # Integer arithmetic; total_seconds() would lose microsecond precision.
    return ((delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds) * 1_000


def nanos_to_timedelta(nanos: int) -> timedelta:
    return timedelta(microseconds=nanos // 1_000)


class Clock(Protocol):
    """Source of monotonically non-decreasing instants, in nanoseconds."""

    def read(self) -> int: ...


class SystemClock:
    """Clock backed by ``time.monotonic_ns``."""

    def read(self) -> int:
        return time.monotonic_ns()

    def __repr__(self) -> str:
        return "SystemClock()"


SYSTEM_CLOCK = SystemClock()
