"""Fluent assembly of token buckets."""

from __future__ import annotations

from datetime import timedelta

from rate_bucket.bucket.clock import SYSTEM_CLOCK, Clock, TimeUnit
from rate_bucket.bucket.refill import FixedIntervalRefillStrategy, RefillStrategy
from rate_bucket.bucket.sleep import (
    BUSY_WAIT_SLEEP_STRATEGY,
    YIELDING_SLEEP_STRATEGY,
    SleepStrategy,
    sleep_strategy_from_name,
)
from rate_bucket.bucket.token_bucket import TokenBucket
from rate_bucket.core.constants import DEFAULT_INITIAL_TOKENS, DEFAULT_SLEEP_STRATEGY
from rate_bucket.core.exceptions import ConfigurationError, InvalidArgumentError


class TokenBucketBuilder:
    """Collects bucket settings and validates them in ``build()``.

    Usage:
        bucket = (
            builder()
            .with_capacity(10)
            .with_fixed_interval_refill_strategy(1, timedelta(seconds=1))
            .build()
        )
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SYSTEM_CLOCK
        self._capacity: int | None = None
        self._initial_tokens = DEFAULT_INITIAL_TOKENS
        self._refill_strategy: RefillStrategy | None = None
        self._sleep_strategy: SleepStrategy | None = None

    def with_capacity(self, num_tokens: int) -> TokenBucketBuilder:
        """Specify the overall capacity of the token bucket."""
        if num_tokens <= 0:
            raise InvalidArgumentError("Must specify a positive number of tokens")
        self._capacity = num_tokens
        return self

    def with_initial_tokens(self, num_tokens: int) -> TokenBucketBuilder:
        """Start the bucket with ``num_tokens`` instead of empty."""
        if num_tokens <= 0:
            raise InvalidArgumentError("Must specify a positive number of tokens")
        self._initial_tokens = num_tokens
        return self

    def with_fixed_interval_refill_strategy(
        self,
        refill_tokens: int,
        period: timedelta | int,
        unit: TimeUnit | None = None,
    ) -> TokenBucketBuilder:
        """Refill ``refill_tokens`` every ``period``.

        ``period`` is a timedelta, or a number of ``unit``.
        """
        return self.with_refill_strategy(
            FixedIntervalRefillStrategy(self._clock, refill_tokens, period, unit)
        )

    def with_refill_strategy(self, refill_strategy: RefillStrategy) -> TokenBucketBuilder:
        """Use a user defined refill strategy."""
        if refill_strategy is None:
            raise InvalidArgumentError("refill_strategy must not be None")
        self._refill_strategy = refill_strategy
        return self

    def with_yielding_sleep_strategy(self) -> TokenBucketBuilder:
        return self.with_sleep_strategy(YIELDING_SLEEP_STRATEGY)

    def with_busy_wait_sleep_strategy(self) -> TokenBucketBuilder:
        """Busy wait instead of yielding the CPU while waiting for tokens."""
        return self.with_sleep_strategy(BUSY_WAIT_SLEEP_STRATEGY)

    def with_sleep_strategy(self, sleep_strategy: SleepStrategy) -> TokenBucketBuilder:
        """Use a user defined sleep strategy."""
        if sleep_strategy is None:
            raise InvalidArgumentError("sleep_strategy must not be None")
        self._sleep_strategy = sleep_strategy
        return self

    def build(self) -> TokenBucket:
        """Build the token bucket.

        Raises:
            ConfigurationError: capacity or refill strategy was never set.
            InvalidArgumentError: initial tokens exceed the capacity.
        """
        if self._capacity is None:
            raise ConfigurationError("Must specify a capacity")
        if self._refill_strategy is None:
            raise ConfigurationError("Must specify a refill strategy")

        sleep_strategy = self._sleep_strategy or sleep_strategy_from_name(DEFAULT_SLEEP_STRATEGY)
        return TokenBucket(self._capacity, self._initial_tokens, self._refill_strategy, sleep_strategy)


def builder(clock: Clock | None = None) -> TokenBucketBuilder:
    """Create a new builder for token buckets."""
    return TokenBucketBuilder(clock)
