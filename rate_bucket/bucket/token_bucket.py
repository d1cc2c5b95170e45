"""Thread-safe token bucket with pluggable refill and sleep strategies."""

from __future__ import annotations

import threading
import time
from datetime import timedelta

from rate_bucket.bucket.clock import TimeUnit
from rate_bucket.bucket.refill import RefillStrategy
from rate_bucket.bucket.sleep import SleepStrategy
from rate_bucket.core.exceptions import InvalidArgumentError
from rate_bucket.core.logger import logger
from rate_bucket.core.metrics import MetricsCollector, WaitMetric


class TokenBucket:
    """Bounded token counter used to rate limit access to a portion of code.

    The bucket has a finite capacity; tokens added beyond it overflow and are
    lost. Before any tokens are consumed the refill strategy is consulted to
    see how many tokens should be added first. How a blocked consumer yields
    the CPU is left to the sleep strategy, so latency-sensitive callers can
    choose to busy wait.
    """

    def __init__(
        self,
        capacity: int,
        initial_tokens: int,
        refill_strategy: RefillStrategy,
        sleep_strategy: SleepStrategy,
    ) -> None:
        if capacity <= 0:
            raise InvalidArgumentError("Capacity must be positive")
        if initial_tokens > capacity:
            raise InvalidArgumentError("Initial tokens must not exceed the capacity of the bucket")
        if refill_strategy is None:
            raise InvalidArgumentError("A refill strategy is required")
        if sleep_strategy is None:
            raise InvalidArgumentError("A sleep strategy is required")

        self._capacity = capacity
        self._refill_strategy = refill_strategy
        self._sleep_strategy = sleep_strategy
        self._size = max(0, initial_tokens)
        # Reentrant so a refill strategy may call back into the bucket.
        self._lock = threading.RLock()
        self.metrics = MetricsCollector()

        logger.debug(
            "TokenBucket created: capacity=%s initial=%s refill=%r sleep=%r",
            capacity,
            self._size,
            refill_strategy,
            sleep_strategy,
        )

    @property
    def refill_strategy(self) -> RefillStrategy:
        return self._refill_strategy

    @property
    def sleep_strategy(self) -> SleepStrategy:
        return self._sleep_strategy

    def get_capacity(self) -> int:
        """Return the maximum number of tokens the bucket can hold at any one time."""
        return self._capacity

    def get_num_tokens(self) -> int:
        """Return the current number of tokens, after letting the strategy refill."""
        with self._lock:
            self._add_tokens(self._refill_strategy.refill())
            return self._size

    def get_duration_until_next_refill(self, unit: TimeUnit = TimeUnit.NANOSECONDS) -> int:
        """Return the time until the next group of tokens is added, in ``unit``.

        Raises:
            UnsupportedOperationError: the refill strategy cannot predict it.
        """
        return self._refill_strategy.get_duration_until_next_refill(unit)

    def time_until_next_refill(self) -> timedelta:
        return self._refill_strategy.time_until_next_refill()

    def try_consume(self, num_tokens: int = 1) -> bool:
        """Attempt to consume ``num_tokens`` without blocking.

        Args:
            num_tokens: Tokens to take, between 1 and the capacity.

        Returns:
            True if the tokens were consumed, False otherwise.
        """
        self._check_num_tokens(num_tokens)
        granted = self._try_take(num_tokens)
        self.metrics.record_attempt(num_tokens, granted)
        return granted

    def consume(self, num_tokens: int = 1) -> None:
        """Consume ``num_tokens``, blocking until enough are available.

        The lock is released while sleeping. Failed retries are not counted
        as rejections; the whole wait is recorded once as a ``WaitMetric``.
        There is no timeout; callers needing one should poll ``try_consume``
        and use ``get_duration_until_next_refill`` as a hint.
        """
        self._check_num_tokens(num_tokens)

        start = time.perf_counter()
        attempts = 1
        while not self._try_take(num_tokens):
            self._sleep_strategy.sleep()
            attempts += 1

        self.metrics.record_attempt(num_tokens, True)
        if attempts > 1:
            self.metrics.record_wait(
                WaitMetric(
                    num_tokens=num_tokens,
                    wait_time=time.perf_counter() - start,
                    attempts=attempts,
                )
            )

    def _check_num_tokens(self, num_tokens: int) -> None:
        if num_tokens <= 0:
            raise InvalidArgumentError("Number of tokens to consume must be positive")
        if num_tokens > self._capacity:
            raise InvalidArgumentError("Number of tokens to consume must not exceed the capacity of the bucket")

    def _try_take(self, num_tokens: int) -> bool:
        with self._lock:
            self._add_tokens(self._refill_strategy.refill())

            if num_tokens <= self._size:
                self._size -= num_tokens
                return True
            return False

    def refill(self, num_tokens: int) -> None:
        """Add tokens to the bucket.

        Negative counts add nothing; a bucket that is full or near capacity
        takes fewer than ``num_tokens``.
        """
        with self._lock:
            self._add_tokens(num_tokens)
        self.metrics.increment("manual_refills")

    def _add_tokens(self, num_tokens: int) -> None:
        # Caller holds self._lock.
        new_tokens = min(self._capacity, max(0, num_tokens))
        self._size = max(0, min(self._size + new_tokens, self._capacity))

    def __repr__(self) -> str:
        return (
            f"TokenBucket(capacity={self._capacity}, "
            f"refill_strategy={self._refill_strategy!r}, "
            f"sleep_strategy={self._sleep_strategy!r})"
        )
