"""Test doubles shared across test modules."""

from __future__ import annotations

from datetime import timedelta

from rate_bucket.bucket.clock import timedelta_to_nanos
from rate_bucket.bucket.refill import RefillStrategy


class MockClock:
    """Clock that only moves when told to."""

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def read(self) -> int:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += timedelta_to_nanos(delta)


class MockRefillStrategy(RefillStrategy):
    """Hands out exactly the tokens queued with add_tokens, then nothing."""

    def __init__(self) -> None:
        self.num_tokens_to_add = 0

    def refill(self) -> int:
        num_tokens = self.num_tokens_to_add
        self.num_tokens_to_add = 0
        return num_tokens

    def add_token(self) -> None:
        self.num_tokens_to_add += 1

    def add_tokens(self, num_tokens: int) -> None:
        self.num_tokens_to_add += num_tokens
