"""Thread-safe token bucket rate limiter."""

from rate_bucket.bucket.builder import TokenBucketBuilder, builder
from rate_bucket.bucket.clock import SYSTEM_CLOCK, Clock, SystemClock, TimeUnit
from rate_bucket.bucket.refill import FixedIntervalRefillStrategy, RefillStrategy
from rate_bucket.bucket.sleep import (
    BUSY_WAIT_SLEEP_STRATEGY,
    YIELDING_SLEEP_STRATEGY,
    BusyWaitSleepStrategy,
    SleepStrategy,
    YieldingSleepStrategy,
    sleep_strategy_from_name,
)
from rate_bucket.bucket.token_bucket import TokenBucket
from rate_bucket.core.config_validator import validate_configuration
from rate_bucket.core.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    RateBucketError,
    UnsupportedOperationError,
)

__all__ = [
    "BUSY_WAIT_SLEEP_STRATEGY",
    "YIELDING_SLEEP_STRATEGY",
    "SYSTEM_CLOCK",
    "BusyWaitSleepStrategy",
    "Clock",
    "ConfigurationError",
    "FixedIntervalRefillStrategy",
    "InvalidArgumentError",
    "RateBucketError",
    "RefillStrategy",
    "SleepStrategy",
    "SystemClock",
    "TimeUnit",
    "TokenBucket",
    "TokenBucketBuilder",
    "UnsupportedOperationError",
    "YieldingSleepStrategy",
    "builder",
    "sleep_strategy_from_name",
    "validate_configuration",
]
