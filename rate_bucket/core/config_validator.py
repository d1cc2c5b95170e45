"""Settings validation."""

from __future__ import annotations

import logging
import os

from rate_bucket.core.constants import SLEEP_STRATEGY_NAMES
from rate_bucket.core.logger import logger


def validate_configuration() -> bool:
    """Validate the RATE_BUCKET_* environment variables.

    Every variable is optional; only values that are present but unusable
    are reported.

    Returns:
        True when all present values are usable, False otherwise
    """
    problems = []

    level = os.getenv("RATE_BUCKET_LOG_LEVEL")
    if level is not None and not isinstance(logging.getLevelName(level.strip().upper()), int):
        problems.append(f"RATE_BUCKET_LOG_LEVEL: unknown level {level!r}")

    strategy = os.getenv("RATE_BUCKET_SLEEP_STRATEGY")
    if strategy is not None and strategy.strip().lower() not in SLEEP_STRATEGY_NAMES:
        expected = ", ".join(sorted(SLEEP_STRATEGY_NAMES))
        problems.append(f"RATE_BUCKET_SLEEP_STRATEGY: {strategy!r} is not one of {expected}")

    warn_sec = os.getenv("RATE_BUCKET_SLOW_CONSUME_WARN_SEC")
    if warn_sec is not None:
        try:
            if float(warn_sec) < 0:
                problems.append(f"RATE_BUCKET_SLOW_CONSUME_WARN_SEC: must not be negative, got {warn_sec}")
        except ValueError:
            problems.append(f"RATE_BUCKET_SLOW_CONSUME_WARN_SEC: not a number: {warn_sec!r}")

    history = os.getenv("RATE_BUCKET_METRICS_HISTORY")
    if history is not None:
        try:
            if int(history) <= 0:
                problems.append(f"RATE_BUCKET_METRICS_HISTORY: must be positive, got {history}")
        except ValueError:
            problems.append(f"RATE_BUCKET_METRICS_HISTORY: not an integer: {history!r}")

    if problems:
        logger.error("Invalid rate_bucket configuration:")
        for problem in problems:
            logger.error("  %s", problem)
        return False

    logger.debug("rate_bucket configuration validated")
    return True
