"""Shared constants and environment-driven settings."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Absolute path so config.env loads correctly even when cwd is elsewhere.
ENV_CONFIG_FILE = os.getenv("RATE_BUCKET_ENV_FILE", str(PROJECT_ROOT / "config.env"))


def _get_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


# Real environment variables always win over the file.
USE_DOTENV = _get_bool_env("USE_DOTENV", True)
if USE_DOTENV:
    load_dotenv(ENV_CONFIG_FILE, override=False)

# =============================================================================
# LOGGING
# =============================================================================
APP_NAME = "rate_bucket"
LOG_LEVEL = os.getenv("RATE_BUCKET_LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("RATE_BUCKET_LOG_DIR", "")

# =============================================================================
# BUCKET DEFAULTS
# =============================================================================
SLEEP_STRATEGY_YIELDING = "yielding"
SLEEP_STRATEGY_BUSY_WAIT = "busy_wait"
SLEEP_STRATEGY_NAMES = frozenset([SLEEP_STRATEGY_YIELDING, SLEEP_STRATEGY_BUSY_WAIT])

DEFAULT_SLEEP_STRATEGY = os.getenv("RATE_BUCKET_SLEEP_STRATEGY", SLEEP_STRATEGY_YIELDING).strip().lower()
DEFAULT_INITIAL_TOKENS = 0

# Smallest sleep the yielding strategy asks for, in seconds (1ns).
YIELD_SLEEP_SEC = 1e-9

# =============================================================================
# METRICS
# =============================================================================
SLOW_CONSUME_WARN_SEC = _get_float_env("RATE_BUCKET_SLOW_CONSUME_WARN_SEC", 5.0)
METRICS_HISTORY_SIZE = _get_int_env("RATE_BUCKET_METRICS_HISTORY", 256)
