"""Tests for configuration validation, logging and metrics helpers."""

from __future__ import annotations

import logging

import pytest

from rate_bucket.core import metrics as metrics_module
from rate_bucket.core.config_validator import validate_configuration
from rate_bucket.core.logger import setup_logging
from rate_bucket.core.metrics import MetricsCollector, WaitMetric

ENV_VARS = (
    "RATE_BUCKET_LOG_LEVEL",
    "RATE_BUCKET_SLEEP_STRATEGY",
    "RATE_BUCKET_SLOW_CONSUME_WARN_SEC",
    "RATE_BUCKET_METRICS_HISTORY",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_validate_configuration_defaults(clean_env: pytest.MonkeyPatch) -> None:
    assert validate_configuration() is True


def test_validate_configuration_accepts_known_values(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("RATE_BUCKET_LOG_LEVEL", "debug")
    clean_env.setenv("RATE_BUCKET_SLEEP_STRATEGY", "busy_wait")
    clean_env.setenv("RATE_BUCKET_SLOW_CONSUME_WARN_SEC", "0.5")
    clean_env.setenv("RATE_BUCKET_METRICS_HISTORY", "10")

    assert validate_configuration() is True


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("RATE_BUCKET_LOG_LEVEL", "LOUD"),
        ("RATE_BUCKET_SLEEP_STRATEGY", "nap"),
        ("RATE_BUCKET_SLOW_CONSUME_WARN_SEC", "soon"),
        ("RATE_BUCKET_SLOW_CONSUME_WARN_SEC", "-1"),
        ("RATE_BUCKET_METRICS_HISTORY", "0"),
        ("RATE_BUCKET_METRICS_HISTORY", "many"),
    ],
)
def test_validate_configuration_rejects_bad_values(
    clean_env: pytest.MonkeyPatch, name: str, value: str
) -> None:
    clean_env.setenv(name, value)

    assert validate_configuration() is False


def test_setup_logging_console_only() -> None:
    logger = setup_logging(level="DEBUG", log_dir="", app_name="rate_bucket_test_console")

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_setup_logging_with_files(tmp_path) -> None:
    logger = setup_logging(log_dir=str(tmp_path / "logs"), app_name="rate_bucket_test_files")

    assert len(logger.handlers) == 3
    assert (tmp_path / "logs").is_dir()

    # Calling again reuses the configured logger.
    again = setup_logging(log_dir=str(tmp_path / "logs"), app_name="rate_bucket_test_files")
    assert again is logger
    assert len(again.handlers) == 3

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_metrics_summary_and_reset() -> None:
    collector = MetricsCollector(history_size=2)
    collector.record_attempt(2, granted=True)
    collector.record_attempt(1, granted=False)
    collector.increment("manual_refills")
    for wait in (0.1, 0.2, 0.3):
        collector.record_wait(WaitMetric(num_tokens=1, wait_time=wait, attempts=2))

    summary = collector.get_summary()
    assert summary["granted"] == 1
    assert summary["rejected"] == 1
    assert summary["tokens_granted"] == 2
    assert summary["manual_refills"] == 1
    # Only the two most recent waits are kept.
    assert summary["waits"] == 2
    assert summary["min_wait_ms"] == pytest.approx(200)
    assert summary["max_wait_ms"] == pytest.approx(300)

    collector.reset()
    assert collector.get_summary()["waits"] == 0
    assert collector.get_counter("granted") == 0


def test_slow_wait_logs_warning(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(metrics_module, "SLOW_CONSUME_WARN_SEC", 0.05)
    collector = MetricsCollector()

    with caplog.at_level(logging.WARNING, logger="rate_bucket"):
        collector.record_wait(WaitMetric(num_tokens=3, wait_time=0.5, attempts=7))

    assert "consume(3) waited 0.50s over 7 attempts" in caplog.text
