"""Per-bucket consumption metrics."""

from __future__ import annotations

import threading
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from rate_bucket.core.constants import METRICS_HISTORY_SIZE, SLOW_CONSUME_WARN_SEC
from rate_bucket.core.logger import logger


@dataclass
class WaitMetric:
    """One completed blocking consume."""

    num_tokens: int
    wait_time: float
    attempts: int
    timestamp: datetime = field(default_factory=datetime.now)


class MetricsCollector:
    """Counters and recent wait history for a single bucket.

    Each bucket owns its collector so unrelated buckets never share a lock.
    """

    def __init__(self, history_size: int = METRICS_HISTORY_SIZE) -> None:
        self._lock = threading.Lock()
        self._waits: deque[WaitMetric] = deque(maxlen=max(1, history_size))
        self._counters: defaultdict[str, int] = defaultdict(int)

    def increment(self, counter_name: str, value: int = 1) -> None:
        """Increment a counter."""
        with self._lock:
            self._counters[counter_name] += value

    def record_attempt(self, num_tokens: int, granted: bool) -> None:
        """Record the outcome of a single try_consume."""
        with self._lock:
            if granted:
                self._counters["granted"] += 1
                self._counters["tokens_granted"] += num_tokens
            else:
                self._counters["rejected"] += 1

    def record_wait(self, metric: WaitMetric) -> None:
        """Record a blocking consume that eventually succeeded."""
        with self._lock:
            self._waits.append(metric)

        if metric.wait_time > SLOW_CONSUME_WARN_SEC:
            logger.warning(
                "consume(%s) waited %.2fs over %s attempts",
                metric.num_tokens,
                metric.wait_time,
                metric.attempts,
            )

    def get_counter(self, counter_name: str) -> int:
        with self._lock:
            return self._counters.get(counter_name, 0)

    def get_summary(self) -> dict[str, Any]:
        """Return counters plus wait statistics."""
        with self._lock:
            counters = dict(self._counters)
            times = [m.wait_time for m in self._waits]

        summary: dict[str, Any] = {
            "granted": counters.get("granted", 0),
            "rejected": counters.get("rejected", 0),
            "tokens_granted": counters.get("tokens_granted", 0),
            "manual_refills": counters.get("manual_refills", 0),
            "waits": len(times),
        }
        if times:
            summary["avg_wait_ms"] = sum(times) / len(times) * 1000
            summary["max_wait_ms"] = max(times) * 1000
            summary["min_wait_ms"] = min(times) * 1000
        return summary

    def reset(self) -> None:
        with self._lock:
            self._waits.clear()
            self._counters.clear()
