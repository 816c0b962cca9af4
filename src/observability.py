"""Fetch metrics: outcome counters, latency samples and an exit summary."""

import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger(source="observability")

FETCH_TIMER = "fact.fetch"
FETCH_OUTCOMES = {
    "success": "fact.fetch.success",
    "network_error": "fact.fetch.network_error",
    "decode_error": "fact.fetch.decode_error",
}


class Metrics:
    """Named counters plus latency samples for the fact client."""

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._latencies: dict[str, list[float]] = {}

    def counter(self, name: str, value: int = 1):
        self._counters[name] = self._counters.get(name, 0) + value

    def count(self, name: str) -> int:
        return self._counters.get(name, 0)

    @contextmanager
    def timer(self, name: str):
        """Record how long the block took, whether or not it raised."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self._latencies.setdefault(name, []).append(time.perf_counter() - start)

    def latency_ms(self, name: str) -> dict[str, float]:
        """``{"count", "avg_ms", "p50_ms", "max_ms"}`` for one timer, or {} if unused."""
        samples = sorted(self._latencies.get(name, []))
        if not samples:
            return {}
        return {
            "count": len(samples),
            "avg_ms": round(1000 * sum(samples) / len(samples), 2),
            "p50_ms": round(1000 * samples[len(samples) // 2], 2),
            "max_ms": round(1000 * samples[-1], 2),
        }

    def fetch_summary(self) -> dict[str, Any]:
        """Outcome totals of fact fetches.

        Keys: ``attempts``, one per entry of FETCH_OUTCOMES, ``success_rate``
        (None before any attempt) and ``latency`` (see ``latency_ms``).
        """
        outcomes = {key: self.count(name) for key, name in FETCH_OUTCOMES.items()}
        attempts = sum(outcomes.values())
        return {
            "attempts": attempts,
            **outcomes,
            "success_rate": round(outcomes["success"] / attempts, 3) if attempts else None,
            "latency": self.latency_ms(FETCH_TIMER),
        }

    def summary(self) -> dict[str, Any]:
        """Raw counters and per-timer latency, keyed by metric name."""
        return {
            "counters": dict(self._counters),
            "timers": {name: self.latency_ms(name) for name in self._latencies},
        }

    def reset(self):
        self._counters.clear()
        self._latencies.clear()


metrics = Metrics()


def log_run_summary():
    """Log fetch totals once a command finishes. Silent if nothing was fetched."""
    fetches = metrics.fetch_summary()
    if not fetches["attempts"]:
        return
    logger.info("run_summary", **fetches)
