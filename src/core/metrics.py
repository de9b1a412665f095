from __future__ import annotations

from collections import Counter
import threading
import time

# Captured at import so uptime covers application construction as well
PROCESS_STARTED_AT = time.monotonic()


class RequestCounter:
    """Thread-safe counter of handled HTTP requests keyed by (method, status)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: Counter[tuple[str, str]] = Counter()

    def increment(self, method: str, status: int | str) -> None:
        with self._lock:
            self._counts[(method.upper(), str(status))] += 1

    def snapshot(self) -> dict[tuple[str, str], int]:
        with self._lock:
            return dict(self._counts)

    def total(self) -> int:
        with self._lock:
            return sum(self._counts.values())


_request_counter: RequestCounter | None = None


def init_metrics() -> RequestCounter:
    """Create the process-wide request counter. Called once from the app factory."""
    global _request_counter
    if _request_counter is None:
        _request_counter = RequestCounter()
    return _request_counter


def get_request_counter() -> RequestCounter:
    if _request_counter is None:
        raise RuntimeError("Metrics not initialized; call init_metrics() first")
    return _request_counter


def process_uptime() -> float:
    return time.monotonic() - PROCESS_STARTED_AT
