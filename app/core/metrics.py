from __future__ import annotations

import threading
import time
from typing import Any


class IngestMetrics:
    """Counters for one ingestion run, shared by the concurrent file tasks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._started = time.monotonic()
        self._counters = {
            "files_processed": 0,
            "files_failed": 0,
            "rows_processed": 0,
            "rows_failed": 0,
            "reference_rows": 0,
        }

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + amount

    def get(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    def elapsed_seconds(self) -> float:
        return time.monotonic() - self._started

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            counters: dict[str, Any] = dict(self._counters)
        counters["elapsed_seconds"] = round(self.elapsed_seconds(), 3)
        return counters
