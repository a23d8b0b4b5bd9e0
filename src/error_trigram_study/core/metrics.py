"""
Purpose: In-process counters for a study run, with JSON-lines snapshots.
Constraints: No external dependencies; file-based output only.
"""

from __future__ import annotations

import json
import threading
import time
from collections import defaultdict
from pathlib import Path
from typing import Dict, Optional


class MetricsCollector:
    """Thread-safe named counters with per-name failure tallies."""

    def __init__(self):
        self._lock = threading.Lock()
        self._start_time = time.time()
        self._totals: Dict[str, int] = defaultdict(int)
        self._errors: Dict[str, int] = defaultdict(int)

    def record(self, name: str, success: bool = True, amount: int = 1) -> None:
        with self._lock:
            self._totals[name] += amount
            if not success:
                self._errors[name] += amount

    def record_error(self, name: str = "error") -> None:
        self.record(name, success=False)

    def total(self, name: str) -> int:
        with self._lock:
            return self._totals.get(name, 0)

    def snapshot(self) -> Dict[str, object]:
        now = time.time()
        with self._lock:
            return {
                "timestamp_utc": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(now)),
                "uptime_seconds": int(now - self._start_time),
                "totals": dict(self._totals),
                "errors": dict(self._errors),
            }

    def write_snapshot(self, path: Path) -> None:
        payload = self.snapshot()
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload) + "\n")

    def reset(self) -> None:
        with self._lock:
            self._totals.clear()
            self._errors.clear()
            self._start_time = time.time()


_GLOBAL_METRICS: Optional[MetricsCollector] = None
_GLOBAL_LOCK = threading.Lock()


def get_metrics() -> MetricsCollector:
    global _GLOBAL_METRICS
    with _GLOBAL_LOCK:
        if _GLOBAL_METRICS is None:
            _GLOBAL_METRICS = MetricsCollector()
        return _GLOBAL_METRICS
