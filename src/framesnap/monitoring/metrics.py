from __future__ import annotations

import threading
import time
from dataclasses import dataclass


@dataclass
class MetricsSnapshot:
    fps_samples: float
    samples: int
    snapshots_written: int
    snapshot_failures: int
    sample_errors: int


class CaptureMetrics:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._start = time.monotonic()
        self._samples = 0
        self._snapshots_written = 0
        self._snapshot_failures = 0
        self._sample_errors = 0

        self._prometheus_started = False
        self._prometheus_counters = None

    def enable_prometheus(self, host: str, port: int) -> bool:
        try:
            from prometheus_client import Counter, start_http_server
        except ImportError:
            return False

        if self._prometheus_started:
            return True

        start_http_server(port, addr=host)
        self._prometheus_started = True
        self._prometheus_counters = {
            "samples": Counter("framesnap_samples_total", "Decoded samples delivered to the sink"),
            "snapshots": Counter("framesnap_snapshots_total", "PNG snapshots written"),
            "snapshot_failures": Counter(
                "framesnap_snapshot_failures_total", "Snapshot writes that failed"
            ),
            "sample_errors": Counter(
                "framesnap_sample_errors_total", "Samples dropped because they were unreadable"
            ),
        }
        return True

    def mark_sample(self) -> None:
        with self._lock:
            self._samples += 1
            if self._prometheus_counters:
                self._prometheus_counters["samples"].inc()

    def mark_snapshot(self) -> None:
        with self._lock:
            self._snapshots_written += 1
            if self._prometheus_counters:
                self._prometheus_counters["snapshots"].inc()

    def add_snapshot_failure(self, count: int = 1) -> None:
        with self._lock:
            self._snapshot_failures += count
            if self._prometheus_counters:
                self._prometheus_counters["snapshot_failures"].inc(count)

    def add_sample_error(self, count: int = 1) -> None:
        with self._lock:
            self._sample_errors += count
            if self._prometheus_counters:
                self._prometheus_counters["sample_errors"].inc(count)

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            elapsed = max(1e-6, time.monotonic() - self._start)
            return MetricsSnapshot(
                fps_samples=self._samples / elapsed,
                samples=self._samples,
                snapshots_written=self._snapshots_written,
                snapshot_failures=self._snapshot_failures,
                sample_errors=self._sample_errors,
            )
