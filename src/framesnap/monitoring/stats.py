from __future__ import annotations

import logging
import time

from framesnap.monitoring.metrics import CaptureMetrics


class PeriodicStatsLogger:
    def __init__(
        self,
        metrics: CaptureMetrics,
        source: str,
        interval_seconds: float = 5.0,
    ) -> None:
        self._metrics = metrics
        self._source = source
        self._interval_seconds = max(0.5, interval_seconds)
        self._next_emit = time.monotonic() + self._interval_seconds
        self._logger = logging.getLogger("framesnap.stats")

    def maybe_emit(self) -> None:
        now = time.monotonic()
        if now < self._next_emit:
            return
        self.emit()
        self._next_emit = now + self._interval_seconds

    def emit(self) -> None:
        snapshot = self._metrics.snapshot()
        self._logger.info(
            "stats fps_samples=%.2f samples=%d snapshots=%d snapshot_failures=%d sample_errors=%d source=%s",
            snapshot.fps_samples,
            snapshot.samples,
            snapshot.snapshots_written,
            snapshot.snapshot_failures,
            snapshot.sample_errors,
            self._source,
        )
