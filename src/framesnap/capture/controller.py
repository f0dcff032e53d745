from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from framesnap.capture.counter import FrameCounter
from framesnap.capture.decode import extract
from framesnap.capture.policy import should_capture
from framesnap.capture.writer import snapshot_path, write_png
from framesnap.errors import SampleReadError, SnapshotWriteError
from framesnap.io.output.events import JsonEventSink
from framesnap.monitoring.metrics import CaptureMetrics
from framesnap.types import FlowReturn, Sample


class PullSink(Protocol):
    def pull_sample(self) -> Sample | None:
        ...


class FrameSinkController:
    """Per-sample callback: count, decide, and write every 30th frame as PNG.

    Only an unreadable sample produces ``FlowReturn.ERROR``. Snapshot write
    failures are logged and the stream keeps flowing.
    """

    def __init__(
        self,
        counter: FrameCounter | None = None,
        *,
        output_dir: Path | None = None,
        metrics: CaptureMetrics | None = None,
        events: JsonEventSink | None = None,
    ) -> None:
        self._counter = counter or FrameCounter()
        self._output_dir = output_dir
        self._metrics = metrics
        self._events = events
        self._logger = logging.getLogger("framesnap.capture")

    @property
    def counter(self) -> FrameCounter:
        return self._counter

    def on_new_sample(self, sink: PullSink) -> FlowReturn:
        sample = sink.pull_sample()
        if sample is None:
            return FlowReturn.ERROR

        n = self._counter.increment()
        if self._metrics is not None:
            self._metrics.mark_sample()

        capture = should_capture(n)
        try:
            with extract(sample) as frame:
                if capture:
                    self._write_snapshot(n, frame.width, frame.height, frame.pixels)
        except SampleReadError as exc:
            self._logger.error("dropping unreadable sample frame=%d error=%s", n, exc)
            if self._metrics is not None:
                self._metrics.add_sample_error()
            return FlowReturn.ERROR

        return FlowReturn.OK

    def _write_snapshot(self, n: int, width: int, height: int, pixels: memoryview) -> None:
        path = snapshot_path(n, self._output_dir)
        try:
            write_png(width, height, pixels, path)
        except SnapshotWriteError as exc:
            self._logger.warning("snapshot failed frame=%d path=%s error=%s", n, path, exc)
            if self._metrics is not None:
                self._metrics.add_snapshot_failure()
            return

        self._logger.info(
            "saved frame to %s",
            path,
            extra={"context": {"frame": n, "width": width, "height": height}},
        )
        if self._metrics is not None:
            self._metrics.mark_snapshot()
        if self._events is None:
            return
        try:
            self._events.emit(
                {
                    "event": "snapshot",
                    "ts": datetime.now(timezone.utc).isoformat(),
                    "frame": n,
                    "path": str(path),
                    "width": width,
                    "height": height,
                }
            )
        except OSError as exc:
            self._logger.warning("snapshot event failed frame=%d error=%s", n, exc)
