from __future__ import annotations

import logging
import threading

from framesnap.capture import FrameSinkController
from framesnap.config.models import RuntimeConfig
from framesnap.errors import SourceError
from framesnap.io.output import JsonEventSink
from framesnap.io.source import SampleSource, select_source_backend
from framesnap.monitoring import CaptureMetrics, PeriodicStatsLogger
from framesnap.types import FlowReturn


class SnapshotRuntime:
    def __init__(self, config: RuntimeConfig) -> None:
        self._config = config
        self._logger = logging.getLogger("framesnap.runtime")
        self._interrupted = False

    def _open_source(self) -> SampleSource | None:
        source, reason = select_source_backend(self._config.ingest)
        self._logger.info("source selected=%s reason=%s", source.name(), reason)
        try:
            source.open(
                self._config.ingest.uri,
                {
                    "gstreamer_pipeline": self._config.ingest.gstreamer_pipeline,
                    "latency_ms": self._config.ingest.latency_ms,
                    "decoder": self._config.ingest.decoder,
                    "pyav_options": self._config.ingest.pyav_options,
                },
            )
        except SourceError as exc:
            self._logger.error("cannot open stream: %s", exc)
            return None
        return source

    def _enable_prometheus(self, metrics: CaptureMetrics) -> None:
        monitoring = self._config.monitoring
        if not monitoring.prometheus_enabled:
            return
        if metrics.enable_prometheus(monitoring.prometheus_host, monitoring.prometheus_port):
            self._logger.info(
                "prometheus endpoint enabled at %s:%d",
                monitoring.prometheus_host,
                monitoring.prometheus_port,
            )
        else:
            self._logger.warning("prometheus requested but prometheus_client is not installed")

    def _log_stop_reason(self, source: SampleSource, metrics: CaptureMetrics) -> None:
        if self._interrupted:
            self._logger.info("interrupted, pipeline stopped")
        elif source.last_error():
            self._logger.error("Error from %s: %s", source.name(), source.last_error())
        elif source.is_eos():
            self._logger.info("end of stream")
        elif metrics.snapshot().sample_errors:
            self._logger.error("stream halted after an unreadable sample")
        else:
            self._logger.error("stream stopped delivering samples")

    def run(self) -> int:
        if not self._config.ingest.uri:
            self._logger.error("missing stream URI. Provide it on the command line or as ingest.uri")
            return 2

        source = self._open_source()
        if source is None:
            return 2

        metrics = CaptureMetrics()
        self._enable_prometheus(metrics)

        events = JsonEventSink(
            stdout_enabled=self._config.monitoring.event_stdout,
            file_path=self._config.monitoring.event_file,
        )
        events.open()

        controller = FrameSinkController(
            metrics=metrics,
            events=events if events.enabled() else None,
        )
        stats_logger = PeriodicStatsLogger(
            metrics=metrics,
            source=source.name(),
            interval_seconds=self._config.monitoring.stats_interval_seconds,
        )
        stop_event = threading.Event()

        def deliver_loop() -> None:
            try:
                while not stop_event.is_set():
                    if controller.on_new_sample(source) is FlowReturn.ERROR:
                        break
            finally:
                stop_event.set()

        deliver_thread = threading.Thread(
            target=deliver_loop,
            name="framesnap-deliver",
            daemon=True,
        )
        deliver_thread.start()

        try:
            while not stop_event.wait(timeout=0.1):
                stats_logger.maybe_emit()
        except KeyboardInterrupt:
            self._interrupted = True
        finally:
            stop_event.set()
            deliver_thread.join(timeout=2)
            # Closing the source wakes a delivery thread still blocked in a read.
            source.close()
            deliver_thread.join(timeout=2)
            if deliver_thread.is_alive():
                self._logger.warning("delivery thread still running after source close")
            events.close()

        self._log_stop_reason(source, metrics)
        stats_logger.emit()
        return 0
