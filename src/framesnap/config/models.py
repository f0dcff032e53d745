from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class IngestConfig:
    uri: str | None = None
    backend: str = "auto"
    gstreamer_pipeline: str | None = None
    latency_ms: int = 200
    decoder: str = "avdec_h264"
    pyav_options: dict[str, str] = field(default_factory=dict)


@dataclass
class MonitoringConfig:
    json_logs: bool = False
    log_level: str = "INFO"
    stats_interval_seconds: float = 5.0
    prometheus_enabled: bool = False
    prometheus_host: str = "0.0.0.0"
    prometheus_port: int = 9108
    event_stdout: bool = False
    event_file: str | None = None


@dataclass
class RuntimeConfig:
    ingest: IngestConfig = field(default_factory=IngestConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    def as_log_context(self) -> dict[str, Any]:
        return {
            "uri": self.ingest.uri,
            "ingest_backend": self.ingest.backend,
            "custom_pipeline": bool(self.ingest.gstreamer_pipeline),
            "decoder": self.ingest.decoder,
            "json_logs": self.monitoring.json_logs,
            "prometheus": self.monitoring.prometheus_enabled,
        }
