from __future__ import annotations


DEFAULT_CONFIG: dict = {
    "ingest": {
        "uri": None,
        "backend": "auto",
        "gstreamer_pipeline": None,
        "latency_ms": 200,
        "decoder": "avdec_h264",
        "pyav_options": {
            "rtsp_transport": "tcp",
            "fflags": "nobuffer",
            "flags": "low_delay",
            "max_delay": "500000",
        },
    },
    "monitoring": {
        "json_logs": False,
        "log_level": "INFO",
        "stats_interval_seconds": 5.0,
        "prometheus_enabled": False,
        "prometheus_host": "0.0.0.0",
        "prometheus_port": 9108,
        "event_stdout": False,
        "event_file": None,
    },
}
