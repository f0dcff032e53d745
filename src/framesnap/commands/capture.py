from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from framesnap.config import load_runtime_config
from framesnap.monitoring import configure_logging


def _clean_overrides(payload: dict[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in payload.items():
        if isinstance(value, dict):
            nested = _clean_overrides(value)
            if nested:
                cleaned[key] = nested
            continue
        if value is not None:
            cleaned[key] = value
    return cleaned


def _parse_pyav_options(raw_items: list[str] | None) -> dict[str, str] | None:
    if not raw_items:
        return None
    parsed: dict[str, str] = {}
    for item in raw_items:
        if "=" not in item:
            continue
        key, value = item.split("=", 1)
        parsed[key.strip()] = value.strip()
    return parsed if parsed else None


def build_capture_overrides(args: Any) -> dict[str, Any]:
    overrides = {
        "ingest": {
            "uri": args.uri,
            "backend": args.ingest_backend,
            "gstreamer_pipeline": args.gstreamer_pipeline,
            "latency_ms": args.latency_ms,
            "decoder": args.decoder,
            "pyav_options": _parse_pyav_options(args.pyav_option),
        },
        "monitoring": {
            "json_logs": (True if args.json_logs else None),
            "log_level": args.log_level,
            "prometheus_enabled": (True if args.prometheus else None),
            "prometheus_host": args.prometheus_host,
            "prometheus_port": args.prometheus_port,
            "event_stdout": (True if args.event_stdout else None),
            "event_file": args.event_file,
        },
    }
    return _clean_overrides(overrides)


def run_capture(args: Any, work_dir: Path) -> int:
    config = load_runtime_config(
        repo_root=work_dir,
        config_path=args.config,
        cli_overrides=build_capture_overrides(args),
    )

    if not config.ingest.uri:
        sys.stderr.write(getattr(args, "usage", "usage: framesnap capture [URI]\n"))
        sys.stderr.write("framesnap capture: error: a stream URI is required on the command line or as ingest.uri\n")
        return 2

    if args.quiet:
        config.monitoring.log_level = "WARNING"

    configure_logging(
        level=config.monitoring.log_level,
        json_logs=config.monitoring.json_logs,
    )

    logger = logging.getLogger("framesnap.capture_cmd")
    logger.info("starting capture", extra={"context": config.as_log_context()})

    from framesnap.pipeline.runtime import SnapshotRuntime

    return SnapshotRuntime(config=config).run()
