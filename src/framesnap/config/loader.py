from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from dynaconf import Dynaconf

from framesnap.config.defaults import DEFAULT_CONFIG
from framesnap.config.models import IngestConfig, MonitoringConfig, RuntimeConfig

_SETTINGS_FILE_NAMES = (
    "framesnap.toml",
    "framesnap.yaml",
    "framesnap.yml",
    "framesnap.json",
    "settings.toml",
    "settings.yaml",
    "settings.yml",
    "settings.json",
)
_SUPPORTED_SUFFIXES = {".toml", ".yaml", ".yml", ".json"}


def _merge_dict(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value
    return base


def _lower_keys(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_lower_keys(item) for item in obj]
    return obj


def _load_with_dynaconf(config_paths: list[Path]) -> dict[str, Any]:
    settings = Dynaconf(
        envvar_prefix="FRAMESNAP",
        settings_files=[str(path) for path in config_paths],
        merge_enabled=True,
        environments=False,
        load_dotenv=True,
    )
    return _lower_keys(settings.as_dict())


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _resolve_relative(path_value: str | None, repo_root: Path) -> str | None:
    if not path_value:
        return path_value
    p = Path(path_value)
    if p.is_absolute():
        return str(p)
    return str((repo_root / p).resolve())


def _normalize(data: dict[str, Any], repo_root: Path) -> RuntimeConfig:
    ingest_data = data.get("ingest", {})
    monitoring_data = data.get("monitoring", {})

    return RuntimeConfig(
        ingest=IngestConfig(
            uri=ingest_data.get("uri") or None,
            backend=str(ingest_data.get("backend", "auto")).lower(),
            gstreamer_pipeline=ingest_data.get("gstreamer_pipeline") or None,
            latency_ms=max(0, int(ingest_data.get("latency_ms", 200))),
            decoder=str(ingest_data.get("decoder", "avdec_h264")),
            pyav_options={
                str(k): str(v) for k, v in (ingest_data.get("pyav_options") or {}).items()
            },
        ),
        monitoring=MonitoringConfig(
            json_logs=_coerce_bool(monitoring_data.get("json_logs", False)),
            log_level=str(monitoring_data.get("log_level", "INFO")).upper(),
            stats_interval_seconds=float(
                monitoring_data.get("stats_interval_seconds", 5.0)
            ),
            prometheus_enabled=_coerce_bool(
                monitoring_data.get("prometheus_enabled", False)
            ),
            prometheus_host=str(monitoring_data.get("prometheus_host", "0.0.0.0")),
            prometheus_port=int(monitoring_data.get("prometheus_port", 9108)),
            event_stdout=_coerce_bool(monitoring_data.get("event_stdout", False)),
            event_file=_resolve_relative(monitoring_data.get("event_file"), repo_root),
        ),
    )


def _default_config_copy() -> dict[str, Any]:
    return json.loads(json.dumps(DEFAULT_CONFIG))


def load_runtime_config(
    repo_root: Path,
    config_path: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> RuntimeConfig:
    config_paths: list[Path] = []
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        if path.suffix.lower() not in _SUPPORTED_SUFFIXES:
            raise RuntimeError(f"Unsupported config extension: {path.suffix.lower()}")
        config_paths.append(path)
    else:
        for name in _SETTINGS_FILE_NAMES:
            candidate = repo_root / name
            if candidate.exists():
                config_paths.append(candidate)

    merged = _default_config_copy()
    _merge_dict(merged, _load_with_dynaconf(config_paths))

    if cli_overrides:
        _merge_dict(merged, _lower_keys(cli_overrides))

    return _normalize(merged, repo_root)
