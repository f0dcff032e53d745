from __future__ import annotations

import json
import platform
import sys
from pathlib import Path
from typing import Any

from framesnap.config import load_runtime_config
from framesnap.io.source import opencv_has_gstreamer, select_source_backend


def _module_version(name: str) -> str | None:
    try:
        module = __import__(name)
        return getattr(module, "__version__", "installed")
    except Exception:
        return None


def build_report(config_path: str | None, work_dir: Path) -> dict[str, Any]:
    config = load_runtime_config(repo_root=work_dir, config_path=config_path)

    source, reason = select_source_backend(config.ingest)

    return {
        "platform": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
            "python": sys.version.split()[0],
        },
        "modules": {
            "opencv": _module_version("cv2"),
            "numpy": _module_version("numpy"),
            "av": _module_version("av"),
            "dynaconf": _module_version("dynaconf"),
            "prometheus_client": _module_version("prometheus_client"),
        },
        "opencv_gstreamer": opencv_has_gstreamer(),
        "source": {
            "selected": source.name(),
            "reason": reason,
        },
        "uri": config.ingest.uri,
    }


def _print_report(report: dict[str, Any]) -> None:
    print("framesnap doctor report")
    print(f"- platform: {report['platform']['system']} {report['platform']['machine']}")
    print(f"- python: {report['platform']['python']}")
    print(f"- opencv gstreamer support: {'yes' if report['opencv_gstreamer'] else 'no'}")
    print(f"- source: {report['source']['selected']} ({report['source']['reason']})")
    print(f"- uri: {report['uri'] or 'not configured'}")
    print("- modules:")
    for name, version in report["modules"].items():
        print(f"  - {name}: {version or 'not installed'}")


def run_doctor(args: Any, work_dir: Path) -> int:
    report = build_report(config_path=args.config, work_dir=work_dir)
    if args.json:
        print(json.dumps(report, ensure_ascii=True, indent=2))
        return 0
    _print_report(report)
    return 0
