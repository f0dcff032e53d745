from __future__ import annotations

import argparse
from pathlib import Path


def _add_capture_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("uri", nargs="?", help="RTSP stream URI (overrides ingest.uri)")
    parser.add_argument("--config", help="Path to TOML/YAML/JSON config file")
    parser.add_argument(
        "--ingest-backend",
        choices=["auto", "gstreamer", "pyav"],
        help="Override sample source selector",
    )
    parser.add_argument("--gstreamer-pipeline", help="Full GStreamer pipeline ending in an appsink")
    parser.add_argument("--latency-ms", type=int, help="rtspsrc jitter buffer latency")
    parser.add_argument("--decoder", help="GStreamer H.264 decode element (default avdec_h264)")
    parser.add_argument(
        "--pyav-option",
        action="append",
        default=None,
        metavar="KEY=VALUE",
        help="PyAV/FFmpeg option pair, repeatable",
    )

    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Runtime log level")
    parser.add_argument("--quiet", action="store_true", help="Suppress non-warning logs")
    parser.add_argument("--prometheus", action="store_true", help="Enable Prometheus metrics endpoint")
    parser.add_argument("--prometheus-host", help="Prometheus bind host")
    parser.add_argument("--prometheus-port", type=int, help="Prometheus bind port")
    parser.add_argument("--event-stdout", action="store_true", help="Print a JSON event per snapshot")
    parser.add_argument("--event-file", help="Append a JSON event per snapshot to file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="framesnap",
        description="Save every 30th decoded frame of an RTSP stream as PNG",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    capture = subparsers.add_parser("capture", help="Run the snapshot loop against a stream")
    _add_capture_args(capture)
    capture.set_defaults(usage=capture.format_usage())

    doctor = subparsers.add_parser("doctor", help="Report OpenCV/PyAV stream support")
    doctor.add_argument("--config", help="Optional config file to evaluate")
    doctor.add_argument("--json", action="store_true", help="Emit JSON report")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    work_dir = Path.cwd()

    if args.command == "capture":
        from framesnap.commands.capture import run_capture

        return run_capture(args, work_dir)
    if args.command == "doctor":
        from framesnap.commands.doctor import run_doctor

        return run_doctor(args, work_dir)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
