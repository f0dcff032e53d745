from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from framesnap.config.loader import load_runtime_config


class ConfigLoaderTests(unittest.TestCase):
    def test_defaults_without_config_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_runtime_config(repo_root=Path(tmpdir))

        self.assertIsNone(config.ingest.uri)
        self.assertEqual(config.ingest.backend, "auto")
        self.assertEqual(config.ingest.latency_ms, 200)
        self.assertEqual(config.ingest.decoder, "avdec_h264")
        self.assertEqual(config.ingest.pyav_options["rtsp_transport"], "tcp")
        self.assertEqual(config.monitoring.log_level, "INFO")
        self.assertFalse(config.monitoring.prometheus_enabled)

    def test_json_file_merges_over_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            config_file = root / "framesnap.json"
            config_file.write_text(
                """
{
  "ingest": {
    "uri": "rtsp://cam.local/stream",
    "backend": "PyAV",
    "latency_ms": 50
  },
  "monitoring": {
    "log_level": "debug",
    "event_file": "logs/snapshots.jsonl"
  }
}
""".strip(),
                encoding="utf-8",
            )

            config = load_runtime_config(repo_root=root, config_path=str(config_file))

            self.assertEqual(config.ingest.uri, "rtsp://cam.local/stream")
            self.assertEqual(config.ingest.backend, "pyav")
            self.assertEqual(config.ingest.latency_ms, 50)
            self.assertEqual(config.ingest.pyav_options["rtsp_transport"], "tcp")
            self.assertEqual(config.monitoring.log_level, "DEBUG")
            self.assertEqual(
                config.monitoring.event_file,
                str((root / "logs/snapshots.jsonl").resolve()),
            )

    def test_settings_file_is_discovered_in_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "framesnap.toml").write_text(
                '[ingest]\nuri = "rtsp://discovered/stream"\n',
                encoding="utf-8",
            )

            config = load_runtime_config(repo_root=root)

            self.assertEqual(config.ingest.uri, "rtsp://discovered/stream")

    def test_cli_overrides_win_over_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            config_file = root / "framesnap.json"
            config_file.write_text('{"ingest": {"uri": "rtsp://from-file"}}', encoding="utf-8")

            config = load_runtime_config(
                repo_root=root,
                config_path=str(config_file),
                cli_overrides={"ingest": {"uri": "rtsp://from-cli"}},
            )

            self.assertEqual(config.ingest.uri, "rtsp://from-cli")

    def test_environment_variables_are_applied(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch.dict(os.environ, {"FRAMESNAP_INGEST__DECODER": "vaapih264dec"}):
                config = load_runtime_config(repo_root=Path(tmpdir))

        self.assertEqual(config.ingest.decoder, "vaapih264dec")

    def test_missing_explicit_config_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            with self.assertRaises(FileNotFoundError):
                load_runtime_config(repo_root=root, config_path=str(root / "nope.toml"))

    def test_unsupported_extension_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            config_file = root / "framesnap.ini"
            config_file.write_text("[ingest]\n", encoding="utf-8")
            with self.assertRaisesRegex(RuntimeError, "Unsupported config extension"):
                load_runtime_config(repo_root=root, config_path=str(config_file))


if __name__ == "__main__":
    unittest.main()
