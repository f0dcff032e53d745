from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from framesnap.io.output.events import JsonEventSink


class JsonEventSinkTests(unittest.TestCase):
    def test_enabled_false_when_no_stdout_and_no_file(self) -> None:
        sink = JsonEventSink(stdout_enabled=False, file_path=None)
        try:
            self.assertFalse(sink.enabled())
        finally:
            sink.close()

    def test_stdout_receives_one_json_line_per_event(self) -> None:
        sink = JsonEventSink(stdout_enabled=True, file_path=None)
        out = io.StringIO()
        try:
            self.assertTrue(sink.enabled())
            with contextlib.redirect_stdout(out):
                sink.emit({"event": "snapshot", "frame": 30})
        finally:
            sink.close()

        self.assertEqual(json.loads(out.getvalue()), {"event": "snapshot", "frame": 30})

    def test_file_is_appended(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "nested" / "events.jsonl"
            output_path.parent.mkdir()
            output_path.write_text('{"event": "earlier"}\n', encoding="utf-8")
            sink = JsonEventSink(stdout_enabled=False, file_path=str(output_path))
            sink.open()
            try:
                sink.emit({"event": "snapshot", "frame": 60})
            finally:
                sink.close()

            lines = output_path.read_text(encoding="utf-8").splitlines()
            self.assertEqual(len(lines), 2)
            self.assertEqual(json.loads(lines[1])["frame"], 60)

    def test_emit_after_close_is_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "events.jsonl"
            sink = JsonEventSink(stdout_enabled=True, file_path=str(output_path))
            sink.open()
            sink.close()

            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                delivered = sink.emit({"event": "snapshot", "frame": 90})

            self.assertFalse(delivered)
            self.assertEqual(out.getvalue(), "")
            self.assertEqual(output_path.read_text(encoding="utf-8"), "")


if __name__ == "__main__":
    unittest.main()
