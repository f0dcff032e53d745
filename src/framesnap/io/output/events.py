from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any


class JsonEventSink:
    """One JSON line per snapshot event, to stdout and/or an append-only file.

    Events emitted after ``close()`` are dropped.
    """

    def __init__(self, stdout_enabled: bool, file_path: str | None = None) -> None:
        self._stdout_enabled = stdout_enabled
        self._file_path = Path(file_path).expanduser().resolve() if file_path else None
        self._file_handle = None
        self._closed = False
        self._lock = threading.Lock()

    def enabled(self) -> bool:
        return self._stdout_enabled or self._file_path is not None

    def open(self) -> None:
        with self._lock:
            self._closed = False
            if self._file_path is not None and self._file_handle is None:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_handle = self._file_path.open("a", encoding="utf-8")

    def emit(self, event: dict[str, Any]) -> bool:
        payload = json.dumps(event, ensure_ascii=True)
        with self._lock:
            if self._closed:
                return False
            if self._stdout_enabled:
                print(payload, flush=True)
            if self._file_handle is not None:
                self._file_handle.write(payload + "\n")
                self._file_handle.flush()
        return True

    def close(self) -> None:
        with self._lock:
            self._closed = True
            if self._file_handle is not None:
                self._file_handle.close()
                self._file_handle = None
