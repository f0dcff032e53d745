from __future__ import annotations

import logging
from typing import Any

import numpy as np

from framesnap.capture.decode import build_caps
from framesnap.errors import SourceError
from framesnap.io.source.base import SampleSource
from framesnap.types import Sample


class PyAVSource(SampleSource):
    def __init__(self) -> None:
        self._av = None
        self._uri = ""
        self._options: dict[str, str] = {}
        self._container = None
        self._frame_iter = None
        self._fps: float | None = None
        self._eos = False
        self._error: str | None = None
        self._logger = logging.getLogger("framesnap.source")

    def _require_av(self) -> Any:
        if self._av is not None:
            return self._av
        try:
            import av
        except ImportError as exc:
            raise SourceError("PyAV source selected but `av` package is not installed.") from exc
        self._av = av
        return av

    def open(self, uri: str, options: dict[str, Any] | None = None) -> None:
        self._uri = uri
        options = options or {}
        nested_options = options.get("pyav_options")
        if isinstance(nested_options, dict):
            self._options = {str(k): str(v) for k, v in nested_options.items()}
        else:
            self._options = {}
        self._eos = False
        self._error = None
        self._close_container()

        av = self._require_av()
        try:
            self._container = av.open(uri, options=self._options)
        except av.error.FFmpegError as exc:
            raise SourceError(f"Failed to open {uri} with PyAV: {exc}") from exc
        if not self._container.streams.video:
            self._close_container()
            raise SourceError(f"No video stream in {uri}")
        rate = self._container.streams.video[0].average_rate
        self._fps = float(rate) if rate else None
        self._frame_iter = self._container.decode(video=0)

    def _close_container(self) -> None:
        if self._container is not None:
            self._container.close()
            self._container = None
            self._frame_iter = None

    def pull_sample(self) -> Sample | None:
        if self._frame_iter is None or self._eos or self._error is not None:
            return None

        av = self._require_av()
        try:
            av_frame = next(self._frame_iter)
        except StopIteration:
            self._eos = True
            return None
        except av.error.FFmpegError as exc:
            self._error = str(exc)
            self._logger.error("error from %s: %s", self._uri, exc)
            return None

        rgb = np.ascontiguousarray(av_frame.to_ndarray(format="rgb24"))
        return Sample(caps=build_caps(av_frame.width, av_frame.height, self._fps), buffer=rgb)

    def is_eos(self) -> bool:
        return self._eos

    def last_error(self) -> str | None:
        return self._error

    def close(self) -> None:
        self._close_container()

    def name(self) -> str:
        return "pyav"
