from __future__ import annotations

import logging
from typing import Any

import cv2

from framesnap.capture.decode import build_caps
from framesnap.errors import SourceError
from framesnap.io.source.base import SampleSource
from framesnap.types import Sample


def build_rtsp_pipeline(uri: str, latency_ms: int = 200, decoder: str = "avdec_h264") -> str:
    return (
        f"rtspsrc location={uri} latency={int(latency_ms)} ! rtph264depay ! {decoder} ! "
        "videoconvert ! video/x-raw,format=BGR ! appsink name=appsink sync=false"
    )


class GStreamerSource(SampleSource):
    """GStreamer pipeline driven through OpenCV's CAP_GSTREAMER appsink."""

    def __init__(self) -> None:
        self._cap: cv2.VideoCapture | None = None
        self._pipeline = ""
        self._nominal_fps: float | None = None
        self._eos = False
        self._logger = logging.getLogger("framesnap.source")

    def open(self, uri: str, options: dict[str, Any] | None = None) -> None:
        options = options or {}
        pipeline = options.get("gstreamer_pipeline")
        if not (isinstance(pipeline, str) and pipeline.strip()):
            pipeline = build_rtsp_pipeline(
                uri,
                latency_ms=int(options.get("latency_ms", 200)),
                decoder=str(options.get("decoder") or "avdec_h264"),
            )
        self._pipeline = pipeline
        self._eos = False
        self._release_capture()

        self._logger.info("opening gstreamer pipeline: %s", pipeline)
        self._cap = cv2.VideoCapture(pipeline, cv2.CAP_GSTREAMER)
        if not self._cap.isOpened():
            self._release_capture()
            raise SourceError(
                "Failed to open GStreamer pipeline with OpenCV CAP_GSTREAMER. "
                "Verify OpenCV was built with GStreamer support and that the "
                "pipeline ends with an appsink OpenCV can consume."
            )
        try:
            fps = float(self._cap.get(cv2.CAP_PROP_FPS))
            self._nominal_fps = fps if fps > 0 else None
        except cv2.error:
            self._nominal_fps = None

    def _release_capture(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None

    def pull_sample(self) -> Sample | None:
        if self._cap is None or self._eos:
            return None

        ok, frame = self._cap.read()
        if not ok or frame is None:
            # OpenCV folds EOS and bus errors into a failed read.
            self._eos = True
            return None

        height, width = frame.shape[:2]
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        return Sample(caps=build_caps(width, height, self._nominal_fps), buffer=rgb)

    def is_eos(self) -> bool:
        return self._eos

    def close(self) -> None:
        self._release_capture()

    def name(self) -> str:
        return "gstreamer"
