from __future__ import annotations

import re

from framesnap.config.models import IngestConfig
from framesnap.io.source.base import SampleSource

_GSTREAMER_BUILD_RE = re.compile(r"^\s*GStreamer:\s*(\S+)", re.MULTILINE)


def opencv_has_gstreamer() -> bool:
    try:
        import cv2

        info = cv2.getBuildInformation()
    except Exception:
        return False
    match = _GSTREAMER_BUILD_RE.search(info)
    return bool(match and match.group(1).upper() != "NO")


def _pyav_available() -> bool:
    try:
        import av

        _ = av.__version__
        return True
    except Exception:
        return False


def select_source_backend(config: IngestConfig) -> tuple[SampleSource, str]:
    backend = config.backend.lower().strip()

    if backend == "gstreamer":
        from framesnap.io.source.gstreamer_source import GStreamerSource

        return GStreamerSource(), "Requested source backend gstreamer"

    if backend == "pyav":
        from framesnap.io.source.pyav_source import PyAVSource

        return PyAVSource(), "Requested source backend pyav"

    # auto selection
    if config.gstreamer_pipeline or opencv_has_gstreamer():
        from framesnap.io.source.gstreamer_source import GStreamerSource

        return GStreamerSource(), "Auto source policy selected gstreamer"

    if _pyav_available():
        from framesnap.io.source.pyav_source import PyAVSource

        return PyAVSource(), "Auto source policy selected pyav (OpenCV lacks GStreamer)"

    from framesnap.io.source.gstreamer_source import GStreamerSource

    return GStreamerSource(), "Auto source policy fell back to gstreamer"
