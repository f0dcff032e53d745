from framesnap.capture.controller import FrameSinkController
from framesnap.capture.counter import FrameCounter
from framesnap.capture.decode import build_caps, extract, parse_caps
from framesnap.capture.policy import CAPTURE_INTERVAL, should_capture
from framesnap.capture.writer import snapshot_path, write_png

__all__ = [
    "CAPTURE_INTERVAL",
    "FrameCounter",
    "FrameSinkController",
    "build_caps",
    "extract",
    "parse_caps",
    "should_capture",
    "snapshot_path",
    "write_png",
]
