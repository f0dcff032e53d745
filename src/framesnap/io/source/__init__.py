from framesnap.io.source.base import SampleSource
from framesnap.io.source.factory import opencv_has_gstreamer, select_source_backend

__all__ = ["SampleSource", "opencv_has_gstreamer", "select_source_backend"]
