from framesnap.io.output.events import JsonEventSink

__all__ = ["JsonEventSink"]
