"""Periodic PNG snapshots from a live RTSP stream."""

__version__ = "0.1.0"
