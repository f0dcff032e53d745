from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple


class FlowReturn(Enum):
    """Verdict handed back to the upstream pipeline after each sample."""

    OK = "ok"
    ERROR = "error"


@dataclass
class Sample:
    """One decoded video sample as delivered by a sample source.

    ``buffer`` is owned by the source and is only valid for the duration of
    the callback that received the sample.
    """

    caps: str | None
    buffer: Any


@dataclass
class VideoInfo:
    width: int
    height: int
    format: str
    framerate: str | None = None


class FrameView(NamedTuple):
    width: int
    height: int
    pixels: memoryview
