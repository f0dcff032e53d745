from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Iterator

from framesnap.errors import BufferMapError, DecodeError
from framesnap.types import FrameView, Sample, VideoInfo

RAW_VIDEO_MEDIA_TYPE = "video/x-raw"
RGB_FORMAT = "RGB"

_FIELD_RE = re.compile(r"\s*([A-Za-z0-9_-]+)\s*=\s*(?:\(([A-Za-z]+)\))?\s*(.+?)\s*$")


def build_caps(width: int, height: int, fps: float | None = None) -> str:
    """Caps string for an RGB raw video sample, in GStreamer's serialization."""
    fields = [
        RAW_VIDEO_MEDIA_TYPE,
        f"format=(string){RGB_FORMAT}",
        f"width=(int){int(width)}",
        f"height=(int){int(height)}",
    ]
    if fps is not None and fps > 0:
        # Whole-number rates keep a /1 denominator; fractional rates use NTSC-style /1000.
        if float(fps).is_integer():
            fields.append(f"framerate=(fraction){int(fps)}/1")
        else:
            fields.append(f"framerate=(fraction){int(round(fps * 1000))}/1000")
    return ", ".join(fields)


def _parse_fields(caps: str) -> tuple[str, dict[str, str]]:
    parts = caps.strip().rstrip(";").split(",")
    media_type = parts[0].strip()
    fields: dict[str, str] = {}
    for part in parts[1:]:
        match = _FIELD_RE.match(part)
        if match is None:
            raise DecodeError(f"Malformed caps field: {part.strip()!r}")
        key, _, value = match.groups()
        fields[key.lower()] = value.strip().strip('"')
    return media_type, fields


def _positive_int(fields: dict[str, str], key: str) -> int:
    raw = fields.get(key)
    if raw is None:
        raise DecodeError(f"Caps missing {key}")
    try:
        value = int(raw)
    except ValueError as exc:
        raise DecodeError(f"Caps {key} is not an integer: {raw!r}") from exc
    if value <= 0:
        raise DecodeError(f"Caps {key} must be positive, got {value}")
    return value


def parse_caps(caps: str | None) -> VideoInfo:
    if not caps or not caps.strip():
        raise DecodeError("Sample has no caps")

    media_type, fields = _parse_fields(caps)
    if media_type != RAW_VIDEO_MEDIA_TYPE:
        raise DecodeError(f"Unsupported media type: {media_type!r}")

    pixel_format = fields.get("format")
    if pixel_format != RGB_FORMAT:
        raise DecodeError(f"Unsupported pixel format: {pixel_format!r}")

    return VideoInfo(
        width=_positive_int(fields, "width"),
        height=_positive_int(fields, "height"),
        format=pixel_format,
        framerate=fields.get("framerate"),
    )


@contextmanager
def map_readable(buffer: Any) -> Iterator[memoryview]:
    """Map ``buffer`` as a flat read-only byte view for the duration of the block."""
    if buffer is None:
        raise BufferMapError("Sample has no buffer")
    try:
        view = memoryview(buffer).cast("B").toreadonly()
    except (TypeError, ValueError) as exc:
        raise BufferMapError(f"Buffer cannot be mapped for reading: {exc}") from exc
    try:
        yield view
    finally:
        view.release()


@contextmanager
def extract(sample: Sample) -> Iterator[FrameView]:
    """Yield ``(width, height, pixels)`` for ``sample``.

    The pixel view is released when the block exits; copy it to keep it.
    """
    info = parse_caps(sample.caps)
    with map_readable(sample.buffer) as pixels:
        yield FrameView(width=info.width, height=info.height, pixels=pixels)
