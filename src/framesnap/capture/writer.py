from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

import cv2
import numpy as np

from framesnap.errors import EncodeError, FileCreateError

BYTES_PER_PIXEL = 3

PixelData = Union[bytes, bytearray, memoryview, np.ndarray, Sequence[int]]


def snapshot_path(counter_value: int, directory: Path | None = None) -> Path:
    name = f"frame_{counter_value}.png"
    if directory is None:
        return Path(name)
    return directory / name


def _as_rgb_array(width: int, height: int, pixel_bytes: PixelData) -> np.ndarray:
    expected = width * height * BYTES_PER_PIXEL
    try:
        if isinstance(pixel_bytes, (bytes, bytearray, memoryview, np.ndarray)):
            flat = np.frombuffer(pixel_bytes, dtype=np.uint8)
        else:
            flat = np.asarray(pixel_bytes, dtype=np.uint8).reshape(-1)
    except (TypeError, ValueError, OverflowError) as exc:
        raise EncodeError(f"Pixel data is not a byte sequence: {exc}") from exc

    if flat.size != expected:
        raise EncodeError(
            f"Pixel buffer has {flat.size} bytes, expected {expected} for {width}x{height} RGB"
        )
    return flat.reshape(height, width, BYTES_PER_PIXEL)


def encode_png(width: int, height: int, pixel_bytes: PixelData) -> bytes:
    if width <= 0 or height <= 0:
        raise EncodeError(f"Invalid dimensions {width}x{height}")

    rgb = _as_rgb_array(width, height, pixel_bytes)
    try:
        # OpenCV encoders take BGR channel order.
        bgr = cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)
        ok, encoded = cv2.imencode(".png", bgr)
    except cv2.error as exc:
        raise EncodeError(f"PNG encoding failed: {exc}") from exc
    if not ok:
        raise EncodeError(f"PNG encoder rejected {width}x{height} frame")
    return encoded.tobytes()


def write_png(width: int, height: int, pixel_bytes: PixelData, file_path: str | Path) -> None:
    payload = encode_png(width, height, pixel_bytes)
    path = Path(file_path)
    try:
        with path.open("wb") as handle:
            handle.write(payload)
    except OSError as exc:
        raise FileCreateError(f"Cannot write {path}: {exc}") from exc
