from __future__ import annotations

import unittest

import numpy as np

from framesnap.capture.decode import build_caps, extract, parse_caps
from framesnap.errors import BufferMapError, DecodeError
from framesnap.types import Sample


class ParseCapsTests(unittest.TestCase):
    def test_parses_built_caps(self) -> None:
        info = parse_caps(build_caps(4, 3, 30.0))

        self.assertEqual(info.width, 4)
        self.assertEqual(info.height, 3)
        self.assertEqual(info.format, "RGB")
        self.assertEqual(info.framerate, "30/1")

    def test_parses_full_gstreamer_caps(self) -> None:
        caps = (
            "video/x-raw, format=(string)RGB, width=(int)640, height=(int)480, "
            "interlace-mode=(string)progressive, pixel-aspect-ratio=(fraction)1/1, "
            "framerate=(fraction)30000/1001"
        )
        info = parse_caps(caps)

        self.assertEqual((info.width, info.height), (640, 480))
        self.assertEqual(info.framerate, "30000/1001")

    def test_rejects_missing_caps(self) -> None:
        for caps in (None, "", "   "):
            with self.assertRaises(DecodeError):
                parse_caps(caps)

    def test_rejects_non_rgb_format(self) -> None:
        with self.assertRaisesRegex(DecodeError, "pixel format"):
            parse_caps("video/x-raw, format=(string)BGR, width=(int)4, height=(int)4")

    def test_rejects_non_video_media_type(self) -> None:
        with self.assertRaisesRegex(DecodeError, "media type"):
            parse_caps("audio/x-raw, format=(string)RGB, width=(int)4, height=(int)4")

    def test_rejects_missing_or_bad_dimensions(self) -> None:
        bad = (
            "video/x-raw, format=(string)RGB, height=(int)4",
            "video/x-raw, format=(string)RGB, width=(int)0, height=(int)4",
            "video/x-raw, format=(string)RGB, width=(int)four, height=(int)4",
            "video/x-raw, format=(string)RGB, width=(int)4, height=(int)-2",
        )
        for caps in bad:
            with self.assertRaises(DecodeError, msg=caps):
                parse_caps(caps)

    def test_rejects_malformed_field(self) -> None:
        with self.assertRaisesRegex(DecodeError, "Malformed"):
            parse_caps("video/x-raw, nonsense")


class ExtractTests(unittest.TestCase):
    def test_yields_dimensions_and_read_only_view(self) -> None:
        buffer = np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3)
        sample = Sample(caps=build_caps(3, 2), buffer=buffer)

        with extract(sample) as frame:
            width, height, pixels = frame
            self.assertEqual((width, height), (3, 2))
            self.assertTrue(pixels.readonly)
            self.assertEqual(bytes(pixels), buffer.tobytes())

        with self.assertRaises(ValueError):
            frame.pixels.tobytes()

    def test_accepts_plain_bytes(self) -> None:
        sample = Sample(caps=build_caps(1, 1), buffer=b"\x01\x02\x03")

        with extract(sample) as frame:
            self.assertEqual(bytes(frame.pixels), b"\x01\x02\x03")

    def test_missing_buffer_is_a_map_error(self) -> None:
        sample = Sample(caps=build_caps(1, 1), buffer=None)

        with self.assertRaises(BufferMapError):
            with extract(sample):
                pass

    def test_non_contiguous_buffer_is_a_map_error(self) -> None:
        strided = np.zeros((4, 8, 3), dtype=np.uint8)[:, ::2, :]
        sample = Sample(caps=build_caps(4, 4), buffer=strided)

        with self.assertRaises(BufferMapError):
            with extract(sample):
                pass

    def test_caps_are_checked_before_buffer(self) -> None:
        sample = Sample(caps=None, buffer=None)

        with self.assertRaises(DecodeError):
            with extract(sample):
                pass


if __name__ == "__main__":
    unittest.main()
