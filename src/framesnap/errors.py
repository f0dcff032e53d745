class SnapshotError(RuntimeError):
    """Base class for frame snapshot failures."""


class SampleReadError(SnapshotError):
    """The sample itself could not be read; fatal to the stream."""


class DecodeError(SampleReadError):
    """Raised when sample caps cannot be parsed into RGB video info."""


class BufferMapError(SampleReadError):
    """Raised when a sample buffer cannot be mapped for reading."""


class SnapshotWriteError(SnapshotError):
    """A snapshot could not be persisted; the stream keeps running."""


class EncodeError(SnapshotWriteError):
    """Raised when pixel data does not match the declared dimensions or fails to encode."""


class FileCreateError(SnapshotWriteError):
    """Raised when the snapshot file cannot be opened or written."""


class SourceError(RuntimeError):
    """Raised when a sample source cannot be opened."""
