from framesnap.pipeline.runtime import SnapshotRuntime

__all__ = ["SnapshotRuntime"]
