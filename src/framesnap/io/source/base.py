from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from framesnap.types import Sample


class SampleSource(ABC):
    """Pull-based access to decoded RGB samples from an external media pipeline."""

    @abstractmethod
    def open(self, uri: str, options: dict[str, Any] | None = None) -> None:
        """Build and start the pipeline for ``uri``."""

    @abstractmethod
    def pull_sample(self) -> Sample | None:
        """Block until the next sample; None on end of stream or pipeline error."""

    @abstractmethod
    def is_eos(self) -> bool:
        """True once the pipeline reached a clean end of stream."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the pipeline."""

    @abstractmethod
    def name(self) -> str:
        """Stable backend name."""

    def last_error(self) -> str | None:
        """Text of the pipeline error that stopped delivery, if any."""
        return None
