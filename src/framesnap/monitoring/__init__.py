from framesnap.monitoring.logging import configure_logging
from framesnap.monitoring.metrics import CaptureMetrics
from framesnap.monitoring.stats import PeriodicStatsLogger

__all__ = [
    "configure_logging",
    "CaptureMetrics",
    "PeriodicStatsLogger",
]
