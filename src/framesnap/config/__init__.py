from framesnap.config.loader import load_runtime_config
from framesnap.config.models import IngestConfig, MonitoringConfig, RuntimeConfig

__all__ = [
    "IngestConfig",
    "MonitoringConfig",
    "RuntimeConfig",
    "load_runtime_config",
]
