from .base import BaseCollector
from .metrics_collector import MetricsCollector

__all__ = [
    "BaseCollector",
    "MetricsCollector",
]
