"""Network metrics aggregation and reporting module."""

from .debug_reporter import DebugReporter
from .history import MetricsHistory
from .models import CombinedMetrics, MetricsInDirection
from .network_metrics import NetworkMetrics

__all__ = [
    "CombinedMetrics",
    "DebugReporter",
    "MetricsHistory",
    "MetricsInDirection",
    "NetworkMetrics",
]
