"""netmetrics: directional datagram and octet rate tracking."""

from .core import RateMetric
from .metrics import (
    CombinedMetrics,
    DebugReporter,
    MetricsHistory,
    MetricsInDirection,
    NetworkMetrics,
)
from .utils import ConfigurationError, load_config

__version__ = "0.1.0"

__all__ = [
    "CombinedMetrics",
    "ConfigurationError",
    "DebugReporter",
    "MetricsHistory",
    "MetricsInDirection",
    "NetworkMetrics",
    "RateMetric",
    "load_config",
]
