"""Configuration utilities."""

from .config_validator import (
    DEFAULT_CONFIG,
    ConfigurationError,
    DistributionConfigValidator,
    MetricsConfigValidator,
    TrafficConfigValidator,
    load_config,
    merge_with_defaults,
    validate_metrics_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigurationError",
    "DistributionConfigValidator",
    "MetricsConfigValidator",
    "TrafficConfigValidator",
    "load_config",
    "merge_with_defaults",
    "validate_metrics_config",
]
