"""
Configuration defaults, validation and loading.

This module provides validation for:
- Network metrics configurations (estimator interval, debug logging, history)
- Traffic simulation configurations
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "measurement_interval_s": 0.1,
    "debug_logging": {
        "enabled": False,
        "interval_ms": 500,
    },
    "history": {
        "max_entries": None,
    },
}


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""
    pass


def merge_with_defaults(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Overlay ``config`` on a copy of ``DEFAULT_CONFIG`` (one level of nesting)."""
    if config is not None and not isinstance(config, dict):
        raise ConfigurationError(f"Configuration must be a mapping, got {type(config).__name__}")

    merged = copy.deepcopy(DEFAULT_CONFIG)
    for key, value in (config or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class MetricsConfigValidator:
    """Validates network metrics configuration."""

    KNOWN_SECTIONS = set(DEFAULT_CONFIG.keys())

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> List[str]:
        """Validate a (defaults-merged) metrics configuration."""
        errors = []

        unknown = set(config.keys()) - cls.KNOWN_SECTIONS
        if unknown:
            errors.append(f"Unknown configuration keys: {sorted(unknown)}")

        interval = config.get("measurement_interval_s")
        if not _is_number(interval):
            errors.append(f"measurement_interval_s must be a number, got {interval!r}")
        elif interval <= 0:
            errors.append(f"Invalid measurement_interval_s: {interval} (must be > 0)")

        errors.extend(cls._validate_debug_logging(config.get("debug_logging")))
        errors.extend(cls._validate_history(config.get("history")))

        return errors

    @classmethod
    def _validate_debug_logging(cls, debug: Any) -> List[str]:
        errors = []

        if not isinstance(debug, dict):
            return [f"debug_logging must be a mapping, got {type(debug).__name__}"]

        if not isinstance(debug.get("enabled"), bool):
            errors.append(f"debug_logging.enabled must be a boolean, got {debug.get('enabled')!r}")

        interval_ms = debug.get("interval_ms")
        if not _is_number(interval_ms):
            errors.append(f"debug_logging.interval_ms must be a number, got {interval_ms!r}")
        elif interval_ms < 0:
            errors.append(f"Invalid debug_logging.interval_ms: {interval_ms}")

        return errors

    @classmethod
    def _validate_history(cls, history: Any) -> List[str]:
        if not isinstance(history, dict):
            return [f"history must be a mapping, got {type(history).__name__}"]

        max_entries = history.get("max_entries")
        if max_entries is None:
            return []
        if not isinstance(max_entries, int) or isinstance(max_entries, bool) or max_entries <= 0:
            return [f"Invalid history.max_entries: {max_entries!r} (must be a positive integer)"]
        return []


class DistributionConfigValidator:
    """Validates the parameters of one traffic distribution config."""

    SUPPORTED_TYPES = {
        "Constant", "Fixed", "Exponential", "Uniform", "Normal",
        "LogNormal", "Pareto", "Gamma", "Mixture",
    }

    @classmethod
    def validate(cls, name: str, dist: Any, strictly_positive: bool = False) -> List[str]:
        """Validate a distribution config.

        Args:
            name: Label used in error messages (e.g. "outgoing inter_arrival_time_dist_config")
            dist: The distribution config mapping
            strictly_positive: Constant values must be > 0 (inter-arrival gaps)
                instead of >= 0
        """
        if not isinstance(dist, dict):
            return [f"{name} must be a mapping, got {type(dist).__name__}"]
        if "type" not in dist:
            return [f"{name} missing type"]

        dist_type = dist["type"]
        if dist_type not in cls.SUPPORTED_TYPES:
            return [f"{name}: unsupported distribution type {dist_type!r}"]

        errors = []

        def check(param: str, minimum: float, inclusive: bool) -> None:
            if param not in dist:
                return
            value = dist[param]
            if not _is_number(value):
                errors.append(f"{name}.{param} must be a number, got {value!r}")
            elif value < minimum or (not inclusive and value == minimum):
                bound = ">=" if inclusive else ">"
                errors.append(f"Invalid {name}.{param}: {value} (must be {bound} {minimum})")

        if dist_type in ("Constant", "Fixed"):
            check("value", 0, inclusive=not strictly_positive)
        elif dist_type == "Exponential":
            check("rate", 0, inclusive=False)
        elif dist_type == "Uniform":
            check("low", 0, inclusive=True)
            check("high", 0, inclusive=True)
            low, high = dist.get("low"), dist.get("high")
            if _is_number(low) and _is_number(high) and high < low:
                errors.append(f"Invalid {name}: high {high} < low {low}")
        elif dist_type == "Normal":
            check("std", 0, inclusive=True)
            check("sigma", 0, inclusive=True)
        elif dist_type == "LogNormal":
            check("sigma", 0, inclusive=True)
        elif dist_type in ("Pareto", "Gamma"):
            check("shape", 0, inclusive=False)
            check("scale", 0, inclusive=False)
        elif dist_type == "Mixture":
            errors.extend(cls._validate_mixture(name, dist, strictly_positive))

        return errors

    @classmethod
    def _validate_mixture(cls, name: str, dist: Dict[str, Any], strictly_positive: bool) -> List[str]:
        components = dist.get("components")
        if not isinstance(components, list) or not components:
            return [f"{name}: Mixture needs a non-empty components list"]

        errors = []
        for i, component in enumerate(components):
            errors.extend(cls.validate(f"{name}.components[{i}]", component, strictly_positive))

        weights = dist.get("weights")
        if weights is not None:
            if not isinstance(weights, list) or len(weights) != len(components):
                errors.append(f"{name}: weights must list one number per component")
            elif not all(_is_number(w) and w >= 0 for w in weights) or sum(weights) <= 0:
                errors.append(f"{name}: weights must be non-negative with a positive sum")

        return errors


class TrafficConfigValidator:
    """Validates synthetic traffic simulation configuration."""

    # dist field -> Constant values must be strictly positive
    DIRECTION_DIST_FIELDS = {
        "outgoing": {
            "inter_arrival_time_dist_config": True,
            "datagram_size_dist_config": False,
        },
        "incoming": {
            "inter_arrival_time_dist_config": True,
            "datagram_size_dist_config": False,
        },
    }
    OPTIONAL_DIST_FIELDS = {
        "outgoing": {"datagrams_per_send_dist_config": False},
        "incoming": {},
    }

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> List[str]:
        """Validate a traffic simulation configuration."""
        if not isinstance(config, dict):
            return [f"Traffic config must be a mapping, got {type(config).__name__}"]

        errors = []

        duration = config.get("duration_s")
        if duration is None:
            errors.append("Traffic config missing duration_s")
        elif not _is_number(duration) or duration <= 0:
            errors.append(f"Invalid duration_s: {duration}")

        poll_interval = config.get("poll_interval_s", 0.05)
        if not _is_number(poll_interval) or poll_interval <= 0:
            errors.append(f"Invalid poll_interval_s: {poll_interval}")

        if "outgoing" not in config and "incoming" not in config:
            errors.append("Traffic config needs at least one of outgoing/incoming")

        for direction, dist_fields in cls.DIRECTION_DIST_FIELDS.items():
            if direction not in config:
                continue
            profile = config[direction]
            if not isinstance(profile, dict):
                errors.append(f"{direction} must be a mapping, got {type(profile).__name__}")
                continue

            for dist_field, strictly_positive in dist_fields.items():
                if dist_field not in profile:
                    errors.append(f"{direction} missing {dist_field}")
                    continue
                errors.extend(DistributionConfigValidator.validate(
                    f"{direction} {dist_field}", profile[dist_field], strictly_positive
                ))

            for dist_field, strictly_positive in cls.OPTIONAL_DIST_FIELDS[direction].items():
                if dist_field in profile:
                    errors.extend(DistributionConfigValidator.validate(
                        f"{direction} {dist_field}", profile[dist_field], strictly_positive
                    ))

        if "metrics" in config:
            try:
                errors.extend(MetricsConfigValidator.validate(merge_with_defaults(config["metrics"])))
            except ConfigurationError as e:
                errors.append(f"metrics: {e}")

        return errors


def validate_metrics_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge defaults into ``config`` and validate it.

    Raises:
        ConfigurationError: If the merged configuration is invalid
    """
    merged = merge_with_defaults(config)
    errors = MetricsConfigValidator.validate(merged)
    if errors:
        raise ConfigurationError("; ".join(errors))
    return merged


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load a metrics configuration from a YAML or JSON file and validate it.

    Returns:
        The defaults-merged configuration
    """
    config_file = Path(config_path)

    with open(config_file) as f:
        if config_file.suffix in [".yaml", ".yml"]:
            config = yaml.safe_load(f) or {}
        else:
            config = json.load(f)

    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

    merged = validate_metrics_config(config)
    logger.info(f"Loaded metrics configuration from {config_path}")
    return merged
