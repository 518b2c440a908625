"""Directional datagram and octet rate tracking for a single connection."""

import logging
from typing import Any, Dict, Optional, Sequence

from ..core import Millis, RateMetric
from ..utils.config_validator import load_config, validate_metrics_config
from .debug_reporter import DebugReporter
from .models import CombinedMetrics, MetricsInDirection

logger = logging.getLogger(__name__)


class NetworkMetrics:
    """Owns the four rate estimators of one connection.

    Callers feed observed traffic through ``sent_datagrams`` and
    ``received_datagram`` and drive recomputation with ``update_metrics``.
    Timestamps are monotonic milliseconds supplied by the caller; nothing
    here reads a clock. Not thread-safe: one instance per connection,
    mutated only by its owner.
    """

    def __init__(self, now: Millis, config: Optional[Dict[str, Any]] = None):
        """Initialize the aggregator.

        Args:
            now: Monotonic start timestamp in milliseconds
            config: Metrics configuration containing:
                - measurement_interval_s: Estimator recompute interval (default 0.1)
                - debug_logging: {"enabled": bool, "interval_ms": int (default 500)}

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = validate_metrics_config(config)
        interval_s = self.config["measurement_interval_s"]

        self._in_datagrams_per_second = RateMetric.with_interval(now, interval_s)
        self._in_octets_per_second = RateMetric.with_interval(now, interval_s)
        self._out_datagrams_per_second = RateMetric.with_interval(now, interval_s)
        self._out_octets_per_second = RateMetric.with_interval(now, interval_s)

        debug = self.config["debug_logging"]
        self.debug_reporter: Optional[DebugReporter] = None
        if debug["enabled"]:
            self.debug_reporter = DebugReporter(now, debug["interval_ms"])

        logger.debug(
            f"NetworkMetrics initialized at {now}ms (interval: {interval_s}s, "
            f"debug logging: {debug['enabled']})"
        )

    @classmethod
    def from_config_file(cls, now: Millis, config_path: str) -> "NetworkMetrics":
        """Create an aggregator from a YAML or JSON configuration file."""
        return cls(now, load_config(config_path))

    def sent_datagrams(self, datagrams: Sequence[bytes]) -> None:
        """Record one outgoing batch.

        Every datagram's length goes to the outgoing octet rate. The batch
        counts as ``len(datagrams)`` on the outgoing datagram rate, added once.
        """
        for datagram in datagrams:
            self._out_octets_per_second.add(len(datagram))
        self._out_datagrams_per_second.add(len(datagrams))

    def received_datagram(self, datagram: bytes) -> None:
        """Record a single incoming datagram."""
        self._in_octets_per_second.add(len(datagram))
        self._in_datagrams_per_second.add(1)

    def update_metrics(self, now: Millis) -> None:
        """Recompute all four rates against the same ``now``.

        When debug logging is enabled this may also emit one DEBUG line.
        """
        self._in_datagrams_per_second.update(now)
        self._in_octets_per_second.update(now)
        self._out_datagrams_per_second.update(now)
        self._out_octets_per_second.update(now)

        if self.debug_reporter is not None:
            self.debug_reporter.maybe_log(now, self.metrics)

    def metrics(self) -> CombinedMetrics:
        """Snapshot the current rates."""
        return CombinedMetrics(
            outgoing=MetricsInDirection(
                datagrams_per_second=self._out_datagrams_per_second.rate(),
                octets_per_second=self._out_octets_per_second.rate(),
            ),
            incoming=MetricsInDirection(
                datagrams_per_second=self._in_datagrams_per_second.rate(),
                octets_per_second=self._in_octets_per_second.rate(),
            ),
        )

    def in_datagrams_per_second(self) -> float:
        return self._in_datagrams_per_second.rate()

    def in_octets_per_second(self) -> float:
        return self._in_octets_per_second.rate()

    def out_datagrams_per_second(self) -> float:
        return self._out_datagrams_per_second.rate()

    def out_octets_per_second(self) -> float:
        return self._out_octets_per_second.rate()
