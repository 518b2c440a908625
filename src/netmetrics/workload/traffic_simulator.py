"""SimPy-driven synthetic traffic for exercising NetworkMetrics."""

import logging
from typing import Any, Dict, List, Optional

import simpy

from ..metrics import MetricsHistory, NetworkMetrics
from ..utils.config_validator import ConfigurationError, TrafficConfigValidator
from .sampler import TrafficSampler

logger = logging.getLogger(__name__)


class TrafficSimulator:
    """Generates outgoing and incoming datagram streams on a simulated clock.

    An outgoing process sends bursts of datagrams, an incoming process
    receives single datagrams, and a poller calls ``update_metrics`` on a
    fixed cadence and records each snapshot. Simulated seconds are converted
    to integer milliseconds before they reach the aggregator.
    """

    def __init__(self, config: Dict[str, Any], network_metrics: Optional[NetworkMetrics] = None):
        """Initialize the simulator.

        Args:
            config: Traffic configuration containing:
                - duration_s: Simulated duration in seconds
                - poll_interval_s: Cadence of update_metrics calls (default 0.05)
                - random_seed (optional): Random seed for reproducibility
                - metrics (optional): NetworkMetrics configuration
                - outgoing / incoming: Direction profiles with
                  inter_arrival_time_dist_config, datagram_size_dist_config and,
                  for outgoing, datagrams_per_send_dist_config
                - percentiles_to_calculate (optional): Percentiles for the summary
            network_metrics: Aggregator to drive; one starting at t=0 is
                created when omitted

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        errors = TrafficConfigValidator.validate(config)
        if errors:
            raise ConfigurationError("; ".join(errors))

        self.config = config
        self.env = simpy.Environment()
        self.sampler = TrafficSampler(config.get("random_seed"))

        self.duration_s: float = config["duration_s"]
        self.poll_interval_s: float = config.get("poll_interval_s", 0.05)

        metrics_config = config.get("metrics")
        if network_metrics is not None and metrics_config is not None:
            logger.warning("Ignoring traffic config 'metrics' section: an aggregator was supplied")
        self.network_metrics = network_metrics or NetworkMetrics(self.now_ms(), metrics_config)
        self.history = MetricsHistory(
            max_entries=self.network_metrics.config["history"]["max_entries"]
        )

        self.totals: Dict[str, int] = {
            "out_datagrams": 0,
            "out_octets": 0,
            "in_datagrams": 0,
            "in_octets": 0,
        }

        logger.info(f"TrafficSimulator initialized (duration: {self.duration_s}s)")

    def now_ms(self) -> int:
        """Current simulated time in whole milliseconds."""
        return int(round(self.env.now * 1000))

    def _outgoing_process(self, profile: Dict[str, Any]):
        burst_config = profile.get(
            "datagrams_per_send_dist_config", {"type": "Constant", "value": 1}
        )
        while True:
            yield self.env.timeout(self.sampler.sample_gap(profile["inter_arrival_time_dist_config"]))
            if self.env.now >= self.duration_s:
                break

            burst = self.sampler.sample_burst(burst_config)
            datagrams = self._make_datagrams(profile, burst)
            self.network_metrics.sent_datagrams(datagrams)
            self.totals["out_datagrams"] += len(datagrams)
            self.totals["out_octets"] += sum(len(d) for d in datagrams)

    def _incoming_process(self, profile: Dict[str, Any]):
        while True:
            yield self.env.timeout(self.sampler.sample_gap(profile["inter_arrival_time_dist_config"]))
            if self.env.now >= self.duration_s:
                break

            datagram = self._make_datagrams(profile, 1)[0]
            self.network_metrics.received_datagram(datagram)
            self.totals["in_datagrams"] += 1
            self.totals["in_octets"] += len(datagram)

    def _poll_process(self):
        polls = int(round(self.duration_s / self.poll_interval_s))
        for _ in range(polls):
            yield self.env.timeout(self.poll_interval_s)
            now = self.now_ms()
            self.network_metrics.update_metrics(now)
            self.history.record(now, self.network_metrics.metrics())

    def _make_datagrams(self, profile: Dict[str, Any], count: int) -> List[bytes]:
        size_config = profile["datagram_size_dist_config"]
        return [bytes(self.sampler.sample_size(size_config)) for _ in range(count)]

    def run(self) -> Dict[str, Any]:
        """Run the simulation to completion.

        Returns:
            Dictionary with exact totals, the final snapshot and rate statistics
        """
        if "outgoing" in self.config:
            self.env.process(self._outgoing_process(self.config["outgoing"]))
        if "incoming" in self.config:
            self.env.process(self._incoming_process(self.config["incoming"]))
        self.env.process(self._poll_process())

        logger.info(f"Starting traffic simulation (max time: {self.duration_s}s)")

        try:
            # The final poll lands on duration_s
            self.env.run(until=self.duration_s + self.poll_interval_s / 2)
        except Exception as e:
            logger.error(f"Error during traffic simulation at time {self.env.now}: {e}")
            raise

        logger.info(f"Traffic simulation ended at time {self.env.now}")

        percentiles = self.config.get("percentiles_to_calculate", [0.5, 0.9, 0.99])
        return {
            "simulation": {
                "duration_s": self.duration_s,
                "snapshots": len(self.history),
            },
            "totals": dict(self.totals),
            "final": self.network_metrics.metrics().to_dict(),
            "rates": self.history.generate_summary_report(percentiles),
        }
