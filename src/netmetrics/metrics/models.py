"""Data models for directional throughput snapshots."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class MetricsInDirection:
    """Datagram and octet rates for one direction of a connection."""

    datagrams_per_second: float
    octets_per_second: float

    def __str__(self) -> str:
        return f"{self.datagrams_per_second} datagrams/s {self.octets_per_second} octets/s"


@dataclass(frozen=True)
class CombinedMetrics:
    """Outgoing and incoming rates captured at the same moment."""

    outgoing: MetricsInDirection
    incoming: MetricsInDirection

    def __str__(self) -> str:
        return f"metrics: out:\n{self.outgoing}, in:\n{self.incoming}"

    def to_dict(self) -> Dict[str, float]:
        """Flatten into the four rate fields."""
        return {
            "out_datagrams_per_second": self.outgoing.datagrams_per_second,
            "out_octets_per_second": self.outgoing.octets_per_second,
            "in_datagrams_per_second": self.incoming.datagrams_per_second,
            "in_octets_per_second": self.incoming.octets_per_second,
        }
