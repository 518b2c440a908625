"""In-memory history of combined metrics snapshots."""

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from ..core import Millis
from .models import CombinedMetrics

logger = logging.getLogger(__name__)

RATE_FIELDS = [
    "out_datagrams_per_second",
    "out_octets_per_second",
    "in_datagrams_per_second",
    "in_octets_per_second",
]


class MetricsHistory:
    """Keeps timestamped snapshots for telemetry and reporting."""

    def __init__(self, max_entries: Optional[int] = None):
        """Initialize the history.

        Args:
            max_entries: Keep at most this many snapshots, dropping the oldest
                first. ``None`` keeps everything.
        """
        self.max_entries = max_entries
        self._entries: Deque[Tuple[Millis, CombinedMetrics]] = deque(maxlen=max_entries)

    def record(self, timestamp: Millis, metrics: CombinedMetrics) -> None:
        self._entries.append((timestamp, metrics))

    def latest(self) -> Optional[Tuple[Millis, CombinedMetrics]]:
        if not self._entries:
            return None
        return self._entries[-1]

    def __len__(self) -> int:
        return len(self._entries)

    def to_dataframe(self) -> pd.DataFrame:
        """Get all snapshots as a pandas DataFrame, one row per snapshot."""
        if not self._entries:
            return pd.DataFrame(columns=["timestamp_ms"] + RATE_FIELDS)

        rows = []
        for timestamp, metrics in self._entries:
            row = {"timestamp_ms": timestamp}
            row.update(metrics.to_dict())
            rows.append(row)

        return pd.DataFrame(rows)

    def generate_summary_report(
        self, percentiles: Optional[List[float]] = None
    ) -> Dict[str, Dict[str, Any]]:
        """Generate per-field summary statistics.

        Args:
            percentiles: Percentiles to calculate, as fractions (e.g. [0.5, 0.99])

        Returns:
            Mapping of rate field name to its statistics
        """
        if percentiles is None:
            percentiles = [0.5, 0.9, 0.99]

        summary = {}
        for field in RATE_FIELDS:
            values = [metrics.to_dict()[field] for _, metrics in self._entries]
            summary[field] = self._calculate_stats(values, percentiles)

        if self._entries:
            logger.info(
                f"Summary over {len(self._entries)} snapshots: "
                f"out {summary['out_octets_per_second']['mean']:.1f} octets/s, "
                f"in {summary['in_octets_per_second']['mean']:.1f} octets/s (mean)"
            )

        return summary

    def _calculate_stats(self, values: List[float], percentiles: List[float]) -> Dict[str, float]:
        """Calculate statistics for a list of values."""
        if not values:
            return {"count": 0}

        stats = {
            "count": len(values),
            "mean": float(np.mean(values)),
            "std": float(np.std(values)),
            "min": float(np.min(values)),
            "max": float(np.max(values)),
        }

        for p in percentiles:
            stats[f"p{int(round(p * 100))}"] = float(np.percentile(values, p * 100))

        return stats
