"""Periodic debug logging of combined metrics."""

import logging
from typing import Callable, Optional

from ..core import Millis
from .models import CombinedMetrics

logger = logging.getLogger(__name__)

DEFAULT_DEBUG_INTERVAL_MS = 500


class DebugReporter:
    """Emits the combined snapshot at DEBUG level at most once per interval.

    Composed into ``NetworkMetrics`` only when debug logging is configured.
    Nothing raised while building or emitting the line reaches the caller.
    """

    def __init__(
        self,
        now: Millis,
        interval_ms: Millis = DEFAULT_DEBUG_INTERVAL_MS,
        log: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the reporter.

        Args:
            now: Timestamp in milliseconds treated as the last emission
            interval_ms: Minimum gap between two emitted lines
            log: Logger to write to (defaults to this module's logger)
        """
        self.last_logged_at: Millis = now
        self.interval_ms: Millis = interval_ms
        self.log = log or logger

    def maybe_log(self, now: Millis, metrics_fn: Callable[[], CombinedMetrics]) -> bool:
        """Emit one line if more than ``interval_ms`` passed since the last one.

        Args:
            now: Current timestamp in milliseconds
            metrics_fn: Produces the snapshot to log

        Returns:
            True if a line was due (and an emission was attempted)
        """
        if now - self.last_logged_at <= self.interval_ms:
            return False

        self.last_logged_at = now
        try:
            self.log.debug("metrics: %s", metrics_fn())
        except Exception:
            # Diagnostics must never disturb the measured connection
            pass
        return True
