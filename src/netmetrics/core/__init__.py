"""Core rate estimation module."""

from .rate_metric import Millis, RateMetric

__all__ = ["Millis", "RateMetric"]
