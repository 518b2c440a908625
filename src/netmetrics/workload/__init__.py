"""Synthetic traffic generation module."""

from .sampler import MIN_GAP_S, TrafficSampler
from .traffic_simulator import TrafficSimulator

__all__ = ["MIN_GAP_S", "TrafficSampler", "TrafficSimulator"]
