"""Random draws for synthetic datagram traffic."""

import logging
from typing import Any, Callable, Dict, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

# Smallest inter-arrival gap handed to the simulated clock
MIN_GAP_S = 1e-6


class TrafficSampler:
    """Draws inter-arrival gaps, datagram sizes and burst lengths.

    Distribution configs are mappings with a ``type`` and its parameters, e.g.
    ``{"type": "Exponential", "rate": 200.0}`` for gaps or
    ``{"type": "Uniform", "low": 64, "high": 1400}`` for sizes. Missing
    parameters fall back to values typical of datagram traffic.
    """

    def __init__(self, seed: Optional[int] = None):
        self.random_state = np.random.RandomState(seed)
        self._draws: Dict[str, Callable[[Dict[str, Any]], float]] = {
            "Constant": self._draw_constant,
            "Fixed": self._draw_constant,
            "Exponential": self._draw_exponential,
            "Uniform": self._draw_uniform,
            "Normal": self._draw_normal,
            "LogNormal": self._draw_lognormal,
            "Pareto": self._draw_pareto,
            "Gamma": self._draw_gamma,
            "Mixture": self._draw_mixture,
        }

    def sample(self, dist: Dict[str, Any]) -> Union[float, int]:
        """Draw one value; ``is_int`` rounds it to a whole number of at least 1."""
        kind = dist.get("type", "Constant")
        draw = self._draws.get(kind)
        if draw is None:
            logger.warning(f"Unsupported traffic distribution {kind!r}, drawing 1.0")
            value = 1.0
        else:
            value = draw(dist)

        if dist.get("is_int", False):
            value = max(1, int(round(value)))
        return value

    def sample_gap(self, dist: Dict[str, Any]) -> float:
        """Draw an inter-arrival gap in seconds, never below ``MIN_GAP_S``."""
        return max(MIN_GAP_S, float(self.sample(dist)))

    def sample_size(self, dist: Dict[str, Any]) -> int:
        """Draw a datagram payload size in octets."""
        return int(self.sample(dict(dist, is_int=True)))

    def sample_burst(self, dist: Dict[str, Any]) -> int:
        """Draw how many datagrams go out in one send."""
        return int(self.sample(dict(dist, is_int=True)))

    def _draw_constant(self, dist: Dict[str, Any]) -> float:
        return dist.get("value", 1.0)

    def _draw_exponential(self, dist: Dict[str, Any]) -> float:
        rate = dist.get("rate", 100.0)
        if rate <= 0:
            raise ValueError(f"Exponential rate must be > 0, got {rate}")
        return self.random_state.exponential(1.0 / rate)

    def _draw_uniform(self, dist: Dict[str, Any]) -> float:
        return self.random_state.uniform(dist.get("low", 64), dist.get("high", 1400))

    def _draw_normal(self, dist: Dict[str, Any]) -> float:
        std = dist.get("std", dist.get("sigma", 128.0))
        return max(0.0, self.random_state.normal(dist.get("mean", 512.0), std))

    def _draw_lognormal(self, dist: Dict[str, Any]) -> float:
        # mean/sigma of the underlying normal; exp(6.0) ~ 400 octets
        return self.random_state.lognormal(dist.get("mean", 6.0), dist.get("sigma", 0.5))

    def _draw_pareto(self, dist: Dict[str, Any]) -> float:
        shape = dist.get("shape", 1.5)
        return (self.random_state.pareto(shape) + 1) * dist.get("scale", 64.0)

    def _draw_gamma(self, dist: Dict[str, Any]) -> float:
        return self.random_state.gamma(dist.get("shape", 2.0), dist.get("scale", 1.0))

    def _draw_mixture(self, dist: Dict[str, Any]) -> float:
        components = dist.get("components", [])
        if not components:
            logger.warning("Mixture without components, drawing 1.0")
            return 1.0

        weights = np.array(dist.get("weights") or [1.0] * len(components), dtype=float)
        index = self.random_state.choice(len(components), p=weights / weights.sum())
        return self.sample(components[index])
