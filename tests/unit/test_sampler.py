"""
Unit tests for the traffic sampler.
"""

import pytest
from netmetrics.workload import MIN_GAP_S, TrafficSampler


class TestTrafficSampler:
    """Test draws from configured distributions."""

    def test_constant(self):
        sampler = TrafficSampler(seed=1)
        assert sampler.sample({"type": "Constant", "value": 0.25}) == 0.25
        assert sampler.sample({"type": "Fixed", "value": 3}) == 3

    def test_seed_reproducible(self):
        """Same seed gives the same sequence."""
        config = {"type": "Exponential", "rate": 100.0}
        a = TrafficSampler(seed=7)
        b = TrafficSampler(seed=7)
        assert [a.sample(config) for _ in range(5)] == [b.sample(config) for _ in range(5)]

    def test_uniform_int_bounds(self):
        sampler = TrafficSampler(seed=3)
        config = {"type": "Uniform", "low": 64, "high": 1200, "is_int": True}
        values = [sampler.sample(config) for _ in range(200)]
        assert all(isinstance(v, int) for v in values)
        assert all(64 <= v <= 1200 for v in values)

    def test_default_sizes_look_like_datagrams(self):
        """Uniform sizes default to 64..1400 octets."""
        sampler = TrafficSampler(seed=3)
        sizes = [sampler.sample_size({"type": "Uniform"}) for _ in range(200)]
        assert all(64 <= s <= 1400 for s in sizes)

    def test_is_int_clamps_to_one(self):
        """Integer draws are at least 1."""
        sampler = TrafficSampler(seed=3)
        assert sampler.sample({"type": "Constant", "value": 0, "is_int": True}) == 1
        assert sampler.sample_size({"type": "Constant", "value": 0}) == 1

    def test_normal_non_negative(self):
        sampler = TrafficSampler(seed=5)
        config = {"type": "Normal", "mean": 0.0, "std": 10.0}
        assert all(sampler.sample(config) >= 0 for _ in range(100))

    @pytest.mark.parametrize("config", [
        {"type": "LogNormal", "mean": 5.0, "sigma": 0.5},
        {"type": "Pareto", "shape": 2.0, "scale": 10.0},
        {"type": "Gamma", "shape": 2.0, "scale": 1.0},
    ])
    def test_positive_distributions(self, config):
        sampler = TrafficSampler(seed=11)
        assert all(sampler.sample(config) > 0 for _ in range(50))

    def test_mixture(self):
        """Mixture draws come from one of the components."""
        sampler = TrafficSampler(seed=2)
        config = {
            "type": "Mixture",
            "components": [
                {"type": "Constant", "value": 64},
                {"type": "Constant", "value": 1400},
            ],
            "weights": [3, 1],
        }
        values = {sampler.sample(config) for _ in range(100)}
        assert values == {64, 1400}

    def test_empty_mixture(self):
        sampler = TrafficSampler(seed=2)
        assert sampler.sample({"type": "Mixture"}) == 1.0

    def test_unknown_type(self):
        sampler = TrafficSampler(seed=2)
        assert sampler.sample({"type": "Zipf"}) == 1.0


class TestGapsAndBursts:
    """Test the gap floor and burst draws."""

    def test_zero_gap_floored(self):
        """A zero gap is raised to the minimum step so simulated time advances."""
        sampler = TrafficSampler(seed=1)
        assert sampler.sample_gap({"type": "Constant", "value": 0}) == MIN_GAP_S

    def test_negative_gap_floored(self):
        sampler = TrafficSampler(seed=1)
        gaps = [sampler.sample_gap({"type": "Uniform", "low": -1.0, "high": 0.0}) for _ in range(20)]
        assert all(g == MIN_GAP_S for g in gaps)

    def test_normal_gaps_always_positive(self):
        """Normal draws clipped at zero still yield positive gaps."""
        sampler = TrafficSampler(seed=4)
        gaps = [sampler.sample_gap({"type": "Normal", "mean": 0.0, "std": 0.01}) for _ in range(100)]
        assert all(g >= MIN_GAP_S for g in gaps)

    def test_positive_gap_unchanged(self):
        sampler = TrafficSampler(seed=1)
        assert sampler.sample_gap({"type": "Constant", "value": 0.02}) == 0.02

    def test_zero_exponential_rate_rejected(self):
        """A zero rate raises ValueError instead of dividing by zero."""
        sampler = TrafficSampler(seed=1)
        with pytest.raises(ValueError):
            sampler.sample_gap({"type": "Exponential", "rate": 0})

    def test_burst_is_whole_number(self):
        sampler = TrafficSampler(seed=1)
        assert sampler.sample_burst({"type": "Constant", "value": 3.6}) == 4
