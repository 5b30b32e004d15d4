"""Shared test fixtures."""

import numpy as np
import pytest

from src.fleet.vehicle import Vehicle


class ScriptedRng:
    """Stand-in random source that replays fixed draws."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = 0

    def integers(self, high):
        value = self.draws[self.calls]
        self.calls += 1
        assert 0 <= value < high
        return value


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def make_vehicles():
    """Factory: make_vehicles([50, 20], {"basic": 0.5}) -> vehicles with ids 1..N."""
    def _make(dirtiness_values, effectiveness=None):
        effectiveness = effectiveness if effectiveness is not None else {"basic": 1.0}
        return [
            Vehicle(vehicle_id=i + 1, dirtiness=float(d), effectiveness=dict(effectiveness))
            for i, d in enumerate(dirtiness_values)
        ]
    return _make


@pytest.fixture
def sample_document():
    return {
        "vehicles": [
            {"id": 1, "dirtiness": 50, "effectiveness_levels": {"basic": 1.0, "premium": 0.8}},
            {"id": 2, "dirtiness": 100.5, "effectiveness_levels": {"basic": 0.4, "premium": 0.9}},
            {"id": 3, "dirtiness": 0, "effectiveness_levels": {"basic": 0.5, "premium": 0.5}},
        ],
        "washing_systems": [
            {"id": 1, "wash_type": "basic", "rule": "ordered"},
            {"id": 2, "wash_type": "premium", "rule": "random"},
        ],
    }


@pytest.fixture
def scripted_rng():
    return ScriptedRng
