"""Tests for the round-based simulation engine."""

import numpy as np
import pytest

from src.config.errors import MissingEffectivenessError, SimulationDidNotConverge
from src.fleet.vehicle import Vehicle
from src.simulation.engine import CarWashSimulation
from src.simulation.results import VehicleResult, compute_results
from src.stations.randomized import RandomizedStation
from src.stations.sequential import SequentialStation


class TestConvergence:
    def test_single_wash_converges(self, make_vehicles):
        """50 dirt, effectiveness 1.0: one round, dirt clamps to 0, level drops to 80."""
        vehicles = make_vehicles([50], {"basic": 1.0})
        station = SequentialStation(1, "basic")
        sim = CarWashSimulation(vehicles, [station])

        results = sim.run()

        assert sim.rounds_completed == 1
        assert results == [VehicleResult(vehicle_id=1, final_dirtiness=0)]
        assert vehicles[0].dirtiness == 0
        assert station.cleaning_level == 80.0
        event = sim.events[0]
        assert event.removed_dirt == 100.0
        assert event.dirtiness_before == 50.0
        assert event.dirtiness_after == 0.0

    def test_exact_removal_converges(self, make_vehicles):
        """5 dirt, effectiveness 0.05: 100 * 0.05 removes it all in round 1."""
        vehicles = make_vehicles([5], {"basic": 0.05})
        sim = CarWashSimulation(vehicles, [SequentialStation(1, "basic")])
        results = sim.run()
        assert sim.rounds_completed == 1
        assert results[0].final_dirtiness == 0

    def test_station_order_within_round(self, make_vehicles):
        """A later station in the same round sees the earlier station's result."""
        vehicles = make_vehicles([100, 30], {"basic": 0.5})
        a = SequentialStation(1, "basic")
        b = SequentialStation(2, "basic")
        sim = CarWashSimulation(vehicles, [a, b])

        sim.run()

        assert sim.rounds_completed == 2
        first, second = sim.events[0], sim.events[1]
        assert (first.station_id, first.vehicle_id) == (1, 1)
        assert (second.station_id, second.vehicle_id) == (2, 1)
        assert first.dirtiness_after == 50.0
        assert second.dirtiness_before == 50.0
        assert second.dirtiness_after == 0.0
        # Round 2: a at 80 removes 40 from 30 -> clamped
        assert sim.events[2].removed_dirt == 40.0
        assert sim.events[2].dirtiness_after == 0.0

    def test_empty_vehicle_list_needs_no_rounds(self):
        sim = CarWashSimulation([], [SequentialStation(1, "basic")])
        assert sim.run() == []
        assert sim.rounds_completed == 0

    def test_already_clean_needs_no_rounds(self, make_vehicles):
        sim = CarWashSimulation(make_vehicles([0, 0]), [SequentialStation(1, "basic")])
        sim.run()
        assert sim.rounds_completed == 0
        assert sim.events == []


class TestDecay:
    def test_sequential_decay(self, make_vehicles):
        """Sequential stations lose exactly 20 per wash, floored at 0."""
        vehicles = make_vehicles([1000] * 6, {"basic": 0.01})
        station = SequentialStation(1, "basic")
        sim = CarWashSimulation(vehicles, [station])

        levels = []
        for _ in range(6):
            sim.run_round()
            levels.append(station.cleaning_level)
        assert levels == [80.0, 60.0, 40.0, 20.0, 0.0, 0.0]

    def test_randomized_decay(self, make_vehicles):
        """Randomized stations lose exactly 10 per wash, floored at 0."""
        vehicles = make_vehicles([1000] * 12, {"basic": 0.0})
        station = RandomizedStation(1, "basic", rng=np.random.default_rng(0))
        sim = CarWashSimulation(vehicles, [station])

        levels = []
        for _ in range(12):
            sim.run_round()
            levels.append(station.cleaning_level)
        expected = [max(100.0 - 10.0 * k, 0.0) for k in range(1, 13)]
        assert levels == expected

    def test_exhausted_capacity_keeps_washing(self, make_vehicles):
        """A station at level 0 keeps selecting (removing nothing) until its roster ends."""
        vehicles = make_vehicles([1000] * 7, {"basic": 0.1})
        station = SequentialStation(1, "basic")
        sim = CarWashSimulation(vehicles, [station])

        summaries = [sim.run_round() for _ in range(8)]

        assert [s.washes for s in summaries] == [1] * 7 + [0]
        assert station.washes_performed == 7
        assert station.cleaning_level == 0.0
        assert sim.events[5].removed_dirt == 0.0
        assert sim.events[6].removed_dirt == 0.0
        assert vehicles[6].dirtiness == 1000.0


class TestInvariants:
    def test_monotonic_and_floored(self, rng):
        """Dirtiness never rises and nothing goes negative, round after round."""
        vehicles = [
            Vehicle(i, float(rng.uniform(0, 300)),
                    {"basic": float(rng.uniform(0, 1)), "premium": float(rng.uniform(0, 1))})
            for i in range(1, 9)
        ]
        stations = [
            SequentialStation(1, "basic"),
            RandomizedStation(2, "premium", rng=np.random.default_rng(1)),
            RandomizedStation(3, "basic", rng=np.random.default_rng(2)),
        ]
        sim = CarWashSimulation(vehicles, stations)

        previous = [v.dirtiness for v in vehicles]
        for _ in range(12):
            sim.run_round()
            current = [v.dirtiness for v in vehicles]
            assert all(c <= p for c, p in zip(current, previous))
            assert all(c >= 0 for c in current)
            assert all(s.cleaning_level >= 0 for s in stations)
            previous = current

    def test_results_truncate_toward_zero(self):
        vehicles = [Vehicle(1, 76.9), Vehicle(2, 0.99), Vehicle(3, 0.0)]
        results = compute_results(vehicles)
        assert [r.final_dirtiness for r in results] == [76, 0, 0]
        assert results[0].to_dict() == {"id": 1, "final_dirtiness": 76}


class TestNonConvergence:
    def test_roster_exhaustion_stalls(self, make_vehicles):
        """Two dirty vehicles, one sequential station: after round 2 nothing changes."""
        vehicles = make_vehicles([500, 500], {"basic": 0.5})
        sim = CarWashSimulation(vehicles, [SequentialStation(1, "basic")])

        stalled_rounds = 0
        previous_total = None
        for _ in range(10):
            summary = sim.run_round()
            if summary.total_dirtiness == previous_total:
                stalled_rounds += 1
            previous_total = summary.total_dirtiness

        assert not sim.all_clean()
        assert stalled_rounds == 8
        assert [v.dirtiness for v in vehicles] == [450.0, 460.0]
        assert all(s.washes == 0 for s in list(sim.round_summaries)[2:])

    def test_round_cap_raises(self, make_vehicles):
        vehicles = make_vehicles([500, 500], {"basic": 0.5})
        sim = CarWashSimulation(vehicles, [SequentialStation(1, "basic")])

        with pytest.raises(SimulationDidNotConverge) as exc_info:
            sim.run(max_rounds=20)

        assert exc_info.value.rounds == 20
        assert exc_info.value.dirty_vehicle_ids == [1, 2]
        assert sim.rounds_completed == 20

    def test_no_stations(self, make_vehicles):
        sim = CarWashSimulation(make_vehicles([1]), [])
        with pytest.raises(SimulationDidNotConverge):
            sim.run(max_rounds=3)
        assert [s.washes for s in sim.round_summaries] == [0, 0, 0]

    def test_cap_not_hit_when_converging(self, make_vehicles):
        sim = CarWashSimulation(make_vehicles([50]), [SequentialStation(1, "basic")])
        sim.run(max_rounds=1)
        assert sim.all_clean()


class TestDataErrors:
    def test_missing_effectiveness_at_wash_time(self):
        """Lookup fails only when the station actually washes that vehicle."""
        vehicles = [Vehicle(1, 10.0, {"basic": 1.0}), Vehicle(2, 10.0, {"premium": 1.0})]
        sim = CarWashSimulation(vehicles, [SequentialStation(1, "basic")])

        sim.run_round()
        assert vehicles[0].dirtiness == 0.0

        with pytest.raises(MissingEffectivenessError):
            sim.run_round()
        # Raised before any mutation of the second vehicle
        assert vehicles[1].dirtiness == 10.0

    def test_missing_effectiveness_is_key_error(self):
        sim = CarWashSimulation([Vehicle(1, 10.0, {})], [SequentialStation(1, "basic")])
        with pytest.raises(KeyError):
            sim.run()


class TestHistory:
    def test_events_can_be_disabled(self, make_vehicles):
        sim = CarWashSimulation(
            make_vehicles([50, 20]), [SequentialStation(1, "basic")], record_events=False,
        )
        sim.run()
        assert sim.events == []
        assert sim.rounds_completed == 2

    def test_round_summaries_are_bounded(self, make_vehicles):
        """Only the most recent summaries are kept, however long the run."""
        sim = CarWashSimulation(make_vehicles([1]), [], summary_history=3)
        for _ in range(10):
            sim.run_round()
        assert [s.round_index for s in sim.round_summaries] == [8, 9, 10]

    def test_dirty_vehicle_count(self, make_vehicles):
        vehicles = make_vehicles([50, 500], {"basic": 1.0})
        sim = CarWashSimulation(vehicles, [SequentialStation(1, "basic")])
        assert sim.run_round().dirty_vehicles == 1
        assert sim.run_round().dirty_vehicles == 1
