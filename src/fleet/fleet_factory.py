"""Build vehicles and washing stations from validated input."""

import logging
from typing import List, Optional, Tuple

import numpy as np

from src.config.constants import RANDOMIZED_RULE, SEQUENTIAL_RULE
from src.config.errors import UnknownRuleError
from src.config.schema import SimulationInput, StationSpec, VehicleSpec
from src.fleet.vehicle import Vehicle
from src.stations.randomized import RandomizedStation
from src.stations.sequential import SequentialStation
from src.stations.washing_station import WashingStation

logger = logging.getLogger(__name__)


def create_vehicles(specs: List[VehicleSpec]) -> List[Vehicle]:
    """Create mutable vehicles, keeping input order."""
    return [
        Vehicle(
            vehicle_id=spec.vehicle_id,
            dirtiness=spec.dirtiness,
            effectiveness=dict(spec.effectiveness),
        )
        for spec in specs
    ]


def _create_station(
    spec: StationSpec, index: int, seed: Optional[int]
) -> WashingStation:
    """Create one station for its rule.

    Randomized stations get their own Generator, seeded from (seed, station_id)
    when a master seed is given so runs are reproducible per station.
    """
    if spec.rule == SEQUENTIAL_RULE:
        return SequentialStation(spec.station_id, spec.wash_type)

    elif spec.rule == RANDOMIZED_RULE:
        # SeedSequence entropy must be non-negative; station ids can be negative
        station_seed = None if seed is None else [seed, spec.station_id % 2**32]
        rng = np.random.default_rng(station_seed)
        return RandomizedStation(spec.station_id, spec.wash_type, rng=rng)

    raise UnknownRuleError(spec.rule, index)


def create_stations(
    specs: List[StationSpec], seed: Optional[int] = None
) -> List[WashingStation]:
    """Create washing stations, keeping input order.

    Args:
        specs: Validated station records.
        seed: Non-negative master RNG seed for randomized stations, or None
            for fresh entropy.
    """
    if seed is not None and seed < 0:
        raise ValueError(f"Seed must be non-negative, got {seed}")
    return [_create_station(spec, i, seed) for i, spec in enumerate(specs)]


def create_fleet(
    sim_input: SimulationInput, seed: Optional[int] = None
) -> Tuple[List[Vehicle], List[WashingStation]]:
    """Create (vehicles, stations) for one run."""
    vehicles = create_vehicles(sim_input.vehicles)
    stations = create_stations(sim_input.stations, seed=seed)

    n_sequential = sum(1 for s in stations if s.rule == SEQUENTIAL_RULE)
    logger.info(
        f"Created {len(vehicles)} vehicles and {len(stations)} washing stations "
        f"({n_sequential} sequential, {len(stations) - n_sequential} randomized)"
    )
    return vehicles, stations
