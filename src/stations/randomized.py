"""Randomized station: uniform draws with rejection until every vehicle is served once."""

from typing import Optional, Sequence, Set

import numpy as np

from src.config.constants import INITIAL_CLEANING_LEVEL, RANDOMIZED_RULE
from src.fleet.vehicle import Vehicle
from src.stations.washing_station import WashingStation, decay_for_rule


class RandomizedStation(WashingStation):
    """Serves each vehicle exactly once, in random order.

    Each call draws an index uniformly (with replacement) and redraws while the
    drawn vehicle has already been served by this station. The random source is
    anything exposing ``integers(high)``; a numpy Generator by default.
    """

    rule = RANDOMIZED_RULE
    decay_per_wash = decay_for_rule(RANDOMIZED_RULE)

    def __init__(
        self,
        station_id: int,
        wash_type: str,
        rng: Optional[np.random.Generator] = None,
        cleaning_level: float = INITIAL_CLEANING_LEVEL,
    ):
        super().__init__(station_id, wash_type, cleaning_level)
        self.rng = rng if rng is not None else np.random.default_rng()
        self._served: Set[int] = set()

    @property
    def served_ids(self) -> Set[int]:
        return set(self._served)

    def select_vehicle_to_wash(self, vehicles: Sequence[Vehicle]) -> Optional[Vehicle]:
        if len(self._served) >= len(vehicles):
            return None

        while True:
            index = int(self.rng.integers(len(vehicles)))
            vehicle = vehicles[index]
            if vehicle.vehicle_id in self._served:
                continue
            self._served.add(vehicle.vehicle_id)
            return vehicle
