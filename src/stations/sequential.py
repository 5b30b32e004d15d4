"""Sequential station: washes vehicles strictly in input order, once each."""

from typing import Optional, Sequence

from src.config.constants import INITIAL_CLEANING_LEVEL, SEQUENTIAL_RULE
from src.fleet.vehicle import Vehicle
from src.stations.washing_station import WashingStation, decay_for_rule


class SequentialStation(WashingStation):
    """Walks a cursor over the vehicle list; idle for good once it passes the end."""

    rule = SEQUENTIAL_RULE
    decay_per_wash = decay_for_rule(SEQUENTIAL_RULE)

    def __init__(
        self,
        station_id: int,
        wash_type: str,
        cleaning_level: float = INITIAL_CLEANING_LEVEL,
    ):
        super().__init__(station_id, wash_type, cleaning_level)
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    def select_vehicle_to_wash(self, vehicles: Sequence[Vehicle]) -> Optional[Vehicle]:
        if self._cursor >= len(vehicles):
            return None

        vehicle = vehicles[self._cursor]
        self._cursor += 1
        return vehicle
