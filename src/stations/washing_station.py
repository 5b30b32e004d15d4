"""Base washing station abstract class."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from src.config.constants import DECAY_PER_WASH, INITIAL_CLEANING_LEVEL
from src.fleet.vehicle import Vehicle


class WashingStation(ABC):
    """Abstract base class for both station selection policies.

    A station is stateful: each call to select_vehicle_to_wash() advances its
    own roster, and cleaning_level drops by decay_per_wash after every wash.
    """

    rule: str = ""
    decay_per_wash: float = 0.0

    def __init__(
        self,
        station_id: int,
        wash_type: str,
        cleaning_level: float = INITIAL_CLEANING_LEVEL,
    ):
        self.station_id = station_id
        self.wash_type = wash_type
        self.cleaning_level = cleaning_level
        self.washes_performed = 0

    @abstractmethod
    def select_vehicle_to_wash(self, vehicles: Sequence[Vehicle]) -> Optional[Vehicle]:
        """Pick the next vehicle for this round, or None if the roster is exhausted.

        Args:
            vehicles: All vehicles, in the same order every round.

        Returns:
            The selected vehicle, or None when there is nothing left to do.
        """
        ...

    def get_wash_effectiveness(self, vehicle: Vehicle) -> float:
        """Effectiveness of this station's wash type on the vehicle.

        Raises:
            MissingEffectivenessError: If the vehicle has no entry for wash_type.
        """
        return vehicle.effectiveness_for(self.wash_type)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(station_id={self.station_id}, "
            f"wash_type={self.wash_type!r}, cleaning_level={self.cleaning_level})"
        )


def decay_for_rule(rule: str) -> float:
    """Cleaning level lost per wash for a canonical rule name."""
    return DECAY_PER_WASH[rule]
