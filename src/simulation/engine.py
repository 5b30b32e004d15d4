"""Round-based car wash simulation.

Each round visits every station in input order. A station that selects a
vehicle removes cleaning_level * effectiveness dirt from it, then loses its
rule's fixed decay. Both values are floored at 0. The run ends once every
vehicle's dirtiness is exactly 0.

If a vehicle can never reach 0 (all rosters exhausted, zero effectiveness,
no stations) the loop never ends. Pass max_rounds to turn that into a
SimulationDidNotConverge error instead.
"""

import logging
from collections import deque
from typing import Deque, List, Optional, Sequence

from src.config.constants import ROUND_SUMMARY_HISTORY
from src.config.errors import SimulationDidNotConverge
from src.fleet.vehicle import Vehicle
from src.simulation.results import RoundSummary, VehicleResult, WashEvent, compute_results
from src.stations.washing_station import WashingStation

logger = logging.getLogger(__name__)


class CarWashSimulation:
    """Owns the vehicles and stations for the duration of one run."""

    def __init__(
        self,
        vehicles: Sequence[Vehicle],
        stations: Sequence[WashingStation],
        record_events: bool = True,
        summary_history: int = ROUND_SUMMARY_HISTORY,
    ):
        self.vehicles = list(vehicles)
        self.stations = list(stations)
        self.record_events = record_events

        self.rounds_completed = 0
        self.events: List[WashEvent] = []
        self.round_summaries: Deque[RoundSummary] = deque(maxlen=summary_history)

    def all_clean(self) -> bool:
        """True when every vehicle's dirtiness is exactly 0 (vacuously for none)."""
        return all(v.is_clean for v in self.vehicles)

    def _wash(self, station: WashingStation, vehicle: Vehicle, round_index: int) -> None:
        effectiveness = station.get_wash_effectiveness(vehicle)
        removed = station.cleaning_level * effectiveness

        dirtiness_before = vehicle.dirtiness
        level_before = station.cleaning_level

        vehicle.dirtiness -= removed
        station.cleaning_level -= station.decay_per_wash

        if station.cleaning_level <= 0:
            station.cleaning_level = 0.0
        if vehicle.dirtiness < 0:
            vehicle.dirtiness = 0.0

        station.washes_performed += 1

        logger.debug(
            f"Round {round_index}: station {station.station_id} washed vehicle "
            f"{vehicle.vehicle_id}: dirtiness {dirtiness_before:.3f} -> {vehicle.dirtiness:.3f}, "
            f"cleaning level {level_before:.1f} -> {station.cleaning_level:.1f}"
        )

        if self.record_events:
            self.events.append(WashEvent(
                round_index=round_index,
                station_id=station.station_id,
                rule=station.rule,
                wash_type=station.wash_type,
                vehicle_id=vehicle.vehicle_id,
                effectiveness=effectiveness,
                removed_dirt=removed,
                dirtiness_before=dirtiness_before,
                dirtiness_after=vehicle.dirtiness,
                cleaning_level_before=level_before,
                cleaning_level_after=station.cleaning_level,
            ))

    def run_round(self) -> RoundSummary:
        """Give every station one chance to wash, in station order.

        Raises:
            MissingEffectivenessError: If a selected vehicle lacks the station's wash type.
        """
        round_index = self.rounds_completed + 1
        washes = 0

        for station in self.stations:
            vehicle = station.select_vehicle_to_wash(self.vehicles)
            if vehicle is None:
                continue
            self._wash(station, vehicle, round_index)
            washes += 1

        self.rounds_completed = round_index
        summary = RoundSummary(
            round_index=round_index,
            washes=washes,
            total_dirtiness=sum(v.dirtiness for v in self.vehicles),
            dirty_vehicles=sum(1 for v in self.vehicles if v.dirtiness > 0),
        )
        self.round_summaries.append(summary)
        logger.debug(
            f"Round {round_index}: {washes} washes, {summary.dirty_vehicles} vehicles still dirty"
        )
        return summary

    def run(self, max_rounds: Optional[int] = None) -> List[VehicleResult]:
        """Run rounds until every vehicle is clean.

        Args:
            max_rounds: Stop with SimulationDidNotConverge after this many rounds
                in total. None runs until convergence, however long that takes.

        Returns:
            Final results in vehicle input order.
        """
        logger.info(
            f"Starting simulation: {len(self.vehicles)} vehicles, "
            f"{len(self.stations)} washing stations"
        )

        while not self.all_clean():
            if max_rounds is not None and self.rounds_completed >= max_rounds:
                dirty = [v.vehicle_id for v in self.vehicles if v.dirtiness > 0]
                logger.warning(
                    f"No convergence after {self.rounds_completed} rounds, "
                    f"{len(dirty)} vehicles still dirty"
                )
                raise SimulationDidNotConverge(self.rounds_completed, dirty)
            self.run_round()

        logger.info(
            f"Simulation converged after {self.rounds_completed} rounds "
            f"({sum(s.washes_performed for s in self.stations)} washes)"
        )
        return self.results()

    def results(self) -> List[VehicleResult]:
        return compute_results(self.vehicles)
