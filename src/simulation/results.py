"""Per-wash events, per-round summaries, and final vehicle results."""

from dataclasses import dataclass
from typing import List

from src.fleet.vehicle import Vehicle


@dataclass
class WashEvent:
    round_index: int          # 1-based
    station_id: int
    rule: str                 # "sequential" or "randomized"
    wash_type: str
    vehicle_id: int
    effectiveness: float
    removed_dirt: float       # cleaning_level_before * effectiveness, before clamping
    dirtiness_before: float
    dirtiness_after: float
    cleaning_level_before: float
    cleaning_level_after: float


@dataclass
class RoundSummary:
    round_index: int
    washes: int               # Stations that selected a vehicle this round
    total_dirtiness: float    # Sum over all vehicles after the round
    dirty_vehicles: int


@dataclass
class VehicleResult:
    vehicle_id: int
    final_dirtiness: int      # Truncated toward zero

    def to_dict(self) -> dict:
        return {"id": self.vehicle_id, "final_dirtiness": self.final_dirtiness}


def compute_results(vehicles: List[Vehicle]) -> List[VehicleResult]:
    """Final dirtiness per vehicle, in input order, truncated (not rounded)."""
    return [
        VehicleResult(vehicle_id=v.vehicle_id, final_dirtiness=int(v.dirtiness))
        for v in vehicles
    ]
