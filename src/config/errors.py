"""Exceptions raised while loading input and running a simulation."""

from typing import List


class InvalidInputError(ValueError):
    """Input document does not match the expected schema."""


class UnknownRuleError(InvalidInputError):
    """Station rule is not one of the supported selection policies."""

    def __init__(self, rule, station_index: int):
        self.rule = rule
        self.station_index = station_index
        super().__init__(
            f"washing_systems[{station_index}]: invalid washing system rule: {rule!r}"
        )


class MissingEffectivenessError(KeyError):
    """Vehicle has no effectiveness entry for a station's wash type."""

    def __init__(self, vehicle_id: int, wash_type: str):
        self.vehicle_id = vehicle_id
        self.wash_type = wash_type
        super().__init__(
            f"Vehicle {vehicle_id} has no effectiveness level for wash type {wash_type!r}"
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class SimulationDidNotConverge(RuntimeError):
    """Round cap reached while some vehicles still have dirt left."""

    def __init__(self, rounds: int, dirty_vehicle_ids: List[int]):
        self.rounds = rounds
        self.dirty_vehicle_ids = dirty_vehicle_ids
        super().__init__(
            f"Simulation did not converge after {rounds} rounds; "
            f"vehicles still dirty: {dirty_vehicle_ids}"
        )
