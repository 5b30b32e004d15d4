"""Input records and strict validation of the raw input document."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from src.config.constants import RULE_ALIASES
from src.config.errors import InvalidInputError, UnknownRuleError


@dataclass(frozen=True)
class VehicleSpec:
    """One vehicle as described in the input file."""

    vehicle_id: int
    dirtiness: float
    effectiveness: Dict[str, float] = field(default_factory=dict)  # wash type -> factor


@dataclass(frozen=True)
class StationSpec:
    """One washing station as described in the input file."""

    station_id: int
    wash_type: str
    rule: str                 # canonical: "sequential" or "randomized"


@dataclass(frozen=True)
class SimulationInput:
    """Validated vehicles and stations, in input order."""

    vehicles: List[VehicleSpec]
    stations: List[StationSpec]


def _require(record: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(record, Mapping):
        raise InvalidInputError(f"{where}: expected an object, got {type(record).__name__}")
    if key not in record:
        raise InvalidInputError(f"{where}: missing required field '{key}'")
    return record[key]


def _as_int(value: Any, where: str) -> int:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"{where}: expected an integer, got {value!r}")
    return int(value)


def _as_real(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(f"{where}: expected a number, got {value!r}")
    # json accepts NaN, Infinity, overflowing literals like 1e400 and huge integers
    try:
        real = float(value)
    except OverflowError:
        real = math.inf
    if not math.isfinite(real):
        raise InvalidInputError(f"{where}: expected a finite number, got {value!r}")
    return real


def parse_vehicle(record: Mapping[str, Any], index: int) -> VehicleSpec:
    """Validate one entry of the ``vehicles`` array."""
    where = f"vehicles[{index}]"
    vehicle_id = _as_int(_require(record, "id", where), f"{where}.id")
    dirtiness = _as_real(_require(record, "dirtiness", where), f"{where}.dirtiness")
    if dirtiness < 0:
        raise InvalidInputError(f"{where}.dirtiness: must be non-negative, got {dirtiness}")

    levels = _require(record, "effectiveness_levels", where)
    if not isinstance(levels, Mapping):
        raise InvalidInputError(f"{where}.effectiveness_levels: expected an object")

    effectiveness = {}
    for wash_type, value in levels.items():
        if not isinstance(wash_type, str):
            raise InvalidInputError(f"{where}.effectiveness_levels: keys must be strings")
        effectiveness[wash_type] = _as_real(
            value, f"{where}.effectiveness_levels.{wash_type}"
        )

    return VehicleSpec(vehicle_id=vehicle_id, dirtiness=dirtiness, effectiveness=effectiveness)


def parse_station(record: Mapping[str, Any], index: int) -> StationSpec:
    """Validate one entry of the ``washing_systems`` array.

    Accepts both rule spellings ("ordered"/"sequential", "random"/"randomized")
    and stores the canonical one. Anything else raises UnknownRuleError.
    """
    where = f"washing_systems[{index}]"
    station_id = _as_int(_require(record, "id", where), f"{where}.id")

    wash_type = _require(record, "wash_type", where)
    if not isinstance(wash_type, str) or not wash_type:
        raise InvalidInputError(f"{where}.wash_type: expected a non-empty string, got {wash_type!r}")

    rule = _require(record, "rule", where)
    if not isinstance(rule, str) or rule not in RULE_ALIASES:
        raise UnknownRuleError(rule, index)

    return StationSpec(station_id=station_id, wash_type=wash_type, rule=RULE_ALIASES[rule])


def _check_unique(ids: List[int], what: str) -> None:
    seen = set()
    for i in ids:
        if i in seen:
            raise InvalidInputError(f"Duplicate {what} id: {i}")
        seen.add(i)


def parse_input(data: Mapping[str, Any]) -> SimulationInput:
    """Validate a decoded input document.

    Expected shape::

        {
          "vehicles": [{"id": 1, "dirtiness": 50, "effectiveness_levels": {"basic": 0.5}}],
          "washing_systems": [{"id": 1, "wash_type": "basic", "rule": "ordered"}]
        }

    Raises:
        InvalidInputError: On any structural or type problem.
        UnknownRuleError: If a station rule is not supported.
    """
    if not isinstance(data, Mapping):
        raise InvalidInputError("Input document must be a JSON object")

    raw_vehicles = _require(data, "vehicles", "input")
    raw_stations = _require(data, "washing_systems", "input")
    if not isinstance(raw_vehicles, list):
        raise InvalidInputError("input.vehicles: expected an array")
    if not isinstance(raw_stations, list):
        raise InvalidInputError("input.washing_systems: expected an array")

    vehicles = [parse_vehicle(r, i) for i, r in enumerate(raw_vehicles)]
    stations = [parse_station(r, i) for i, r in enumerate(raw_stations)]

    _check_unique([v.vehicle_id for v in vehicles], "vehicle")
    _check_unique([s.station_id for s in stations], "washing system")

    return SimulationInput(vehicles=vehicles, stations=stations)
