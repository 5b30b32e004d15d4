"""Read the simulation input document and write final results as JSON."""

import json
import logging
from pathlib import Path
from typing import List

from src.config.errors import InvalidInputError
from src.config.schema import SimulationInput, parse_input
from src.simulation.results import VehicleResult

logger = logging.getLogger(__name__)


def load_input(input_path: Path) -> SimulationInput:
    """Load and validate an input.json file.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidInputError: If the file is not UTF-8 JSON or fails validation.
    """
    path = Path(input_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise InvalidInputError(f"{path}: not valid UTF-8 ({e})") from e
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"{path}: not valid JSON ({e})") from e

    sim_input = parse_input(data)
    logger.info(
        f"Loaded {len(sim_input.vehicles)} vehicles and "
        f"{len(sim_input.stations)} washing systems from {path}"
    )
    return sim_input


def results_payload(results: List[VehicleResult]) -> dict:
    return {"vehicles": [r.to_dict() for r in results]}


def save_results(output_path: Path, results: List[VehicleResult]) -> Path:
    """Write ``{"vehicles": [{"id": ..., "final_dirtiness": ...}]}``."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(results_payload(results), indent=2) + "\n")
    logger.info(f"Results for {len(results)} vehicles written to {path}")
    return path
