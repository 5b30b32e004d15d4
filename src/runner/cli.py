"""Command-line interface for the car wash simulation."""

import logging
import sys
from pathlib import Path

import click

from src.config.constants import DEFAULT_INPUT_FILE, DEFAULT_MAX_ROUNDS, DEFAULT_OUTPUT_FILE
from src.config.errors import InvalidInputError, MissingEffectivenessError, SimulationDidNotConverge
from src.fleet.fleet_factory import create_fleet
from src.simulation.engine import CarWashSimulation
from src.storage.json_io import load_input, save_results
from src.storage.wash_log_writer import WashLogWriter, events_to_frame
from src.validation.run_checks import validate_wash_log


@click.command()
@click.option("--input", "input_file", default=DEFAULT_INPUT_FILE, help="Input JSON file.")
@click.option("--output", "output_file", default=DEFAULT_OUTPUT_FILE, help="Output JSON file.")
@click.option("--seed", default=None, type=click.IntRange(min=0), help="Master RNG seed for randomized stations.")
@click.option("--max-rounds", default=DEFAULT_MAX_ROUNDS, type=click.IntRange(min=0),
              help="Give up after this many rounds (0 = run until convergence).")
@click.option("--wash-log-dir", default=None, help="Also write the wash-event log as Parquet here.")
@click.option("--check", is_flag=True, help="Validate run invariants on the wash log.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def main(input_file, output_file, seed, max_rounds, wash_log_dir, check, verbose):
    """Simulate washing stations cleaning a fixed set of vehicles."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger(__name__)

    try:
        sim_input = load_input(Path(input_file))
    except (FileNotFoundError, InvalidInputError) as e:
        logger.error(f"Could not load input: {e}")
        sys.exit(1)

    vehicles, stations = create_fleet(sim_input, seed=seed)
    simulation = CarWashSimulation(
        vehicles, stations, record_events=wash_log_dir is not None or check,
    )

    try:
        results = simulation.run(max_rounds=max_rounds or None)
    except SimulationDidNotConverge as e:
        logger.error(str(e))
        sys.exit(1)
    except MissingEffectivenessError as e:
        logger.error(f"Data error: {e}")
        sys.exit(1)

    save_results(Path(output_file), results)

    if wash_log_dir is not None:
        path = WashLogWriter(Path(wash_log_dir)).write_run(simulation.events)
        logger.info(f"Wash log written to {path}")

    if check:
        report = validate_wash_log(events_to_frame(simulation.events))
        logger.info(report.summary())
        if not report.passed:
            sys.exit(1)

    click.echo("Simulation completed successfully!")


if __name__ == "__main__":
    main()
