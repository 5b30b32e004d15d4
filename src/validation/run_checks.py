"""Invariant checks over a run's wash-event log."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd

from src.config.constants import DECAY_PER_WASH

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    check: str
    subject: str              # e.g. "vehicle 3", "station 1", "all"
    passed: bool
    message: str = ""


@dataclass
class ValidationReport:
    results: List[ValidationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def n_passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def n_failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    def summary(self) -> str:
        lines = [f"Validation: {self.n_passed} passed, {self.n_failed} failed"]
        for r in self.results:
            status = "PASS" if r.passed else "FAIL"
            lines.append(f"  [{status}] {r.check}/{r.subject} {r.message}".rstrip())
        return "\n".join(lines)


def _check_floor(log: pd.DataFrame) -> List[ValidationResult]:
    results = []
    for col in ("dirtiness_after", "cleaning_level_after"):
        n_negative = int((log[col] < 0).sum())
        results.append(ValidationResult(
            check="floor",
            subject=col,
            passed=n_negative == 0,
            message=f"{n_negative} negative values" if n_negative else "",
        ))
    return results


def _check_monotonic_dirtiness(log: pd.DataFrame) -> List[ValidationResult]:
    results = []
    for vehicle_id, washes in log.groupby("vehicle_id", sort=True):
        after = washes["dirtiness_after"].to_numpy()
        before = washes["dirtiness_before"].to_numpy()
        increased = bool(np.any(after > before)) or bool(np.any(np.diff(after) > 0))
        results.append(ValidationResult(
            check="monotonic_dirtiness",
            subject=f"vehicle {vehicle_id}",
            passed=not increased,
            message="dirtiness increased between washes" if increased else "",
        ))
    return results


def _check_decay(log: pd.DataFrame) -> List[ValidationResult]:
    results = []
    for station_id, washes in log.groupby("station_id", sort=True):
        rule = washes["rule"].iloc[0]
        decay = DECAY_PER_WASH.get(rule)
        if decay is None:
            results.append(ValidationResult(
                check="decay", subject=f"station {station_id}", passed=False,
                message=f"unknown rule {rule!r}",
            ))
            continue

        expected = np.maximum(washes["cleaning_level_before"].to_numpy() - decay, 0.0)
        actual = washes["cleaning_level_after"].to_numpy()
        mismatches = int(np.sum(~np.isclose(actual, expected)))
        results.append(ValidationResult(
            check="decay",
            subject=f"station {station_id}",
            passed=mismatches == 0,
            message=f"{mismatches} washes off the {decay:g}/wash decay" if mismatches else "",
        ))
    return results


def validate_wash_log(log: pd.DataFrame) -> ValidationReport:
    """Check floor, monotonicity, and decay invariants on a wash log.

    Args:
        log: One row per wash, in the order the washes happened
            (see src.storage.schema_definition.WASH_LOG_COLUMNS).

    Returns:
        ValidationReport with one result per check and subject.
    """
    report = ValidationReport()
    if len(log) == 0:
        logger.warning("Wash log is empty, nothing to validate")
        return report

    report.results.extend(_check_floor(log))
    report.results.extend(_check_monotonic_dirtiness(log))
    report.results.extend(_check_decay(log))

    for r in report.results:
        if not r.passed:
            logger.warning(f"Check failed: {r.check}/{r.subject} {r.message}")

    return report


if __name__ == "__main__":
    import sys

    from src.storage.wash_log_writer import read_wash_log

    if len(sys.argv) < 2:
        print("Usage: python -m src.validation.run_checks <wash_log.parquet>")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO)
    report = validate_wash_log(read_wash_log(Path(sys.argv[1])))
    print(report.summary())
    sys.exit(0 if report.passed else 1)
