"""Write the per-wash event log of a run to Parquet."""

from dataclasses import asdict
from pathlib import Path
from typing import List

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from src.config.constants import WASH_LOG_FILE
from src.simulation.results import WashEvent
from src.storage.schema_definition import WASH_LOG_COLUMNS, WASH_LOG_SCHEMA


def events_to_frame(events: List[WashEvent]) -> pd.DataFrame:
    """Wash events as a DataFrame with the log's column order."""
    df = pd.DataFrame([asdict(e) for e in events], columns=WASH_LOG_COLUMNS)
    return df[WASH_LOG_COLUMNS]


class WashLogWriter:
    """Writes wash events to <output_dir>/wash_log.parquet."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def write_run(self, events: List[WashEvent], file_name: str = WASH_LOG_FILE) -> Path:
        """Write all events of one run.

        Args:
            events: Events in the order the engine produced them.
            file_name: Name of the Parquet file inside output_dir.

        Returns:
            Path to the written Parquet file.
        """
        df = events_to_frame(events)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / file_name

        table = pa.Table.from_pandas(df, schema=WASH_LOG_SCHEMA, preserve_index=False)
        pq.write_table(table, output_path, compression="snappy")

        return output_path


def read_wash_log(path: Path) -> pd.DataFrame:
    return pq.read_table(path).to_pandas()
