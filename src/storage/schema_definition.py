"""PyArrow schema for the wash-event Parquet log."""

import pyarrow as pa

WASH_LOG_COLUMNS = [
    "round_index",
    "station_id",
    "rule",
    "wash_type",
    "vehicle_id",
    "effectiveness",
    "removed_dirt",
    "dirtiness_before",
    "dirtiness_after",
    "cleaning_level_before",
    "cleaning_level_after",
]


def build_wash_log_schema() -> pa.Schema:
    """One row per wash: identifiers, then float64 quantities."""
    fields = [
        pa.field("round_index", pa.int32()),
        pa.field("station_id", pa.int64()),
        pa.field("rule", pa.string()),
        pa.field("wash_type", pa.string()),
        pa.field("vehicle_id", pa.int64()),
    ]

    # Quantities stay float64 so clamped zeros compare exactly
    for col in WASH_LOG_COLUMNS[5:]:
        fields.append(pa.field(col, pa.float64()))

    return pa.schema(fields)


WASH_LOG_SCHEMA = build_wash_log_schema()
