"""
Data Ingestion Service

CONTRACT:
    Input:  DailySnapshot list (raw scraped rows, many symbols per day)
    Output: TimeSeries (one symbol, oldest-first)

RESPONSIBILITIES:
    - Serve stored daily snapshots (read-only)
    - Normalize numeric and comma-formatted prices/volumes
    - Skip days without a usable price, default missing volume to 0
    - Signal NoData when a symbol has no usable history
"""

from nepse_analyzer.services.data_ingestion.extractor import (
    extract_series,
    normalize_symbol,
    parse_number,
)
from nepse_analyzer.services.data_ingestion.snapshot_source import (
    InMemorySnapshotSource,
    SnapshotSource,
    get_snapshot_source,
    set_snapshot_source,
)

__all__ = [
    "extract_series",
    "normalize_symbol",
    "parse_number",
    "SnapshotSource",
    "InMemorySnapshotSource",
    "get_snapshot_source",
    "set_snapshot_source",
]
