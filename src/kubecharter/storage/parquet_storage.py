"""
Parquet snapshot storage using Polars.

The snapshot is stored in long form, one row per recorded point, so that it
can be loaded straight into a DataFrame for analysis. Per-series constants
(baseline, start time, interval) are repeated on every row of their group.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Literal

import polars as pl

from ..engine.series_store import SNAPSHOT_VERSION, SeriesStore
from .base import PathLike, SnapshotStorage, replace_file

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA = {
    "group": pl.Utf8,
    "point": pl.Int64,
    "cpu_m": pl.Int64,
    "mem_mi": pl.Int64,
    "pods": pl.Int64,
    "cpu_request_m": pl.Int64,
    "mem_request_mi": pl.Int64,
    # ISO 8601 text keeps the UTC offset exactly as recorded.
    "start_time": pl.Utf8,
    "tick_interval_seconds": pl.Int64,
}


class ParquetSnapshotStorage(SnapshotStorage):
    """
    Columnar snapshot with compression.
    """

    format_name = "parquet"

    def __init__(self, compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"):
        self.compression = compression
        logger.debug(f"Initialized ParquetSnapshotStorage with compression: {compression}")

    def store_to_dataframe(self, store: SeriesStore) -> pl.DataFrame:
        columns: Dict[str, List[Any]] = {name: [] for name in SNAPSHOT_SCHEMA}
        for group, raw in store.to_dict()["groups"].items():
            baseline = raw["baseline"] or {}
            for point, (cpu, mem, pods) in enumerate(
                zip(raw["cpu_history"], raw["mem_history"], raw["pod_count_history"])
            ):
                columns["group"].append(group)
                columns["point"].append(point)
                columns["cpu_m"].append(cpu)
                columns["mem_mi"].append(mem)
                columns["pods"].append(pods)
                columns["cpu_request_m"].append(baseline.get("cpu_request_m"))
                columns["mem_request_mi"].append(baseline.get("mem_request_mi"))
                columns["start_time"].append(raw["start_time"])
                columns["tick_interval_seconds"].append(raw["tick_interval_seconds"])
        return pl.DataFrame(columns, schema=SNAPSHOT_SCHEMA)

    def dataframe_to_store(self, df: pl.DataFrame) -> SeriesStore:
        groups: Dict[str, Any] = {}
        for group in df["group"].unique(maintain_order=True).to_list():
            rows = df.filter(pl.col("group") == group).sort("point")
            first = rows.row(0, named=True)
            baseline = None
            if first["cpu_request_m"] is not None or first["mem_request_mi"] is not None:
                baseline = {
                    "cpu_request_m": first["cpu_request_m"] or 0,
                    "mem_request_mi": first["mem_request_mi"] or 0,
                }
            groups[group] = {
                "baseline": baseline,
                "start_time": first["start_time"],
                "tick_interval_seconds": first["tick_interval_seconds"],
                "cpu_history": rows["cpu_m"].to_list(),
                "mem_history": rows["mem_mi"].to_list(),
                "pod_count_history": rows["pods"].to_list(),
            }
        return SeriesStore.from_dict({"version": SNAPSHOT_VERSION, "groups": groups})

    def save_store(self, store: SeriesStore, path: PathLike) -> None:
        df = self.store_to_dataframe(store)

        def _write(tmp_path: Path) -> None:
            df.write_parquet(tmp_path, compression=self.compression)

        try:
            replace_file(path, _write)
            logger.debug(f"Saved snapshot with {len(df)} rows to {path}")
        except Exception as e:
            logger.error(f"Failed to save snapshot to {path}: {e}")
            raise

    def load_store(self, path: PathLike) -> SeriesStore:
        try:
            df = pl.read_parquet(path)
            store = self.dataframe_to_store(df)
            logger.debug(f"Loaded snapshot with {len(df)} rows from {path}")
            return store
        except Exception as e:
            logger.error(f"Failed to load snapshot from {path}: {e}")
            raise
