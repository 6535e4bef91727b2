"""
Snapshot storage: whole-file JSON or Parquet images of the series store.
"""

from .base import SnapshotStorage, replace_file
from .factory import create_storage, storage_for_path
from .json_storage import JsonSnapshotStorage
from .parquet_storage import ParquetSnapshotStorage

__all__ = [
    "JsonSnapshotStorage",
    "ParquetSnapshotStorage",
    "SnapshotStorage",
    "create_storage",
    "replace_file",
    "storage_for_path",
]
