"""
Factory for creating snapshot storage instances.
"""

import logging
from pathlib import Path
from typing import Literal

from .base import PathLike, SnapshotStorage
from .json_storage import JsonSnapshotStorage
from .parquet_storage import ParquetSnapshotStorage

logger = logging.getLogger(__name__)


def create_storage(format_type: Literal["json", "parquet"] = "json") -> SnapshotStorage:
    """
    Create a storage instance for the given snapshot format.

    Raises:
        ValueError: If an unsupported format type is specified
    """
    if format_type == "json":
        logger.debug("Creating JsonSnapshotStorage")
        return JsonSnapshotStorage()
    elif format_type == "parquet":
        logger.debug("Creating ParquetSnapshotStorage")
        return ParquetSnapshotStorage()
    else:
        raise ValueError(f"Unsupported snapshot format: {format_type}")


def storage_for_path(path: PathLike) -> SnapshotStorage:
    """Pick the storage matching a snapshot file's suffix."""
    suffix = Path(path).suffix.lower()
    if suffix == ".parquet":
        return create_storage("parquet")
    return create_storage("json")
