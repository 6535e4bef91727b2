"""
JSON snapshot storage, the default format.
"""

import json
import logging
from pathlib import Path

from ..engine.series_store import SeriesStore
from .base import PathLike, SnapshotStorage, replace_file

logger = logging.getLogger(__name__)


class JsonSnapshotStorage(SnapshotStorage):
    """
    Human-readable snapshot: one JSON object holding every series.
    """

    format_name = "json"

    def __init__(self, indent: int = 2):
        self.indent = indent

    def save_store(self, store: SeriesStore, path: PathLike) -> None:
        data = store.to_dict()

        def _write(tmp_path: Path) -> None:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=self.indent, ensure_ascii=False)
                f.write("\n")

        try:
            replace_file(path, _write)
            logger.debug(f"Saved snapshot of {len(store)} groups to {path}")
        except Exception as e:
            logger.error(f"Failed to save snapshot to {path}: {e}")
            raise

    def load_store(self, path: PathLike) -> SeriesStore:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            store = SeriesStore.from_dict(data)
            logger.debug(f"Loaded snapshot of {len(store)} groups from {path}")
            return store
        except Exception as e:
            logger.error(f"Failed to load snapshot from {path}: {e}")
            raise
