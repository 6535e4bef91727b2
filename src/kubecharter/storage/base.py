"""
Abstract base class for snapshot storage implementations.

A snapshot is the complete image of a SeriesStore. It is rewritten in full
on every tick, never appended to, so a reader always sees a self-consistent
set of series. Implementations write through ``replace_file`` so that a
crash mid-write leaves the previous snapshot intact.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Union

from ..engine.series_store import SeriesStore

PathLike = Union[str, Path]


def replace_file(path: PathLike, write: Callable[[Path], None]) -> None:
    """
    Write a file through a temporary sibling and atomically swap it in.

    Args:
        path: Final destination
        write: Callable receiving the temporary path to write to
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        write(tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


class SnapshotStorage(ABC):
    """Abstract base class for snapshot storage implementations."""

    format_name: str = ""

    @abstractmethod
    def save_store(self, store: SeriesStore, path: PathLike) -> None:
        """
        Overwrite ``path`` with a full snapshot of ``store``.

        Args:
            store: The series to serialize
            path: File path to save to
        """
        pass

    @abstractmethod
    def load_store(self, path: PathLike) -> SeriesStore:
        """
        Reconstruct the SeriesStore saved at ``path``.

        Args:
            path: File path to load from

        Returns:
            A store equal to the one that was saved
        """
        pass

    def file_exists(self, path: PathLike) -> bool:
        return Path(path).exists()
