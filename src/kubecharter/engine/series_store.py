"""
The owned collection of per-group series.

A SeriesStore is created empty at startup, mutated only by the tick loop and
serialized in full after every tick. It is the only state carried between
ticks.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..models.series import BaselineEntry, Series, TickAggregate
from ..validation import PreconditionError

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class SeriesStore:
    """
    Per-group series, keyed by group name.

    Groups listed in ``group_order`` come first, in that order; any other
    group follows in first-seen order. Iteration, groups() and to_dict() all
    use this order, so a snapshot lists its groups the way the live report
    does.
    """

    def __init__(self, group_order: Optional[Sequence[str]] = None):
        self._series: Dict[str, Series] = {}
        self._rank = {group: i for i, group in enumerate(group_order or ())}

    def _ordered(self) -> List[str]:
        unranked = len(self._rank)
        return sorted(self._series, key=lambda group: self._rank.get(group, unranked))

    def ensure(
        self,
        group: str,
        baseline: Optional[BaselineEntry],
        now: datetime,
        interval_seconds: int,
    ) -> Series:
        """
        Create the series for ``group`` if it does not exist yet.

        Idempotent: once a series exists, later baselines, timestamps and
        intervals for the same group are ignored.
        """
        series = self._series.get(group)
        if series is None:
            series = Series(
                baseline=baseline,
                start_time=now,
                tick_interval_seconds=interval_seconds,
            )
            self._series[group] = series
            logger.debug(f"Created series for group '{group}'")
        return series

    def append(self, group: str, aggregate: TickAggregate) -> None:
        """
        Record one tick for ``group``: per-container averages and the count.

        Raises:
            PreconditionError: If no series exists for the group, or the
                aggregate matched no container
        """
        series = self._series.get(group)
        if series is None:
            raise PreconditionError(f"append() before ensure() for group '{group}'")
        count = aggregate.matched_entity_count
        if count <= 0:
            raise PreconditionError(
                f"append() with an empty aggregate for group '{group}'"
            )

        series.cpu_history.append(aggregate.total_cpu_m // count)
        series.mem_history.append(aggregate.total_mem_mi // count)
        series.pod_count_history.append(count)

    def get(self, group: str) -> Series:
        try:
            return self._series[group]
        except KeyError:
            raise PreconditionError(f"No series for group '{group}'") from None

    def groups(self) -> List[str]:
        return self._ordered()

    def items(self) -> Iterator[Tuple[str, Series]]:
        return ((group, self._series[group]) for group in self._ordered())

    def __contains__(self, group: str) -> bool:
        return group in self._series

    def __iter__(self) -> Iterator[str]:
        return iter(self._ordered())

    def __len__(self) -> int:
        return len(self._series)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeriesStore):
            return NotImplemented
        return self._series == other._series

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize every series to plain JSON-compatible values.

        The layout is stable and read back by from_dict(). Groups keep
        their file order on the way back in.
        """
        groups = {}
        for group, series in self.items():
            baseline = None
            if series.baseline is not None:
                baseline = {
                    "cpu_request_m": series.baseline.cpu_request_m,
                    "mem_request_mi": series.baseline.mem_request_mi,
                }
            groups[group] = {
                "baseline": baseline,
                "start_time": series.start_time.isoformat(),
                "tick_interval_seconds": series.tick_interval_seconds,
                "cpu_history": list(series.cpu_history),
                "mem_history": list(series.mem_history),
                "pod_count_history": list(series.pod_count_history),
            }
        return {"version": SNAPSHOT_VERSION, "groups": groups}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeriesStore":
        """
        Rebuild a store from the output of to_dict().

        Raises:
            ValueError: If the data is not a supported snapshot
        """
        version = data.get("version")
        if version != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version: {version!r}")

        store = cls()
        for group, raw in data.get("groups", {}).items():
            baseline = raw.get("baseline")
            series = Series(
                baseline=BaselineEntry(**baseline) if baseline else None,
                start_time=datetime.fromisoformat(raw["start_time"]),
                tick_interval_seconds=int(raw["tick_interval_seconds"]),
                cpu_history=[int(v) for v in raw["cpu_history"]],
                mem_history=[int(v) for v in raw["mem_history"]],
                pod_count_history=[int(v) for v in raw["pod_count_history"]],
            )
            lengths = {len(series.cpu_history), len(series.mem_history), len(series.pod_count_history)}
            if len(lengths) != 1:
                raise ValueError(f"Snapshot histories for group '{group}' differ in length")
            store._series[group] = series
        return store
