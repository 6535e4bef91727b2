"""
Reduction of one tick's raw readings into per-group aggregates.
"""

from typing import Dict, Iterable, Sequence

from ..models.series import RawReading, TickAggregate


def reduce_readings(readings: Iterable[RawReading], target_group: str) -> TickAggregate:
    """
    Sum the readings belonging to ``target_group``.

    Pure and deterministic. A group with no matching reading yields an empty
    aggregate (count 0), which callers must skip rather than record.
    """
    count = 0
    total_cpu = 0
    total_mem = 0
    for reading in readings:
        if reading.group != target_group:
            continue
        count += 1
        total_cpu += reading.cpu_m
        total_mem += reading.mem_mi
    return TickAggregate(
        matched_entity_count=count,
        total_cpu_m=total_cpu,
        total_mem_mi=total_mem,
    )


def group_readings(readings: Sequence[RawReading], groups: Sequence[str]) -> Dict[str, TickAggregate]:
    """Reduce the readings for every group, keyed in configured order."""
    return {group: reduce_readings(readings, group) for group in groups}
