"""
Sampling and accumulation data models.

Quantities are integers in fixed-point sub-units: CPU in milli-cores and
memory in mebibytes. Percentages are the only floating-point values and are
always derived on demand from these integers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class BaselineEntry:
    """
    Declared resource requests for one group, resolved once at startup.
    """

    cpu_request_m: int
    mem_request_mi: int


@dataclass(frozen=True)
class RawReading:
    """
    Usage of a single container at a single tick.

    Attributes:
        entity_name: "<namespace>/<pod>" of the pod running the container.
        group: The container name, matched against configured group names.
        cpu_m: CPU usage in milli-cores.
        mem_mi: Memory working set in mebibytes.
    """

    entity_name: str
    group: str
    cpu_m: int
    mem_mi: int


@dataclass(frozen=True)
class TickAggregate:
    """
    One group's readings for one tick, summed.
    """

    matched_entity_count: int
    total_cpu_m: int
    total_mem_mi: int

    @property
    def is_empty(self) -> bool:
        return self.matched_entity_count == 0


@dataclass
class Series:
    """
    The accumulated history of one group since its first non-empty tick.

    The three history lists always have the same length: one entry per tick
    in which the group had at least one matching container. CPU and memory
    entries are per-container averages (truncating division of the tick's
    totals by its container count).
    """

    baseline: Optional[BaselineEntry]
    start_time: datetime
    tick_interval_seconds: int
    cpu_history: List[int] = field(default_factory=list)
    mem_history: List[int] = field(default_factory=list)
    pod_count_history: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pod_count_history)


@dataclass(frozen=True)
class SummaryStats:
    """
    Min, max and average of a history, optionally relative to a baseline.

    The percentage fields are None when no usable baseline exists.
    """

    min: int
    max: int
    avg: int
    min_pct: Optional[float] = None
    max_pct: Optional[float] = None
    avg_pct: Optional[float] = None

    @property
    def has_percentages(self) -> bool:
        return self.avg_pct is not None


@dataclass(frozen=True)
class GroupSummary:
    """Statistics for every tracked quantity of one group."""

    cpu: SummaryStats
    mem: SummaryStats
    pods: SummaryStats
