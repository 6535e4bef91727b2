"""
Accumulation and summarization engine.

- reducer: raw readings to per-group tick aggregates
- series_store: per-group histories, the only state kept between ticks
- statistics: min/max/avg and percentage-of-baseline figures
"""

from .reducer import group_readings, reduce_readings
from .series_store import SNAPSHOT_VERSION, SeriesStore
from .statistics import format_pod_range, percent_of, summarize, summarize_series

__all__ = [
    "SNAPSHOT_VERSION",
    "SeriesStore",
    "format_pod_range",
    "group_readings",
    "percent_of",
    "reduce_readings",
    "summarize",
    "summarize_series",
]
