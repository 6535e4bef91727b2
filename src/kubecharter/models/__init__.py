"""
Data models and structures for kubecharter.

Configuration Models:
- Cluster access and output settings loaded from TOML

Series Models:
- Baselines, raw readings, per-tick aggregates
- Accumulated per-group series and derived statistics

Report Models:
- Renderer-agnostic chart descriptions
"""

from .config import DATE_TOKEN, ChartConfig, ClusterConfig
from .report import ChartSpec, ReportInput
from .series import (
    BaselineEntry,
    GroupSummary,
    RawReading,
    Series,
    SummaryStats,
    TickAggregate,
)

__all__ = [
    # Configuration
    "DATE_TOKEN",
    "ChartConfig",
    "ClusterConfig",
    # Series
    "BaselineEntry",
    "GroupSummary",
    "RawReading",
    "Series",
    "SummaryStats",
    "TickAggregate",
    # Report
    "ChartSpec",
    "ReportInput",
]
