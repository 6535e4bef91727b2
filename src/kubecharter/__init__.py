"""
kubecharter: per-group Kubernetes resource usage charts.

Samples container usage from the metrics API on a fixed interval,
accumulates it into per-group series, and rewrites an HTML report and a
replayable snapshot after every tick.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures and type definitions
- validation: Error taxonomy and value validators
- cluster: Kubernetes connection, usage readings and baselines
- engine: Reduction, accumulation and statistics
- reporting: Chart assembly and HTML rendering
- storage: Snapshot serialization
- orchestration: The tick loop and shutdown signalling
- cli: Command-line interface

Usage:
    From command line:
        kubecharter --config conf/config.toml

    Programmatically:
        from kubecharter import SeriesStore, summarize
        store = SeriesStore()
"""

from .config import clear_config_cache, get_config, set_config_path
from .engine import SeriesStore, reduce_readings, summarize, summarize_series
from .models import (
    BaselineEntry,
    ChartConfig,
    ClusterConfig,
    GroupSummary,
    RawReading,
    ReportInput,
    Series,
    SummaryStats,
    TickAggregate,
)
from .reporting import assemble, render_report
from .storage import create_storage
from .validation import (
    ArtifactWriteError,
    ClusterConnectionError,
    ConfigError,
    EmptyHistoryError,
    KubeCharterError,
    PreconditionError,
    SamplingError,
)

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Engine
    "SeriesStore",
    "reduce_readings",
    "summarize",
    "summarize_series",
    # Models
    "BaselineEntry",
    "ChartConfig",
    "ClusterConfig",
    "GroupSummary",
    "RawReading",
    "ReportInput",
    "Series",
    "SummaryStats",
    "TickAggregate",
    # Reporting and storage
    "assemble",
    "render_report",
    "create_storage",
    # Errors
    "ArtifactWriteError",
    "ClusterConnectionError",
    "ConfigError",
    "EmptyHistoryError",
    "KubeCharterError",
    "PreconditionError",
    "SamplingError",
]
