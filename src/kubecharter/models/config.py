"""
Configuration data models.

This module contains the configuration structure loaded from `config.toml`.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional

DATE_TOKEN = "{{date}}"


@dataclass
class ClusterConfig:
    """
    Settings for reaching the cluster, loaded from `[charter.cluster]`.
    """

    # Path to a kubeconfig file. Empty means the client library default.
    kubeconfig: str = ""
    # kubeconfig context to use. Empty means the current context.
    context: str = ""
    # Use the pod's service account instead of a kubeconfig file.
    in_cluster: bool = False
    # Deployment label whose value names the group.
    group_label: str = "app.kubernetes.io/name"
    # Timeout for every API call in seconds. None blocks indefinitely.
    request_timeout_seconds: Optional[int] = None


@dataclass
class ChartConfig:
    """
    The root configuration object, loaded once and never mutated.
    """

    # Namespace to watch. Empty string means all namespaces.
    namespace: str
    # Seconds between two sampling ticks.
    interval_seconds: int
    # Monitored groups, in report order.
    groups: List[str]
    # Number of ticks before a clean stop. Negative means unbounded.
    max_ticks: int
    # Output paths, may contain the {{date}} token.
    html_output_path: str
    snapshot_output_path: str
    # "split" renders absolute and percentage charts, "combined" one chart per resource.
    report_layout: str = "split"
    # "json" or "parquet".
    snapshot_format: str = "json"
    cluster: ClusterConfig = field(default_factory=ClusterConfig)

    @property
    def unbounded(self) -> bool:
        return self.max_ticks < 0

    def resolve_output_paths(self, timestamp_str: str) -> "ChartConfig":
        """
        Return a copy whose output paths have the date token substituted.

        Called once at process start; every tick of a run writes to the same files.
        """
        return replace(
            self,
            html_output_path=self.html_output_path.replace(DATE_TOKEN, timestamp_str),
            snapshot_output_path=self.snapshot_output_path.replace(DATE_TOKEN, timestamp_str),
        )
