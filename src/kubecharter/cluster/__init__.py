"""
Kubernetes collaborators: connection setup, usage readings and baselines.
"""

from .baseline import BaselineTable
from .client import connect
from .metrics import MetricsSource, parse_pod_metrics
from .quantity import MEBIBYTE, parse_cpu_quantity, parse_memory_quantity

__all__ = [
    "BaselineTable",
    "MEBIBYTE",
    "MetricsSource",
    "connect",
    "parse_cpu_quantity",
    "parse_memory_quantity",
    "parse_pod_metrics",
]
