"""
Kubernetes quantity conversion to the integer units used internally.
"""

import math
from typing import Optional

from kubernetes.utils import parse_quantity

MEBIBYTE = 1024 * 1024


def parse_cpu_quantity(q: Optional[str]) -> Optional[int]:
    """
    Convert a CPU quantity ("250m", "1", "123456n") to milli-cores.

    Rounds up, so that any non-zero usage is at least 1m.
    """
    if q is None:
        return None
    return math.ceil(parse_quantity(q) * 1000)


def parse_memory_quantity(q: Optional[str]) -> Optional[int]:
    """Convert a memory quantity ("128Mi", "1G", "4096Ki") to mebibytes, rounded up."""
    if q is None:
        return None
    return math.ceil(parse_quantity(q) / MEBIBYTE)
