"""
Summary statistics over accumulated histories.

Statistics are recomputed from the full history on every tick. Nothing is
carried over between calls, so a series read back from a snapshot yields
exactly the figures the live run showed.
"""

from typing import Optional, Sequence

from ..models.series import GroupSummary, Series, SummaryStats
from ..validation import EmptyHistoryError


def percent_of(value: int, baseline: int) -> float:
    return value / baseline * 100


def summarize(history: Sequence[int], baseline: Optional[int] = None) -> SummaryStats:
    """
    Compute min, max and the truncated integer average of ``history``.

    When ``baseline`` is a positive quantity each figure is also expressed as
    a percentage of it. Percentages are taken of the summarized values, so
    ``avg_pct`` is the percentage of the average rather than the average of
    per-tick percentages. A missing or zero baseline leaves them None.

    Raises:
        EmptyHistoryError: If ``history`` is empty
    """
    if not history:
        raise EmptyHistoryError("Cannot summarize an empty history")

    min_v = history[0]
    max_v = history[0]
    total = 0
    for value in history:
        total += value
        if value < min_v:
            min_v = value
        if value > max_v:
            max_v = value
    avg_v = total // len(history)

    if baseline is None or baseline <= 0:
        return SummaryStats(min=min_v, max=max_v, avg=avg_v)

    return SummaryStats(
        min=min_v,
        max=max_v,
        avg=avg_v,
        min_pct=percent_of(min_v, baseline),
        max_pct=percent_of(max_v, baseline),
        avg_pct=percent_of(avg_v, baseline),
    )


def summarize_series(series: Series) -> GroupSummary:
    """Summarize CPU and memory against their requests, and the pod counts."""
    cpu_request = series.baseline.cpu_request_m if series.baseline else None
    mem_request = series.baseline.mem_request_mi if series.baseline else None
    return GroupSummary(
        cpu=summarize(series.cpu_history, cpu_request),
        mem=summarize(series.mem_history, mem_request),
        pods=summarize(series.pod_count_history),
    )


def format_pod_range(pods: SummaryStats) -> str:
    """Render a pod-count range as "3" or "2-4"."""
    if pods.min == pods.max:
        return str(pods.min)
    return f"{pods.min}-{pods.max}"
