"""
Assembly of renderer input from a group's series and statistics.

Everything here is a pure function of its arguments: no clock, no I/O. The
x-axis indexes *recorded* points (0..n-1), which differs from the global
tick counter for groups that appeared late or skipped ticks.
"""

from typing import List, Optional

from ..engine.statistics import format_pod_range, percent_of
from ..models.report import ChartSpec, ReportInput
from ..models.series import GroupSummary, Series, SummaryStats

LAYOUT_SPLIT = "split"
LAYOUT_COMBINED = "combined"

START_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
PERCENT_FORMAT = ".2f"

_RESOURCES = (
    # key, label, unit, history attribute, request attribute
    ("cpu", "CPU", "m", "cpu_history", "cpu_request_m"),
    ("mem", "Memory", "Mi", "mem_history", "mem_request_mi"),
)


def _caption_prefix(series: Series, summary: GroupSummary) -> str:
    return (
        f"[pods: {format_pod_range(summary.pods)}, "
        f"start time: {series.start_time.strftime(START_TIME_FORMAT)}, "
        f"tick: {series.tick_interval_seconds}s]"
    )


def _request_text(request: Optional[int], unit: str) -> str:
    if request is None or request <= 0:
        return "n/a"
    return f"{request}{unit}"


def _absolute_caption(prefix: str, stats: SummaryStats, request_text: str) -> str:
    return (
        f"{prefix} min: {stats.min}, max: {stats.max}, avg: {stats.avg}, "
        f"request per pod: {request_text}"
    )


def _percent_caption(prefix: str, stats: SummaryStats, request_text: str) -> str:
    return (
        f"{prefix} min: {stats.min_pct:.2f}%, max: {stats.max_pct:.2f}%, "
        f"avg: {stats.avg_pct:.2f}%, request per pod: {request_text}"
    )


def _combined_caption(prefix: str, stats: SummaryStats, request_text: str) -> str:
    if not stats.has_percentages:
        return _absolute_caption(prefix, stats, request_text)
    return (
        f"{prefix} min: {stats.min} ({stats.min_pct:.2f}%), "
        f"max: {stats.max} ({stats.max_pct:.2f}%), "
        f"avg: {stats.avg} ({stats.avg_pct:.2f}%), "
        f"request per pod: {request_text}"
    )


def assemble(
    group: str,
    series: Series,
    summary: GroupSummary,
    layout: str = LAYOUT_SPLIT,
) -> ReportInput:
    """
    Build the charts for one group.

    With the split layout each resource gets an absolute chart and, when a
    request is known, a percentage-of-request chart. The combined layout
    gives one absolute chart per resource with both sets of figures in its
    caption. Captions are built from ``summary`` only.
    """
    x_axis = tuple(range(len(series)))
    pods = tuple(series.pod_count_history)
    prefix = _caption_prefix(series, summary)

    charts: List[ChartSpec] = []
    for key, label, unit, history_attr, request_attr in _RESOURCES:
        history = getattr(series, history_attr)
        stats: SummaryStats = getattr(summary, key)
        request = getattr(series.baseline, request_attr) if series.baseline else None
        request_text = _request_text(request, unit)

        if layout == LAYOUT_COMBINED:
            caption = _combined_caption(prefix, stats, request_text)
        else:
            caption = _absolute_caption(prefix, stats, request_text)

        charts.append(
            ChartSpec(
                title=f"{group} ({label} per pod [{unit}])",
                caption=caption,
                x_axis=x_axis,
                primary_name=label,
                primary_values=tuple(history),
                primary_axis_title=f"{label} [{unit}]",
                secondary_name="Pods",
                secondary_values=pods,
            )
        )

        if layout == LAYOUT_SPLIT and stats.has_percentages:
            charts.append(
                ChartSpec(
                    title=f"{group} ({label} per pod [% of request])",
                    caption=_percent_caption(prefix, stats, request_text),
                    x_axis=x_axis,
                    primary_name=f"{label} %",
                    primary_values=tuple(percent_of(v, request) for v in history),
                    primary_axis_title=f"{label} [% of request]",
                    secondary_name="Pods",
                    secondary_values=pods,
                    value_format=PERCENT_FORMAT,
                )
            )

    return ReportInput(group=group, charts=tuple(charts))
