"""
Report data models.

These are the renderer-agnostic structures produced by the report assembler.
They contain only plain values so that two assemblies of the same input
compare equal.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

Number = Union[int, float]


@dataclass(frozen=True)
class ChartSpec:
    """
    One chart: a primary line over recorded ticks plus a pod-count line.
    """

    title: str
    caption: str
    x_axis: Tuple[int, ...]
    primary_name: str
    primary_values: Tuple[Number, ...]
    primary_axis_title: str
    secondary_name: str
    secondary_values: Tuple[int, ...]
    # d3 format for primary values on hover and ticks. Empty keeps the default.
    value_format: str = ""


@dataclass(frozen=True)
class ReportInput:
    """All charts of one group, in display order."""

    group: str
    charts: Tuple[ChartSpec, ...]

    def chart_titles(self) -> List[str]:
        return [chart.title for chart in self.charts]
