"""
Renders assembled report input into one self-contained HTML document.

Each ChartSpec becomes an interactive Plotly line chart: the resource on the
primary y-axis and the pod count on a secondary y-axis overlaid on the right.
Charts are laid out in two columns. Plotly.js is embedded once, inline, so
the document opens without network access.
"""

import html
import logging
from pathlib import Path
from typing import List, Sequence, Union

import plotly.graph_objects as go

from ..models.report import ChartSpec, ReportInput
from ..storage.base import replace_file
from ..validation import ErrorSeverity, handle_file_error

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style> .container {{float: left; width: 50%;}} .item {{margin: auto;}} .empty {{font-family: sans-serif;}} </style>
</head>
<body>
{body}
</body>
</html>
"""

CHART_TEMPLATE = '<div class="container"><div class="item">{chart}</div></div>'

EMPTY_BODY = '<p class="empty">No matching containers found for the configured groups yet.</p>'


def build_figure(chart: ChartSpec) -> go.Figure:
    """Create the dual-axis figure for one chart."""
    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=list(chart.x_axis),
            y=list(chart.primary_values),
            name=chart.primary_name,
            mode="lines+markers",
            marker_color="cornflowerblue",
            yhoverformat=chart.value_format or None,
        )
    )

    fig.add_trace(
        go.Scatter(
            x=list(chart.x_axis),
            y=list(chart.secondary_values),
            name=chart.secondary_name,
            mode="lines",
            line={"color": "indianred", "dash": "dot", "shape": "hv"},
            yaxis="y2",  # Assign this trace to the secondary y-axis.
        )
    )

    fig.update_layout(
        title={
            "text": f"{html.escape(chart.title)}<br><sup>{html.escape(chart.caption)}</sup>",
            "font": {"size": 14},
        },
        xaxis={"title_text": "tick", "rangemode": "tozero"},
        yaxis={
            "title_text": chart.primary_axis_title,
            "showgrid": False,
            "rangemode": "tozero",
            "tickformat": chart.value_format or None,
        },
        yaxis2={
            "title_text": chart.secondary_name,
            "overlaying": "y",
            "side": "right",
            "showgrid": False,
            "rangemode": "tozero",
            "dtick": 1,
        },
        hovermode="x unified",
        legend={"orientation": "h", "y": -0.2},
        margin={"t": 80},
        height=450,
    )
    return fig


def render_report(reports: Sequence[ReportInput], title: str) -> str:
    """
    Render every group's charts into one HTML page.

    Args:
        reports: Report input per group, in display order
        title: Page title

    Returns:
        The complete HTML document
    """
    blocks: List[str] = []
    for report in reports:
        for chart in report.charts:
            fig = build_figure(chart)
            blocks.append(
                CHART_TEMPLATE.format(
                    chart=fig.to_html(
                        full_html=False,
                        include_plotlyjs=not blocks,
                        div_id=f"chart-{len(blocks)}",
                    )
                )
            )

    body = "\n".join(blocks) if blocks else EMPTY_BODY
    return PAGE_TEMPLATE.format(title=html.escape(title), body=body)


def write_report(document: str, path: Union[str, Path]) -> None:
    """Overwrite ``path`` with the rendered document."""

    def _write(tmp_path: Path) -> None:
        tmp_path.write_text(document, encoding="utf-8")

    try:
        replace_file(path, _write)
        logger.debug(f"Report written to {path}")
    except OSError as e:
        handle_file_error(
            error=e,
            context=f"writing report {path}",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
