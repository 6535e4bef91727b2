"""
Report assembly and HTML rendering.
"""

from .assembler import LAYOUT_COMBINED, LAYOUT_SPLIT, assemble
from .renderer import build_figure, render_report, write_report

__all__ = [
    "LAYOUT_COMBINED",
    "LAYOUT_SPLIT",
    "assemble",
    "build_figure",
    "render_report",
    "write_report",
]
