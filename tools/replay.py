"""Standalone Command-Line Tool for Re-rendering kubecharter Snapshots.

Reads a snapshot written by a kubecharter run (JSON or Parquet, chosen by
file suffix), recomputes the statistics of every group from its stored
history and renders the same HTML report the live run produced. Useful
after a run has ended, or to switch the chart layout of an existing run.

Usage examples:
  # Re-render next to the snapshot (run.json -> run.html)
  python tools/replay.py --snapshot out/2024-01-01T10-00-00.json

  # Render the combined layout into a chosen file
  python tools/replay.py --snapshot out/run.parquet --output /tmp/run.html --layout combined

  # Print the per-group statistics without rendering
  python tools/replay.py --snapshot out/run.json --summary-only
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Allow running from a source checkout without installing the package.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from kubecharter.engine import SeriesStore, format_pod_range, summarize_series  # noqa: E402
from kubecharter.reporting import LAYOUT_COMBINED, LAYOUT_SPLIT, assemble, render_report, write_report  # noqa: E402
from kubecharter.storage import storage_for_path  # noqa: E402

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("ReplayTool")


def _format_pct(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value:.2f}%"


def log_summaries(store: SeriesStore) -> None:
    """Log one line of statistics per group and resource."""
    for group, series in store.items():
        summary = summarize_series(series)
        logger.info(
            f"{group}: {len(series)} points, pods {format_pod_range(summary.pods)}, "
            f"since {series.start_time.isoformat()}"
        )
        for label, stats, unit in (("CPU", summary.cpu, "m"), ("MEM", summary.mem, "Mi")):
            logger.info(
                f"  {label}: min {stats.min}{unit} ({_format_pct(stats.min_pct)}), "
                f"max {stats.max}{unit} ({_format_pct(stats.max_pct)}), "
                f"avg {stats.avg}{unit} ({_format_pct(stats.avg_pct)})"
            )


def replay(snapshot_path: Path, output_path: Path, layout: str) -> int:
    """
    Render the report for a snapshot.

    Returns:
        The number of groups rendered
    """
    store = storage_for_path(snapshot_path).load_store(snapshot_path)
    logger.info(f"Loaded {len(store)} group(s) from {snapshot_path}")

    reports = [
        assemble(group, series, summarize_series(series), layout=layout)
        for group, series in store.items()
    ]
    write_report(render_report(reports, title=output_path.name), output_path)
    logger.info(f"Report written to: {output_path}")
    return len(reports)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Re-render a kubecharter snapshot as an HTML report.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        required=True,
        help="Snapshot file written by kubecharter (.json or .parquet).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="HTML file to write. Defaults to the snapshot path with an .html suffix.",
    )
    parser.add_argument(
        "--layout",
        choices=[LAYOUT_SPLIT, LAYOUT_COMBINED],
        default=LAYOUT_SPLIT,
        help="split: absolute and percentage charts\ncombined: one chart per resource",
    )
    parser.add_argument(
        "--summary-only",
        action="store_true",
        help="Only log per-group statistics, do not render.",
    )
    args = parser.parse_args(argv)

    if not args.snapshot.exists():
        logger.error(f"Snapshot not found: {args.snapshot}")
        return 1

    try:
        if args.summary_only:
            log_summaries(storage_for_path(args.snapshot).load_store(args.snapshot))
            return 0
        output_path = args.output or args.snapshot.with_suffix(".html")
        replay(args.snapshot, output_path, args.layout)
    except Exception as e:
        logger.error(f"Replay failed: {type(e).__name__}: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
