"""
Command-line interface for kubecharter.

Loads the configuration, connects to the cluster, resolves baselines once
and runs the tick loop until max_ticks is reached or SIGINT/SIGTERM arrives.
Exit code 0 on a clean stop, 1 on any fatal error.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..cluster import BaselineTable, MetricsSource, connect
from ..config import get_config, set_config_path
from ..models.config import ChartConfig
from ..orchestration import SignalHandler, TickOrchestrator
from ..orchestration.tick_orchestrator import local_now
from ..validation import KubeCharterError, handle_cli_error

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

# Substituted for {{date}} in output paths. Contains no colons.
RUN_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubecharter",
        description="Chart per-group Kubernetes resource usage against declared requests.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.toml (defaults to conf/config.toml in the repository).",
    )
    parser.add_argument(
        "--kubeconfig",
        type=str,
        help="Path to a kubeconfig file. Overrides charter.cluster.kubeconfig.",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        help="Stop after this many ticks. Negative runs until interrupted.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def apply_overrides(config: ChartConfig, args: argparse.Namespace) -> ChartConfig:
    """Return ``config`` with command-line overrides applied."""
    if args.kubeconfig:
        config = dataclasses.replace(
            config, cluster=dataclasses.replace(config.cluster, kubeconfig=args.kubeconfig)
        )
    if args.max_ticks is not None:
        config = dataclasses.replace(config, max_ticks=args.max_ticks)
    return config


def run(config: ChartConfig) -> int:
    """
    Connect, resolve baselines and run the loop.

    Returns:
        The number of completed ticks
    """
    start_time = local_now()
    config = config.resolve_output_paths(start_time.strftime(RUN_TIMESTAMP_FORMAT))
    logger.info(f"Report: {config.html_output_path}")
    logger.info(f"Snapshot ({config.snapshot_format}): {config.snapshot_output_path}")

    api_client = connect(config.cluster)
    timeout = config.cluster.request_timeout_seconds

    baselines = BaselineTable(
        api_client,
        namespace=config.namespace,
        group_label=config.cluster.group_label,
        request_timeout=timeout,
    ).resolve(config.groups)

    metrics_source = MetricsSource(api_client, namespace=config.namespace, request_timeout=timeout)

    with SignalHandler() as signal_handler:
        orchestrator = TickOrchestrator(
            config=config,
            metrics_source=metrics_source,
            baselines=baselines,
            shutdown_event=signal_handler.shutdown_event,
        )
        return orchestrator.run()


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for kubecharter.

    Raises:
        SystemExit: On configuration errors or any fatal runtime error
    """
    args = build_parser().parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    if args.config:
        set_config_path(args.config)

    try:
        config = apply_overrides(get_config(), args)
        ticks = run(config)
    except KubeCharterError as e:
        handle_cli_error(
            error=e,
            context=type(e).__name__,
            exit_code=1,
            logger=logger,
        )
    except Exception as e:
        logger.critical(f"Unexpected error: {type(e).__name__}: {e}", exc_info=True)
        sys.exit(1)

    logger.info(f"Stopped cleanly after {ticks} tick(s)")


if __name__ == "__main__":
    main_cli()
