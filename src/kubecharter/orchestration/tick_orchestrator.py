"""
The sampling loop.

TickOrchestrator is the only component with control flow. On every tick it
samples the metrics source, folds the readings into the series store,
recomputes statistics for every group from full history, and rewrites both
output artifacts. Any failure aborts the run: there is no retry and no
partial tick.
"""

import logging
import threading
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..cluster.metrics import MetricsSource
from ..engine.reducer import group_readings
from ..engine.series_store import SeriesStore
from ..engine.statistics import summarize_series
from ..models.config import ChartConfig
from ..models.report import ReportInput
from ..models.series import BaselineEntry, RawReading
from ..reporting.assembler import assemble
from ..reporting.renderer import render_report, write_report
from ..storage.base import SnapshotStorage
from ..storage.factory import create_storage
from ..validation import ArtifactWriteError, KubeCharterError, SamplingError

logger = logging.getLogger(__name__)

LOG_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


class TickState(Enum):
    IDLE = "idle"
    SAMPLING = "sampling"
    REDUCING = "reducing"
    RENDERING = "rendering"
    SLEEPING = "sleeping"
    STOPPED = "stopped"


def local_now() -> datetime:
    return datetime.now().astimezone()


class TickOrchestrator:
    """
    Drives the Idle → Sampling → Reducing → Rendering → Sleeping loop.

    Args:
        config: Validated configuration with output paths already resolved
        metrics_source: Collaborator returning the current readings
        baselines: Requests per group, resolved once before the first tick
        store: Series store to fill; a new empty one by default
        storage: Snapshot storage; chosen from the configuration by default
        shutdown_event: Set by the signal handler to request a stop
        clock: Returns the current, timezone-aware time
    """

    def __init__(
        self,
        config: ChartConfig,
        metrics_source: MetricsSource,
        baselines: Dict[str, BaselineEntry],
        store: Optional[SeriesStore] = None,
        storage: Optional[SnapshotStorage] = None,
        shutdown_event: Optional[threading.Event] = None,
        clock: Callable[[], datetime] = local_now,
    ):
        self.config = config
        self.metrics_source = metrics_source
        self.baselines = dict(baselines)
        self.store = store if store is not None else SeriesStore(group_order=config.groups)
        self.storage = storage or create_storage(config.snapshot_format)
        self.shutdown_event = shutdown_event or threading.Event()
        self.clock = clock
        self.state = TickState.IDLE
        self.ticks_completed = 0

    def _transition(self, state: TickState) -> None:
        logger.debug(f"{self.state.value} -> {state.value}")
        self.state = state

    def _limit_reached(self) -> bool:
        return not self.config.unbounded and self.ticks_completed >= self.config.max_ticks

    def _should_stop(self) -> bool:
        if self.shutdown_event.is_set():
            logger.info("Shutdown requested, stopping the tick loop")
            return True
        if self._limit_reached():
            logger.info(f"Reached max ticks ({self.config.max_ticks}), stopping")
            return True
        return False

    def run(self) -> int:
        """
        Run until max_ticks is reached or a shutdown is requested.

        Returns:
            The number of completed ticks

        Raises:
            SamplingError: If the metrics query fails
            ArtifactWriteError: If either artifact cannot be written
        """
        self._transition(TickState.IDLE)
        try:
            while not self._should_stop():
                self.run_tick()
                if self._limit_reached():
                    continue
                self._transition(TickState.SLEEPING)
                self.shutdown_event.wait(self.config.interval_seconds)
        finally:
            self._transition(TickState.STOPPED)
        return self.ticks_completed

    def run_tick(self) -> List[ReportInput]:
        """Run one Sampling → Reducing → Rendering cycle."""
        now = self.clock()
        max_ticks_str = "MAX" if self.config.unbounded else str(self.config.max_ticks)
        logger.info(
            f"{now.strftime(LOG_TIME_FORMAT)} (tick {self.ticks_completed + 1}/{max_ticks_str})"
        )

        self._transition(TickState.SAMPLING)
        readings = self._sample()

        self._transition(TickState.REDUCING)
        reports = self._reduce(readings, now)

        self._transition(TickState.RENDERING)
        self._render(reports)

        self.ticks_completed += 1
        return reports

    def _sample(self) -> List[RawReading]:
        try:
            return self.metrics_source.fetch()
        except SamplingError:
            raise
        except Exception as e:
            raise SamplingError(f"Pod metrics query failed: {e}") from e

    def _reduce(self, readings: List[RawReading], now: datetime) -> List[ReportInput]:
        """
        Record this tick's aggregates and assemble every group's report.

        Groups without a matching container this tick are not recorded; they
        still appear in the report if they have earlier history, so the report
        and the snapshot always cover the same groups.
        """
        matched = 0
        for group, aggregate in group_readings(readings, self.config.groups).items():
            if aggregate.is_empty:
                continue
            matched += 1
            for reading in readings:
                if reading.group == group:
                    logger.info(
                        f"{reading.group}:  CPU: {reading.cpu_m}m  MEM: {reading.mem_mi}Mi"
                    )
            self.store.ensure(group, self.baselines.get(group), now, self.config.interval_seconds)
            self.store.append(group, aggregate)

        if not matched:
            logger.warning("No matching containers found for configured groups")

        reports = []
        for group in self.config.groups:
            if group not in self.store:
                continue
            series = self.store.get(group)
            summary = summarize_series(series)
            reports.append(assemble(group, series, summary, layout=self.config.report_layout))
        return reports

    def _render(self, reports: List[ReportInput]) -> None:
        html_path = self.config.html_output_path
        snapshot_path = self.config.snapshot_output_path

        try:
            document = render_report(reports, title=Path(html_path).name)
            write_report(document, html_path)
        except KubeCharterError:
            raise
        except Exception as e:
            raise ArtifactWriteError(f"Cannot write report {html_path}: {e}") from e

        try:
            self.storage.save_store(self.store, snapshot_path)
        except KubeCharterError:
            raise
        except Exception as e:
            raise ArtifactWriteError(f"Cannot write snapshot {snapshot_path}: {e}") from e
