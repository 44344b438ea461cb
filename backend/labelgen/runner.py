"""LabelRunner: label every decision point of a tick history.

Decision points are the first tick of each new timeframe period, i.e.
the tick that completes the previous bar. For decision point i the
entry is ticks[i] and the future window is
ticks[i + 1 : i + 1 + max_future_ticks].

Each decision point depends only on its own window, so chunks of
decision points can be labeled in separate processes. Every worker gets
its own read-only slice of ticks and results are reassembled in
decision-point order, making parallel output identical to a sequential
run.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from concurrent.futures import Future, ProcessPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from labelcore.labeling.generator import LabelGenerator
from labelcore.models.config import LabelGenerationConfig
from labelcore.models.label import LabelResult
from labelcore.models.tick import Tick
from labelcore.timeframe import period_start, timeframe_seconds

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10_000


@dataclass
class LabelRunConfig:
    """Configuration for a batch labeling run."""

    label: LabelGenerationConfig = field(default_factory=LabelGenerationConfig)
    timeframe: str = "1m"
    warmup_bars: int = 0
    workers: int = 1
    chunk_size: int = 5_000

    def __post_init__(self) -> None:
        timeframe_seconds(self.timeframe)
        if self.warmup_bars < 0:
            raise ValueError(f"warmup_bars must be >= 0, got {self.warmup_bars}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")


@dataclass(slots=True, frozen=True)
class DecisionPoint:
    """A tick index at which a label is generated, with its entry mid price."""

    index: int
    timestamp: datetime
    mid_price: Decimal


@dataclass
class LabelRunResult:
    """Labels for every decision point of a run, in order."""

    decision_points: list[DecisionPoint] = field(default_factory=list)
    results: list[LabelResult] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    def __len__(self) -> int:
        return len(self.results)


def find_decision_points(
    ticks: Sequence[Tick],
    timeframe: str = "1m",
    warmup_bars: int = 0,
) -> list[DecisionPoint]:
    """Find the ticks that complete a bar of the given timeframe.

    The first tick whose period differs from its predecessor's completes
    a bar. The first warmup_bars completed bars are skipped.
    """
    period = timeframe_seconds(timeframe)
    points: list[DecisionPoint] = []
    current: int | None = None
    bars = 0

    for i, tick in enumerate(ticks):
        start = period_start(tick.timestamp, period)
        if current is None:
            current = start
            continue
        if start != current:
            current = start
            bars += 1
            if bars > warmup_bars:
                points.append(
                    DecisionPoint(index=i, timestamp=tick.timestamp, mid_price=tick.mid_price)
                )

    return points


def label_chunk(
    config: LabelGenerationConfig,
    ticks: Sequence[Tick],
    offsets: Sequence[int],
) -> list[LabelResult]:
    """Label the decision points at the given offsets into ticks.

    Top-level so it can be shipped to worker processes.
    """
    generator = LabelGenerator(config)
    horizon = config.max_future_ticks
    return [
        generator.generate(ticks[offset], ticks[offset + 1 : offset + 1 + horizon])
        for offset in offsets
    ]


class LabelRunner:
    """Generate labels for all decision points in a tick history."""

    def __init__(self, config: LabelRunConfig):
        self.config = config

    def run(self, ticks: Sequence[Tick]) -> LabelRunResult:
        """Execute the labeling pipeline."""
        start_time = time.time()

        points = find_decision_points(
            ticks, self.config.timeframe, self.config.warmup_bars
        )
        logger.info(
            f"Labeling {len(points):,} decision points "
            f"({self.config.timeframe} bars, {len(ticks):,} ticks, "
            f"workers={self.config.workers})"
        )

        if not points:
            logger.warning("No decision points found")
            return LabelRunResult(elapsed_seconds=time.time() - start_time)

        if self.config.workers > 1 and len(points) > self.config.chunk_size:
            results = self._run_parallel(ticks, points)
        else:
            results = self._run_sequential(ticks, points)

        elapsed = time.time() - start_time
        logger.info(f"Generated {len(results):,} labels in {elapsed:.1f}s")
        return LabelRunResult(
            decision_points=points,
            results=results,
            elapsed_seconds=elapsed,
        )

    def _run_sequential(
        self, ticks: Sequence[Tick], points: list[DecisionPoint]
    ) -> list[LabelResult]:
        results: list[LabelResult] = []
        for start in range(0, len(points), PROGRESS_EVERY):
            batch = points[start : start + PROGRESS_EVERY]
            results.extend(
                label_chunk(self.config.label, ticks, [p.index for p in batch])
            )
            logger.info(f"Processed {len(results):,}/{len(points):,} decision points")
        return results

    def _run_parallel(
        self, ticks: Sequence[Tick], points: list[DecisionPoint]
    ) -> list[LabelResult]:
        horizon = self.config.label.max_future_ticks
        size = self.config.chunk_size

        with ProcessPoolExecutor(max_workers=self.config.workers) as pool:
            futures: list[Future[list[LabelResult]]] = []
            for start in range(0, len(points), size):
                chunk = points[start : start + size]
                lo = chunk[0].index
                hi = chunk[-1].index + 1 + horizon
                futures.append(
                    pool.submit(
                        label_chunk,
                        self.config.label,
                        list(ticks[lo:hi]),
                        [p.index - lo for p in chunk],
                    )
                )

            results: list[LabelResult] = []
            for future in futures:
                results.extend(future.result())
                logger.info(
                    f"Processed {len(results):,}/{len(points):,} decision points"
                )
        return results
