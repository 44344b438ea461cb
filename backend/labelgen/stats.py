"""Statistics for generated labels.

Computes the label distribution, confidence statistics and a per-class
breakdown (long / short / neutral).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from statistics import quantiles

from labelcore.models.label import Direction, LabelResult

logger = logging.getLogger(__name__)

LABEL_NAMES = {1: "LONG", -1: "SHORT", 0: "NEUTRAL"}


@dataclass
class LabelClassStats:
    label: int
    name: str
    count: int = 0
    pct: float = 0.0
    avg_confidence: float = 0.0
    avg_quality: float = 0.0
    avg_risk_reward: float = 0.0
    avg_time_to_target: float = 0.0


@dataclass
class LabelStatistics:
    """Summary of one labeling run."""

    total: int = 0
    longs: int = 0
    shorts: int = 0
    neutrals: int = 0

    # Confidence
    avg_confidence: float = 0.0
    min_confidence: float = 0.0
    max_confidence: float = 0.0
    confidence_p25: float = 0.0
    confidence_p50: float = 0.0
    confidence_p75: float = 0.0

    avg_quality: float = 0.0
    avg_long_profit_pips: float = 0.0
    avg_short_profit_pips: float = 0.0

    by_label: list[LabelClassStats] = field(default_factory=list)

    def pct(self, count: int) -> float:
        return count / self.total * 100 if self.total > 0 else 0.0

    @property
    def long_pct(self) -> float:
        return self.pct(self.longs)

    @property
    def short_pct(self) -> float:
        return self.pct(self.shorts)

    @property
    def neutral_pct(self) -> float:
        return self.pct(self.neutrals)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class LabelStatisticsCalculator:
    """Calculate label distribution and quality statistics."""

    def calculate(self, results: list[LabelResult]) -> LabelStatistics:
        stats = LabelStatistics(total=len(results))
        if not results:
            return stats

        self._calc_overall(stats, results)
        self._calc_confidence(stats, results)
        self._calc_by_label(stats, results)
        return stats

    def _calc_overall(self, stats: LabelStatistics, results: list[LabelResult]) -> None:
        stats.longs = sum(1 for r in results if r.direction is Direction.LONG)
        stats.shorts = sum(1 for r in results if r.direction is Direction.SHORT)
        stats.neutrals = sum(1 for r in results if r.direction is None)
        stats.avg_quality = round(_mean([r.quality_score for r in results]), 4)
        stats.avg_long_profit_pips = round(_mean([r.long_profit_pips for r in results]), 4)
        stats.avg_short_profit_pips = round(_mean([r.short_profit_pips for r in results]), 4)

    def _calc_confidence(self, stats: LabelStatistics, results: list[LabelResult]) -> None:
        confidences = sorted(r.confidence for r in results)
        stats.avg_confidence = round(_mean(confidences), 4)
        stats.min_confidence = confidences[0]
        stats.max_confidence = confidences[-1]

        if len(confidences) >= 2:
            q = quantiles(confidences, n=4)
            stats.confidence_p25 = round(q[0], 4)
            stats.confidence_p50 = round(q[1], 4)
            stats.confidence_p75 = round(q[2], 4)
        else:
            only = confidences[0]
            stats.confidence_p25 = stats.confidence_p50 = stats.confidence_p75 = only

    def _calc_by_label(self, stats: LabelStatistics, results: list[LabelResult]) -> None:
        groups: dict[int, list[LabelResult]] = {1: [], -1: [], 0: []}
        for result in results:
            groups[result.label].append(result)

        by_label = []
        for label, members in groups.items():
            entry = LabelClassStats(label=label, name=LABEL_NAMES[label])
            entry.count = len(members)
            entry.pct = stats.pct(entry.count)
            if members:
                entry.avg_confidence = round(_mean([r.confidence for r in members]), 4)
                entry.avg_quality = round(_mean([r.quality_score for r in members]), 4)
                entry.avg_risk_reward = round(_mean([r.risk_reward_ratio for r in members]), 4)
                entry.avg_time_to_target = round(
                    _mean([float(r.time_to_target) for r in members]), 2
                )
            by_label.append(entry)
        stats.by_label = by_label
