"""Report formatting for label generation runs.

Outputs results to console (formatted tables), JSON files and a
per-decision-point labels CSV.
"""

from __future__ import annotations

import csv
import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from labelcore.models.config import LabelGenerationConfig
from labelgen.runner import LabelRunResult
from labelgen.stats import LabelStatistics
from labelgen.validation import TickQualityReport

LABEL_COLUMNS = [
    "timestamp",
    "tick_index",
    "mid_price",
    "label",
    "confidence",
    "long_profit_pips",
    "short_profit_pips",
    "max_adverse_excursion",
    "max_favorable_excursion",
    "time_to_target",
    "risk_reward_ratio",
    "quality_score",
]


class DecimalEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class ReportFormatter:
    """Format label statistics for display and export."""

    @staticmethod
    def print_console(
        stats: LabelStatistics,
        config: LabelGenerationConfig | None = None,
        quality: TickQualityReport | None = None,
    ) -> None:
        """Print formatted report to console."""
        print("\n" + "=" * 70)
        print("  LABEL GENERATION RESULTS")
        print("=" * 70)

        if config is not None:
            stop_loss = "infer" if config.infers_stop_loss else f"{config.stop_loss_pips:.2f}"
            print(
                f"  Trigger: {config.trigger_pips:.2f} pips  "
                f"Distance: {config.distance_pips:.2f} pips  "
                f"Stop-loss: {stop_loss}"
            )
            print(
                f"  Max future ticks: {config.max_future_ticks}  "
                f"Min confidence: {config.min_confidence_threshold:.2f}  "
                f"Min score: {config.min_score_threshold:.2f}"
            )

        if quality is not None:
            print("\n" + "-" * 70)
            print("  TICK DATA")
            print("-" * 70)
            print(f"  Ticks:          {quality.tick_count:,}")
            print(
                f"  Spread (pips):  avg={quality.avg_spread_pips:.2f}  "
                f"min={quality.min_spread_pips:.2f}  max={quality.max_spread_pips:.2f}"
            )
            status = "passed" if quality.passed else f"{len(quality.issues)} issues"
            print(f"  Validation:     {status}")

        print("\n" + "-" * 70)
        print("  LABEL DISTRIBUTION")
        print("-" * 70)
        print(f"  LONG (1):     {stats.longs:>10} ({stats.long_pct:.2f}%)")
        print(f"  SHORT (-1):   {stats.shorts:>10} ({stats.short_pct:.2f}%)")
        print(f"  NEUTRAL (0):  {stats.neutrals:>10} ({stats.neutral_pct:.2f}%)")
        print(f"  Total:        {stats.total:>10}")

        print("\n" + "-" * 70)
        print("  CONFIDENCE")
        print("-" * 70)
        print(f"  Average: {stats.avg_confidence:.3f}")
        print(f"  Min:     {stats.min_confidence:.3f}")
        print(f"  Max:     {stats.max_confidence:.3f}")
        print(
            f"  p25={stats.confidence_p25:.3f}  p50={stats.confidence_p50:.3f}  "
            f"p75={stats.confidence_p75:.3f}"
        )

        if stats.by_label:
            print("\n" + "-" * 70)
            print("  BY LABEL")
            print("-" * 70)
            print(
                f"  {'Label':<10} {'Count':>8} {'Pct':>8} {'Conf':>7} "
                f"{'Quality':>8} {'R:R':>7} {'Ticks':>8}"
            )
            for s in stats.by_label:
                print(
                    f"  {s.name:<10} {s.count:>8} {s.pct:>7.2f}% {s.avg_confidence:>7.3f} "
                    f"{s.avg_quality:>8.3f} {s.avg_risk_reward:>7.2f} {s.avg_time_to_target:>8.1f}"
                )

        print("\n" + "=" * 70)

    @staticmethod
    def to_dict(
        stats: LabelStatistics,
        config: LabelGenerationConfig | None = None,
        quality: TickQualityReport | None = None,
    ) -> dict:
        """Convert results to JSON-serializable dict."""
        data: dict = {
            "distribution": {
                "total": stats.total,
                "long": stats.longs,
                "short": stats.shorts,
                "neutral": stats.neutrals,
                "long_pct": round(stats.long_pct, 2),
                "short_pct": round(stats.short_pct, 2),
                "neutral_pct": round(stats.neutral_pct, 2),
            },
            "confidence": {
                "avg": stats.avg_confidence,
                "min": stats.min_confidence,
                "max": stats.max_confidence,
                "p25": stats.confidence_p25,
                "p50": stats.confidence_p50,
                "p75": stats.confidence_p75,
            },
            "profit": {
                "avg_quality": stats.avg_quality,
                "avg_long_profit_pips": stats.avg_long_profit_pips,
                "avg_short_profit_pips": stats.avg_short_profit_pips,
            },
            "by_label": [
                {
                    "label": s.label,
                    "name": s.name,
                    "count": s.count,
                    "pct": round(s.pct, 2),
                    "avg_confidence": s.avg_confidence,
                    "avg_quality": s.avg_quality,
                    "avg_risk_reward": s.avg_risk_reward,
                    "avg_time_to_target": s.avg_time_to_target,
                }
                for s in stats.by_label
            ],
        }
        if config is not None:
            data["config"] = config.model_dump()
        if quality is not None:
            data["tick_data"] = {
                "tick_count": quality.tick_count,
                "avg_spread_pips": quality.avg_spread_pips,
                "min_spread_pips": quality.min_spread_pips,
                "max_spread_pips": quality.max_spread_pips,
                "issues": quality.issues,
            }
        return data

    @staticmethod
    def save_json(
        stats: LabelStatistics,
        path: str | Path,
        config: LabelGenerationConfig | None = None,
        quality: TickQualityReport | None = None,
    ) -> None:
        """Save results to a JSON file."""
        data = ReportFormatter.to_dict(stats, config, quality)
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(data, f, indent=2, cls=DecimalEncoder)
        print(f"\nResults saved to {path}")

    @staticmethod
    def save_labels_csv(result: LabelRunResult, path: str | Path) -> None:
        """Save one label row per decision point to a CSV file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(LABEL_COLUMNS)
            for point, label in zip(result.decision_points, result.results):
                writer.writerow([
                    point.timestamp.isoformat(),
                    point.index,
                    point.mid_price,
                    label.label,
                    f"{label.confidence:.6f}",
                    f"{label.long_profit_pips:.2f}",
                    f"{label.short_profit_pips:.2f}",
                    f"{label.max_adverse_excursion:.2f}",
                    f"{label.max_favorable_excursion:.2f}",
                    label.time_to_target,
                    f"{label.risk_reward_ratio:.4f}",
                    f"{label.quality_score:.6f}",
                ])
        print(f"Labels saved to {path} ({len(result):,} rows)")
