"""Tick data quality checks run before label generation.

Checks:
- Spread statistics (avg/min/max in pips)
- Extreme spread: max spread above 10x the average
- Time ordering: any tick older than its predecessor

Validation only reports; it never rejects data.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from labelcore.models.config import PIP
from labelcore.models.tick import Tick
from labelcore.pips import to_pips

logger = logging.getLogger(__name__)

EXTREME_SPREAD_MULT = 10
MAX_LOGGED_ISSUES = 5


@dataclass
class TickQualityReport:
    tick_count: int = 0
    avg_spread_pips: float = 0.0
    min_spread_pips: float = 0.0
    max_spread_pips: float = 0.0
    out_of_order: list[int] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.issues


def validate_ticks(ticks: Sequence[Tick], pip_size: Decimal = PIP) -> TickQualityReport:
    """Compute spread statistics and flag ordering/spread anomalies."""
    report = TickQualityReport(tick_count=len(ticks))
    if not ticks:
        return report

    spreads = [t.spread for t in ticks]
    avg_spread = sum(spreads, Decimal("0")) / len(spreads)
    max_spread = max(spreads)

    report.avg_spread_pips = to_pips(avg_spread, pip_size)
    report.min_spread_pips = to_pips(min(spreads), pip_size)
    report.max_spread_pips = to_pips(max_spread, pip_size)

    if max_spread > avg_spread * EXTREME_SPREAD_MULT:
        report.issues.append(
            f"Extreme spread detected: {report.max_spread_pips:.2f} pips"
        )

    for i in range(1, len(ticks)):
        if ticks[i].timestamp < ticks[i - 1].timestamp:
            report.out_of_order.append(i)
            report.issues.append(f"Time ordering issue at index {i}")

    logger.info(
        f"Spread: avg={report.avg_spread_pips:.2f} min={report.min_spread_pips:.2f} "
        f"max={report.max_spread_pips:.2f} pips over {report.tick_count:,} ticks"
    )
    if report.issues:
        logger.warning(f"Data quality issues: {len(report.issues)}")
        for issue in report.issues[:MAX_LOGGED_ISSUES]:
            logger.warning(f"  - {issue}")
    else:
        logger.info("Data validation passed")

    return report
