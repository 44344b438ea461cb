"""Quality scoring for simulated trades."""

from __future__ import annotations

from labelcore.models.config import MAX_TIME_LIMIT_TICKS
from labelcore.models.label import TrailingStopResult
from labelcore.pips import clamp, safe_divide

# Pip scale at which profit saturates and adverse excursion zeroes the risk score
PROFIT_SCALE_PIPS = 10.0
RISK_SCALE_PIPS = 10.0

PROFIT_WEIGHT = 0.5
RISK_WEIGHT = 0.3
TIME_WEIGHT = 0.2


class QualityScorer:
    """Reduce a TrailingStopResult to a single score in [0, 1].

    Trades whose trailing stop never activated score 0: they never
    reached the minimum profitable confirmation and are treated as noise.
    Otherwise the score blends realized profit, adverse risk and speed.
    """

    def __init__(self, max_time_limit_ticks: int = MAX_TIME_LIMIT_TICKS):
        self.max_time_limit_ticks = max_time_limit_ticks

    def score(self, result: TrailingStopResult) -> float:
        if not result.trailing_activated:
            return 0.0

        profit_score = clamp(result.profit_pips / PROFIT_SCALE_PIPS)

        if result.max_adverse_excursion_pips > 0:
            risk_score = clamp(1 - result.max_adverse_excursion_pips / RISK_SCALE_PIPS)
        else:
            risk_score = 1.0

        time_score = clamp(
            1 - safe_divide(result.time_to_exit, self.max_time_limit_ticks)
        )

        return (
            PROFIT_WEIGHT * profit_score
            + RISK_WEIGHT * risk_score
            + TIME_WEIGHT * time_score
        )
