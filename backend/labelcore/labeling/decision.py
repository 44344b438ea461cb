"""Combine long and short simulations into one training label."""

from __future__ import annotations

from labelcore.labeling.quality import QualityScorer
from labelcore.models.config import LabelGenerationConfig
from labelcore.models.label import LabelResult, TrailingStopResult
from labelcore.pips import safe_divide

# Risk/reward reported when a profitable trade had no adverse excursion
NO_ADVERSE_RISK_REWARD = 10.0


def risk_reward_ratio(result: TrailingStopResult) -> float:
    """Realized profit per pip of adverse excursion."""
    if result.max_adverse_excursion_pips <= 0:
        return NO_ADVERSE_RISK_REWARD if result.profit_pips > 0 else 0.0
    return safe_divide(result.profit_pips, result.max_adverse_excursion_pips)


class LabelDecisionMaker:
    """Pick the better of two simulated directions.

    confidence = |long_quality - short_quality| (capped at 1). A side wins
    only if confidence reaches min_confidence_threshold and its own quality
    reaches min_score_threshold; otherwise the label is neutral. Equal
    qualities are always neutral.
    """

    def __init__(self, scorer: QualityScorer | None = None):
        self.scorer = scorer or QualityScorer()

    def decide(
        self,
        long_result: TrailingStopResult,
        short_result: TrailingStopResult,
        config: LabelGenerationConfig,
    ) -> LabelResult:
        long_quality = self.scorer.score(long_result)
        short_quality = self.scorer.score(short_result)
        confidence = min(1.0, abs(long_quality - short_quality))

        label = 0
        if confidence >= config.min_confidence_threshold:
            if long_quality > short_quality and long_quality >= config.min_score_threshold:
                label = 1
            elif short_quality > long_quality and short_quality >= config.min_score_threshold:
                label = -1

        winner: TrailingStopResult | None = None
        if label == 1:
            winner = long_result
        elif label == -1:
            winner = short_result

        return LabelResult(
            label=label,
            confidence=confidence,
            long_profit_pips=long_result.profit_pips,
            short_profit_pips=short_result.profit_pips,
            max_adverse_excursion=max(
                long_result.max_adverse_excursion_pips,
                short_result.max_adverse_excursion_pips,
            ),
            max_favorable_excursion=max(
                long_result.max_favorable_excursion_pips,
                short_result.max_favorable_excursion_pips,
            ),
            time_to_target=winner.time_to_exit if winner else 0,
            risk_reward_ratio=risk_reward_ratio(winner) if winner else 0.0,
            quality_score=max(long_quality, short_quality),
        )
