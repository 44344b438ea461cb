"""Trailing-stop label generation.

Public API:
- TrailingStopSimulator: one directional trade over a future-tick window
- infer_stop_loss_pips: resolve the hard stop for a decision point
- QualityScorer: reduce a simulated trade to a [0, 1] score
- LabelDecisionMaker: combine long and short outcomes into a label
- LabelGenerator / generate_label: one decision point end to end
"""

from labelcore.labeling.decision import LabelDecisionMaker, risk_reward_ratio
from labelcore.labeling.generator import LabelGenerator, generate_label
from labelcore.labeling.quality import QualityScorer
from labelcore.labeling.simulator import TrailingStopSimulator, infer_stop_loss_pips

__all__ = [
    "LabelDecisionMaker",
    "LabelGenerator",
    "QualityScorer",
    "TrailingStopSimulator",
    "generate_label",
    "infer_stop_loss_pips",
    "risk_reward_ratio",
]
