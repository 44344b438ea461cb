"""Label generation configuration and engine constants."""

from __future__ import annotations

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

# Standard pip for non-JPY, 4-decimal quotes
PIP = Decimal("0.0001")

# Take-profit is always a fixed multiple of the activation distance
TAKE_PROFIT_MULTIPLIER = Decimal("3.0")

# Hard cap on trade duration in ticks, independent of the window size
MAX_TIME_LIMIT_TICKS = 600

# Stop-loss inference floor and spread multiple
DEFAULT_MIN_SL_PIPS = 5.0
DEFAULT_SPREAD_MULT = 3.0

# Windows shorter than this produce the neutral label without simulation
MIN_FUTURE_TICKS = 10


class LabelGenerationConfig(BaseModel):
    """Parameters for trailing-stop label generation.

    Defaults match the production settings the training datasets were
    built with.
    """

    model_config = ConfigDict(frozen=True)

    # Hard stop-loss in pips; <= 0 means infer from spread and distance
    stop_loss_pips: float = 0.0

    # Favorable move required before the trailing stop starts tracking
    trigger_pips: float = Field(default=3.5, gt=0)

    # Distance between the trailing stop and the best price seen
    distance_pips: float = Field(default=2.5, gt=0)

    # Maximum number of future ticks simulated per decision point
    max_future_ticks: int = Field(default=600, gt=0)

    # Decision thresholds
    min_confidence_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    min_score_threshold: float = Field(default=0.35, ge=0.0, le=1.0)

    # Instrument pip size (0.01 for JPY pairs)
    pip_size: Decimal = Field(default=PIP, gt=0)

    @property
    def infers_stop_loss(self) -> bool:
        """True when the stop-loss is derived from the entry tick."""
        return self.stop_loss_pips <= 0
