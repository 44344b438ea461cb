"""Data models for ticks, label configuration and simulation results."""

from labelcore.models.config import (
    DEFAULT_MIN_SL_PIPS,
    DEFAULT_SPREAD_MULT,
    MAX_TIME_LIMIT_TICKS,
    MIN_FUTURE_TICKS,
    PIP,
    TAKE_PROFIT_MULTIPLIER,
    LabelGenerationConfig,
)
from labelcore.models.label import (
    Direction,
    ExitReason,
    LabelResult,
    TrailingStopResult,
    TrailState,
)
from labelcore.models.tick import Tick

__all__ = [
    "DEFAULT_MIN_SL_PIPS",
    "DEFAULT_SPREAD_MULT",
    "MAX_TIME_LIMIT_TICKS",
    "MIN_FUTURE_TICKS",
    "PIP",
    "TAKE_PROFIT_MULTIPLIER",
    "Direction",
    "ExitReason",
    "LabelGenerationConfig",
    "LabelResult",
    "Tick",
    "TrailingStopResult",
    "TrailState",
]
